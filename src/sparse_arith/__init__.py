"""
Sparse integer matrices with addition, subtraction and multiplication.

Matrices store only their non-zero entries and are read from / written to a
line-oriented rows/cols/(row, col, value) text format.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrix
from .arithmetic import add, subtract, multiply, negate, combine, OPERATIONS
from .matrix_io import parse_matrix, serialize_matrix, load_matrix, save_matrix
from .matrix_errors import (SparseMatrixError, FormatError, DimensionMismatchError,
                            DimensionIncompatibleError, OutOfRangeError, MatrixConfigError)
from .config import MatrixConfig
from .logging_config import setup_logging

__all__ = [
    "SparseMatrix",
    "add",
    "subtract",
    "multiply",
    "negate",
    "combine",
    "OPERATIONS",
    "parse_matrix",
    "serialize_matrix",
    "load_matrix",
    "save_matrix",
    "SparseMatrixError",
    "FormatError",
    "DimensionMismatchError",
    "DimensionIncompatibleError",
    "OutOfRangeError",
    "MatrixConfigError",
    "MatrixConfig",
    "setup_logging",
]
