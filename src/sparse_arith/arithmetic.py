import logging
import operator
from typing import Callable

from .constants import MULTIPLY_STRATEGIES, Operation
from .matrix_errors import DimensionMismatchError, DimensionIncompatibleError, InvalidMultiplyStrategyError
from .sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)


def combine(a: SparseMatrix, b: SparseMatrix, op: Callable[[int, int], int]) -> SparseMatrix:
    """
    Combine two equally shaped matrices element-wise over the union of their entries.

    Each coordinate is visited exactly once: first every entry of ``a``
    (paired with b's value there, or 0), then every entry of ``b`` that ``a``
    does not have (paired with 0 on the left). Keys only in ``b`` therefore get
    ``op(0, b_value)``, which is ``-b_value`` for subtraction.

    Args:
        a: Left operand.
        b: Right operand, same shape as ``a``.
        op: Binary integer function, e.g. operator.add or operator.sub.

    Returns:
        A new matrix of the same shape. Coordinates that combine to 0 are not stored.
    """
    result = SparseMatrix(a.num_rows, a.num_cols)
    for (i, j), v in a.data_store.items():
        result.set(i, j, op(v, b.data_store.get((i, j), 0)))
    for (i, j), v in b.data_store.items():
        if (i, j) not in a.data_store:
            result.set(i, j, op(0, v))
    return result


def _check_same_shape(a: SparseMatrix, b: SparseMatrix, operation: str) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(operation, a.shape, b.shape)


def add(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Element-wise sum. Raises DimensionMismatchError unless the shapes are equal."""
    _check_same_shape(a, b, "addition")
    result = combine(a, b, operator.add)
    logger.debug(f"add {a.shape}: nnz {a.nnz} + {b.nnz} -> {result.nnz}")
    return result


def subtract(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Element-wise difference a - b. Raises DimensionMismatchError unless the shapes are equal."""
    _check_same_shape(a, b, "subtraction")
    result = combine(a, b, operator.sub)
    logger.debug(f"subtract {a.shape}: nnz {a.nnz} - {b.nnz} -> {result.nnz}")
    return result


def negate(a: SparseMatrix) -> SparseMatrix:
    """Returns a new matrix with every entry multiplied by -1."""
    result = SparseMatrix(a.num_rows, a.num_cols)
    result.data_store = {key: -v for key, v in a.data_store.items()}
    return result


def _multiply_column_scan(a: SparseMatrix, b: SparseMatrix) -> dict[tuple[int, int], int]:
    sums = {}
    # every column of b is probed for each non-zero of a; zero products are skipped
    for (r, k), v1 in a.data_store.items():
        for c in range(b.num_cols):
            v2 = b.data_store.get((k, c), 0)
            if v2 == 0:
                continue
            sums[(r, c)] = sums.get((r, c), 0) + v1 * v2
    return sums


def _multiply_row_index(a: SparseMatrix, b: SparseMatrix) -> dict[tuple[int, int], int]:
    sums = {}
    b_rows = b.row_index()
    for (r, k), v1 in a.data_store.items():
        for c, v2 in b_rows.get(k, {}).items():
            sums[(r, c)] = sums.get((r, c), 0) + v1 * v2
    return sums


_MULTIPLY_KERNELS = {
    'row_index': _multiply_row_index,
    'column_scan': _multiply_column_scan,
}


def multiply(a: SparseMatrix, b: SparseMatrix, strategy: str = 'row_index') -> SparseMatrix:
    """
    Matrix product a @ b.

    Args:
        a: Left operand of shape (n, k).
        b: Right operand of shape (k, m).
        strategy: 'row_index' visits only the non-zero entries of the matching
            row of b; 'column_scan' probes all m columns of b for each non-zero
            of a. The sums are identical since values are integers.

    Returns:
        A new (n, m) matrix.

    Raises:
        DimensionIncompatibleError: If a.num_cols != b.num_rows.
        InvalidMultiplyStrategyError: If strategy is not a known algorithm.
    """
    if strategy not in _MULTIPLY_KERNELS:
        raise InvalidMultiplyStrategyError(strategy, MULTIPLY_STRATEGIES)
    if a.num_cols != b.num_rows:
        raise DimensionIncompatibleError(a.shape, b.shape)

    result = SparseMatrix(a.num_rows, b.num_cols)
    # cells whose products cancel to 0 are dropped by set()
    for (i, j), v in _MULTIPLY_KERNELS[strategy](a, b).items():
        result.set(i, j, v)
    logger.debug(f"multiply {a.shape} x {b.shape} ({strategy}): nnz {a.nnz}, {b.nnz} -> {result.nnz}")
    return result


OPERATIONS = {
    Operation.ADD: add,
    Operation.SUBTRACT: subtract,
    Operation.MULTIPLY: multiply,
}
