import numpy as np
import pandas as pd
from scipy import sparse as sp
from dataclasses import dataclass, field

from .matrix_errors import OutOfRangeError


def _as_int(value, what: str = "value") -> int:
    """Normalise an integer-like value (int or numpy integer) to a Python int."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"SparseMatrix {what} must be an integer, got {type(value).__name__}")
    return int(value)


@dataclass
class SparseMatrix:
    """Integer matrix that stores only its non-zero entries, keyed by (row, col).

    Assigning zero removes the entry, so ``len(m)`` is always the number of
    non-zero cells. Coordinates are bounds checked against the declared shape.
    """
    num_rows: int = 0
    num_cols: int = 0
    data_store: dict[tuple[int, int], int] = field(default_factory=dict)

    def __post_init__(self):
        self.num_rows = _as_int(self.num_rows, "row count")
        self.num_cols = _as_int(self.num_cols, "column count")
        if self.num_rows < 0 or self.num_cols < 0:
            raise ValueError(f"SparseMatrix dimensions must be non-negative, got {self.shape}")
        # re-insert through set() so zero and out of range entries are rejected up front
        entries = self.data_store
        self.data_store = {}
        for (i, j), v in entries.items():
            self.set(i, j, v)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.num_rows, self.num_cols)

    @property
    def nnz(self) -> int:
        return len(self.data_store)

    def _key(self, i, j) -> tuple[int, int]:
        i = _as_int(i, "row index")
        j = _as_int(j, "column index")
        if not (0 <= i < self.num_rows and 0 <= j < self.num_cols):
            raise OutOfRangeError(i, j, self.shape)
        return (i, j)

    def get(self, i: int, j: int) -> int:
        """Get the value at position (i, j), 0 when no entry is stored."""
        return self.data_store.get(self._key(i, j), 0)

    def set(self, i: int, j: int, v: int) -> None:
        """Set the value at position (i, j). A zero value removes the entry."""
        key = self._key(i, j)
        v = _as_int(v)
        if v == 0:
            # Remove zero values to maintain sparsity
            self.data_store.pop(key, None)
        else:
            self.data_store[key] = v

    def add_at(self, i: int, j: int, v: int) -> None:
        """Add a value to the element at position (i, j)."""
        self.set(i, j, self.get(i, j) + _as_int(v))

    @staticmethod
    def _split(key) -> tuple:
        if isinstance(key, tuple) and len(key) == 2:
            return key
        raise KeyError("SparseMatrix indices must be a tuple of length 2")

    def __getitem__(self, key) -> int:
        """Returns the value at position (i, j), or 0 if no entry is stored."""
        i, j = self._split(key)
        return self.get(i, j)

    def __setitem__(self, key, value: int) -> None:
        i, j = self._split(key)
        self.set(i, j, value)

    def __delitem__(self, key) -> None:
        i, j = self._split(key)
        self.data_store.pop(self._key(i, j), None)

    def __contains__(self, key) -> bool:
        """Checks if position (i, j) holds a non-zero entry."""
        if isinstance(key, tuple) and len(key) == 2:
            return key in self.data_store
        return False

    def __len__(self) -> int:
        """Returns the number of non-zero elements."""
        return len(self.data_store)

    def __iter__(self):
        """Allows iteration over the position tuples with non-zero values."""
        return iter(self.data_store.keys())

    def keys(self):
        """Returns the keys (position tuples) of non-zero elements."""
        return self.data_store.keys()

    def values(self):
        """Returns the values of non-zero elements."""
        return self.data_store.values()

    def items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns a list of (key, value) pairs in insertion order, mimicking dict.items()."""
        return list(self.data_store.items())

    def sorted_items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns the (key, value) pairs in row-major order.

        This is the order used when a matrix is serialized, so written files
        are reproducible regardless of how the matrix was built.
        """
        return sorted(self.data_store.items())

    def row_index(self) -> dict[int, dict[int, int]]:
        """Groups the non-zero entries by row: {row: {col: value}}."""
        rows = {}
        for (i, j), v in self.data_store.items():
            rows.setdefault(i, {})[j] = v
        return rows

    def density(self) -> float:
        """Fraction of cells holding a non-zero value (0.0 for an empty shape)."""
        total = self.num_rows * self.num_cols
        return len(self.data_store) / total if total > 0 else 0.0

    def __add__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        from .arithmetic import add
        return add(self, other)

    def __sub__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        from .arithmetic import subtract
        return subtract(self, other)

    def __matmul__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        from .arithmetic import multiply
        return multiply(self, other)

    def __neg__(self) -> 'SparseMatrix':
        from .arithmetic import negate
        return negate(self)

    def __repr__(self) -> str:
        """String representation of the matrix."""
        if not self.data_store:
            return f"SparseMatrix({self.num_rows}x{self.num_cols}, {{}})"
        items_str = ", ".join(f"{k}: {v}" for k, v in self.sorted_items())
        return f"SparseMatrix({self.num_rows}x{self.num_cols}, {{{items_str}}})"

    def clear(self) -> None:
        """Removes all elements from the matrix."""
        self.data_store.clear()

    def copy(self) -> 'SparseMatrix':
        """Returns a copy of the matrix that shares no state with this one."""
        result = SparseMatrix(self.num_rows, self.num_cols)
        result.data_store = self.data_store.copy()
        return result

    def to_dense(self) -> np.ndarray:
        """Returns the matrix as a dense int64 numpy array."""
        dense = np.zeros(self.shape, dtype=np.int64)
        for (i, j), v in self.data_store.items():
            dense[i, j] = v
        return dense

    @classmethod
    def from_dense(cls, array) -> 'SparseMatrix':
        """Builds a sparse matrix from a 2D integer array, keeping only the non-zero cells."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"SparseMatrix.from_dense expects a 2D array, got {array.ndim}D")
        if array.size and not np.issubdtype(array.dtype, np.integer):
            raise TypeError(f"SparseMatrix.from_dense expects an integer array, got {array.dtype}")
        result = cls(array.shape[0], array.shape[1])
        rows, cols = np.nonzero(array)
        for i, j in zip(rows, cols):
            result.data_store[(int(i), int(j))] = int(array[i, j])
        return result

    def to_scipy(self) -> sp.csr_matrix:
        """Returns the matrix as a scipy CSR matrix with int64 values."""
        if not self.data_store:
            return sp.csr_matrix(self.shape, dtype=np.int64)
        keys = np.array(list(self.data_store.keys()), dtype=np.int64)
        vals = np.fromiter(self.data_store.values(), dtype=np.int64, count=len(self.data_store))
        return sp.coo_matrix((vals, (keys[:, 0], keys[:, 1])), shape=self.shape).tocsr()

    @classmethod
    def from_scipy(cls, matrix) -> 'SparseMatrix':
        """Builds a sparse matrix from any scipy sparse matrix with integer values."""
        coo = sp.coo_matrix(matrix)
        if coo.nnz and not np.issubdtype(coo.dtype, np.integer):
            raise TypeError(f"SparseMatrix.from_scipy expects integer values, got {coo.dtype}")
        coo.sum_duplicates()
        result = cls(coo.shape[0], coo.shape[1])
        for i, j, v in zip(coo.row, coo.col, coo.data):
            if v != 0:
                result.data_store[(int(i), int(j))] = int(v)
        return result

    def to_frame(self) -> pd.DataFrame:
        """Returns the non-zero entries as a DataFrame with columns row, col, value (row-major order)."""
        records = [(i, j, v) for (i, j), v in self.sorted_items()]
        return pd.DataFrame(records, columns=['row', 'col', 'value'], dtype=np.int64)
