"""
Sparse constraint matrix in GLPK's 1-based triplet layout
"""
import numpy as np
from scipy import sparse
from typing import List, Tuple


def _ensure_contiguous_int32(arr):
    """Ensure array is contiguous int32"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.int32)
    if arr.dtype != np.int32:
        arr = arr.astype(np.int32)
    return np.ascontiguousarray(arr)


def _ensure_contiguous_float64(arr):
    """Ensure array is contiguous float64"""
    if not isinstance(arr, np.ndarray):
        arr = np.array(arr, dtype=np.float64)
    if arr.dtype != np.float64:
        arr = arr.astype(np.float64)
    return np.ascontiguousarray(arr)


class SparseMatrixBuilder:
    """
    Accumulates (row, column, coefficient) triplets for ``glp_load_matrix``.

    GLPK reads the matrix as three parallel arrays ``ia``, ``ja``, ``ar``
    indexed from 1; element 0 is never read. The builder keeps that slot
    as a sentinel so the arrays it builds can be copied verbatim.

    Entries keep insertion order. The translator adds them constraint by
    constraint, following each constraint's term order.

    Examples
    --------
    >>> builder = SparseMatrixBuilder()
    >>> builder.add_entry(1, 1, 2.0)
    >>> builder.add_entry(1, 2, -1.0)
    >>> ia, ja, ar = builder.build()
    >>> ia
    array([0, 1, 1], dtype=int32)
    """

    SENTINEL = (0, 0, 0.0)

    def __init__(self):
        self._entries: List[Tuple[int, int, float]] = [self.SENTINEL]

    def __len__(self) -> int:
        """Number of non-zero entries, sentinel excluded"""
        return len(self._entries) - 1

    def add_entry(self, row: int, col: int, coefficient: float):
        """
        Append one matrix entry.

        Parameters
        ----------
        row : int
            1-based row index
        col : int
            1-based column index
        coefficient : float
            Matrix coefficient
        """
        if row < 1 or col < 1:
            raise ValueError(f"Matrix indices are 1-based (got row={row}, col={col})")
        self._entries.append((int(row), int(col), float(coefficient)))

    def entries(self) -> List[Tuple[int, int, float]]:
        """Entries in insertion order, sentinel excluded"""
        return self._entries[1:]

    def build(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Lay the triplets out as contiguous arrays.

        Returns
        -------
        ia : np.ndarray
            Row indices (int32, length len(self) + 1)
        ja : np.ndarray
            Column indices (int32, length len(self) + 1)
        ar : np.ndarray
            Coefficients (float64, length len(self) + 1)
        """
        rows, cols, values = zip(*self._entries)
        return (
            _ensure_contiguous_int32(rows),
            _ensure_contiguous_int32(cols),
            _ensure_contiguous_float64(values),
        )

    def to_coo(self, shape: Tuple[int, int]) -> sparse.coo_matrix:
        """
        0-based scipy view of the entries.

        Duplicate (row, col) pairs are kept as separate entries, as GLPK
        would reject them anyway.

        Parameters
        ----------
        shape : tuple of int
            (number of rows, number of columns)
        """
        ia, ja, ar = self.build()
        return sparse.coo_matrix((ar[1:], (ia[1:] - 1, ja[1:] - 1)), shape=shape)

    def __repr__(self):
        return f"<SparseMatrixBuilder nnz={len(self)}>"
