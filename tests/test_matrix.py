"""Tests for the 1-based sparse matrix builder"""

import numpy as np
import pytest

from optiglpk import SparseMatrixBuilder


def test_empty_builder_holds_only_sentinel():
    builder = SparseMatrixBuilder()
    assert len(builder) == 0
    assert builder.entries() == []

    ia, ja, ar = builder.build()
    assert ia.tolist() == [0]
    assert ja.tolist() == [0]
    assert ar.tolist() == [0.0]


def test_entries_keep_insertion_order():
    builder = SparseMatrixBuilder()
    builder.add_entry(2, 3, 1.5)
    builder.add_entry(1, 1, -2.0)
    builder.add_entry(2, 1, 4.0)

    assert len(builder) == 3
    assert builder.entries() == [(2, 3, 1.5), (1, 1, -2.0), (2, 1, 4.0)]


def test_build_layout():
    builder = SparseMatrixBuilder()
    builder.add_entry(1, 1, 2.0)
    builder.add_entry(1, 2, -1.0)

    ia, ja, ar = builder.build()
    assert ia.dtype == np.int32 and ja.dtype == np.int32
    assert ar.dtype == np.float64
    assert len(ia) == len(ja) == len(ar) == len(builder) + 1
    assert ia.flags['C_CONTIGUOUS']
    assert ia.tolist() == [0, 1, 1]
    assert ja.tolist() == [0, 1, 2]
    assert ar.tolist() == [0.0, 2.0, -1.0]


@pytest.mark.parametrize("row, col", [(0, 1), (1, 0), (-1, 2)])
def test_indices_are_one_based(row, col):
    builder = SparseMatrixBuilder()
    with pytest.raises(ValueError):
        builder.add_entry(row, col, 1.0)
    assert len(builder) == 0


def test_to_coo_is_zero_based():
    builder = SparseMatrixBuilder()
    builder.add_entry(1, 2, 3.0)
    builder.add_entry(2, 1, 5.0)

    dense = builder.to_coo((2, 2)).toarray()
    np.testing.assert_array_equal(dense, [[0.0, 3.0], [5.0, 0.0]])
