"""Tests for sparse (CSC) arrays."""

import numpy as np
import pytest

from mat5 import (
    ComplexPartCountMismatchError,
    IncompatibleNumericTypeError,
    SparseMatrix,
    SparseShapeMismatchError,
    parse_data_element,
)
from mat5.arrays.sparse import check_csc_shape

import matbuild


def _random_layout(rng):
    n_rows = int(rng.randint(1, 12))
    n_cols = int(rng.randint(1, 12))
    dense = rng.rand(n_rows, n_cols)
    dense[dense < 0.6] = 0.0
    row_index, column_shift, values = [], [0], []
    for j in range(n_cols):
        rows = np.nonzero(dense[:, j])[0]
        row_index.extend(rows.tolist())
        values.extend(dense[rows, j].tolist())
        column_shift.append(len(row_index))
    return (n_rows, n_cols), row_index, column_shift, values, dense


class TestSparseMatrix:
    def test_known_matrix(self):
        """8x8 sparse matrix with 7 non-zeros."""
        row_index = [5, 7, 2, 0, 1, 3, 6]
        column_shift = [0, 1, 2, 2, 3, 4, 5, 6, 7]
        values = [2.0, 7.0, 4.0, 9.0, 5.0, 8.0, 6.0]
        buf = matbuild.sparse_matrix("s", (8, 8), row_index, column_shift, values)
        element, offset = parse_data_element(buf, 0, "<")
        assert isinstance(element, SparseMatrix)
        assert offset == len(buf)
        assert element.dims == (8, 8)
        assert element.nnz == 7
        assert element.flags.nzmax == 7
        np.testing.assert_array_equal(element.row_index, row_index)
        np.testing.assert_array_equal(element.column_shift, column_shift)
        np.testing.assert_array_equal(element.real.to_numpy(), values)
        assert element.imag is None

    def test_not_hashable(self):
        """Array-valued results compare by value and cannot be hashed."""
        buf = matbuild.sparse_matrix("s", (2, 2), [0], [0, 1, 1], [4.0])
        element, _ = parse_data_element(buf, 0, "<")
        again, _ = parse_data_element(buf, 0, "<")
        assert element == again
        with pytest.raises(TypeError):
            hash(element)

    def test_random_layouts_accepted(self):
        rng = np.random.RandomState(42)
        for _ in range(25):
            dims, row_index, column_shift, values, dense = _random_layout(rng)
            buf = matbuild.sparse_matrix("r", dims, row_index, column_shift, values)
            element, _ = parse_data_element(buf, 0, "<")
            np.testing.assert_array_equal(element.to_dense(), dense)

    def test_last_shift_mismatch_rejected(self):
        """column_shift[-1] must equal the number of row indices."""
        rng = np.random.RandomState(7)
        for _ in range(10):
            dims, row_index, column_shift, values, _ = _random_layout(rng)
            column_shift[-1] += 1
            buf = matbuild.sparse_matrix("r", dims, row_index, column_shift, values)
            with pytest.raises(SparseShapeMismatchError):
                parse_data_element(buf, 0, "<")

    def test_column_count_mismatch_rejected(self):
        """len(column_shift) must be n_columns + 1."""
        buf = matbuild.sparse_matrix("s", (3, 3), [0, 2], [0, 1, 2], [1.0, 2.0])
        with pytest.raises(SparseShapeMismatchError):
            parse_data_element(buf, 0, "<")

    def test_decreasing_shift_rejected(self):
        buf = matbuild.sparse_matrix("s", (3, 2), [0, 1], [0, 2, 1], [1.0, 2.0])
        with pytest.raises(SparseShapeMismatchError):
            check_csc_shape((3, 2), np.array([0, 1]), np.array([0, 2, 1]))
        with pytest.raises(SparseShapeMismatchError):
            parse_data_element(buf, 0, "<")

    def test_row_out_of_range_rejected(self):
        buf = matbuild.sparse_matrix("s", (2, 1), [0, 2], [0, 2], [1.0, 2.0])
        with pytest.raises(SparseShapeMismatchError):
            parse_data_element(buf, 0, "<")

    def test_value_count_mismatch_rejected(self):
        buf = matbuild.sparse_matrix("s", (3, 2), [0, 1], [0, 1, 2], [1.0, 2.0, 3.0])
        with pytest.raises(SparseShapeMismatchError):
            parse_data_element(buf, 0, "<")

    def test_index_subtype_fixed(self):
        """Row indices stored as anything but INT32 are rejected."""
        body = (
            matbuild.numeric(matbuild.MI_UINT8, [0, 1])
            + matbuild.numeric(matbuild.MI_INT32, [0, 1, 2])
            + matbuild.numeric(matbuild.MI_DOUBLE, [1.0, 2.0])
        )
        buf = matbuild.matrix(matbuild.MX_SPARSE, (2, 2), "s", body, nzmax=2)
        with pytest.raises(IncompatibleNumericTypeError):
            parse_data_element(buf, 0, "<")

    def test_complex(self):
        buf = matbuild.sparse_matrix("c", (2, 2), [1, 0], [0, 1, 2], [1.0, 2.0], imag=[3.0, 0.0])
        element, _ = parse_data_element(buf, 0, "<")
        expected = np.array([[0, 2 + 0j], [1 + 3j, 0]])
        np.testing.assert_array_equal(element.to_dense(), expected)

    def test_complex_part_count_mismatch(self):
        buf = matbuild.sparse_matrix("c", (2, 2), [1, 0], [0, 1, 2], [1.0, 2.0], imag=[3.0])
        with pytest.raises(ComplexPartCountMismatchError):
            parse_data_element(buf, 0, "<")

    def test_empty_sparse(self):
        buf = matbuild.sparse_matrix("e", (3, 2), [], [0, 0, 0], [])
        element, _ = parse_data_element(buf, 0, "<")
        assert element.nnz == 0
        assert element.to_dense().shape == (3, 2)
