"""Sparse arrays in compressed-sparse-column (CSC) layout.

After the prologue a sparse matrix holds:
    ROW INDEX (INT32): row of every stored value, grouped by column
    COLUMN SHIFT (INT32, n_columns + 1 entries): cumulative value counts,
        column j owns row_index[column_shift[j]:column_shift[j + 1]]
    REAL PART (numeric)
    IMAGINARY PART (numeric, complex arrays only)

The value subtype is not tied to the class for sparse arrays, so only the
index arrays are type-checked.
"""

from typing import Tuple

import numpy as np

from ..errors import ComplexPartCountMismatchError, IncompatibleNumericTypeError, SparseShapeMismatchError
from ..numeric import parse_numeric_subelement
from ..types import ArrayFlags, Dimensions, SparseMatrix


def _parse_index(buf, offset, end, byte_order, flags, decoder):
    data, next_offset = parse_numeric_subelement(buf, offset, byte_order, end, decoder)
    expected = flags.array_class.index_data_type
    if data.data_type is not expected:
        raise IncompatibleNumericTypeError(
            f"{decoder} must be {expected.name}, found {data.data_type.name}",
            offset, decoder, int(data.data_type),
        )
    return data.to_numpy().astype(np.int64), next_offset


def check_csc_shape(dims: Dimensions, row_index: np.ndarray, column_shift: np.ndarray, offset: int = 0) -> None:
    """Raise SparseShapeMismatchError unless the index arrays form a valid CSC layout."""
    def fail(detail):
        raise SparseShapeMismatchError(detail, offset, "sparse array")

    if len(dims) != 2:
        fail(f"sparse arrays are two-dimensional, got dimensions {dims}")
    n_rows, n_cols = dims
    if len(column_shift) != n_cols + 1:
        fail(f"{n_cols} columns need {n_cols + 1} column shifts, found {len(column_shift)}")
    if column_shift[0] != 0:
        fail(f"column shifts must start at 0, found {column_shift[0]}")
    if np.any(np.diff(column_shift) < 0):
        fail("column shifts are not non-decreasing")
    if column_shift[-1] != len(row_index):
        fail(f"last column shift {column_shift[-1]} != {len(row_index)} row indices")
    if len(row_index) and (row_index.min() < 0 or row_index.max() >= n_rows):
        fail(f"row index outside [0, {n_rows})")


def parse_sparse_matrix(
    buf,
    offset: int,
    end: int,
    byte_order: str,
    flags: ArrayFlags,
    dims: Dimensions,
    name: str,
) -> Tuple[SparseMatrix, int]:
    start = offset
    row_index, offset = _parse_index(buf, offset, end, byte_order, flags, "row index")
    column_shift, offset = _parse_index(buf, offset, end, byte_order, flags, "column shift")
    check_csc_shape(dims, row_index, column_shift, start)

    real_offset = offset
    real, offset = parse_numeric_subelement(buf, offset, byte_order, end, "real part")
    if real.count != len(row_index):
        raise SparseShapeMismatchError(
            f"{len(row_index)} row indices but {real.count} values",
            real_offset, "sparse array", int(real.data_type),
        )

    imag = None
    if flags.complex:
        imag_offset = offset
        imag, offset = parse_numeric_subelement(buf, offset, byte_order, end, "imaginary part")
        if imag.count != real.count:
            raise ComplexPartCountMismatchError(
                f"real part has {real.count} values, imaginary part has {imag.count}",
                imag_offset, "sparse array", int(imag.data_type),
            )

    matrix = SparseMatrix(
        flags=flags,
        dims=dims,
        name=name,
        row_index=row_index,
        column_shift=column_shift,
        real=real,
        imag=imag,
    )
    return matrix, offset
