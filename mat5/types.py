"""Decoded MAT-file values.

Everything here is immutable and owns its bytes: results never reference the
input buffer. ``DataElement`` is a closed union; callers dispatch on the
concrete class.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional, Tuple, Union

import numpy as np


class DataType(IntEnum):
    """Type codes carried by data-element tags."""
    INT8 = 1
    UINT8 = 2
    INT16 = 3
    UINT16 = 4
    INT32 = 5
    UINT32 = 6
    SINGLE = 7
    DOUBLE = 9
    INT64 = 12
    UINT64 = 13
    MATRIX = 14
    COMPRESSED = 15
    UTF8 = 16
    UTF16 = 17
    UTF32 = 18

    @property
    def is_numeric(self) -> bool:
        return self in _NUMPY_CODES

    @property
    def byte_width(self) -> Optional[int]:
        return _BYTE_WIDTHS.get(self)

    def numpy_dtype(self, byte_order: str) -> np.dtype:
        return np.dtype(byte_order + _NUMPY_CODES[self])


_NUMPY_CODES = {
    DataType.INT8: "i1",
    DataType.UINT8: "u1",
    DataType.INT16: "i2",
    DataType.UINT16: "u2",
    DataType.INT32: "i4",
    DataType.UINT32: "u4",
    DataType.SINGLE: "f4",
    DataType.DOUBLE: "f8",
    DataType.INT64: "i8",
    DataType.UINT64: "u8",
}

_BYTE_WIDTHS = {
    DataType.INT8: 1,
    DataType.UINT8: 1,
    DataType.UTF8: 1,
    DataType.INT16: 2,
    DataType.UINT16: 2,
    DataType.UTF16: 2,
    DataType.INT32: 4,
    DataType.UINT32: 4,
    DataType.SINGLE: 4,
    DataType.UTF32: 4,
    DataType.INT64: 8,
    DataType.UINT64: 8,
    DataType.DOUBLE: 8,
}


class ArrayClass(IntEnum):
    """Array class stored in the low byte of the array-flags word."""
    CELL = 1
    STRUCT = 2
    OBJECT = 3
    CHAR = 4
    SPARSE = 5
    DOUBLE = 6
    SINGLE = 7
    INT8 = 8
    UINT8 = 9
    INT16 = 10
    UINT16 = 11
    INT32 = 12
    UINT32 = 13
    INT64 = 14
    UINT64 = 15

    @property
    def numeric_data_type(self) -> Optional[DataType]:
        """Value subtype of a dense numeric class, None for the others."""
        return _CLASS_DATA_TYPES.get(self)

    @property
    def index_data_type(self) -> Optional[DataType]:
        """Subtype of the row-index and column-shift arrays (sparse only)."""
        return DataType.INT32 if self is ArrayClass.SPARSE else None


_CLASS_DATA_TYPES = {
    ArrayClass.DOUBLE: DataType.DOUBLE,
    ArrayClass.SINGLE: DataType.SINGLE,
    ArrayClass.INT8: DataType.INT8,
    ArrayClass.UINT8: DataType.UINT8,
    ArrayClass.INT16: DataType.INT16,
    ArrayClass.UINT16: DataType.UINT16,
    ArrayClass.INT32: DataType.INT32,
    ArrayClass.UINT32: DataType.UINT32,
    ArrayClass.INT64: DataType.INT64,
    ArrayClass.UINT64: DataType.UINT64,
}


@dataclass(frozen=True)
class Header:
    """Decoded 128-byte file header."""
    text: str
    subsystem_offset: bytes
    version: int
    byte_order: str  # '<' or '>'

    @property
    def is_little_endian(self) -> bool:
        return self.byte_order == "<"


@dataclass(frozen=True)
class DataElementTag:
    """Tag preceding every data element.

    Compact tags pack type and length into one 4-byte word and keep the
    payload (at most 4 bytes) in the following word.
    """
    data_type: DataType
    byte_size: int
    padding: int
    compact: bool = False

    @property
    def header_size(self) -> int:
        return 4 if self.compact else 8

    @property
    def total_size(self) -> int:
        """Bytes consumed by tag + payload + padding."""
        return self.header_size + self.byte_size + self.padding

    def payload_offset(self, offset: int) -> int:
        return offset + self.header_size


@dataclass(frozen=True)
class NumericData:
    """Raw numeric payload with its declared subtype (not widened)."""
    data_type: DataType
    count: int
    raw: bytes
    byte_order: str = "<"

    def __len__(self) -> int:
        return self.count

    def to_numpy(self) -> np.ndarray:
        return np.frombuffer(self.raw, dtype=self.data_type.numpy_dtype(self.byte_order)).copy()


@dataclass(frozen=True)
class ArrayFlags:
    array_class: Optional[ArrayClass]  # None when the class code is unknown
    class_code: int
    complex: bool = False
    global_: bool = False
    logical: bool = False
    nzmax: int = 0


Dimensions = Tuple[int, ...]


@dataclass(frozen=True)
class NumericMatrix:
    flags: ArrayFlags
    dims: Dimensions
    name: str
    real: NumericData
    imag: Optional[NumericData] = None

    def to_numpy(self) -> np.ndarray:
        """Values as a numpy array shaped like ``dims`` (MATLAB column-major)."""
        values = self.real.to_numpy()
        if self.imag is not None:
            values = values + 1j * self.imag.to_numpy()
        elif self.flags.logical:
            values = values.astype(bool)
        return values.reshape(self.dims, order="F")


@dataclass(frozen=True, eq=False)
class SparseMatrix:
    """Compressed-sparse-column matrix. Compared by value, not hashable."""
    flags: ArrayFlags
    dims: Dimensions
    name: str
    row_index: np.ndarray
    column_shift: np.ndarray
    real: NumericData
    imag: Optional[NumericData] = None

    __hash__ = None

    @property
    def nnz(self) -> int:
        return len(self.row_index)

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (
            self.flags == other.flags
            and self.dims == other.dims
            and self.name == other.name
            and np.array_equal(self.row_index, other.row_index)
            and np.array_equal(self.column_shift, other.column_shift)
            and self.real == other.real
            and self.imag == other.imag
        )

    def to_dense(self) -> np.ndarray:
        n_rows, n_cols = self.dims
        values = self.real.to_numpy()
        if self.imag is not None:
            values = values + 1j * self.imag.to_numpy()
        elif self.flags.logical:
            values = values.astype(bool)
        dense = np.zeros((n_rows, n_cols), dtype=values.dtype)
        cols = np.repeat(np.arange(n_cols), np.diff(self.column_shift))
        dense[self.row_index, cols] = values
        return dense


@dataclass(frozen=True)
class StructMatrix:
    """Structure array; ``fields[i]`` maps field name to value for element ``i``.

    ``fields`` is empty when the struct has no field names, whatever ``dims``
    declares. Not hashable, since the field maps are dicts.
    """
    flags: ArrayFlags
    dims: Dimensions
    name: str
    field_name_length: int
    field_names: Tuple[str, ...]
    fields: Tuple[Dict[str, "DataElement"], ...] = field(default_factory=tuple)

    __hash__ = None


@dataclass(frozen=True)
class EmptyMatrix:
    """Matrix element with a zero-length payload (e.g. an unset struct field)."""
    name: str = ""


@dataclass(frozen=True)
class CompressedElement:
    element: "DataElement"
    compressed_size: int


@dataclass(frozen=True)
class UnsupportedElement:
    """Element the parser recognises but does not decode.

    For matrices of an unhandled class, flags/dims/name are filled in and
    ``raw`` holds the rest of the matrix payload.
    """
    data_type: DataType
    byte_size: int
    raw: Optional[bytes] = None
    flags: Optional[ArrayFlags] = None
    dims: Optional[Dimensions] = None
    name: Optional[str] = None


DataElement = Union[
    NumericMatrix,
    SparseMatrix,
    StructMatrix,
    EmptyMatrix,
    CompressedElement,
    UnsupportedElement,
]


@dataclass(frozen=True)
class ParseResult:
    header: Header
    elements: Tuple[DataElement, ...]

    def variables(self) -> Dict[str, DataElement]:
        """Named top-level elements, compressed wrappers unwrapped."""
        out = {}
        for element in self.elements:
            while isinstance(element, CompressedElement):
                element = element.element
            name = getattr(element, "name", None)
            if name:
                out[name] = element
        return out
