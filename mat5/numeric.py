"""Numeric subelements and the storage-type compatibility table.

MATLAB may store an array's values in a narrower type than its class when
they fit (e.g. a double array of small integers written as UINT8). The table
below lists which stored subtypes each class accepts.
"""

from typing import Optional, Tuple

from .errors import IncompatibleNumericTypeError, SizeMismatchError
from .tags import read_element
from .types import ArrayClass, DataType, NumericData

_SMALL_INTS = frozenset({DataType.UINT8, DataType.INT16, DataType.UINT16})

COMPATIBLE_TYPES = {
    DataType.INT8: frozenset({DataType.INT8}),
    DataType.UINT8: frozenset({DataType.UINT8}),
    DataType.INT16: frozenset({DataType.UINT8, DataType.INT16}),
    DataType.UINT16: frozenset({DataType.UINT8, DataType.UINT16}),
    DataType.INT32: _SMALL_INTS | {DataType.INT32},
    DataType.UINT32: _SMALL_INTS | {DataType.UINT32},
    DataType.INT64: _SMALL_INTS | {DataType.INT32, DataType.INT64},
    DataType.UINT64: _SMALL_INTS | {DataType.INT32, DataType.UINT64},
    DataType.SINGLE: _SMALL_INTS | {DataType.INT32, DataType.SINGLE},
    DataType.DOUBLE: _SMALL_INTS | {DataType.INT32, DataType.DOUBLE},
}

# Logical arrays are always stored one byte per element.
LOGICAL_TYPES = frozenset({DataType.UINT8})


def numeric_types_are_compatible(array_type: DataType, stored_type: DataType) -> bool:
    return stored_type in COMPATIBLE_TYPES.get(array_type, frozenset())


def check_compatible(
    array_class: ArrayClass,
    stored_type: DataType,
    logical: bool = False,
    offset: int = 0,
) -> None:
    """Raise IncompatibleNumericTypeError unless ``stored_type`` fits the class."""
    if logical:
        ok = stored_type in LOGICAL_TYPES
    else:
        expected = array_class.numeric_data_type
        ok = expected is not None and numeric_types_are_compatible(expected, stored_type)
    if not ok:
        kind = "logical " if logical else ""
        raise IncompatibleNumericTypeError(
            f"{stored_type.name} values in a {kind}{array_class.name} array",
            offset, "numeric array", int(stored_type),
        )


def parse_numeric_subelement(
    buf,
    offset: int,
    byte_order: str,
    end: Optional[int] = None,
    decoder: str = "numeric data",
) -> Tuple[NumericData, int]:
    """Decode one numeric subelement, keeping its raw bytes.

    Returns:
        (NumericData, offset of the next subelement).
    """
    tag, start, stop, next_offset = read_element(buf, offset, byte_order, end)
    if not tag.data_type.is_numeric:
        raise IncompatibleNumericTypeError(
            f"expected a numeric subelement, found {tag.data_type.name}",
            offset, decoder, int(tag.data_type),
        )
    width = tag.data_type.byte_width
    if tag.byte_size % width:
        raise SizeMismatchError(
            f"{tag.byte_size} bytes is not a multiple of the {tag.data_type.name} width {width}",
            offset, decoder, int(tag.data_type),
        )
    data = NumericData(
        data_type=tag.data_type,
        count=tag.byte_size // width,
        raw=bytes(buf[start:stop]),
        byte_order=byte_order,
    )
    return data, next_offset
