"""Matrix prologue: array flags, dimensions and array name.

Every matrix payload starts with these three subelements:

    ARRAY FLAGS (UINT32, 8 bytes):
        flags_and_class: uint32   # bits 0-7 class, 0x0200 logical,
                                  # 0x0400 global, 0x0800 complex
        nzmax: uint32             # sparse only: allocated non-zeros
    DIMENSIONS (INT32, >= 2 entries)
    ARRAY NAME (INT8 text, may be empty for struct fields)
"""

import struct
from typing import Optional, Tuple

from ..errors import IncompatibleNumericTypeError, SizeMismatchError
from ..tags import read_element
from ..types import ArrayClass, ArrayFlags, DataType, Dimensions

COMPLEX_FLAG = 0x0800
GLOBAL_FLAG = 0x0400
LOGICAL_FLAG = 0x0200

TEXT_TYPES = frozenset({DataType.INT8, DataType.UINT8, DataType.UTF8})


def parse_array_flags(buf, offset: int, byte_order: str, end: Optional[int] = None) -> Tuple[ArrayFlags, int]:
    tag, start, _stop, next_offset = read_element(buf, offset, byte_order, end)
    if tag.data_type is not DataType.UINT32:
        raise IncompatibleNumericTypeError(
            f"array flags must be UINT32, found {tag.data_type.name}",
            offset, "array flags", int(tag.data_type),
        )
    if tag.byte_size != 8:
        raise SizeMismatchError(
            f"array flags must be 8 bytes, found {tag.byte_size}",
            offset, "array flags", int(tag.data_type),
        )
    flags_and_class, nzmax = struct.unpack_from(byte_order + "II", buf, start)
    class_code = flags_and_class & 0xFF
    try:
        array_class = ArrayClass(class_code)
    except ValueError:
        array_class = None
    flags = ArrayFlags(
        array_class=array_class,
        class_code=class_code,
        complex=bool(flags_and_class & COMPLEX_FLAG),
        global_=bool(flags_and_class & GLOBAL_FLAG),
        logical=bool(flags_and_class & LOGICAL_FLAG),
        nzmax=nzmax,
    )
    return flags, next_offset


def parse_dimensions(buf, offset: int, byte_order: str, end: Optional[int] = None) -> Tuple[Dimensions, int]:
    tag, start, _stop, next_offset = read_element(buf, offset, byte_order, end)
    if tag.data_type is not DataType.INT32:
        raise IncompatibleNumericTypeError(
            f"dimensions must be INT32, found {tag.data_type.name}",
            offset, "dimensions", int(tag.data_type),
        )
    if tag.byte_size < 8 or tag.byte_size % 4:
        raise SizeMismatchError(
            f"dimensions need at least two INT32 entries, found {tag.byte_size} bytes",
            offset, "dimensions", int(tag.data_type),
        )
    n_dims = tag.byte_size // 4
    dims = struct.unpack_from(f"{byte_order}{n_dims}i", buf, start)
    if any(d < 0 for d in dims):
        raise SizeMismatchError(
            f"negative dimension in {dims}", offset, "dimensions", int(tag.data_type),
        )
    return tuple(dims), next_offset


def parse_array_name(buf, offset: int, byte_order: str, end: Optional[int] = None) -> Tuple[str, int]:
    tag, start, stop, next_offset = read_element(buf, offset, byte_order, end)
    if tag.data_type not in TEXT_TYPES:
        raise IncompatibleNumericTypeError(
            f"array name must be INT8 text, found {tag.data_type.name}",
            offset, "array name", int(tag.data_type),
        )
    name = bytes(buf[start:stop]).decode("utf-8", errors="replace")
    return name, next_offset


def parse_prologue(
    buf, offset: int, byte_order: str, end: Optional[int] = None,
) -> Tuple[ArrayFlags, Dimensions, str, int]:
    """Decode flags, dimensions and name in file order.

    Returns:
        (flags, dims, name, offset of the first class-specific subelement).
    """
    flags, offset = parse_array_flags(buf, offset, byte_order, end)
    dims, offset = parse_dimensions(buf, offset, byte_order, end)
    name, offset = parse_array_name(buf, offset, byte_order, end)
    return flags, dims, name, offset
