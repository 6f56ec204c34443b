"""Structure arrays.

After the prologue a structure holds:
    FIELD NAME LENGTH (INT32, one value, usually a compact tag): slot width
    FIELD NAMES (INT8, n_fields * width bytes): NUL-terminated fixed slots
    FIELD VALUES: one MATRIX element per (array element, field), written
        for array element 0 all fields in name order, then element 1, ...
        Unset fields are zero-length MATRIX elements.
"""

import struct
from typing import Tuple

from .._util import product
from ..config import ParserConfig
from ..errors import FieldCountMismatchError, IncompatibleNumericTypeError, SizeMismatchError
from ..tags import read_element
from ..types import ArrayFlags, DataType, Dimensions, StructMatrix
from .metadata import TEXT_TYPES


def parse_field_name_length(buf, offset: int, byte_order: str, end: int) -> Tuple[int, int]:
    tag, start, _stop, next_offset = read_element(buf, offset, byte_order, end)
    if tag.data_type is not DataType.INT32:
        raise IncompatibleNumericTypeError(
            f"field name length must be INT32, found {tag.data_type.name}",
            offset, "field name length", int(tag.data_type),
        )
    if tag.byte_size != 4:
        raise SizeMismatchError(
            f"field name length must be 4 bytes, found {tag.byte_size}",
            offset, "field name length", int(tag.data_type),
        )
    return struct.unpack_from(byte_order + "i", buf, start)[0], next_offset


def parse_field_names(buf, offset: int, byte_order: str, end: int, width: int) -> Tuple[Tuple[str, ...], int]:
    tag, start, stop, next_offset = read_element(buf, offset, byte_order, end)
    if tag.data_type not in TEXT_TYPES:
        raise IncompatibleNumericTypeError(
            f"field names must be INT8 text, found {tag.data_type.name}",
            offset, "field names", int(tag.data_type),
        )
    if tag.byte_size == 0:
        return (), next_offset
    if width <= 0 or tag.byte_size % width:
        raise FieldCountMismatchError(
            f"{tag.byte_size} bytes of field names do not split into slots of {width}",
            offset, "field names", int(tag.data_type),
        )
    raw = bytes(buf[start:stop])
    names = tuple(
        raw[i:i + width].split(b"\x00", 1)[0].decode("utf-8", errors="replace")
        for i in range(0, len(raw), width)
    )
    return names, next_offset


def parse_struct_matrix(
    buf,
    offset: int,
    end: int,
    byte_order: str,
    flags: ArrayFlags,
    dims: Dimensions,
    name: str,
    config: ParserConfig,
) -> Tuple[StructMatrix, int]:
    from ..elements import parse_data_element

    width, offset = parse_field_name_length(buf, offset, byte_order, end)
    names_offset = offset
    field_names, offset = parse_field_names(buf, offset, byte_order, end, width)

    values = []
    while offset < end:
        element, offset = parse_data_element(
            buf, offset, byte_order, config, allow_compressed=False, end=end,
        )
        values.append(element)

    n_fields = len(field_names)
    n_elements = product(dims)
    if n_fields == 0:
        if values:
            raise FieldCountMismatchError(
                f"{len(values)} field values but no field names",
                names_offset, "struct array",
            )
    elif len(values) % n_fields or len(values) != n_fields * n_elements:
        raise FieldCountMismatchError(
            f"{len(values)} field values for {n_fields} fields x {n_elements} elements",
            names_offset, "struct array",
        )

    # A struct without fields stores no values, whatever its dimensions.
    fields = tuple(
        dict(zip(field_names, values[i * n_fields:(i + 1) * n_fields]))
        for i in range(n_elements if n_fields else 0)
    )
    matrix = StructMatrix(
        flags=flags,
        dims=dims,
        name=name,
        field_name_length=width,
        field_names=field_names,
        fields=fields,
    )
    return matrix, offset
