"""Data-element tags.

STANDARD TAG (8 bytes):
    data_type: uint32
    byte_size: uint32
    payload: byte_size bytes, then padding up to the next 8-byte boundary

COMPACT TAG (payload of at most 4 bytes):
    byte_size: uint16 + data_type: uint16 packed in one uint32 word
    payload: 4 bytes (unused tail is padding)

A tag is compact when the upper 16 bits of its first word are non-zero.
Compressed elements are the exception to the padding rule: their payload is
never padded.
"""

import struct
from typing import Optional, Tuple

from ._util import padding_for
from .errors import SizeMismatchError, TruncatedElementError, TruncatedTagError, UnknownElementTypeError
from .types import DataElementTag, DataType

TAG_SIZE = 8
COMPACT_PAYLOAD_SIZE = 4


def parse_tag(buf, offset: int, byte_order: str, end: Optional[int] = None) -> DataElementTag:
    """Decode the tag starting at ``offset``.

    Args:
        buf: Buffer holding the tag.
        offset: Tag position.
        byte_order: '<' or '>' from the header.
        end: Exclusive bound of the enclosing element (defaults to len(buf)).

    Returns:
        DataElementTag.
    """
    if end is None:
        end = len(buf)
    if end - offset < TAG_SIZE:
        raise TruncatedTagError(
            f"need {TAG_SIZE} bytes, {max(end - offset, 0)} left", offset, "tag",
        )

    word = struct.unpack_from(byte_order + "I", buf, offset)[0]
    if word & 0xFFFF0000:
        type_code = word & 0x0000FFFF
        byte_size = word >> 16
        data_type = _data_type(type_code, offset)
        if byte_size > COMPACT_PAYLOAD_SIZE:
            raise SizeMismatchError(
                f"compact tag declares {byte_size} bytes (max {COMPACT_PAYLOAD_SIZE})",
                offset, "tag", type_code,
            )
        return DataElementTag(
            data_type=data_type,
            byte_size=byte_size,
            padding=COMPACT_PAYLOAD_SIZE - byte_size,
            compact=True,
        )

    data_type = _data_type(word, offset)
    byte_size = struct.unpack_from(byte_order + "I", buf, offset + 4)[0]
    return DataElementTag(
        data_type=data_type,
        byte_size=byte_size,
        padding=padding_for(byte_size),
    )


def read_element(
    buf,
    offset: int,
    byte_order: str,
    end: Optional[int] = None,
    tolerate_missing_padding: bool = False,
) -> Tuple[DataElementTag, int, int, int]:
    """Locate one element's payload and the start of the next element.

    The next-element offset is computed from the tag alone, before any of
    the payload is looked at.

    Returns:
        (tag, payload_start, payload_stop, next_offset).
    """
    if end is None:
        end = len(buf)
    tag = parse_tag(buf, offset, byte_order, end)
    start = tag.payload_offset(offset)
    stop = start + tag.byte_size
    if stop > end:
        raise TruncatedElementError(
            f"payload of {tag.byte_size} bytes runs {stop - end} bytes past the end",
            offset, "element", int(tag.data_type),
        )

    if tag.data_type is DataType.COMPRESSED and not tag.compact:
        next_offset = stop
    else:
        next_offset = stop + tag.padding
        if next_offset > end:
            if not tolerate_missing_padding:
                raise TruncatedElementError(
                    f"missing {next_offset - end} padding bytes",
                    offset, "element", int(tag.data_type),
                )
            next_offset = end
    return tag, start, stop, next_offset


def _data_type(type_code: int, offset: int) -> DataType:
    try:
        return DataType(type_code)
    except ValueError:
        raise UnknownElementTypeError(
            f"unrecognised data type {type_code}", offset, "tag", type_code,
        ) from None
