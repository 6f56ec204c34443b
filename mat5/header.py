"""Level-5 MAT-file header.

HEADER (128 bytes fixed):
    text: bytes[116]              # human-readable description, blank padded
    subsystem_offset: bytes[8]    # subsystem-specific data offset (kept raw)
    version: uint16               # 0x0100, written in the file's byte order
    endian_indicator: bytes[2]    # b'IM' little-endian, b'MI' big-endian

A Level-4 file has a NUL in its first four bytes; those are rejected.
"""

import logging
import struct
from typing import Tuple

from .config import DEFAULT_CONFIG, ParserConfig
from .errors import MalformedHeaderError
from .types import Header

logger = logging.getLogger(__name__)

HEADER_SIZE = 128
HEADER_FORMAT = "116s8s2s2s"
VERSION = 0x0100

_BYTE_ORDERS = {b"IM": "<", b"MI": ">"}


def parse_header(buf, config: ParserConfig = DEFAULT_CONFIG) -> Tuple[Header, int]:
    """Decode the header at the start of ``buf``.

    Args:
        buf: Complete MAT-file bytes.
        config: Parser configuration (``strict_version``).

    Returns:
        (Header, offset of the first data element).
    """
    if len(buf) < HEADER_SIZE:
        raise MalformedHeaderError(
            f"need {HEADER_SIZE} bytes, got {len(buf)}", 0, "header",
        )
    text, subsystem_offset, version_bytes, marker = struct.unpack_from(HEADER_FORMAT, buf, 0)

    if b"\x00" in text[:4]:
        raise MalformedHeaderError(
            f"first four bytes contain NUL ({text[:4]!r}); not a Level-5 file", 0, "header",
        )

    byte_order = _BYTE_ORDERS.get(marker)
    if byte_order is None:
        raise MalformedHeaderError(
            f"unknown endian indicator {marker!r}", 126, "header",
        )

    version = struct.unpack(byte_order + "H", version_bytes)[0]
    if config.strict_version and version != VERSION:
        raise MalformedHeaderError(
            f"unsupported version 0x{version:04x}", 124, "header",
        )

    header = Header(
        text=text.decode("utf-8", errors="replace").rstrip(" \x00"),
        subsystem_offset=subsystem_offset,
        version=version,
        byte_order=byte_order,
    )
    logger.debug("MAT header: version 0x%04x, byte order %r", version, byte_order)
    return header, HEADER_SIZE
