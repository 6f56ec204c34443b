"""Data-element dispatch and the top-level driver.

A MAT-file is a header followed by data elements until the end of the
buffer. Top-level elements are MATRIX elements or COMPRESSED wrappers whose
zlib payload inflates to exactly one MATRIX element. Compressed payloads are
parsed as independent buffers starting at offset 0, so byte offsets in errors
raised inside them are moved to the wrapper's own offset.
"""

import logging
from typing import Optional, Tuple

from .arrays.matrix import parse_matrix
from .config import DEFAULT_CONFIG, ParserConfig
from .errors import DecompressionFailedError, MatFileError, NestedCompressionError, annotate
from .header import parse_header
from .tags import read_element
from .types import (
    CompressedElement,
    DataElement,
    DataElementTag,
    DataType,
    EmptyMatrix,
    ParseResult,
    UnsupportedElement,
)

logger = logging.getLogger(__name__)


def parse_data_element(
    buf,
    offset: int,
    byte_order: str,
    config: ParserConfig = DEFAULT_CONFIG,
    allow_compressed: bool = True,
    end: Optional[int] = None,
) -> Tuple[DataElement, int]:
    """Decode the element at ``offset``.

    Args:
        buf: Buffer holding the element.
        offset: Tag position.
        byte_order: '<' or '>' from the header.
        config: Parser configuration.
        allow_compressed: False inside inflated payloads and struct fields.
        end: Exclusive bound of the enclosing element (defaults to len(buf)).

    Returns:
        (element, offset just past the padded element).
    """
    tag, start, stop, next_offset = read_element(
        buf, offset, byte_order, end, config.tolerate_missing_padding,
    )
    logger.debug(
        "Element at %d: %s, %d bytes", offset, tag.data_type.name, tag.byte_size,
    )

    try:
        if tag.data_type is DataType.MATRIX:
            if tag.byte_size == 0:
                return EmptyMatrix(), next_offset
            return parse_matrix(buf, start, stop, byte_order, config), next_offset

        if tag.data_type is DataType.COMPRESSED:
            if not allow_compressed:
                raise NestedCompressionError(
                    "compressed element inside a compressed or matrix payload",
                    offset, "data element", int(tag.data_type),
                )
            return _parse_compressed(buf, offset, start, stop, tag, byte_order, config), next_offset
    except MatFileError as err:
        # Tag was readable: report where the following element starts.
        raise annotate(err, next_offset=next_offset) from err

    logger.warning(
        "Unsupported element type %s at offset %d (expected MATRIX or COMPRESSED)",
        tag.data_type.name, offset,
    )
    element = UnsupportedElement(
        data_type=tag.data_type,
        byte_size=tag.byte_size,
        raw=bytes(buf[start:stop]) if config.keep_unsupported_bytes else None,
    )
    return element, next_offset


def _parse_compressed(
    buf,
    offset: int,
    start: int,
    stop: int,
    tag: DataElementTag,
    byte_order: str,
    config: ParserConfig,
) -> CompressedElement:
    try:
        inflated = config.inflate(bytes(buf[start:stop]))
    except Exception as exc:
        raise DecompressionFailedError(
            f"inflate failed: {exc}", offset, "compressed element", int(tag.data_type),
        ) from exc
    logger.debug("Inflated %d bytes at %d to %d bytes", tag.byte_size, offset, len(inflated))

    try:
        element, _ = parse_data_element(inflated, 0, byte_order, config, allow_compressed=False)
    except MatFileError as err:
        raise annotate(err, offset=offset, inner_offset=err.offset) from err
    return CompressedElement(element=element, compressed_size=tag.byte_size)


def parse_all(buf, config: ParserConfig = DEFAULT_CONFIG) -> ParseResult:
    """Parse a complete MAT-file.

    Stops at the first failing element; no partial result is returned.

    Args:
        buf: Whole file contents (bytes, bytearray or memoryview).
        config: Parser configuration.

    Returns:
        ParseResult with the header and the top-level elements in file order.
    """
    header, offset = parse_header(buf, config)
    elements = []
    while offset < len(buf):
        element, offset = parse_data_element(buf, offset, header.byte_order, config)
        elements.append(element)
    logger.debug("Parsed %d top-level elements", len(elements))
    return ParseResult(header=header, elements=tuple(elements))
