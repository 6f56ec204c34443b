"""Matrix payload decoder: prologue, then dispatch on the array class."""

import logging

from ..config import ParserConfig
from ..types import ArrayClass, DataElement, DataType, UnsupportedElement
from .metadata import parse_prologue
from .numeric import parse_numeric_matrix
from .sparse import parse_sparse_matrix
from .structure import parse_struct_matrix

logger = logging.getLogger(__name__)

_NUMERIC_CLASSES = frozenset(c for c in ArrayClass if c.numeric_data_type is not None)


def parse_matrix(buf, start: int, end: int, byte_order: str, config: ParserConfig) -> DataElement:
    """Decode the matrix payload ``buf[start:end]``.

    Classes without a decoder (cell, object, char, unknown codes) still have
    their prologue decoded; the rest of the payload is passed through.
    """
    flags, dims, name, offset = parse_prologue(buf, start, byte_order, end)
    array_class = flags.array_class

    if array_class is ArrayClass.SPARSE:
        matrix, _ = parse_sparse_matrix(buf, offset, end, byte_order, flags, dims, name)
    elif array_class is ArrayClass.STRUCT:
        matrix, _ = parse_struct_matrix(buf, offset, end, byte_order, flags, dims, name, config)
    elif array_class in _NUMERIC_CLASSES:
        matrix, _ = parse_numeric_matrix(buf, offset, end, byte_order, flags, dims, name)
    else:
        label = array_class.name if array_class is not None else f"code {flags.class_code}"
        logger.warning("Array %r has unsupported class %s; payload kept undecoded", name, label)
        matrix = UnsupportedElement(
            data_type=DataType.MATRIX,
            byte_size=end - start,
            raw=bytes(buf[offset:end]) if config.keep_unsupported_bytes else None,
            flags=flags,
            dims=dims,
            name=name,
        )
    return matrix
