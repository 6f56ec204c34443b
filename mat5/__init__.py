"""mat5 — parser for MATLAB Level-5 MAT-files.

    import mat5
    result = mat5.parse_all(data)           # data: bytes of a whole .mat file
    for element in result.elements:
        ...
    x = result.variables()["x"].to_numpy()

Dense numeric, sparse and structure arrays are decoded; compressed elements
are inflated (zlib by default, see ParserConfig.inflate) and parsed
recursively. Other element kinds come back as UnsupportedElement. Malformed
input raises a MatFileError subclass carrying the failing byte offset.
"""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, ParserConfig
from .elements import parse_all, parse_data_element
from .errors import (
    ComplexPartCountMismatchError,
    DecompressionFailedError,
    ErrorKind,
    FieldCountMismatchError,
    IncompatibleNumericTypeError,
    MalformedHeaderError,
    MatFileError,
    NestedCompressionError,
    SizeMismatchError,
    SparseShapeMismatchError,
    TruncatedElementError,
    TruncatedTagError,
    UnknownElementTypeError,
)
from .header import parse_header
from .numeric import parse_numeric_subelement
from .tags import parse_tag
from .types import (
    ArrayClass,
    ArrayFlags,
    CompressedElement,
    DataElement,
    DataElementTag,
    DataType,
    EmptyMatrix,
    Header,
    NumericData,
    NumericMatrix,
    ParseResult,
    SparseMatrix,
    StructMatrix,
    UnsupportedElement,
)

__all__ = [
    "parse_all", "parse_data_element", "parse_header", "parse_tag", "parse_numeric_subelement",
    "ParserConfig", "DEFAULT_CONFIG",
    "ArrayClass", "ArrayFlags", "CompressedElement", "DataElement", "DataElementTag",
    "DataType", "EmptyMatrix", "Header", "NumericData", "NumericMatrix", "ParseResult",
    "SparseMatrix", "StructMatrix", "UnsupportedElement",
    "ErrorKind", "MatFileError", "MalformedHeaderError", "TruncatedTagError",
    "TruncatedElementError", "UnknownElementTypeError", "NestedCompressionError",
    "DecompressionFailedError", "SizeMismatchError", "IncompatibleNumericTypeError",
    "ComplexPartCountMismatchError", "SparseShapeMismatchError", "FieldCountMismatchError",
]
