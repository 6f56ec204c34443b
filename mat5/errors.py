"""Structured parse errors.

Every decoder raises a ``MatFileError`` subclass carrying where it failed
(byte offset, decoder name, declared type code) instead of a pre-formatted
string. Errors raised inside an inflated sub-buffer are re-annotated with the
offset of the enclosing compressed element; the offset inside the inflated
bytes is kept as ``inner_offset``.

When the failing element's own tag was readable, ``next_offset`` is the
offset just past that element, so a caller can skip it and keep reading.
"""

import copy
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    MALFORMED_HEADER = "malformed header"
    TRUNCATED_TAG = "truncated tag"
    TRUNCATED_ELEMENT = "truncated element"
    UNKNOWN_ELEMENT_TYPE = "unknown element type"
    NESTED_COMPRESSION = "nested compression"
    DECOMPRESSION_FAILED = "decompression failed"
    SIZE_MISMATCH = "size mismatch"
    INCOMPATIBLE_NUMERIC_TYPE = "incompatible numeric type"
    COMPLEX_PART_COUNT_MISMATCH = "complex part count mismatch"
    SPARSE_SHAPE_MISMATCH = "sparse shape mismatch"
    FIELD_COUNT_MISMATCH = "field count mismatch"


class MatFileError(ValueError):
    """Base class for all MAT-file parse failures."""

    kind: Optional[ErrorKind] = None

    def __init__(
        self,
        detail: str,
        offset: int = 0,
        decoder: str = "",
        type_code: Optional[int] = None,
        inner_offset: Optional[int] = None,
        next_offset: Optional[int] = None,
    ):
        self.detail = detail
        self.offset = offset
        self.decoder = decoder
        self.type_code = type_code
        self.inner_offset = inner_offset
        self.next_offset = next_offset
        super().__init__(self._render())

    def _render(self) -> str:
        where = f"offset {self.offset}"
        if self.inner_offset is not None:
            where += f" (inflated offset {self.inner_offset})"
        label = self.kind.value if self.kind is not None else "parse error"
        parts = [f"{label} at {where}"]
        if self.decoder:
            parts.append(f"in {self.decoder}")
        if self.type_code is not None:
            parts.append(f"type code {self.type_code}")
        return ", ".join(parts) + f": {self.detail}"

    def __reduce__(self):
        return (
            self.__class__,
            (
                self.detail, self.offset, self.decoder, self.type_code,
                self.inner_offset, self.next_offset,
            ),
        )


class MalformedHeaderError(MatFileError):
    kind = ErrorKind.MALFORMED_HEADER


class TruncatedTagError(MatFileError):
    kind = ErrorKind.TRUNCATED_TAG


class TruncatedElementError(MatFileError):
    kind = ErrorKind.TRUNCATED_ELEMENT


class UnknownElementTypeError(MatFileError):
    kind = ErrorKind.UNKNOWN_ELEMENT_TYPE


class NestedCompressionError(MatFileError):
    kind = ErrorKind.NESTED_COMPRESSION


class DecompressionFailedError(MatFileError):
    kind = ErrorKind.DECOMPRESSION_FAILED


class SizeMismatchError(MatFileError):
    kind = ErrorKind.SIZE_MISMATCH


class IncompatibleNumericTypeError(MatFileError):
    kind = ErrorKind.INCOMPATIBLE_NUMERIC_TYPE


class ComplexPartCountMismatchError(MatFileError):
    kind = ErrorKind.COMPLEX_PART_COUNT_MISMATCH


class SparseShapeMismatchError(MatFileError):
    kind = ErrorKind.SPARSE_SHAPE_MISMATCH


class FieldCountMismatchError(MatFileError):
    kind = ErrorKind.FIELD_COUNT_MISMATCH


def annotate(err: MatFileError, **context) -> MatFileError:
    """Return a copy of ``err`` with some context fields replaced.

    Accepted keys: ``offset``, ``decoder``, ``type_code``, ``inner_offset``,
    ``next_offset``.
    """
    unknown = set(context) - {"offset", "decoder", "type_code", "inner_offset", "next_offset"}
    if unknown:
        raise TypeError(f"Unknown error context field(s): {sorted(unknown)}")
    new = copy.copy(err)
    for key, value in context.items():
        setattr(new, key, value)
    new.args = (new._render(),)
    return new
