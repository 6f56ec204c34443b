"""Dense numeric arrays: real part, then an imaginary part when complex."""

from typing import Tuple

from .._util import product
from ..errors import ComplexPartCountMismatchError, SizeMismatchError
from ..numeric import check_compatible, parse_numeric_subelement
from ..types import ArrayFlags, Dimensions, NumericMatrix


def parse_numeric_matrix(
    buf,
    offset: int,
    end: int,
    byte_order: str,
    flags: ArrayFlags,
    dims: Dimensions,
    name: str,
) -> Tuple[NumericMatrix, int]:
    n_required = product(dims)

    real_offset = offset
    real, offset = parse_numeric_subelement(buf, offset, byte_order, end, "real part")
    check_compatible(flags.array_class, real.data_type, flags.logical, real_offset)
    if real.count != n_required:
        raise SizeMismatchError(
            f"dimensions {dims} need {n_required} values, real part has {real.count}",
            real_offset, "numeric array", int(real.data_type),
        )

    imag = None
    if flags.complex:
        imag_offset = offset
        imag, offset = parse_numeric_subelement(buf, offset, byte_order, end, "imaginary part")
        check_compatible(flags.array_class, imag.data_type, False, imag_offset)
        if imag.count != real.count:
            raise ComplexPartCountMismatchError(
                f"real part has {real.count} values, imaginary part has {imag.count}",
                imag_offset, "numeric array", int(imag.data_type),
            )

    return NumericMatrix(flags=flags, dims=dims, name=name, real=real, imag=imag), offset
