"""Small pure helpers shared by the decoders."""

from typing import Iterable


def ceil_to_multiple(x: int, multiple: int) -> int:
    """Round ``x`` up to the next multiple of ``multiple`` (0 stays 0)."""
    if x <= 0:
        return 0
    return ((x - 1) // multiple + 1) * multiple


def padding_for(byte_size: int, alignment: int = 8) -> int:
    """Number of padding bytes that follow a payload of ``byte_size`` bytes."""
    return ceil_to_multiple(byte_size, alignment) - byte_size


def product(values: Iterable[int]) -> int:
    result = 1
    for v in values:
        result *= v
    return result
