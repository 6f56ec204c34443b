from .matrix import parse_matrix
from .metadata import parse_array_flags, parse_array_name, parse_dimensions, parse_prologue
from .numeric import parse_numeric_matrix
from .sparse import check_csc_shape, parse_sparse_matrix
from .structure import parse_struct_matrix

__all__ = [
    "parse_matrix",
    "parse_array_flags", "parse_array_name", "parse_dimensions", "parse_prologue",
    "parse_numeric_matrix",
    "check_csc_shape", "parse_sparse_matrix",
    "parse_struct_matrix",
]
