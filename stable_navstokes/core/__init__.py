"""Grid layout, boundary conditions and double buffering"""

from .grid import (
    DTYPE,
    index,
    padded_size,
    allocate_field,
    as_grid,
    interior_sum,
)
from .boundary import Boundary, enforce_boundary
from .buffers import FieldPair

__all__ = [
    'DTYPE',
    'index',
    'padded_size',
    'allocate_field',
    'as_grid',
    'interior_sum',
    'Boundary',
    'enforce_boundary',
    'FieldPair'
]
