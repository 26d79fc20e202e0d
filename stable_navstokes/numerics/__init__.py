"""Numerical kernels for the stable fluids solver"""

from .relaxation import relax, DEFAULT_ITERATIONS, ORDERINGS
from .advection import advect, backtrace

__all__ = [
    'relax',
    'DEFAULT_ITERATIONS',
    'ORDERINGS',
    'advect',
    'backtrace'
]
