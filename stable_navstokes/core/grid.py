"""
Padded grid layout for the stable fluids solver

Every field lives in a flat float32 buffer of (n+2)**2 values: an n x n
interior surrounded by a one-cell ghost ring. The single flattening convention
used throughout the package is

    index(i, j, n) = j + (n + 2) * i

so ``i`` (the x coordinate) is the slow axis and ``j`` (the y coordinate) is
the fast axis. ``as_grid(field, n)[i, j]`` is ``field[index(i, j, n)]``.
"""

import numpy as np
from typing import Tuple

DTYPE = np.float32


def index(i: int, j: int, n: int) -> int:
    """Flat offset of cell (i, j) in a padded buffer. No bounds checks."""
    return j + (n + 2) * i


def padded_shape(n: int) -> Tuple[int, int]:
    return (n + 2, n + 2)


def padded_size(n: int) -> int:
    return (n + 2) * (n + 2)


def allocate_field(n: int) -> np.ndarray:
    """
    Allocate a zero-initialized flat field buffer

    Args:
        n: Interior resolution

    Returns:
        Flat float32 array of (n+2)**2 zeros
    """
    check_resolution(n)
    return np.zeros(padded_size(n), dtype=DTYPE)


def as_grid(field: np.ndarray, n: int) -> np.ndarray:
    """
    2D (n+2, n+2) view of a field buffer sharing its memory

    Accepts flat buffers and buffers that already have the padded shape.
    Writes through the returned array land in ``field``.
    """
    grid = field.reshape(padded_shape(n))
    if not np.shares_memory(grid, field):
        raise ValueError("field buffer cannot be viewed in place as a grid")
    return grid


def interior(grid: np.ndarray) -> np.ndarray:
    """Interior cells [1, n] x [1, n] of a padded 2D grid."""
    return grid[1:-1, 1:-1]


def interior_sum(field: np.ndarray, n: int) -> float:
    """Sum over the interior cells, accumulated in double precision."""
    return float(np.sum(interior(as_grid(field, n)), dtype=np.float64))


def check_resolution(n: int):
    if int(n) != n or n < 1:
        raise ValueError(f"Grid resolution must be a positive integer, got {n!r}")


def check_field(field: np.ndarray, n: int, name: str = "field"):
    """
    Validate that a buffer can be updated in place as an n-grid field

    Raises:
        ValueError: wrong type, dtype, size or memory layout
    """
    if not isinstance(field, np.ndarray):
        raise ValueError(f"{name} must be a numpy array, got {type(field).__name__}")
    if field.dtype != DTYPE:
        raise ValueError(f"{name} must be float32, got {field.dtype}")
    if field.size != padded_size(n):
        raise ValueError(
            f"{name} has {field.size} cells, expected {padded_size(n)} for n={n}"
        )
    if not field.flags.c_contiguous:
        raise ValueError(f"{name} must be C-contiguous")


def check_fields(n: int, **fields: np.ndarray):
    check_resolution(n)
    for name, field in fields.items():
        check_field(field, n, name)


def check_distinct(**fields: np.ndarray):
    """
    Require that no two of the given buffers overlap in memory

    In-place relaxation and interpolation read one buffer while writing
    another; overlap silently corrupts the result.
    """
    names = list(fields)
    for a in range(len(names)):
        for b in range(a + 1, len(names)):
            if np.shares_memory(fields[names[a]], fields[names[b]]):
                raise ValueError(
                    f"{names[a]} and {names[b]} must be distinct buffers"
                )


def check_non_negative(**params: float):
    for name, value in params.items():
        if not value >= 0:
            raise ValueError(f"{name} must be non-negative, got {value!r}")
