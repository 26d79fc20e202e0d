"""
Semi-Lagrangian advection

Each interior cell is traced backward along the velocity field and the
previous field is sampled there with bilinear interpolation. Unconditionally
stable (no CFL restriction); the repeated interpolation adds numerical
diffusion.
"""

import numpy as np
from functools import lru_cache
from scipy.ndimage import map_coordinates
from ..core.boundary import Boundary, enforce_boundary
from ..core.grid import as_grid, check_fields, check_distinct, check_non_negative


@lru_cache(maxsize=8)
def _cell_coordinates(n: int):
    """Integer (i, j) coordinates of the interior cells, shape (2, n, n)."""
    coords = np.indices((n, n), dtype=np.float64) + 1.0
    coords.setflags(write=False)
    return coords


def backtrace(n: int, vx: np.ndarray, vy: np.ndarray, dt: float) -> np.ndarray:
    """
    Departure points of the interior cells, clamped to the sampling region

    Args:
        n: Interior resolution
        vx, vy: Padded 2D velocity grids
        dt: Time step

    Returns:
        Array of shape (2, n, n) holding the (x, y) source positions, both in
        [0.5, n + 0.5]
    """
    dt0 = dt * n
    cells = _cell_coordinates(n)
    x = cells[0] - dt0 * vx[1:-1, 1:-1]
    y = cells[1] - dt0 * vy[1:-1, 1:-1]
    positions = np.stack([x, y])
    np.clip(positions, 0.5, n + 0.5, out=positions)
    return positions


def advect(n: int, kind: Boundary, d: np.ndarray, d0: np.ndarray,
           vx: np.ndarray, vy: np.ndarray, dt: float) -> np.ndarray:
    """
    Advect ``d0`` along (vx, vy) into ``d``

    Args:
        n: Interior resolution
        kind: Boundary kind applied to ``d`` afterwards
        d: Output field, must not alias any input
        d0: Field being transported
        vx, vy: Velocity components
        dt: Time step

    Returns:
        The 2D view of ``d``
    """
    check_fields(n, d=d, d0=d0, vx=vx, vy=vy)
    check_distinct(d=d, d0=d0)
    check_distinct(d=d, vx=vx)
    check_distinct(d=d, vy=vy)
    check_non_negative(dt=dt)

    dg = as_grid(d, n)
    positions = backtrace(n, as_grid(vx, n), as_grid(vy, n), dt)

    # order=1 is bilinear interpolation between the four lattice neighbours
    dg[1:-1, 1:-1] = map_coordinates(
        as_grid(d0, n), positions, order=1, mode='nearest'
    )
    enforce_boundary(n, kind, dg)
    return dg
