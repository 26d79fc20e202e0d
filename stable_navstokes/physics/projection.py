"""
Pressure projection

Removes the gradient part of the velocity field (discrete Helmholtz
decomposition) so that what remains is approximately divergence free.
"""

import numpy as np
from ..core.boundary import Boundary, enforce_boundary
from ..core.grid import as_grid, check_fields, check_distinct
from ..numerics.relaxation import relax, DEFAULT_ITERATIONS, GAUSS_SEIDEL


def compute_divergence(n: int, vx: np.ndarray, vy: np.ndarray,
                       out: np.ndarray) -> np.ndarray:
    """
    Scaled centred-difference divergence of (vx, vy) into ``out``

    out[i,j] = -0.5 * ((vx[i+1,j] - vx[i-1,j]) + (vy[i,j+1] - vy[i,j-1])) / n

    This is the right hand side of the pressure Poisson system. Only the
    interior of ``out`` is written.

    Returns:
        The 2D view of ``out``
    """
    u = as_grid(vx, n)
    v = as_grid(vy, n)
    div = as_grid(out, n)
    div[1:-1, 1:-1] = -0.5 * ((u[2:, 1:-1] - u[:-2, 1:-1]) +
                              (v[1:-1, 2:] - v[1:-1, :-2])) / n
    return div


def divergence(n: int, vx: np.ndarray, vy: np.ndarray) -> np.ndarray:
    """Interior divergence (n x n) of a velocity field, without the -0.5/n scale."""
    u = as_grid(vx, n)
    v = as_grid(vy, n)
    return 0.5 * n * ((u[2:, 1:-1] - u[:-2, 1:-1]) + (v[1:-1, 2:] - v[1:-1, :-2]))


def max_divergence(n: int, vx: np.ndarray, vy: np.ndarray) -> float:
    return float(np.max(np.abs(divergence(n, vx, vy))))


def project(n: int, vx: np.ndarray, vy: np.ndarray,
            pressure: np.ndarray, div: np.ndarray,
            iterations: int = DEFAULT_ITERATIONS,
            ordering: str = GAUSS_SEIDEL):
    """
    Make (vx, vy) approximately divergence free, in place

    Args:
        n: Interior resolution
        vx, vy: Velocity components, corrected in place
        pressure: Scratch buffer for the pressure solve
        div: Scratch buffer for the divergence
        iterations: Relaxation sweeps for the pressure solve
        ordering: Relaxation ordering

    Returns:
        2D views of the corrected (vx, vy)
    """
    check_fields(n, vx=vx, vy=vy, pressure=pressure, div=div)
    check_distinct(vx=vx, vy=vy, pressure=pressure, div=div)

    u = as_grid(vx, n)
    v = as_grid(vy, n)
    p = as_grid(pressure, n)

    d = compute_divergence(n, u, v, div)
    p[1:-1, 1:-1] = 0
    enforce_boundary(n, Boundary.NONE, d)
    enforce_boundary(n, Boundary.NONE, p)

    relax(n, Boundary.NONE, pressure, div, 1.0, 4.0,
          iterations=iterations, ordering=ordering)

    u[1:-1, 1:-1] -= 0.5 * n * (p[2:, 1:-1] - p[:-2, 1:-1])
    v[1:-1, 1:-1] -= 0.5 * n * (p[1:-1, 2:] - p[1:-1, :-2])
    enforce_boundary(n, Boundary.MIRROR_X, u)
    enforce_boundary(n, Boundary.MIRROR_Y, v)

    return u, v
