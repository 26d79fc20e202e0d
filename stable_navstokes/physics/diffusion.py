"""
Implicit diffusion
"""

import numpy as np
from ..core.boundary import Boundary
from ..core.grid import check_non_negative
from ..numerics.relaxation import relax, DEFAULT_ITERATIONS, GAUSS_SEIDEL


def diffusion_coefficients(n: int, diff: float, dt: float):
    """Neighbour and diagonal coefficients (a, c) of the backward Euler system."""
    a = dt * diff * n * n
    return a, 1 + 4 * a


def diffuse(n: int, kind: Boundary, x: np.ndarray, x0: np.ndarray,
            diff: float, dt: float,
            iterations: int = DEFAULT_ITERATIONS,
            ordering: str = GAUSS_SEIDEL) -> np.ndarray:
    """
    Diffuse ``x0`` into ``x`` with a backward Euler step

    Stable for any dt, which is why the system is relaxed rather than
    stepped explicitly. With ``diff == 0`` the result is a copy of the
    interior of ``x0``.

    Args:
        n: Interior resolution
        kind: Boundary kind of the field
        x: Output field (and initial guess), must not alias ``x0``
        x0: Field before diffusion
        diff: Diffusion coefficient (viscosity for velocity)
        dt: Time step

    Returns:
        The 2D view of ``x``
    """
    check_non_negative(diff=diff, dt=dt)
    a, c = diffusion_coefficients(n, diff, dt)
    return relax(n, kind, x, x0, a, c, iterations=iterations, ordering=ordering)
