"""
Gauss-Seidel relaxation for the implicit diffusion and pressure systems

Solves, for every interior cell,

    x[i,j] = (x0[i,j] + a*(x[i-1,j] + x[i+1,j] + x[i,j-1] + x[i,j+1])) / c

with a fixed number of sweeps instead of a convergence test. Boundary
conditions are re-applied after each sweep so the ghost cells read by the next
sweep are consistent.
"""

import numpy as np
import scipy.sparse as sp
from functools import lru_cache
from scipy.sparse.linalg import splu
from ..core.boundary import Boundary, enforce_boundary
from ..core.grid import as_grid, check_fields, check_distinct

DEFAULT_ITERATIONS = 20

GAUSS_SEIDEL = "gauss_seidel"
RED_BLACK = "red_black"
ORDERINGS = (GAUSS_SEIDEL, RED_BLACK)


@lru_cache(maxsize=32)
def _sweep_operator(n: int, a: float, c: float):
    """
    LU factor of the lower-triangular operator of one raster sweep

    Scanning i outer, j inner, the neighbours (i-1, j) and (i, j-1) have
    already been updated when (i, j) is visited. Moving them to the left hand
    side gives (c*I - a*L) x_new = x0 + a*(old and ghost neighbours), whose
    forward substitution is exactly one lexicographic Gauss-Seidel sweep.
    """
    size = n * n
    diagonals = [np.full(size, c)]
    offsets = [0]
    if n > 1:
        left = np.full(size - 1, -a)
        # first cell of each row has a ghost, not an unknown, on its left
        left[n - 1::n] = 0.0
        diagonals += [left, np.full(size - n, -a)]
        offsets += [-1, -n]
    operator = sp.diags(diagonals, offsets, shape=(size, size), format='csc')
    # Natural ordering keeps the factor triangular; c > a so no pivoting
    return splu(operator, permc_spec='NATURAL', diag_pivot_thresh=0.0)


def _lexicographic_sweep(n: int, x: np.ndarray, x0: np.ndarray, a: float, lu):
    rhs = x0[1:-1, 1:-1].astype(np.float64)
    rhs += a * np.add(x[2:, 1:-1], x[1:-1, 2:], dtype=np.float64)
    rhs[0, :] += a * x[0, 1:-1].astype(np.float64)
    rhs[:, 0] += a * x[1:-1, 0].astype(np.float64)
    x[1:-1, 1:-1] = lu.solve(rhs.ravel()).reshape(n, n)


@lru_cache(maxsize=32)
def _colour_masks(n: int):
    ii, jj = np.indices((n, n))
    red = (ii + jj) % 2 == 0
    return red, ~red


def _red_black_sweep(n: int, x: np.ndarray, x0: np.ndarray, a: float, c: float):
    inner = x[1:-1, 1:-1]
    for mask in _colour_masks(n):
        neighbours = x[:-2, 1:-1] + x[2:, 1:-1] + x[1:-1, :-2] + x[1:-1, 2:]
        update = (x0[1:-1, 1:-1] + a * neighbours) / c
        inner[mask] = update[mask]


def relax(n: int, kind: Boundary, x: np.ndarray, x0: np.ndarray,
          a: float, c: float,
          iterations: int = DEFAULT_ITERATIONS,
          ordering: str = GAUSS_SEIDEL) -> np.ndarray:
    """
    Relax ``x`` towards the solution of the implicit system, in place

    Args:
        n: Interior resolution
        kind: Boundary kind re-applied to ``x`` after each sweep
        x: Unknown field, also the initial guess
        x0: Right hand side field, read only
        a: Neighbour coupling coefficient
        c: Diagonal coefficient, must be positive
        iterations: Number of sweeps. More sweeps give a more accurate
            implicit solve, fewer are faster.
        ordering: 'gauss_seidel' for the raster sweep or 'red_black' for the
            coloured variant (vectorised, numerically different)

    Returns:
        The 2D view of ``x``
    """
    check_fields(n, x=x, x0=x0)
    check_distinct(x=x, x0=x0)
    if not c > 0:
        raise ValueError(f"Diagonal coefficient must be positive, got c={c!r}")
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")

    xg = as_grid(x, n)
    x0g = as_grid(x0, n)

    if ordering == GAUSS_SEIDEL:
        lu = _sweep_operator(n, float(a), float(c))
        for _ in range(iterations):
            _lexicographic_sweep(n, xg, x0g, float(a), lu)
            enforce_boundary(n, kind, xg)
    elif ordering == RED_BLACK:
        for _ in range(iterations):
            _red_black_sweep(n, xg, x0g, float(a), float(c))
            enforce_boundary(n, kind, xg)
    else:
        raise ValueError(f"Unknown ordering: {ordering}")

    return xg
