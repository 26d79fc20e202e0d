"""
Ghost ring boundary conditions

Free-slip, no-penetration walls on all four sides of the domain. The ghost
ring is the only part of a field this module writes.
"""

import numpy as np
from enum import IntEnum
from .grid import as_grid


class Boundary(IntEnum):
    """
    Field kind, selecting which walls negate the copied value

    NONE: scalar fields (density, pressure, divergence)
    MIRROR_X: horizontal velocity, negated on the left/right walls (i = 0, n+1)
    MIRROR_Y: vertical velocity, negated on the bottom/top walls (j = 0, n+1)
    """
    NONE = 0
    MIRROR_X = 1
    MIRROR_Y = 2


def enforce_boundary(n: int, kind: Boundary, field: np.ndarray) -> np.ndarray:
    """
    Fill the ghost ring of ``field`` from its interior

    Edge ghosts copy their interior neighbour (negated on walls normal to a
    mirrored component). Corners are then set to the mean of their two
    adjacent edge ghosts, so they must come after the edges.

    Args:
        n: Interior resolution
        kind: Field kind
        field: Flat or 2D padded buffer, modified in place

    Returns:
        The 2D view of ``field``
    """
    x = as_grid(field, n)
    sx = -1 if kind == Boundary.MIRROR_X else 1
    sy = -1 if kind == Boundary.MIRROR_Y else 1

    # Edges
    x[0, 1:-1] = sx * x[1, 1:-1]
    x[-1, 1:-1] = sx * x[-2, 1:-1]
    x[1:-1, 0] = sy * x[1:-1, 1]
    x[1:-1, -1] = sy * x[1:-1, -2]

    # Corners
    x[0, 0] = 0.5 * (x[1, 0] + x[0, 1])
    x[0, -1] = 0.5 * (x[1, -1] + x[0, -2])
    x[-1, 0] = 0.5 * (x[-2, 0] + x[-1, 1])
    x[-1, -1] = 0.5 * (x[-2, -1] + x[-1, -2])

    return x
