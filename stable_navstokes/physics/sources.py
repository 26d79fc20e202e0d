"""
Source injection
"""

import numpy as np
from ..core.grid import check_fields, check_distinct, check_non_negative


def add_source(n: int, x: np.ndarray, s: np.ndarray, dt: float) -> np.ndarray:
    """
    Add ``dt * s`` to every cell of ``x``, ghost ring included

    Args:
        n: Interior resolution
        x: Field receiving the source, modified in place
        s: Per-cell source rates
        dt: Time step

    Returns:
        ``x``
    """
    check_fields(n, x=x, s=s)
    check_distinct(x=x, s=s)
    check_non_negative(dt=dt)
    x += dt * s
    return x
