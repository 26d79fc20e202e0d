"""Forcing policies and initial conditions"""

from .initial_conditions import (
    react,
    react_state,
    center_impulse,
    gaussian_blob,
    vortex_pair
)

__all__ = [
    'react',
    'react_state',
    'center_impulse',
    'gaussian_blob',
    'vortex_pair'
]
