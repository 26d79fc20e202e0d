"""Diagnostics for stable fluids simulations"""

from .diagnostics import DiagnosticPlotter, TIMING_KEYS

__all__ = [
    'DiagnosticPlotter',
    'TIMING_KEYS'
]
