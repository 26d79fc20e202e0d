"""
Double buffering by role swap
"""

import numpy as np
from .grid import allocate_field


class FieldPair:
    """
    Two owned field buffers plus a flag saying which one is current

    ``swap()`` exchanges the current/previous roles without touching the
    data, so the two buffers always hold distinct memory.
    """

    def __init__(self, current: np.ndarray, previous: np.ndarray):
        if np.shares_memory(current, previous):
            raise ValueError("current and previous must be distinct buffers")
        self._buffers = (current, previous)
        self._flipped = False

    @classmethod
    def zeros(cls, n: int) -> 'FieldPair':
        return cls(allocate_field(n), allocate_field(n))

    @property
    def current(self) -> np.ndarray:
        return self._buffers[1 if self._flipped else 0]

    @property
    def previous(self) -> np.ndarray:
        return self._buffers[0 if self._flipped else 1]

    def swap(self):
        self._flipped = not self._flipped

    def fill(self, value: float = 0.0):
        for buf in self._buffers:
            buf.fill(value)

    def __repr__(self):
        return (f"FieldPair(size={self.current.size}, "
                f"swapped={self._flipped})")
