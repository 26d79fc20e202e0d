"""
2D fluid state: velocity and density fields with their scratch buffers
"""

import numpy as np
from ..core.buffers import FieldPair
from ..core.grid import as_grid, check_resolution, interior_sum
from .projection import divergence


class FluidState:
    """
    Six padded field buffers held as three double-buffered pairs

    The "previous" buffers are not history: between ticks they carry the
    source terms the driver injects, during a tick they are scratch space.
    """

    def __init__(self, n: int, time: float = 0.0):
        """
        Allocate a zeroed state

        Args:
            n: Interior resolution
            time: Simulation time
        """
        check_resolution(n)
        self.n = n
        self.time = time
        self.velocity_x = FieldPair.zeros(n)
        self.velocity_y = FieldPair.zeros(n)
        self.dye = FieldPair.zeros(n)

    @property
    def vx(self) -> np.ndarray:
        return self.velocity_x.current

    @property
    def vy(self) -> np.ndarray:
        return self.velocity_y.current

    @property
    def density(self) -> np.ndarray:
        return self.dye.current

    @property
    def vx_prev(self) -> np.ndarray:
        return self.velocity_x.previous

    @property
    def vy_prev(self) -> np.ndarray:
        return self.velocity_y.previous

    @property
    def density_prev(self) -> np.ndarray:
        return self.dye.previous

    def reset(self):
        """Zero every buffer and the clock."""
        for pair in (self.velocity_x, self.velocity_y, self.dye):
            pair.fill(0.0)
        self.time = 0.0

    def grid(self, field: np.ndarray) -> np.ndarray:
        return as_grid(field, self.n)

    def speed_squared(self) -> np.ndarray:
        """Squared speed over the whole padded grid."""
        vx = self.vx.astype(np.float64)
        vy = self.vy.astype(np.float64)
        return vx * vx + vy * vy

    def max_speed(self) -> float:
        return float(np.sqrt(np.max(self.speed_squared())))

    def kinetic_energy(self) -> float:
        """
        Kinetic energy 0.5 * sum |u|^2 * h^2 over the interior, h = 1/n
        """
        e = as_grid(self.speed_squared(), self.n)[1:-1, 1:-1]
        return float(0.5 * np.sum(e) / (self.n * self.n))

    def total_density(self) -> float:
        return interior_sum(self.density, self.n)

    def max_divergence(self) -> float:
        return float(np.max(np.abs(divergence(self.n, self.vx, self.vy))))

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.vx)) and
                    np.all(np.isfinite(self.vy)) and
                    np.all(np.isfinite(self.density)))

    def __repr__(self):
        return f"FluidState(n={self.n}, time={self.time:.4f})"
