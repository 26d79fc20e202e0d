"""
Simulation parameters for the stable fluids solver and its headless driver
"""

from dataclasses import dataclass, asdict, replace
from typing import Dict
from .numerics.relaxation import DEFAULT_ITERATIONS, ORDERINGS, GAUSS_SEIDEL


@dataclass
class SolverConfig:
    """
    Parameters of a run

    n: Grid resolution (interior cells per side)
    dt: Time step
    diff: Diffusion coefficient of the density field
    visc: Viscosity coefficient of the velocity field
    force: Scale of the velocity impulse injected by the forcing policy
    source: Amount of density deposited by the forcing policy
    steps: Number of ticks the headless driver performs
    iterations: Relaxation sweeps per implicit solve. Raising it sharpens
        diffusion and projection at a proportional cost in speed; lowering
        it is faster but leaves more residual divergence.
    ordering: Relaxation ordering, 'gauss_seidel' or 'red_black'
    """
    n: int = 128
    dt: float = 0.1
    diff: float = 0.0
    visc: float = 0.0
    force: float = 5.0
    source: float = 100.0
    steps: int = 1 << 30
    iterations: int = DEFAULT_ITERATIONS
    ordering: str = GAUSS_SEIDEL

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check every parameter

        Raises:
            ValueError: on the first invalid parameter
        """
        if int(self.n) != self.n or self.n < 1:
            raise ValueError(f"n must be a positive integer, got {self.n!r}")
        for name in ('dt', 'diff', 'visc'):
            value = getattr(self, name)
            if not value >= 0:
                raise ValueError(f"{name} must be non-negative, got {value!r}")
        if int(self.steps) != self.steps or self.steps < 0:
            raise ValueError(f"steps must be a non-negative integer, got {self.steps!r}")
        if int(self.iterations) != self.iterations or self.iterations < 0:
            raise ValueError(
                f"iterations must be a non-negative integer, got {self.iterations!r}"
            )
        if self.ordering not in ORDERINGS:
            raise ValueError(f"Unknown ordering: {self.ordering}")

    def with_updates(self, **changes) -> 'SolverConfig':
        """Validated copy with some parameters changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def describe(self) -> str:
        return (f"    N = {self.n}\n"
                f"    dt = {self.dt}\n"
                f"    diff = {self.diff}\n"
                f"    visc = {self.visc}\n"
                f"    force = {self.force}\n"
                f"    source = {self.source}")
