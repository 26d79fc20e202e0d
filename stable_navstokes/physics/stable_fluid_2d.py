"""
Stable fluids time stepping

velocity_step: source -> diffuse -> project -> advect -> project
density_step:  source -> diffuse -> advect

The current and previous buffers of each field trade roles through FieldPair
swaps, never through copies. Every pair is swapped an even number of times,
so the updated fields end up back in the caller's current buffers.
"""

import numpy as np
from ..config import SolverConfig
from ..core.boundary import Boundary
from ..core.buffers import FieldPair
from ..core.grid import check_fields, check_distinct, check_non_negative
from ..numerics.advection import advect
from ..numerics.relaxation import DEFAULT_ITERATIONS, GAUSS_SEIDEL
from .diffusion import diffuse
from .fluid_state_2d import FluidState
from .projection import project
from .sources import add_source


def velocity_step(n: int, vx: np.ndarray, vy: np.ndarray,
                  vx_prev: np.ndarray, vy_prev: np.ndarray,
                  visc: float, dt: float,
                  iterations: int = DEFAULT_ITERATIONS,
                  ordering: str = GAUSS_SEIDEL):
    """
    Advance the velocity field by one tick

    Args:
        n: Interior resolution
        vx, vy: Current velocity, updated in place
        vx_prev, vy_prev: Force sources on entry, scratch afterwards
        visc: Viscosity
        dt: Time step
        iterations: Relaxation sweeps per implicit solve
        ordering: Relaxation ordering

    Returns:
        (vx, vy)
    """
    check_fields(n, vx=vx, vy=vy, vx_prev=vx_prev, vy_prev=vy_prev)
    check_distinct(vx=vx, vy=vy, vx_prev=vx_prev, vy_prev=vy_prev)
    check_non_negative(visc=visc, dt=dt)

    u = FieldPair(vx, vx_prev)
    v = FieldPair(vy, vy_prev)

    add_source(n, u.current, u.previous, dt)
    add_source(n, v.current, v.previous, dt)

    u.swap()
    diffuse(n, Boundary.MIRROR_X, u.current, u.previous, visc, dt,
            iterations=iterations, ordering=ordering)
    v.swap()
    diffuse(n, Boundary.MIRROR_Y, v.current, v.previous, visc, dt,
            iterations=iterations, ordering=ordering)
    project(n, u.current, v.current, u.previous, v.previous,
            iterations=iterations, ordering=ordering)

    # Self-advection: the velocity is carried by its own projected state
    u.swap()
    v.swap()
    advect(n, Boundary.MIRROR_X, u.current, u.previous, u.previous, v.previous, dt)
    advect(n, Boundary.MIRROR_Y, v.current, v.previous, u.previous, v.previous, dt)
    project(n, u.current, v.current, u.previous, v.previous,
            iterations=iterations, ordering=ordering)

    return u.current, v.current


def density_step(n: int, d: np.ndarray, d_prev: np.ndarray,
                 vx: np.ndarray, vy: np.ndarray,
                 diff: float, dt: float,
                 iterations: int = DEFAULT_ITERATIONS,
                 ordering: str = GAUSS_SEIDEL) -> np.ndarray:
    """
    Advance the density field by one tick

    Args:
        n: Interior resolution
        d: Current density, updated in place
        d_prev: Density sources on entry, scratch afterwards
        vx, vy: Velocity field carrying the density, read only
        diff: Diffusion coefficient
        dt: Time step

    Returns:
        d
    """
    check_fields(n, d=d, d_prev=d_prev, vx=vx, vy=vy)
    check_distinct(d=d, d_prev=d_prev, vx=vx, vy=vy)
    check_non_negative(diff=diff, dt=dt)

    dye = FieldPair(d, d_prev)

    add_source(n, dye.current, dye.previous, dt)
    dye.swap()
    diffuse(n, Boundary.NONE, dye.current, dye.previous, diff, dt,
            iterations=iterations, ordering=ordering)
    dye.swap()
    advect(n, Boundary.NONE, dye.current, dye.previous, vx, vy, dt)

    return dye.current


class StableFluidSolver:
    """
    Applies a SolverConfig to a FluidState, one tick at a time
    """

    def __init__(self, config: SolverConfig = None):
        """
        Initialize solver

        Args:
            config: Run parameters (defaults if omitted)
        """
        self.config = config if config is not None else SolverConfig()
        self.config.validate()

    def create_state(self) -> FluidState:
        return FluidState(self.config.n)

    def _check_state(self, state: FluidState):
        if state.n != self.config.n:
            raise ValueError(
                f"State resolution {state.n} does not match solver n={self.config.n}"
            )

    def velocity_step(self, state: FluidState):
        self._check_state(state)
        cfg = self.config
        velocity_step(cfg.n, state.vx, state.vy, state.vx_prev, state.vy_prev,
                      cfg.visc, cfg.dt,
                      iterations=cfg.iterations, ordering=cfg.ordering)

    def density_step(self, state: FluidState):
        self._check_state(state)
        cfg = self.config
        density_step(cfg.n, state.density, state.density_prev,
                     state.vx, state.vy, cfg.diff, cfg.dt,
                     iterations=cfg.iterations, ordering=cfg.ordering)

    def time_step(self, state: FluidState) -> FluidState:
        """
        One full tick: velocity first, then density carried by the new velocity

        The state is updated in place and returned.
        """
        self.velocity_step(state)
        self.density_step(state)
        state.time += self.config.dt
        return state

    def check_state(self, state: FluidState) -> bool:
        """
        Report a state that has gone non-finite

        Returns:
            True if every current field is finite
        """
        if state.is_finite():
            return True
        print(f"Warning: non-finite values in fluid state at t={state.time:.4f}")
        return False
