"""
Forcing policies and initial conditions for stable fluids simulations
"""

import numpy as np
from typing import Tuple
from ..core.boundary import Boundary, enforce_boundary
from ..core.grid import as_grid, check_fields, check_distinct
from ..physics.fluid_state_2d import FluidState

# Below this squared speed the flow counts as quiescent
QUIESCENT_SPEED_SQUARED = 5e-7
# Below this peak density the dye counts as used up
DEPLETED_DENSITY = 1.0


def grid_center(n: int) -> Tuple[int, int]:
    """Cell (i, j) the forcing policy injects into."""
    return n // 2, n // 2


def react(n: int, force: float, source: float,
          d_prev: np.ndarray, vx_prev: np.ndarray, vy_prev: np.ndarray,
          d: np.ndarray, vx: np.ndarray, vy: np.ndarray) -> Tuple[bool, bool]:
    """
    Refill the source buffers before a tick

    The source buffers are cleared. When the current velocity is near
    quiescent a fixed impulse of ``force * 10`` is placed at the grid centre
    in both velocity sources; when the current density has faded below 1 a
    deposit of ``source * 10`` is placed there in the density source.

    Both velocity components receive the impulse, so the flow (and the
    timings) differ from benchmark runs that force only the x component.

    Args:
        n: Interior resolution
        force: Impulse scale
        source: Deposit scale
        d_prev, vx_prev, vy_prev: Source buffers, overwritten
        d, vx, vy: Current fields, read only

    Returns:
        (impulse injected, dye injected)
    """
    check_fields(n, d_prev=d_prev, vx_prev=vx_prev, vy_prev=vy_prev,
                 d=d, vx=vx, vy=vy)
    check_distinct(d_prev=d_prev, vx_prev=vx_prev, vy_prev=vy_prev,
                   d=d, vx=vx, vy=vy)

    speed2 = vx.astype(np.float64) ** 2 + vy.astype(np.float64) ** 2
    max_velocity2 = float(np.max(speed2))
    max_density = float(np.max(d))

    d_prev.fill(0.0)
    vx_prev.fill(0.0)
    vy_prev.fill(0.0)

    i, j = grid_center(n)
    impulse = max_velocity2 < QUIESCENT_SPEED_SQUARED
    if impulse:
        as_grid(vx_prev, n)[i, j] = force * 10
        as_grid(vy_prev, n)[i, j] = force * 10
    dye = max_density < DEPLETED_DENSITY
    if dye:
        as_grid(d_prev, n)[i, j] = source * 10

    return impulse, dye


def react_state(state: FluidState, force: float, source: float) -> Tuple[bool, bool]:
    """Apply ``react`` to the buffers of a FluidState."""
    return react(state.n, force, source,
                 state.density_prev, state.vx_prev, state.vy_prev,
                 state.density, state.vx, state.vy)


def center_impulse(n: int, amplitude: float = 50.0,
                   direction: Tuple[float, float] = (1.0, 0.0)) -> FluidState:
    """
    Quiet state with a single-cell force source at the grid centre

    Args:
        n: Interior resolution
        amplitude: Source magnitude
        direction: (x, y) weights of the source in each velocity component

    Returns:
        Initial fluid state
    """
    state = FluidState(n)
    i, j = grid_center(n)
    state.grid(state.vx_prev)[i, j] = amplitude * direction[0]
    state.grid(state.vy_prev)[i, j] = amplitude * direction[1]
    return state


def gaussian_blob(n: int, amplitude: float = 1.0, width: float = 0.1,
                  center: Tuple[float, float] = (0.5, 0.5)) -> FluidState:
    """
    Gaussian patch of density, fluid at rest

    Args:
        n: Interior resolution
        amplitude: Peak density
        width: Standard deviation as a fraction of the domain
        center: Blob centre in unit-square coordinates

    Returns:
        Initial fluid state
    """
    state = FluidState(n)
    x, y = _cell_centres(n)
    r_squared = (x - center[0])**2 + (y - center[1])**2
    rho = state.grid(state.density)
    rho[1:-1, 1:-1] = amplitude * np.exp(-r_squared / (2 * width**2))
    enforce_boundary(n, Boundary.NONE, rho)
    return state


def vortex_pair(n: int, separation: float = 0.3,
                strength: float = 0.05) -> FluidState:
    """
    Counter-rotating vortex pair centred in the box

    Args:
        n: Interior resolution
        separation: Distance between the vortices (unit-square coordinates)
        strength: Vortex strength

    Returns:
        Initial fluid state
    """
    state = FluidState(n)
    x, y = _cell_centres(n)

    u = np.zeros_like(x)
    v = np.zeros_like(y)
    centres = [(1, (0.5 - separation/2, 0.5)), (-1, (0.5 + separation/2, 0.5))]
    for sign, (x0, y0) in centres:
        dx = x - x0
        dy = y - y0
        r_squared = dx**2 + dy**2 + 0.01  # Regularization

        # Velocity field of point vortex
        u -= sign * strength * dy / r_squared
        v += sign * strength * dx / r_squared

    vx = state.grid(state.vx)
    vy = state.grid(state.vy)
    vx[1:-1, 1:-1] = u
    vy[1:-1, 1:-1] = v
    enforce_boundary(n, Boundary.MIRROR_X, vx)
    enforce_boundary(n, Boundary.MIRROR_Y, vy)
    return state


def _cell_centres(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """Unit-square (x, y) of the interior cell centres, indexed [i, j]."""
    centres = (np.arange(1, n + 1) - 0.5) / n
    return np.meshgrid(centres, centres, indexing='ij')
