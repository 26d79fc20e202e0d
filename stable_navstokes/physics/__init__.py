"""Physics steps of the stable fluids scheme"""

from .sources import add_source
from .diffusion import diffuse
from .projection import project, compute_divergence, divergence, max_divergence
from .fluid_state_2d import FluidState
from .stable_fluid_2d import velocity_step, density_step, StableFluidSolver

__all__ = [
    'add_source',
    'diffuse',
    'project',
    'compute_divergence',
    'divergence',
    'max_divergence',
    'FluidState',
    'velocity_step',
    'density_step',
    'StableFluidSolver'
]
