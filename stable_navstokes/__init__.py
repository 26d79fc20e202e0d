"""
Stable fluids Navier-Stokes solver

Semi-implicit 2D incompressible flow on a padded square grid: source
injection, implicit diffusion by Gauss-Seidel relaxation, semi-Lagrangian
advection and pressure projection.
"""

__version__ = "0.1.0"

from .config import SolverConfig
from .core import Boundary, FieldPair, index, allocate_field, enforce_boundary
from .physics import FluidState, StableFluidSolver, velocity_step, density_step

__all__ = [
    'SolverConfig',
    'Boundary',
    'FieldPair',
    'index',
    'allocate_field',
    'enforce_boundary',
    'FluidState',
    'StableFluidSolver',
    'velocity_step',
    'density_step'
]
