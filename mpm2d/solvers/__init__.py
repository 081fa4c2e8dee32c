from mpm2d.solvers.uniform_grid import UniformGrid
from mpm2d.solvers.particle_state import ParticleState
from mpm2d.solvers.grid_state import GridState
from mpm2d.solvers.context import SolverContext
from mpm2d.solvers.handoff import SolverHandoff
from mpm2d.solvers.base_model import ConstitutiveModel, validate_passes
from mpm2d.solvers.elastic_model import ElasticModel
from mpm2d.solvers.fluid_model import FluidModel
from mpm2d.solvers.pipeline import TransferPipeline
from mpm2d.solvers.factory import build_solver, make_params

__all__ = [
    "ConstitutiveModel",
    "ElasticModel",
    "FluidModel",
    "GridState",
    "ParticleState",
    "SolverContext",
    "SolverHandoff",
    "TransferPipeline",
    "UniformGrid",
    "build_solver",
    "make_params",
    "validate_passes",
]
