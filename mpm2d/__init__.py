from mpm2d.configurations.parameters import ElasticParams, FluidParams, SimulationParams
from mpm2d.solvers import (
    ElasticModel,
    FluidModel,
    SolverHandoff,
    TransferPipeline,
    UniformGrid,
    build_solver,
    make_params,
)

__all__ = [
    "ElasticModel",
    "ElasticParams",
    "FluidModel",
    "FluidParams",
    "SimulationParams",
    "SolverHandoff",
    "TransferPipeline",
    "UniformGrid",
    "build_solver",
    "make_params",
]
