from mpm2d.configurations.parameters import ElasticParams, FluidParams, SimulationParams
from mpm2d.solvers.elastic_model import ElasticModel
from mpm2d.solvers.uniform_grid import UniformGrid
from mpm2d.solvers.fluid_model import FluidModel
from mpm2d.solvers.pipeline import TransferPipeline
from mpm2d.solvers.handoff import SolverHandoff
from mpm2d.solvers.context import SolverContext
from mpm2d.errors import ConfigurationError, HandoffError
from mpm2d.constants import Material, ModelKind

from typing import Optional

import logging

logger = logging.getLogger(__name__)

MODELS = {
    ElasticParams: ElasticModel,
    FluidParams: FluidModel,
}


def make_params(
    kind: str,
    material: Material,
    grid: UniformGrid,
    particle_count: int,
    timestep: float,
) -> SimulationParams:
    """Builds the parameter record of the given model kind from a material."""
    if kind == ModelKind.Elastic:
        return ElasticParams.for_grid(
            grid,
            particle_count=particle_count,
            timestep=timestep,
            density=material.Density,
            youngs_modulus=material.E,
        )
    if kind == ModelKind.Fluid:
        return FluidParams.for_grid(
            grid,
            particle_count=particle_count,
            timestep=timestep,
            rest_density=material.Density,
            dynamic_viscosity=material.DynamicViscosity,
            eos_stiffness=material.EosStiffness,
            eos_power=material.EosPower,
        )
    raise ConfigurationError(f"unknown model kind '{kind}'")


def build_solver(
    params: SimulationParams,
    iters_count: int,
    grid: Optional[UniformGrid] = None,
    handoff: Optional[SolverHandoff] = None,
) -> TransferPipeline:
    """
    Builds a solver for the model matching the type of params. Fresh buffers are
    allocated for grid, or the buffers of a released solver are taken from handoff.
    """
    model_class = MODELS.get(type(params))
    if model_class is None:
        raise ConfigurationError(f"no constitutive model for {type(params).__name__}")
    if (grid is None) == (handoff is None):
        raise ConfigurationError("a solver needs either a grid or a handoff")
    if iters_count <= 0:
        raise ConfigurationError(f"iters_count must be positive, got {iters_count}")

    if handoff is not None:
        if handoff.is_consumed:
            raise HandoffError("this handoff has already been taken")
        if handoff.particle_count != params.particle_count:
            raise HandoffError(
                f"handoff holds {handoff.particle_count} particles, params expect {params.particle_count}"
            )
        context = handoff.take()
        logger.info("Taking over %d particles with %s", context.particle_count, model_class.__name__)
    else:
        context = SolverContext(grid, params.particle_count)
        logger.info("Allocated %d particles on %s", context.particle_count, grid)

    return TransferPipeline(model_class(context, params), iters_count)
