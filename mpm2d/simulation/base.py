from mpm2d.configurations import Configuration, ModelPreset
from mpm2d.solvers import TransferPipeline, UniformGrid, build_solver, make_params
from mpm2d.samplers import RandomSampler
from mpm2d.errors import TickFailedError

from abc import abstractmethod
from typing import Optional, Tuple

import logging

logger = logging.getLogger(__name__)


class BaseSimulation:
    def __init__(
        self,
        configurations: list[Configuration],
        name: str,
        initial_configuration: int = 0,
        initial_model: Optional[int] = None,
    ) -> None:
        """Constructs a simulation, this advances the MPM solver once per rendered frame.
        ---
        Parameters:
            configurations: list of configurations for the solver
            name: string displayed at the top of the window
            initial_configuration: index of the configuration loaded first
            initial_model: index of the model preset to start with, defaults to the configuration's
        """
        self.is_paused = True
        self.name = name

        self.solver: Optional[TransferPipeline] = None
        self.sampler: Optional[RandomSampler] = None
        self.configurations = configurations

        # Load the initial configuration and reset the solver to this configuration.
        self.configuration_id = initial_configuration % len(configurations)
        self.load_configuration(configurations[self.configuration_id], initial_model)

    @abstractmethod
    def render(self) -> None:
        pass

    @abstractmethod
    def run(self) -> None:
        pass

    @property
    def model(self) -> ModelPreset:
        return self.configuration.models[self.model_id]

    def params_for(self, model: ModelPreset):
        return make_params(
            model.kind,
            model.material,
            self.grid,
            particle_count=self.configuration.particle_count,
            timestep=model.timestep,
        )

    def build(self, model: ModelPreset, handoff=None) -> TransferPipeline:
        params = self.params_for(model)
        if handoff is None:
            return build_solver(params, iters_count=model.iters_count, grid=self.grid)
        return TransferPipeline.from_handoff(handoff, params, iters_count=model.iters_count)

    def load_configuration(self, configuration: Configuration, model_id: Optional[int] = None) -> None:
        """
        Loads the chosen configuration into the solver.
        ---
        Parameters:
            configuration: Configuration
            model_id: index into the model presets of the configuration
        """
        self.configuration = configuration
        self.grid = UniformGrid(configuration.boundary, configuration.cell_size)
        self.model_id = configuration.initial_model if model_id is None else model_id % len(configuration.models)
        self.reset()

    def reset(self) -> None:
        """
        Reset the simulation and seed all particles again. The buffers of the current
        solver are reused when it runs the same model on the same grid.
        """
        solver = self.solver
        is_reusable = (
            solver is not None
            and solver.context.grid is self.grid
            and solver.model.params == self.params_for(self.model)
        )
        if not is_reusable:
            self.solver = self.build(self.model)
            self.sampler = RandomSampler(self.solver)
        else:
            solver.reset()

        self.solver.set_gravity(self.configuration.gravity)
        self.sampler.add_geometries(self.configuration.geometries)
        logger.info("Loaded '%s' with model '%s'", self.configuration.name, self.model.name)

    def switch_model(self, model_id: Optional[int] = None) -> None:
        """
        Hands the particles over to another model preset without resetting them,
        defaults to the next model of the configuration.
        """
        if model_id is None:
            model_id = self.model_id + 1
        model_id %= len(self.configuration.models)

        gravity = self.solver.gravity
        self.solver = self.build(self.configuration.models[model_id], handoff=self.solver.export_handoff())
        self.sampler = RandomSampler(self.solver)
        self.model_id = model_id
        logger.info("Switched to model '%s', gravity %s is kept", self.model.name, gravity)

    def steer_gravity(self, direction: Tuple[float, float]) -> None:
        self.solver.set_gravity(direction)

    def substep(self) -> None:
        if self.is_paused:
            return
        try:
            self.solver.tick()
        except TickFailedError:
            # The particles are still in the state of the previous frame:
            self.is_paused = True
            logger.exception("Pausing '%s' after a failed tick", self.configuration.name)
