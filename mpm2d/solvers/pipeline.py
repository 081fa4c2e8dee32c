from mpm2d.solvers.base_model import ConstitutiveModel, validate_passes
from mpm2d.solvers.handoff import SolverHandoff
from mpm2d.errors import ConfigurationError, SolverReleasedError, TickFailedError
from mpm2d.constants import Phase

from typing import Tuple

import taichi as ti
import numpy as np
import logging

logger = logging.getLogger(__name__)


@ti.data_oriented
class TransferPipeline:
    def __init__(self, model: ConstitutiveModel, iters_count: int) -> None:
        """Runs the passes of a constitutive model, iters_count substeps per tick.
        ---
        Parameters:
            model: the constitutive model, owns the context with all buffers
            iters_count: number of full substeps per call to tick()
        """
        if iters_count <= 0:
            raise ConfigurationError(f"iters_count must be positive, got {iters_count}")

        validate_passes(model.substep_passes())
        self.passes = model.substep_passes()
        self.iters_count = int(iters_count)
        self.phase = Phase.Idle
        self.model = model
        self._is_released = False

    @classmethod
    def from_handoff(cls, handoff: SolverHandoff, params, iters_count: int) -> "TransferPipeline":
        """Builds a new solver for params on top of the buffers of a previous solver."""
        from mpm2d.solvers.factory import build_solver

        return build_solver(params, iters_count=iters_count, handoff=handoff)

    @property
    def context(self):
        self._ensure_active()
        return self.model.context

    @property
    def particle_count(self) -> int:
        return self.context.particle_count

    def _ensure_active(self) -> None:
        if self._is_released:
            raise SolverReleasedError("this solver handed its buffers over and can't be used anymore")

    def init_particle(self, index: int, position: Tuple[float, float], velocity: Tuple[float, float]) -> None:
        self.context.particles.init_particle(index, position, velocity)

    def init_particles(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        self.context.particles.init_particles(positions, velocities)

    def set_gravity(self, direction: Tuple[float, float]) -> None:
        self.context.set_gravity(direction)

    @property
    def gravity(self) -> Tuple[float, float]:
        return self.context.get_gravity()

    def positions(self) -> ti.Field:
        """
        Returns the live position field, no copy is made. The field is only valid until
        the next tick, callers have to finish reading before ticking again.
        """
        return self.context.particles.position

    def positions_to_numpy(self) -> np.ndarray:
        return self.context.particles.position.to_numpy()

    def velocities_to_numpy(self) -> np.ndarray:
        return self.context.particles.velocity.to_numpy()

    def reset(self) -> None:
        """
        Zeroes the particles, model specific scalars and gravity in place, the same
        buffers are reseeded afterwards.
        """
        self._ensure_active()
        self.phase = Phase.Idle
        self.model.reset()

    def substep(self) -> None:
        for phase, kernel_id in self.passes:
            self.phase = phase
            self.model.kernels[kernel_id]()
        self.phase = Phase.Idle

    def tick(self) -> None:
        """
        Advances the simulation by iters_count substeps. Either all of them complete or
        the particles are restored to where they were before this call.
        """
        self._ensure_active()
        self.model.checkpoint()
        try:
            for _ in range(self.iters_count):
                self.substep()
            ti.sync()
        except Exception as exception:
            failed_phase = self.phase
            self.phase = Phase.Idle
            self.model.rollback()
            logger.error("Tick failed in phase %s, particles have been rolled back", failed_phase)
            raise TickFailedError(f"tick failed in phase {failed_phase}") from exception

    def export_handoff(self) -> SolverHandoff:
        """
        Moves the buffers of this solver into a handoff, this solver is unusable afterwards
        and a new solver can be built from the handoff with `from_handoff`.
        """
        self._ensure_active()
        handoff = SolverHandoff(self.model.context)
        self._is_released = True
        logger.info("%s released its buffers for a handoff", type(self.model).__name__)
        return handoff
