from mpm2d.configurations.parameters import SimulationParams
from mpm2d.solvers.context import SolverContext
from mpm2d.constants import Phase, Simulation
from mpm2d.errors import ConfigurationError

from abc import ABC
from typing import Callable

import taichi as ti


@ti.data_oriented
class ConstitutiveModel(ABC):
    """
    Physics of one material, expressed as an ordered list of passes over a shared
    SolverContext. Clearing, the grid update and the gather are the same for all
    models, subclasses provide the scatter and hook into the gather through
    `update_deformation`.
    """

    # Ordered (Phase, KernelId) pairs forming one substep.
    PASSES: tuple[tuple[int, str], ...] = ()

    # KernelId -> name of the kernel method implementing it.
    KERNELS: dict[str, str] = {}

    def __init__(self, context: SolverContext, params: SimulationParams) -> None:
        self.context = context
        self.params = params
        self.grid = context.grid
        self.particles = context.particles
        self.grid_state = context.grid_state
        self.kernels = self.resolve_kernels()

    def resolve_kernels(self) -> dict[str, Callable[[], None]]:
        kernels = {}
        for _, kernel_id in self.PASSES:
            name = self.KERNELS.get(kernel_id)
            if name is None or not hasattr(self, name):
                raise ConfigurationError(f"{type(self).__name__} has no kernel for '{kernel_id}'")
            kernels[kernel_id] = getattr(self, name)
        return kernels

    def substep_passes(self) -> tuple[tuple[int, str], ...]:
        return self.PASSES

    def checkpoint(self) -> None:
        self.particles.checkpoint()

    def rollback(self) -> None:
        self.particles.rollback()

    def reset(self) -> None:
        self.context.reset()

    def clear_grid(self) -> None:
        self.grid_state.clear()

    @ti.kernel
    def update_grid(self):
        dt = self.params.timestep
        width, height = self.grid.shape[0], self.grid.shape[1]
        bound = Simulation.MarginCells
        for i, j in self.grid_state.mass:
            mass = self.grid_state.mass[i, j]
            velocity = ti.Vector.zero(ti.f32, 2)
            if mass > Simulation.MinimumMass:
                # Normalize momentum, add gravity:
                velocity = self.grid_state.velocity[i, j] / mass
                velocity += dt * self.context.gravity[None]

                # Separating simulation boundary:
                if i < bound and velocity[0] < 0:
                    velocity[0] = 0
                if i > width - 1 - bound and velocity[0] > 0:
                    velocity[0] = 0
                if j < bound and velocity[1] < 0:
                    velocity[1] = 0
                if j > height - 1 - bound and velocity[1] > 0:
                    velocity[1] = 0
            self.grid_state.velocity[i, j] = velocity

    @ti.func
    def update_deformation(self, p: ti.i32, C: ti.template()):  # pyright: ignore
        """Advances model specific particle scalars with the gathered velocity gradient."""
        pass

    @ti.kernel
    def grid_to_particle(self):
        dt = self.params.timestep
        dx = self.grid.cell_size
        inv_dx = self.grid.inv_dx
        for p in range(self.particles.count):
            position = self.particles.position[p]
            base = self.grid.base_cell(position)
            fx = position * inv_dx - ti.cast(base, ti.f32)
            w = self.grid.quadratic_weights(fx)

            C = ti.Matrix.zero(ti.f32, 2, 2)
            v = ti.Vector.zero(ti.f32, 2)
            for i, j in ti.static(ti.ndrange(3, 3)):  # Loop over 3x3 grid node neighborhood
                offset = ti.Vector([i, j])
                dpos = (ti.cast(offset, ti.f32) - fx) * dx
                weight = w[i, 0] * w[j, 1]
                g_v = self.grid_state.velocity[base + offset]
                v += weight * g_v
                C += 4 * inv_dx * inv_dx * weight * g_v.outer_product(dpos)

            self.particles.velocity[p], self.particles.affine_velocity[p] = v, C
            self.update_deformation(p, C)
            self.particles.position[p] = self.grid.clamp(position + dt * v)


PHASE_TRANSITIONS = {
    Phase.Idle: (Phase.Clear,),
    Phase.Clear: (Phase.Scatter,),
    Phase.Scatter: (Phase.Scatter, Phase.Update),
    Phase.Update: (Phase.Gather,),
    Phase.Gather: (Phase.Clear, Phase.Idle),
}


def validate_passes(passes: tuple[tuple[int, str], ...]) -> None:
    """Checks that a pass list forms one full Clear, Scatter, Update, Gather cycle."""
    phase = Phase.Idle
    for next_phase, kernel_id in passes:
        if next_phase not in PHASE_TRANSITIONS[phase]:
            raise ConfigurationError(f"pass '{kernel_id}' can't follow phase {phase}")
        phase = next_phase
    if Phase.Idle not in PHASE_TRANSITIONS[phase]:
        raise ConfigurationError("a substep must end with a gather pass")
