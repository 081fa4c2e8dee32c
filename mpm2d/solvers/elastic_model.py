from mpm2d.configurations.parameters import ElasticParams
from mpm2d.solvers.base_model import ConstitutiveModel
from mpm2d.solvers.context import SolverContext
from mpm2d.constants import KernelId, Phase, Simulation

from typing_extensions import override

import taichi as ti


@ti.data_oriented
class ElasticModel(ConstitutiveModel):
    """MLS-MPM solid where the stress only depends on the volume ratio J (MPM88)."""

    PASSES = (
        (Phase.Clear, KernelId.ClearGrid),
        (Phase.Scatter, KernelId.ElasticP2G),
        (Phase.Update, KernelId.ElasticUpdate),
        (Phase.Gather, KernelId.ElasticG2P),
    )

    KERNELS = {
        KernelId.ClearGrid: "clear_grid",
        KernelId.ElasticP2G: "particle_to_grid",
        KernelId.ElasticUpdate: "update_grid",
        KernelId.ElasticG2P: "grid_to_particle",
    }

    def __init__(self, context: SolverContext, params: ElasticParams) -> None:
        super().__init__(context, params)

        # J is owned by this model, taking over particles always starts undeformed:
        self.volume_ratio = ti.field(dtype=ti.f32, shape=self.particles.count)
        self.volume_ratio.fill(1.0)
        self._volume_ratio_checkpoint = ti.field(dtype=ti.f32, shape=self.particles.count)

    @override
    def checkpoint(self) -> None:
        super().checkpoint()
        self._volume_ratio_checkpoint.copy_from(self.volume_ratio)

    @override
    def rollback(self) -> None:
        super().rollback()
        self.volume_ratio.copy_from(self._volume_ratio_checkpoint)

    @override
    def reset(self) -> None:
        super().reset()
        self.volume_ratio.fill(1.0)

    @ti.kernel
    def particle_to_grid(self):
        dt = self.params.timestep
        dx = self.grid.cell_size
        inv_dx = self.grid.inv_dx
        mass = self.params.particle_mass
        volume = self.params.particle_volume
        E = self.params.youngs_modulus
        for p in range(self.particles.count):
            position = self.particles.position[p]
            base = self.grid.base_cell(position)
            fx = position * inv_dx - ti.cast(base, ti.f32)
            w = self.grid.quadratic_weights(fx)

            # Linear pressure from the volume change, times dt and D_inv:
            stress = -dt * 4 * E * volume * (self.volume_ratio[p] - 1) * inv_dx * inv_dx

            # APIC momentum + MLS-MPM stress contribution [Hu et al. 2018, Eqn. 29].
            affine = ti.Matrix([[stress, 0], [0, stress]]) + mass * self.particles.affine_velocity[p]
            momentum = mass * self.particles.velocity[p]

            for i, j in ti.static(ti.ndrange(3, 3)):  # Loop over 3x3 grid node neighborhood
                offset = ti.Vector([i, j])
                dpos = (ti.cast(offset, ti.f32) - fx) * dx
                weight = w[i, 0] * w[j, 1]
                self.grid_state.velocity[base + offset] += weight * (momentum + affine @ dpos)
                self.grid_state.mass[base + offset] += weight * mass

    @ti.func
    @override
    def update_deformation(self, p: ti.i32, C: ti.template()):  # pyright: ignore
        # An inverted or collapsed element is clamped instead of being reported:
        J = self.volume_ratio[p] * (1 + self.params.timestep * C.trace())
        self.volume_ratio[p] = ti.max(J, Simulation.MinimumVolumeRatio)
