from mpm2d.configurations.parameters import FluidParams
from mpm2d.solvers.base_model import ConstitutiveModel
from mpm2d.solvers.context import SolverContext
from mpm2d.constants import KernelId, Phase, Simulation

from typing_extensions import override

import taichi as ti


@ti.data_oriented
class FluidModel(ConstitutiveModel):
    """
    Weakly compressible fluid, the pressure follows from an equation of state
    and needs a density estimate, hence two scatter passes:
        1. scatter mass only, the grid now holds a mass field,
        2. gather the density back from that field, compute pressure and viscous
           stress and scatter momentum together with the resulting forces.
    Based on https://nialltl.neocities.org/articles/mpm_guide.html
    """

    PASSES = (
        (Phase.Clear, KernelId.ClearGrid),
        (Phase.Scatter, KernelId.FluidP2GMass),
        (Phase.Scatter, KernelId.FluidP2GMomentum),
        (Phase.Update, KernelId.FluidUpdate),
        (Phase.Gather, KernelId.FluidG2P),
    )

    KERNELS = {
        KernelId.ClearGrid: "clear_grid",
        KernelId.FluidP2GMass: "scatter_mass",
        KernelId.FluidP2GMomentum: "scatter_momentum",
        KernelId.FluidUpdate: "update_grid",
        KernelId.FluidG2P: "grid_to_particle",
    }

    def __init__(self, context: SolverContext, params: FluidParams) -> None:
        super().__init__(context, params)

        # Recomputed in every substep, only kept around for inspection:
        self.density = ti.field(dtype=ti.f32, shape=self.particles.count)

    @override
    def reset(self) -> None:
        super().reset()
        self.density.fill(0)

    @ti.kernel
    def scatter_mass(self):
        inv_dx = self.grid.inv_dx
        mass = self.params.particle_mass
        for p in range(self.particles.count):
            position = self.particles.position[p]
            base = self.grid.base_cell(position)
            fx = position * inv_dx - ti.cast(base, ti.f32)
            w = self.grid.quadratic_weights(fx)
            for i, j in ti.static(ti.ndrange(3, 3)):  # Loop over 3x3 grid node neighborhood
                offset = ti.Vector([i, j])
                self.grid_state.mass[base + offset] += w[i, 0] * w[j, 1] * mass

    @ti.kernel
    def scatter_momentum(self):
        dt = self.params.timestep
        dx = self.grid.cell_size
        inv_dx = self.grid.inv_dx
        mass = self.params.particle_mass
        rest_density = self.params.rest_density
        viscosity = self.params.dynamic_viscosity
        for p in range(self.particles.count):
            position = self.particles.position[p]
            base = self.grid.base_cell(position)
            fx = position * inv_dx - ti.cast(base, ti.f32)
            w = self.grid.quadratic_weights(fx)

            # Density estimate from the neighbouring grid mass:
            density = 0.0
            for i, j in ti.static(ti.ndrange(3, 3)):
                density += w[i, 0] * w[j, 1] * self.grid_state.mass[base + ti.Vector([i, j])]
            density = ti.max(density / self.grid.cell_volume, Simulation.MinimumDensity)
            self.density[p] = density

            # Equation of state, fluid is only allowed to push:
            pressure = ti.max(0.0, (density / rest_density) ** self.params.eos_power - 1.0)
            pressure *= self.params.eos_stiffness

            # Pressure and viscous stress, C + C^T approximates the strain rate:
            C = self.particles.affine_velocity[p]
            stress = -pressure * ti.Matrix.identity(ti.f32, 2) + viscosity * (C + C.transpose())

            volume = mass / density
            affine = -dt * volume * 4 * inv_dx * inv_dx * stress + mass * C
            momentum = mass * self.particles.velocity[p]

            for i, j in ti.static(ti.ndrange(3, 3)):  # Loop over 3x3 grid node neighborhood
                offset = ti.Vector([i, j])
                dpos = (ti.cast(offset, ti.f32) - fx) * dx
                weight = w[i, 0] * w[j, 1]
                self.grid_state.velocity[base + offset] += weight * (momentum + affine @ dpos)
