from mpm2d.configurations.geometries import Geometry
from mpm2d.solvers.pipeline import TransferPipeline

import taichi as ti
import logging

logger = logging.getLogger(__name__)


@ti.data_oriented
class RandomSampler:
    def __init__(self, solver: TransferPipeline) -> None:
        # Some of the solver's buffers will be written directly:
        self.solver = solver

    def split(self, geometries: list[Geometry]) -> list[int]:
        """Distributes all particles over the geometries proportionally to their areas."""
        count = self.solver.particle_count
        total_area = sum(geometry.area for geometry in geometries)
        counts = [int(count * geometry.area / total_area) for geometry in geometries]
        counts[-1] += count - sum(counts)  # the last geometry takes the rounding error
        return counts

    def add_geometries(self, geometries: list[Geometry]) -> None:
        start = 0
        for geometry, count in zip(geometries, self.split(geometries)):
            self.add_geometry(start, count, geometry)
            start += count
        logger.debug("Seeded %d particles in %d geometries", start, len(geometries))

    @ti.kernel
    def add_geometry(self, start: ti.i32, count: ti.i32, geometry: ti.template()):  # pyright: ignore
        particles = self.solver.context.particles
        grid = self.solver.context.grid
        for p in range(start, start + count):
            # Seeds are clamped, geometries are allowed to reach into the margin:
            particles.position[p] = grid.clamp(geometry.random_seed())
            particles.velocity[p] = geometry.random_velocity()
            particles.affine_velocity[p] = ti.Matrix.zero(ti.f32, 2, 2)
