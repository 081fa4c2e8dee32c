from mpm2d.solvers.particle_state import ParticleState
from mpm2d.solvers.uniform_grid import UniformGrid
from mpm2d.solvers.grid_state import GridState
from mpm2d.errors import InvalidArgumentError
from mpm2d.constants import Simulation

from typing import Tuple

import taichi as ti
import math


@ti.data_oriented
class SolverContext:
    """
    Holds every buffer a solver works on: the uniform grid, the particles, the grid
    nodes and gravity. Exactly one solver owns a context at a time, ownership moves
    to another solver through a SolverHandoff.
    """

    def __init__(self, grid: UniformGrid, particle_count: int) -> None:
        self.grid = grid
        self.particles = ParticleState(particle_count)
        self.grid_state = GridState(grid)

        self.gravity = ti.Vector.field(2, dtype=ti.f32, shape=())
        self.gravity[None] = list(Simulation.InitialGravity)

    @property
    def particle_count(self) -> int:
        return self.particles.count

    def set_gravity(self, direction: Tuple[float, float]) -> None:
        """
        Points gravity along the given direction with a fixed strength,
        a zero direction turns gravity off.
        """
        x, y = float(direction[0]), float(direction[1])
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidArgumentError(f"gravity direction must be finite, got {direction}")

        length = math.hypot(x, y)
        if length > 0:
            scale = Simulation.GravityStrength / length
            x, y = x * scale, y * scale
        self.gravity[None] = ti.Vector([x, y])

    def reset(self) -> None:
        """Zeroes all particles and restores the initial gravity, no buffers are reallocated."""
        self.particles.reset()
        self.grid_state.clear()
        self.gravity[None] = list(Simulation.InitialGravity)

    def get_gravity(self) -> Tuple[float, float]:
        gravity = self.gravity[None]
        return float(gravity[0]), float(gravity[1])
