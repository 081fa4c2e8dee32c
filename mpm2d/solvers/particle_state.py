from mpm2d.errors import ConfigurationError, InvalidArgumentError

from typing import Tuple

import taichi as ti
import numpy as np


@ti.data_oriented
class ParticleState:
    def __init__(self, count: int) -> None:
        if count <= 0:
            raise ConfigurationError(f"particle count must be positive, got {count}")
        self.count = int(count)

        # Properties on particles:
        self.position = ti.Vector.field(2, dtype=ti.f32, shape=self.count)
        self.velocity = ti.Vector.field(2, dtype=ti.f32, shape=self.count)
        self.affine_velocity = ti.Matrix.field(2, 2, dtype=ti.f32, shape=self.count)

        # Copies of the above, a failed tick restores the particles from these:
        self._position_checkpoint = ti.Vector.field(2, dtype=ti.f32, shape=self.count)
        self._velocity_checkpoint = ti.Vector.field(2, dtype=ti.f32, shape=self.count)
        self._affine_velocity_checkpoint = ti.Matrix.field(2, 2, dtype=ti.f32, shape=self.count)

    def init_particle(self, index: int, position: Tuple[float, float], velocity: Tuple[float, float]) -> None:
        if not 0 <= index < self.count:
            raise InvalidArgumentError(f"particle index {index} is out of range [0, {self.count})")
        self.position[index] = ti.Vector([position[0], position[1]])
        self.velocity[index] = ti.Vector([velocity[0], velocity[1]])

    def init_particles(self, positions: np.ndarray, velocities: np.ndarray) -> None:
        """Writes all particles at once, both arrays must have the shape (count, 2)."""
        positions = np.asarray(positions, dtype=np.float32)
        velocities = np.asarray(velocities, dtype=np.float32)
        for name, array in (("positions", positions), ("velocities", velocities)):
            if array.shape != (self.count, 2):
                raise InvalidArgumentError(f"{name} must have shape ({self.count}, 2), got {array.shape}")
        self.position.from_numpy(positions)
        self.velocity.from_numpy(velocities)

    def checkpoint(self) -> None:
        self._position_checkpoint.copy_from(self.position)
        self._velocity_checkpoint.copy_from(self.velocity)
        self._affine_velocity_checkpoint.copy_from(self.affine_velocity)

    def rollback(self) -> None:
        self.position.copy_from(self._position_checkpoint)
        self.velocity.copy_from(self._velocity_checkpoint)
        self.affine_velocity.copy_from(self._affine_velocity_checkpoint)

    def reset(self) -> None:
        self.position.fill(0)
        self.velocity.fill(0)
        self.affine_velocity.fill(0)
