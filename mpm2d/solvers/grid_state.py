from mpm2d.solvers.uniform_grid import UniformGrid

import taichi as ti
import numpy as np


@ti.data_oriented
class GridState:
    def __init__(self, grid: UniformGrid) -> None:
        self.grid = grid

        # Properties on grid nodes, velocity holds the momentum between scatter and update:
        self.mass = ti.field(dtype=ti.f32, shape=grid.shape)
        self.velocity = ti.Vector.field(2, dtype=ti.f32, shape=grid.shape)

    @ti.kernel
    def clear(self):
        for i, j in self.mass:
            self.velocity[i, j] = 0
            self.mass[i, j] = 0

    def total_mass(self) -> float:
        return float(self.mass.to_numpy().astype(np.float64).sum())

    def total_momentum(self) -> np.ndarray:
        """Only meaningful between the scatter and the update pass."""
        return self.velocity.to_numpy().astype(np.float64).sum(axis=(0, 1))
