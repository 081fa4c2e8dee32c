from mpm2d.constants import Simulation
from mpm2d.errors import ConfigurationError

from typing import Tuple

import taichi as ti
import numpy as np
import logging
import math

logger = logging.getLogger(__name__)


@ti.data_oriented
class UniformGrid:
    def __init__(self, boundary: Tuple[float, float], cell_size: float) -> None:
        """Derives the grid resolution from a physical boundary.
        ---
        Parameters:
            boundary: width and height of the simulated domain
            cell_size: edge length of one square cell, must be positive
        """
        if not (math.isfinite(cell_size) and cell_size > 0):
            raise ConfigurationError(f"cell_size must be positive and finite, got {cell_size}")
        if len(boundary) != 2 or not all(math.isfinite(b) and b > 0 for b in boundary):
            raise ConfigurationError(f"boundary must hold two positive finite values, got {boundary}")

        self.boundary = (float(boundary[0]), float(boundary[1]))
        self.cell_size = float(cell_size)
        self.inv_dx = 1.0 / self.cell_size
        self.cell_volume = self.cell_size * self.cell_size

        width = math.ceil(self.boundary[0] * self.inv_dx)
        height = math.ceil(self.boundary[1] * self.inv_dx)
        self.shape = (width, height)
        self.cells_count = width * height

        # Particles must stay inside [lower, upper] on each axis:
        self.margin = Simulation.MarginCells * self.cell_size
        self.lower = (self.margin, self.margin)
        self.upper = (self.boundary[0] - self.margin, self.boundary[1] - self.margin)
        if self.upper[0] <= self.lower[0] or self.upper[1] <= self.lower[1]:
            raise ConfigurationError(
                f"boundary {self.boundary} leaves no room for particles with a margin of {self.margin}"
            )

        logger.debug(
            "UniformGrid boundary=%s grid=%s cellSize=%s cellsCount=%d",
            self.boundary,
            self.shape,
            self.cell_size,
            self.cells_count,
        )

    def __repr__(self) -> str:
        return f"UniformGrid(boundary={self.boundary}, cell_size={self.cell_size}, shape={self.shape})"

    def linear_index(self, cell: Tuple[int, int]) -> int:
        """Row-major index of a cell, matches the layout of `to_numpy().ravel()`."""
        return int(cell[0]) * self.shape[1] + int(cell[1])

    def cell_of(self, position) -> Tuple[int, int]:
        """Returns the cell that contains the given position, clamped into the grid."""
        position = np.asarray(position, dtype=np.float64)
        cell = np.floor(position * self.inv_dx).astype(np.int64)
        cell = np.clip(cell, 0, np.array(self.shape) - 1)
        return int(cell[0]), int(cell[1])

    def nearest_node(self, position) -> Tuple[int, int]:
        """Returns the grid node closest to the given position, clamped into the grid."""
        position = np.asarray(position, dtype=np.float64)
        node = np.floor(position * self.inv_dx + 0.5).astype(np.int64)
        node = np.clip(node, 0, np.array(self.shape) - 1)
        return int(node[0]), int(node[1])

    def cell_index_and_weights(self, position) -> Tuple[Tuple[int, int], np.ndarray]:
        """
        Computes the lower left node of the 3x3 interpolation stencil around a position
        and the quadratic B-spline weights of all nine nodes, weights[i, j] belongs to
        the node base + (i, j). This mirrors `base_cell` and `quadratic_weights`.
        """
        position = np.asarray(position, dtype=np.float64)
        base = np.floor(position * self.inv_dx - 0.5).astype(np.int64)
        base = np.clip(base, 0, np.array(self.shape) - 3)
        fx = position * self.inv_dx - base
        w = np.array([0.5 * (1.5 - fx) ** 2, 0.75 - (fx - 1.0) ** 2, 0.5 * (fx - 0.5) ** 2])
        return (int(base[0]), int(base[1])), np.outer(w[:, 0], w[:, 1])

    @ti.func
    def base_cell(self, position: ti.template()) -> ti.Vector:  # pyright: ignore
        # Clamping keeps stray particles from indexing outside the grid:
        base = ti.floor(position * self.inv_dx - 0.5, dtype=ti.i32)
        return ti.max(ti.min(base, ti.Vector([self.shape[0] - 3, self.shape[1] - 3])), ti.Vector([0, 0]))

    @ti.func
    def quadratic_weights(self, fx: ti.template()) -> ti.Matrix:  # pyright: ignore
        # Quadratic kernels  [http://mpm.graphics   Eqn. 123, with x=fx, fx-1,fx-2]
        return ti.Matrix.rows([0.5 * (1.5 - fx) ** 2, 0.75 - (fx - 1.0) ** 2, 0.5 * (fx - 0.5) ** 2])

    @ti.func
    def clamp(self, position: ti.template()) -> ti.Vector:  # pyright: ignore
        lower = ti.Vector([self.lower[0], self.lower[1]])
        upper = ti.Vector([self.upper[0], self.upper[1]])
        return ti.max(ti.min(position, upper), lower)
