from abc import ABC, abstractmethod
from typing import Tuple

import taichi as ti
import math


@ti.data_oriented
class Geometry(ABC):
    def __init__(self, velocity: Tuple[float, float], velocity_spread: Tuple[float, float]) -> None:
        """
        Seeded particles move with velocity, each component is jittered uniformly
        over an interval of width velocity_spread centered on it.
        """
        self.velocity = list(velocity)
        self.velocity_spread = list(velocity_spread)

    @property
    @abstractmethod
    def area(self) -> float:
        pass

    @abstractmethod
    def random_seed(self) -> ti.Vector:
        pass

    @ti.func
    def random_velocity(self) -> ti.Vector:
        x = self.velocity[0] + (ti.random() - 0.5) * self.velocity_spread[0]
        y = self.velocity[1] + (ti.random() - 0.5) * self.velocity_spread[1]
        return ti.Vector([x, y])


@ti.data_oriented
class Circle(Geometry):
    def __init__(
        self,
        center: Tuple[float, float],
        radius: float,
        velocity: Tuple[float, float] = (0, 0),
        velocity_spread: Tuple[float, float] = (0, 0),
    ) -> None:
        super().__init__(velocity, velocity_spread)
        self.x, self.y = list(center)
        self.squared_radius = radius * radius
        self.radius = radius

    @property
    def area(self) -> float:
        return math.pi * self.squared_radius

    @ti.func
    def random_seed(self) -> ti.Vector:
        r = self.radius * ti.math.sqrt(ti.random())
        t = 2 * ti.math.pi * ti.random()
        x = (r * ti.sin(t)) + self.x
        y = (r * ti.cos(t)) + self.y
        return ti.Vector([x, y])


@ti.data_oriented
class Rectangle(Geometry):
    def __init__(
        self,
        lower_left: Tuple[float, float],
        size: Tuple[float, float],
        velocity: Tuple[float, float] = (0, 0),
        velocity_spread: Tuple[float, float] = (0, 0),
    ) -> None:
        super().__init__(velocity, velocity_spread)
        self.width, self.height = size
        self.x, self.y = lower_left
        self.r_bound = self.x + self.width
        self.t_bound = self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @ti.func
    def random_seed(self) -> ti.Vector:
        x = self.x + ti.random() * self.width
        y = self.y + ti.random() * self.height
        return ti.Vector([x, y])
