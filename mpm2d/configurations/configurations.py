from mpm2d.configurations.geometries import Geometry
from mpm2d.constants import Material, ModelKind
from mpm2d.errors import ConfigurationError

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ModelPreset:
    """A constitutive model together with the time stepping it is stable with."""

    name: str
    kind: str
    material: type[Material]
    timestep: float
    iters_count: int

    def __post_init__(self) -> None:
        if self.kind not in (ModelKind.Elastic, ModelKind.Fluid):
            raise ConfigurationError(f"unknown model kind '{self.kind}'")


class Configuration:
    """This class represents a starting configuration for the MPM solvers."""

    def __init__(
        self,
        name: str,
        geometries: list[Geometry],
        models: list[ModelPreset],
        boundary: Tuple[float, float] = (96.0, 96.0),
        cell_size: float = 1.0,
        particle_count: int = 16384,
        gravity: Tuple[float, float] = (0.0, -1.0),  # direction, the strength is fixed
        initial_model: int = 0,
        information: str = "",
    ):
        if len(geometries) == 0:
            raise ConfigurationError(f"configuration '{name}' has no geometries to seed particles in")
        if len(models) == 0:
            raise ConfigurationError(f"configuration '{name}' has no models")

        self.name = name
        self.boundary = boundary
        self.cell_size = cell_size
        self.particle_count = particle_count
        self.gravity = gravity
        self.information = information
        self.geometries = geometries
        self.models = models
        self.initial_model = initial_model % len(models)
