from mpm2d.errors import ConfigurationError

from dataclasses import dataclass, fields

import math


def default_particle_volume(cell_size: float) -> float:
    """Volume of one particle when four particles are seeded per cell."""
    return (cell_size * 0.5) ** 2


@dataclass(frozen=True)
class SimulationParams:
    """Parameters shared by all constitutive models, immutable during a run."""

    particle_count: int
    timestep: float
    particle_mass: float
    particle_volume: float

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{field.name} must be finite, got {value}")

        if self.particle_count <= 0:
            raise ConfigurationError(f"particle_count must be positive, got {self.particle_count}")
        self._require_positive("timestep", "particle_mass", "particle_volume")

    def _require_positive(self, *names: str) -> None:
        for name in names:
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")

    def _require_non_negative(self, *names: str) -> None:
        for name in names:
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")


@dataclass(frozen=True)
class ElasticParams(SimulationParams):
    youngs_modulus: float = 400.0

    def __post_init__(self) -> None:
        super().__post_init__()
        self._require_non_negative("youngs_modulus")

    @classmethod
    def for_grid(
        cls,
        grid,
        particle_count: int,
        timestep: float,
        density: float = 1.0,
        youngs_modulus: float = 400.0,
    ) -> "ElasticParams":
        volume = default_particle_volume(grid.cell_size)
        return cls(
            particle_count=particle_count,
            timestep=timestep,
            particle_mass=density * volume,
            particle_volume=volume,
            youngs_modulus=youngs_modulus,
        )


@dataclass(frozen=True)
class FluidParams(SimulationParams):
    rest_density: float = 1.0
    dynamic_viscosity: float = 0.1
    eos_stiffness: float = 2.0
    eos_power: float = 4.0

    def __post_init__(self) -> None:
        super().__post_init__()
        self._require_positive("rest_density", "eos_power")
        self._require_non_negative("dynamic_viscosity", "eos_stiffness")

    @classmethod
    def for_grid(
        cls,
        grid,
        particle_count: int,
        timestep: float,
        rest_density: float = 1.0,
        dynamic_viscosity: float = 0.1,
        eos_stiffness: float = 2.0,
        eos_power: float = 4.0,
    ) -> "FluidParams":
        volume = default_particle_volume(grid.cell_size)
        return cls(
            particle_count=particle_count,
            timestep=timestep,
            particle_mass=rest_density * volume,
            particle_volume=volume,
            rest_density=rest_density,
            dynamic_viscosity=dynamic_viscosity,
            eos_stiffness=eos_stiffness,
            eos_power=eos_power,
        )
