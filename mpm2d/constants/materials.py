from mpm2d.constants.enums import ColorHEX
from dataclasses import dataclass


@dataclass
class Material:
    """Defines parameters that represent a material."""

    Density: float = 1.0
    Color: int = 0xFFFFFF

    # Elastic:
    E: float = 0.0

    # Fluid:
    DynamicViscosity: float = 0.0
    EosStiffness: float = 0.0
    EosPower: float = 1.0


@dataclass
class Jelly(Material):
    """Defines parameters that represent a soft elastic solid."""

    Density = 1.0
    Color = ColorHEX.Jelly
    E = 400.0


@dataclass
class Water(Material):
    """Defines parameters that represent a weakly compressible fluid."""

    Density = 1.0  # rest density
    Color = ColorHEX.Water
    DynamicViscosity = 0.1
    EosStiffness = 2.0
    EosPower = 4.0
