from mpm2d.constants.enums import ColorHEX, KernelId, ModelKind, Phase, Simulation
from mpm2d.constants.materials import Jelly, Material, Water

__all__ = [
    "ColorHEX",
    "Jelly",
    "KernelId",
    "Material",
    "ModelKind",
    "Phase",
    "Simulation",
    "Water",
]
