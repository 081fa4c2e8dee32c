from mpm2d.configurations.parameters import ElasticParams, FluidParams, SimulationParams, default_particle_volume
from mpm2d.configurations.geometries import Circle, Geometry, Rectangle
from mpm2d.configurations.configurations import Configuration, ModelPreset

__all__ = [
    "Circle",
    "Configuration",
    "ElasticParams",
    "FluidParams",
    "Geometry",
    "ModelPreset",
    "Rectangle",
    "SimulationParams",
    "default_particle_volume",
]
