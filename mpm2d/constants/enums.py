from dataclasses import dataclass


@dataclass
class ColorHEX:
    Background = 0x112F41
    Jelly = 0xED553B  # red 50
    Water = 0x78A9FF  # blue 40


@dataclass
class ModelKind:
    Elastic = "elastic"
    Fluid = "fluid"


@dataclass
class Phase:
    """Phases of one substep, a pipeline is Idle between ticks."""

    Idle = 0
    Clear = 1
    Scatter = 2
    Update = 3
    Gather = 4


@dataclass
class KernelId:
    """Names of the kernels a model can dispatch, resolved once per model."""

    ClearGrid = "clear_grid"
    ElasticP2G = "elastic_p2g"
    ElasticUpdate = "elastic_update"
    ElasticG2P = "elastic_g2p"
    FluidP2GMass = "fluid_p2g_mass"
    FluidP2GMomentum = "fluid_p2g_momentum"
    FluidUpdate = "fluid_update"
    FluidG2P = "fluid_g2p"


@dataclass
class Simulation:
    """Defines parameters for the simulation."""

    GravityStrength = 9.81
    InitialGravity = (0.0, -9.81)

    # Particles are kept this many cells away from the boundary, this also
    # guarantees that the 3x3 interpolation stencil never leaves the grid:
    MarginCells = 2

    # Floors for degenerate configurations under extreme compression:
    MinimumVolumeRatio = 1e-2
    MinimumDensity = 1e-6
    MinimumMass = 1e-10
