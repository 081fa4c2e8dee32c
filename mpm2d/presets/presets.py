from mpm2d.configurations import Circle, Configuration, ModelPreset, Rectangle
from mpm2d.constants import Jelly, ModelKind, Water

elastic_model = ModelPreset(
    name="Elastic (MPM88)",
    kind=ModelKind.Elastic,
    material=Jelly,  # pyright: ignore
    timestep=10.0 / 1e3,
    iters_count=5,
)

fluid_model = ModelPreset(
    name="Fluid (EOS)",
    kind=ModelKind.Fluid,
    material=Water,  # pyright: ignore
    timestep=25.0 / 1e3,
    iters_count=2,
)

# Width and height of the simulated domain, a particle covers a quarter of a cell:
boundary = (96.0, 96.0)
side = min(boundary) * 0.5

configuration_list = [
    Configuration(
        name="Falling Block",
        information="Elastic",
        boundary=boundary,
        geometries=[
            Rectangle(
                lower_left=((boundary[0] - side) * 0.5, (boundary[1] - side) * 0.5),
                size=(side, side),
                velocity=(0, -1),
                velocity_spread=(1, 1),
            ),
        ],
        models=[elastic_model, fluid_model],
        initial_model=0,
    ),
    Configuration(
        name="Dam Break",
        information="Fluid",
        boundary=boundary,
        geometries=[
            Rectangle(
                lower_left=(2.0, 2.0),
                size=(side * 0.75, side * 1.5),
                velocity=(0, 0),
            ),
        ],
        models=[elastic_model, fluid_model],
        initial_model=1,
    ),
    Configuration(
        name="Droplets",
        information="Fluid",
        boundary=boundary,
        geometries=[
            Circle(center=(0.3 * boundary[0], 0.7 * boundary[1]), radius=0.15 * side * 2, velocity=(2, 0)),
            Circle(center=(0.7 * boundary[0], 0.6 * boundary[1]), radius=0.15 * side * 2, velocity=(-2, 0)),
        ],
        models=[elastic_model, fluid_model],
        initial_model=1,
    ),
]
