from mpm2d.configurations import Circle, Configuration, ModelPreset, Rectangle
from mpm2d.constants import Jelly, KernelId, ModelKind, Water
from mpm2d.simulation import BaseSimulation
from mpm2d.samplers import RandomSampler
from mpm2d.errors import TickFailedError
from mpm2d.presets import configuration_list

from conftest import make_elastic

import taichi as ti
import numpy as np
import pytest


class HeadlessSimulation(BaseSimulation):
    def __init__(self, *args, **kwargs) -> None:
        self.frames = 0
        super().__init__(*args, **kwargs)

    def render(self) -> None:
        self.frames += 1

    def run(self) -> None:
        self.substep()
        self.render()


@pytest.fixture
def configuration():
    return Configuration(
        name="Test Block",
        boundary=(32.0, 32.0),
        particle_count=256,
        geometries=[Rectangle(lower_left=(10.0, 12.0), size=(8.0, 8.0), velocity=(0.5, 0.0))],
        models=[
            ModelPreset("Jelly", ModelKind.Elastic, Jelly, timestep=0.01, iters_count=2),
            ModelPreset("Water", ModelKind.Fluid, Water, timestep=0.01, iters_count=2),
        ],
    )


@pytest.fixture
def simulation(configuration):
    return HeadlessSimulation([configuration], name="Headless")


def test_reset_seeds_all_particles_in_the_geometry(simulation):
    positions = simulation.solver.positions_to_numpy()
    assert positions.shape == (256, 2)
    assert np.all(positions >= [10.0, 12.0]) and np.all(positions <= [18.0, 20.0])
    np.testing.assert_allclose(simulation.solver.velocities_to_numpy(), np.tile([0.5, 0.0], (256, 1)))
    assert simulation.solver.gravity == pytest.approx((0.0, -9.81))


def test_simulation_starts_paused(simulation):
    positions = simulation.solver.positions_to_numpy()
    simulation.run()
    np.testing.assert_array_equal(simulation.solver.positions_to_numpy(), positions)
    assert simulation.frames == 1


def test_running_moves_the_particles(simulation):
    positions = simulation.solver.positions_to_numpy()
    simulation.is_paused = False
    simulation.run()
    assert not np.array_equal(simulation.solver.positions_to_numpy(), positions)


def test_switch_model_keeps_positions_and_gravity(simulation):
    simulation.is_paused = False
    simulation.run()
    simulation.steer_gravity((-1.0, 0.0))
    positions = simulation.solver.positions_to_numpy()
    previous = simulation.solver

    simulation.switch_model()
    assert simulation.model.kind == ModelKind.Fluid
    assert simulation.solver is not previous
    assert simulation.solver.gravity == pytest.approx((-9.81, 0.0))
    np.testing.assert_array_equal(simulation.solver.positions_to_numpy(), positions)

    simulation.switch_model()
    assert simulation.model.kind == ModelKind.Elastic


def test_reset_restores_the_seeded_state(simulation):
    simulation.steer_gravity((1.0, 0.0))
    simulation.is_paused = False
    for _ in range(3):
        simulation.run()
    simulation.reset()
    assert simulation.solver.gravity == pytest.approx((0.0, -9.81))
    np.testing.assert_allclose(simulation.solver.velocities_to_numpy(), np.tile([0.5, 0.0], (256, 1)))


def test_failed_tick_pauses_the_simulation(simulation, monkeypatch):
    simulation.is_paused = False
    positions = simulation.solver.positions_to_numpy()

    def failing_scatter():
        raise RuntimeError("kernel launch failed")

    monkeypatch.setitem(simulation.solver.model.kernels, KernelId.ElasticP2G, failing_scatter)
    simulation.run()

    assert simulation.is_paused
    np.testing.assert_array_equal(simulation.solver.positions_to_numpy(), positions)
    with pytest.raises(TickFailedError):
        simulation.solver.tick()


def test_initial_model_can_be_chosen(configuration):
    simulation = HeadlessSimulation([configuration], name="Headless", initial_model=1)
    assert simulation.model.kind == ModelKind.Fluid


def test_sampler_splits_by_area(simulation):
    sampler = RandomSampler(simulation.solver)
    small = Rectangle(lower_left=(4.0, 4.0), size=(2.0, 2.0))
    large = Rectangle(lower_left=(10.0, 10.0), size=(4.0, 6.0))
    counts = sampler.split([small, large])
    assert sum(counts) == 256
    assert counts[0] == int(256 * 4 / 28)


def test_sampler_seeds_circles_inside_their_radius(simulation):
    circle = Circle(center=(16.0, 16.0), radius=5.0, velocity=(0.0, 1.0))
    RandomSampler(simulation.solver).add_geometries([circle])
    positions = simulation.solver.positions_to_numpy()
    distances = np.linalg.norm(positions - [16.0, 16.0], axis=1)
    assert np.all(distances <= 5.0 + 1e-4)
    np.testing.assert_allclose(simulation.solver.velocities_to_numpy(), np.tile([0.0, 1.0], (256, 1)))


@pytest.mark.parametrize("index", range(len(configuration_list)))
def test_presets_fit_their_boundary(index):
    configuration = configuration_list[index]
    width, height = configuration.boundary
    for geometry in configuration.geometries:
        if isinstance(geometry, Circle):
            lower = (geometry.x - geometry.radius, geometry.y - geometry.radius)
            upper = (geometry.x + geometry.radius, geometry.y + geometry.radius)
        else:
            lower, upper = (geometry.x, geometry.y), (geometry.r_bound, geometry.t_bound)
        assert 0 <= lower[0] and upper[0] <= width
        assert 0 <= lower[1] and upper[1] <= height
    for model in configuration.models:
        assert model.timestep > 0 and model.iters_count > 0


def snode_tree_count():
    return ti.lang.impl.get_runtime().prog.get_snode_tree_size()


def test_sampler_seeds_a_fresh_solver(grid):
    solver = make_elastic(grid, 64)
    RandomSampler(solver).add_geometries([Rectangle(lower_left=(8.0, 8.0), size=(4.0, 4.0), velocity=(1.0, 2.0))])
    positions = solver.positions_to_numpy()
    assert np.all(positions >= [8.0, 8.0]) and np.all(positions <= [12.0, 12.0])
    np.testing.assert_allclose(solver.velocities_to_numpy(), np.tile([1.0, 2.0], (64, 1)))
    np.testing.assert_array_equal(solver.context.particles.affine_velocity.to_numpy(), 0)


def test_sampler_spreads_velocities(simulation):
    rectangle = Rectangle(lower_left=(10.0, 10.0), size=(8.0, 8.0), velocity=(0.0, -1.0), velocity_spread=(1.0, 1.0))
    RandomSampler(simulation.solver).add_geometries([rectangle])
    velocities = simulation.solver.velocities_to_numpy()
    assert np.all((velocities[:, 0] >= -0.5) & (velocities[:, 0] <= 0.5))
    assert np.all((velocities[:, 1] >= -1.5) & (velocities[:, 1] <= -0.5))
    assert velocities[:, 0].std() > 0.1 and velocities[:, 1].std() > 0.1


@pytest.mark.parametrize("index", range(len(configuration_list)))
def test_presets_load_and_run(index):
    simulation = HeadlessSimulation(configuration_list, name="Headless", initial_configuration=index)
    assert simulation.solver.particle_count == configuration_list[index].particle_count
    simulation.is_paused = False
    simulation.run()
    assert not simulation.is_paused
    assert np.all(np.isfinite(simulation.solver.positions_to_numpy()))


def test_reset_reuses_the_buffers(simulation):
    solver, context = simulation.solver, simulation.solver.context
    simulation.is_paused = False
    simulation.run()
    trees = snode_tree_count()

    for _ in range(5):
        simulation.steer_gravity((1.0, 0.0))
        simulation.run()
        simulation.reset()

    assert snode_tree_count() == trees
    assert simulation.solver is solver and simulation.solver.context is context
    assert simulation.solver.gravity == pytest.approx((0.0, -9.81))
    np.testing.assert_allclose(simulation.solver.velocities_to_numpy(), np.tile([0.5, 0.0], (256, 1)))
    np.testing.assert_array_equal(simulation.solver.context.particles.affine_velocity.to_numpy(), 0)
    np.testing.assert_array_equal(simulation.solver.model.volume_ratio.to_numpy(), np.ones(256, dtype=np.float32))


def test_reset_after_a_model_switch_keeps_the_new_model(simulation):
    simulation.switch_model()
    solver = simulation.solver
    trees = snode_tree_count()
    simulation.reset()
    assert simulation.solver is solver
    assert simulation.model.kind == ModelKind.Fluid
    assert snode_tree_count() == trees
