from mpm2d.solvers import GridState, ParticleState, UniformGrid
from mpm2d.errors import ConfigurationError, InvalidArgumentError

from conftest import make_elastic, random_block

import numpy as np
import pytest


def test_particle_count_must_be_positive():
    with pytest.raises(ConfigurationError):
        ParticleState(0)


def test_init_particle():
    particles = ParticleState(3)
    particles.init_particle(1, (4.0, 5.0), (0.5, -0.5))
    np.testing.assert_array_equal(particles.position.to_numpy()[1], [4.0, 5.0])
    np.testing.assert_array_equal(particles.velocity.to_numpy()[1], [0.5, -0.5])


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_init_particle_out_of_range_changes_nothing(index):
    particles = ParticleState(3)
    particles.init_particle(0, (4.0, 5.0), (1.0, 1.0))
    before = particles.position.to_numpy(), particles.velocity.to_numpy()
    with pytest.raises(InvalidArgumentError):
        particles.init_particle(index, (1.0, 1.0), (1.0, 1.0))
    np.testing.assert_array_equal(particles.position.to_numpy(), before[0])
    np.testing.assert_array_equal(particles.velocity.to_numpy(), before[1])


def test_init_particles_checks_shapes():
    particles = ParticleState(4)
    with pytest.raises(InvalidArgumentError):
        particles.init_particles(np.zeros((3, 2)), np.zeros((4, 2)))
    with pytest.raises(InvalidArgumentError):
        particles.init_particles(np.zeros((4, 2)), np.zeros((4, 3)))


def test_checkpoint_and_rollback(rng):
    particles = ParticleState(16)
    positions, velocities = random_block(rng, 16, 3.0, 10.0)
    particles.init_particles(positions, velocities)
    particles.checkpoint()

    particles.init_particles(positions + 1.0, -velocities)
    particles.rollback()
    np.testing.assert_array_equal(particles.position.to_numpy(), positions)
    np.testing.assert_array_equal(particles.velocity.to_numpy(), velocities)


def test_clear_is_idempotent(grid, rng):
    solver = make_elastic(grid, 64)
    solver.init_particles(*random_block(rng, 64, 8.0, 24.0))
    grid_state = solver.model.grid_state
    solver.model.clear_grid()
    solver.model.particle_to_grid()
    assert grid_state.total_mass() > 0

    for _ in range(2):
        grid_state.clear()
        assert np.all(grid_state.mass.to_numpy() == 0)
        assert np.all(grid_state.velocity.to_numpy() == 0)


def test_grid_state_matches_grid_shape():
    grid = UniformGrid((10.0, 12.0), 2.0)
    grid_state = GridState(grid)
    assert grid_state.mass.shape == (5, 6)
    assert grid_state.velocity.shape == (5, 6)
