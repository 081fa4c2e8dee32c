from mpm2d.configurations import ElasticParams, FluidParams
from mpm2d.solvers import UniformGrid, build_solver

import taichi as ti
import numpy as np
import pytest


@pytest.fixture(scope="session", autouse=True)
def taichi_runtime():
    ti.init(arch=ti.cpu, default_fp=ti.f32, random_seed=42)
    yield
    ti.reset()


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def grid():
    return UniformGrid((32.0, 32.0), 1.0)


def make_elastic(grid, particle_count, timestep=0.01, youngs_modulus=400.0, iters_count=1):
    params = ElasticParams.for_grid(grid, particle_count, timestep, density=1.0, youngs_modulus=youngs_modulus)
    return build_solver(params, iters_count=iters_count, grid=grid)


def make_fluid(grid, particle_count, timestep=0.01, iters_count=1):
    params = FluidParams.for_grid(grid, particle_count, timestep)
    return build_solver(params, iters_count=iters_count, grid=grid)


def random_block(rng, count, lower, upper, speed=1.0):
    positions = rng.uniform(lower, upper, size=(count, 2)).astype(np.float32)
    velocities = rng.uniform(-speed, speed, size=(count, 2)).astype(np.float32)
    return positions, velocities
