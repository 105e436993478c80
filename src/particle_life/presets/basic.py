from __future__ import annotations

import numba

from particle_life.core import ParticleArray, SimConfig, TypeInteractionModel, World


def make_simulation(sim_config: SimConfig) -> tuple[World, TypeInteractionModel, ParticleArray]:
    """
    Build the world, a randomized interaction model and the initial particles.
    Seeding is the caller's job (see `particle_life.utils.random.seed_all`).
    """
    sim_config.validate()
    if sim_config.n_threads is not None:
        numba.set_num_threads(sim_config.n_threads)
    world = World(width=sim_config.width, height=sim_config.height, wrap=sim_config.wrap)
    model = TypeInteractionModel(sim_config.num_types, params=sim_config.physics)
    particles = world.create_particles(model, sim_config.num_particles)
    return world, model, particles
