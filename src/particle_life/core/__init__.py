# src/particle_life/core/__init__.py

from .config import ConfigError, PhysicsParams, SimConfig
from .particles import ParticleArray, PARTICLE_DIAMETER, PARTICLE_RADIUS
from .interactions import TypeInteractionModel
from .grid import SpatialGrid, GRID_DIM
from .physics import step_physics, pair_force, accumulate_velocities, integrate
from .world import World, FrameSnapshot, SimulationRecording, run_simulation

__all__ = [
    "ConfigError",
    "PhysicsParams",
    "SimConfig",
    "ParticleArray",
    "PARTICLE_DIAMETER",
    "PARTICLE_RADIUS",
    "TypeInteractionModel",
    "SpatialGrid",
    "GRID_DIM",
    "step_physics",
    "pair_force",
    "accumulate_velocities",
    "integrate",
    "World",
    "FrameSnapshot",
    "SimulationRecording",
    "run_simulation",
]
