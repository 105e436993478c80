# src/particle_life/core/world.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional
import numpy as np

from .config import ConfigError, PhysicsParams
from .interactions import TypeInteractionModel
from .particles import ParticleArray
from .physics import step_physics
from particle_life.utils.random import rng as named_rng

INITIAL_VELOCITY_STD = 0.2


@dataclass(frozen=True)
class World:
    """
    Simulation extent and boundary policy.

    wrap=True makes the world a torus (positions and distances wrap);
    wrap=False gives reflective walls.
    """
    width: float
    height: float
    wrap: bool = True

    def __post_init__(self):
        if not (self.width > 0.0 and self.height > 0.0):
            raise ConfigError(f"World extent must be positive, got {self.width}x{self.height}")
        object.__setattr__(self, "width", float(self.width))
        object.__setattr__(self, "height", float(self.height))

    def extent(self) -> tuple[float, float]:
        return self.width, self.height

    def minimal_displacement(self, a, b) -> np.ndarray:
        """b - a, taking the short way round each axis when the world wraps."""
        d = np.asarray(b, dtype=float) - np.asarray(a, dtype=float)
        if self.wrap:
            ext = np.array(self.extent())
            d = np.where(d > 0.5 * ext, d - ext, d)
            d = np.where(d < -0.5 * ext, d + ext, d)
        return d

    def create_particles(
        self,
        model: TypeInteractionModel,
        count: int,
        rng: Optional[np.random.Generator] = None,
    ) -> ParticleArray:
        """
        Uniform positions over the world, N(0, 0.2) velocities and uniform
        type ids in [0, model.n_types).
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        gen = rng if rng is not None else named_rng("particles")
        vel = gen.normal(0.0, INITIAL_VELOCITY_STD, size=(count, 2))
        pos = gen.uniform(0.0, 1.0, size=(count, 2)) * np.array(self.extent())
        types = gen.integers(0, model.n_types, size=count).astype(np.uint8)
        return ParticleArray(pos=pos, vel=vel, types=types)

    def step(self, model: TypeInteractionModel, params: PhysicsParams, particles: ParticleArray) -> ParticleArray:
        return step_physics(self, model, params, particles)


@dataclass
class FrameSnapshot:
    t: int
    pos: np.ndarray
    types: np.ndarray


@dataclass
class SimulationRecording:
    """In-memory frames of a run, kept for rendering."""
    frames: list[FrameSnapshot] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    def add_frame(self, frame: FrameSnapshot) -> None:
        self.frames.append(frame)

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[FrameSnapshot]:
        return iter(self.frames)


def run_simulation(
    world: World,
    model: TypeInteractionModel,
    params: PhysicsParams,
    particles: ParticleArray,
    n_steps: int,
    log_interval: int = 600,
    *,
    record_every: int = 1,
) -> tuple[ParticleArray, SimulationRecording]:
    """
    Step the world forward n_steps, recording every `record_every`-th tick.
    Returns the final particle state and the recording.
    """
    recording = SimulationRecording()
    recording.add_frame(FrameSnapshot(t=0, pos=particles.pos, types=particles.types))
    for step in range(n_steps):
        particles = world.step(model, params, particles)
        if (step + 1) % record_every == 0:
            recording.add_frame(FrameSnapshot(t=step + 1, pos=particles.pos, types=particles.types))
        if log_interval and (step + 1) % log_interval == 0:
            print(f"Simulated {step + 1} / {n_steps} ticks...")
    return particles, recording
