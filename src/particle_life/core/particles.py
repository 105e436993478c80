# src/particle_life/core/particles.py

from __future__ import annotations
from dataclasses import dataclass
import numpy as np

PARTICLE_DIAMETER = 1.0
PARTICLE_RADIUS = 0.5 * PARTICLE_DIAMETER


def _checked_type_ids(types) -> np.ndarray:
    """Reject ids that would not survive the cast to uint8 unchanged."""
    raw = np.asarray(types)
    if raw.size == 0:
        return raw
    if not (np.issubdtype(raw.dtype, np.integer) or np.issubdtype(raw.dtype, np.bool_)):
        if not np.all(np.isfinite(raw)) or np.any(raw != np.floor(raw)):
            raise ValueError("Particle type ids must be integers")
    if raw.min() < 0 or raw.max() > 255:
        raise ValueError(
            f"Particle type ids must be in [0, 256), got range [{raw.min()}, {raw.max()}]"
        )
    return raw


@dataclass(frozen=True, eq=False)
class ParticleArray:
    """
    Structure-of-arrays particle state for one tick.

    - pos: (n, 2) float64 world-space positions
    - vel: (n, 2) float64 velocities, in world units per tick
    - types: (n,) uint8 type ids in [0, n_types)

    A tick never edits an existing ParticleArray; it returns a new one.
    """
    pos: np.ndarray
    vel: np.ndarray
    types: np.ndarray

    def __post_init__(self):
        pos = np.ascontiguousarray(self.pos, dtype=np.float64)
        vel = np.ascontiguousarray(self.vel, dtype=np.float64)
        types = np.ascontiguousarray(_checked_type_ids(self.types), dtype=np.uint8)
        n = types.shape[0] if types.ndim == 1 else -1
        if pos.shape != (n, 2) or vel.shape != (n, 2):
            raise ValueError(
                f"Inconsistent particle shapes: pos={pos.shape}, vel={vel.shape}, types={types.shape}"
            )
        object.__setattr__(self, "pos", pos)
        object.__setattr__(self, "vel", vel)
        object.__setattr__(self, "types", types)

    def __len__(self) -> int:
        return self.types.shape[0]

    @classmethod
    def from_lists(cls, pos, vel=None, types=None) -> "ParticleArray":
        """Convenience constructor; missing velocities are zero, missing types are 0."""
        pos = np.asarray(pos, dtype=np.float64).reshape(-1, 2)
        n = pos.shape[0]
        vel = np.zeros((n, 2)) if vel is None else vel
        types = np.zeros(n, dtype=np.uint8) if types is None else types
        return cls(pos=pos, vel=vel, types=types)
