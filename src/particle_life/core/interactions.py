# src/particle_life/core/interactions.py

from __future__ import annotations
import numpy as np
from typing import Optional

from .config import PhysicsParams, ConfigError
from .particles import PARTICLE_DIAMETER
from particle_life.utils.random import rng as named_rng


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.ascontiguousarray(a, dtype=np.float64)
    a.setflags(write=False)
    return a


class TypeInteractionModel:
    """
    Per-type-pair force coefficients.

    - attraction[i, j]: signed strength of i's response to j. Not symmetric.
    - min_radius[i, j], max_radius[i, j]: near/far cutoffs of the force law.
      Symmetric, with PARTICLE_DIAMETER <= min_radius <= max_radius.

    Matrices are replaced wholesale on `randomize` and exposed read-only,
    so a model can be shared by every worker of a tick.
    """

    def __init__(self, n_types: int, params: Optional[PhysicsParams] = None, rng: Optional[np.random.Generator] = None):
        self._attraction = _frozen(np.zeros((0, 0)))
        self._min_radius = _frozen(np.zeros((0, 0)))
        self._max_radius = _frozen(np.zeros((0, 0)))
        self._max_interaction_radius: float | None = None
        self.resize(n_types)
        if params is not None:
            self.randomize(params, rng=rng)

    @classmethod
    def from_matrices(cls, attraction, min_radius, max_radius) -> "TypeInteractionModel":
        """Build a model from explicit matrices, checking the radius invariants."""
        attraction = np.asarray(attraction, dtype=np.float64)
        min_radius = np.asarray(min_radius, dtype=np.float64)
        max_radius = np.asarray(max_radius, dtype=np.float64)
        n = attraction.shape[0]
        for name, m in (("attraction", attraction), ("min_radius", min_radius), ("max_radius", max_radius)):
            if m.shape != (n, n):
                raise ConfigError(f"{name} must be a square ({n}, {n}) matrix, got {m.shape}")
            if not np.all(np.isfinite(m)):
                raise ConfigError(f"{name} must contain only finite values")
        if not (np.array_equal(min_radius, min_radius.T) and np.array_equal(max_radius, max_radius.T)):
            raise ConfigError("min_radius and max_radius must be symmetric")
        if np.any(min_radius < PARTICLE_DIAMETER):
            raise ConfigError(f"min_radius must be >= particle diameter ({PARTICLE_DIAMETER})")
        if np.any(max_radius < min_radius):
            raise ConfigError("max_radius must be >= min_radius")
        model = cls(n)
        model._set(attraction, min_radius, max_radius)
        return model

    # --- lifecycle ---

    @property
    def n_types(self) -> int:
        return self._attraction.shape[0]

    def resize(self, n_types: int) -> None:
        """Reset to `n_types` types with all-zero coefficients."""
        if not (1 <= n_types <= 256):
            raise ConfigError(f"n_types must be in [1, 256], got {n_types}")
        zeros = np.zeros((n_types, n_types))
        self._set(zeros, zeros, zeros)

    def randomize(self, params: PhysicsParams, rng: Optional[np.random.Generator] = None) -> None:
        """
        Redraw every coefficient from `params`.

        Attraction ~ Normal(mean, std) (absolute value on the diagonal);
        min radius ~ Uniform(min bounds) off-diagonal, PARTICLE_DIAMETER on it;
        max radius ~ Uniform(max bounds), clamped to at least the min radius.
        Radii of (i, j) are mirrored into (j, i) right after they are drawn.
        """
        params.validate()
        gen = rng if rng is not None else named_rng("types")
        n = self.n_types
        attraction = np.zeros((n, n))
        min_radius = np.zeros((n, n))
        max_radius = np.zeros((n, n))
        for i in range(n):
            for j in range(n):
                if i == j:
                    attraction[i, j] = abs(gen.normal(params.mean_attraction, params.std_attraction))
                    min_radius[i, j] = PARTICLE_DIAMETER
                else:
                    attraction[i, j] = gen.normal(params.mean_attraction, params.std_attraction)
                    min_radius[i, j] = max(
                        PARTICLE_DIAMETER,
                        gen.uniform(params.min_radius_lower, params.min_radius_upper),
                    )
                max_radius[i, j] = max(
                    gen.uniform(params.max_radius_lower, params.max_radius_upper),
                    min_radius[i, j],
                )
                min_radius[j, i] = min_radius[i, j]
                max_radius[j, i] = max_radius[i, j]
        self._set(attraction, min_radius, max_radius)

    def _set(self, attraction, min_radius, max_radius) -> None:
        self._attraction = _frozen(attraction)
        self._min_radius = _frozen(min_radius)
        self._max_radius = _frozen(max_radius)
        self._max_interaction_radius = None

    # --- reads ---

    @property
    def attraction_matrix(self) -> np.ndarray:
        return self._attraction

    @property
    def min_radius_matrix(self) -> np.ndarray:
        return self._min_radius

    @property
    def max_radius_matrix(self) -> np.ndarray:
        return self._max_radius

    def attraction(self, i: int, j: int) -> float:
        return float(self._attraction[i, j])

    def radii(self, i: int, j: int) -> tuple[float, float]:
        return float(self._min_radius[i, j]), float(self._max_radius[i, j])

    def max_interaction_radius(self) -> float:
        """Largest max radius over all pairs; sizes the neighbour query."""
        if self._max_interaction_radius is None:
            self._max_interaction_radius = float(self._max_radius.max())
        return self._max_interaction_radius

    def check_type_ids(self, types: np.ndarray) -> None:
        types = np.asarray(types)
        if types.size and int(types.max()) >= self.n_types:
            raise ValueError(
                f"Particle type id {int(types.max())} out of range for {self.n_types} types"
            )
