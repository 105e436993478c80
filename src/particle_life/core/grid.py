# src/particle_life/core/grid.py

from __future__ import annotations
from dataclasses import dataclass
import math
import numpy as np
from numba import njit

GRID_DIM = 32


@njit
def cell_span(p, r, scale, grid_dim):
    """
    Inclusive range of (unwrapped) cell indices on one axis covering [p - r, p + r].
    Never longer than the grid so no cell is visited twice after wrapping.
    """
    lo = int(math.floor((p - r) * scale))
    hi = int(math.floor((p + r) * scale))
    if hi - lo >= grid_dim:
        hi = lo + grid_dim - 1
    return lo, hi


@njit
def _gather_neighbors(px, py, radius, scale_x, scale_y, grid_dim, order, offsets):
    x0, x1 = cell_span(px, radius, scale_x, grid_dim)
    y0, y1 = cell_span(py, radius, scale_y, grid_dim)
    total = 0
    for cy in range(y0, y1 + 1):
        row = (cy % grid_dim) * grid_dim
        for cx in range(x0, x1 + 1):
            cell = row + cx % grid_dim
            total += offsets[cell + 1] - offsets[cell]
    out = np.empty(total, dtype=np.int64)
    k = 0
    for cy in range(y0, y1 + 1):
        row = (cy % grid_dim) * grid_dim
        for cx in range(x0, x1 + 1):
            cell = row + cx % grid_dim
            for s in range(offsets[cell], offsets[cell + 1]):
                out[k] = order[s]
                k += 1
    return out


@dataclass(frozen=True, eq=False)
class SpatialGrid:
    """
    Uniform grid_dim x grid_dim bucketing of particle positions, rebuilt every tick.

    Buckets live in one flat arena: `order` lists particle indices grouped by
    cell, and cell c owns `order[offsets[c]:offsets[c + 1]]`. Cell indices wrap
    modulo grid_dim on lookup whatever the world's boundary policy is, so near
    an edge a query also returns particles from the opposite edge.
    """
    order: np.ndarray      # (n,) int64
    offsets: np.ndarray    # (grid_dim * grid_dim + 1,) int64
    scale: np.ndarray      # (2,) cells per world unit
    grid_dim: int = GRID_DIM

    @classmethod
    def build(cls, positions: np.ndarray, extent: tuple[float, float], grid_dim: int = GRID_DIM) -> "SpatialGrid":
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        scale = grid_dim / np.asarray(extent, dtype=np.float64)
        cells = np.floor(positions * scale).astype(np.int64) % grid_dim
        flat = cells[:, 0] + cells[:, 1] * grid_dim
        order = np.argsort(flat, kind="stable").astype(np.int64)
        counts = np.bincount(flat, minlength=grid_dim * grid_dim)
        offsets = np.zeros(grid_dim * grid_dim + 1, dtype=np.int64)
        np.cumsum(counts, out=offsets[1:])
        for a in (order, offsets, scale):
            a.setflags(write=False)
        return cls(order=order, offsets=offsets, scale=scale, grid_dim=grid_dim)

    def cell_of(self, position) -> tuple[int, int]:
        cx, cy = (np.floor(np.asarray(position, dtype=np.float64) * self.scale).astype(np.int64) % self.grid_dim)
        return int(cx), int(cy)

    def bucket(self, cx: int, cy: int) -> np.ndarray:
        """Particle indices in cell (cx, cy); indices wrap like lookups do."""
        c = (cx % self.grid_dim) + (cy % self.grid_dim) * self.grid_dim
        return self.order[self.offsets[c]:self.offsets[c + 1]]

    def neighbors_of(self, position, radius: float) -> np.ndarray:
        """
        Indices of every particle in the cells overlapping the disc of `radius`
        around `position`. A superset: callers still need an exact distance test.
        """
        px, py = (float(v) for v in position)
        return _gather_neighbors(
            px, py, float(radius),
            float(self.scale[0]), float(self.scale[1]),
            self.grid_dim, self.order, self.offsets,
        )
