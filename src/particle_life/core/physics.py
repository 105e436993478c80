# src/particle_life/core/physics.py

from __future__ import annotations
from typing import TYPE_CHECKING
import math
import numpy as np
from numba import njit, prange

from .grid import SpatialGrid, cell_span
from .particles import ParticleArray, PARTICLE_RADIUS
if TYPE_CHECKING:
    from .world import World
    from .config import PhysicsParams
    from .interactions import TypeInteractionModel

R_SMOOTH = 2.0
MIN_DISTANCE_SQ = 0.01


@njit
def wrap_delta(d, extent):
    """Shortest signed separation along one toroidal axis."""
    if d > 0.5 * extent:
        d -= extent
    elif d < -0.5 * extent:
        d += extent
    return d


@njit
def wrap_coord(x, extent):
    x = x % extent
    if x < 0.0:
        x += extent
    # x % extent can round up to extent for tiny negative x
    if x >= extent:
        x -= extent
    return x


@njit
def _pair_velocity(dx, dy, attraction, min_r, max_r):
    """
    Velocity change of a particle from one neighbour at displacement (dx, dy).

    Beyond min_r the magnitude is a tent over [min_r, max_r] peaking at the
    attraction coefficient; inside min_r a smoothed repulsion takes over.
    """
    r2 = dx * dx + dy * dy
    if r2 < MIN_DISTANCE_SQ or r2 > max_r * max_r:
        return 0.0, 0.0
    r = math.sqrt(r2)
    if r > min_r:
        mid = 0.5 * (max_r + min_r)
        mag = attraction * (1.0 - 2.0 * abs(r - mid) / (max_r - min_r))
    else:
        mag = R_SMOOTH * min_r * (1.0 / (min_r + R_SMOOTH) - 1.0 / (r + R_SMOOTH))
    return dx / r * mag, dy / r * mag


@njit(parallel=True)
def _accumulate_kernel(pos, vel, types, attraction, min_radius, max_radius,
                       search_radius, width, height, wrap,
                       scale_x, scale_y, grid_dim, order, offsets):
    n = pos.shape[0]
    out = np.empty((n, 2), dtype=np.float64)
    for i in prange(n):
        px = pos[i, 0]
        py = pos[i, 1]
        ti = types[i]
        vx = vel[i, 0]
        vy = vel[i, 1]
        x0, x1 = cell_span(px, search_radius, scale_x, grid_dim)
        y0, y1 = cell_span(py, search_radius, scale_y, grid_dim)
        for cy in range(y0, y1 + 1):
            row = (cy % grid_dim) * grid_dim
            for cx in range(x0, x1 + 1):
                cell = row + cx % grid_dim
                for s in range(offsets[cell], offsets[cell + 1]):
                    j = order[s]
                    dx = pos[j, 0] - px
                    dy = pos[j, 1] - py
                    if wrap:
                        dx = wrap_delta(dx, width)
                        dy = wrap_delta(dy, height)
                    tj = types[j]
                    fx, fy = _pair_velocity(
                        dx, dy, attraction[ti, tj], min_radius[ti, tj], max_radius[ti, tj]
                    )
                    vx += fx
                    vy += fy
        out[i, 0] = vx
        out[i, 1] = vy
    return out


@njit(parallel=True)
def _integrate_kernel(pos, vel, friction, width, height, wrap, inset):
    n = pos.shape[0]
    new_pos = np.empty((n, 2), dtype=np.float64)
    new_vel = np.empty((n, 2), dtype=np.float64)
    damp = 1.0 - friction
    for i in prange(n):
        x = pos[i, 0] + vel[i, 0]
        y = pos[i, 1] + vel[i, 1]
        vx = vel[i, 0] * damp
        vy = vel[i, 1] * damp
        if wrap:
            x = wrap_coord(x, width)
            y = wrap_coord(y, height)
        else:
            if x <= inset:
                vx = -vx
                x = inset
            elif x >= width - inset:
                vx = -vx
                x = width - inset
            if y <= inset:
                vy = -vy
                y = inset
            elif y >= height - inset:
                vy = -vy
                y = height - inset
        new_pos[i, 0] = x
        new_pos[i, 1] = y
        new_vel[i, 0] = vx
        new_vel[i, 1] = vy
    return new_pos, new_vel


def pair_force(displacement, attraction: float, min_radius: float, max_radius: float) -> np.ndarray:
    """Velocity contribution from a single neighbour at `displacement` (neighbour - self)."""
    dx, dy = (float(v) for v in displacement)
    fx, fy = _pair_velocity(dx, dy, float(attraction), float(min_radius), float(max_radius))
    return np.array([fx, fy])


def accumulate_velocities(
    world: World,
    model: TypeInteractionModel,
    particles: ParticleArray,
    grid: SpatialGrid,
) -> np.ndarray:
    """
    Phase A: old velocity plus every neighbour's contribution, no friction.
    Reads only the previous positions/velocities; returns a fresh (n, 2) array.
    """
    width, height = world.extent()
    return _accumulate_kernel(
        particles.pos, particles.vel, particles.types,
        model.attraction_matrix, model.min_radius_matrix, model.max_radius_matrix,
        model.max_interaction_radius(), width, height, world.wrap,
        float(grid.scale[0]), float(grid.scale[1]), grid.grid_dim, grid.order, grid.offsets,
    )


def integrate(
    world: World,
    pos: np.ndarray,
    vel: np.ndarray,
    friction: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Phase B: advance positions by `vel`, damp velocities by friction, then
    wrap or reflect off walls inset by the particle radius.
    """
    width, height = world.extent()
    return _integrate_kernel(pos, vel, float(friction), width, height, world.wrap, PARTICLE_RADIUS)


def step_physics(
    world: World,
    model: TypeInteractionModel,
    params: PhysicsParams,
    particles: ParticleArray,
) -> ParticleArray:
    """
    Advance every particle one tick and return the new state.
    `particles` is left untouched.
    """
    if not (0.0 <= params.friction <= 1.0):
        raise ValueError(f"friction must be in [0, 1], got {params.friction}")
    model.check_type_ids(particles.types)

    grid = SpatialGrid.build(particles.pos, world.extent())
    vel = accumulate_velocities(world, model, particles, grid)
    pos, vel = integrate(world, particles.pos, vel, params.friction)
    return ParticleArray(pos=pos, vel=vel, types=particles.types.copy())
