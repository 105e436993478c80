import numpy as np
import pytest

from particle_life.core import (
    ParticleArray,
    PhysicsParams,
    SpatialGrid,
    TypeInteractionModel,
    World,
    accumulate_velocities,
    pair_force,
)
from particle_life.core.physics import R_SMOOTH

NO_FRICTION = PhysicsParams(friction=0.0)


def _phase_a(world, model, particles):
    grid = SpatialGrid.build(particles.pos, world.extent())
    return accumulate_velocities(world, model, particles, grid)


def test_tent_peak_equals_attraction():
    f = pair_force((2.0, 0.0), 0.7, 1.0, 3.0)
    assert f == pytest.approx([0.7, 0.0])
    f = pair_force((0.0, -2.0), -0.4, 1.0, 3.0)
    assert f == pytest.approx([0.0, 0.4])


def test_tent_vanishes_at_both_cutoffs():
    assert pair_force((3.0, 0.0), 1.0, 1.0, 3.0) == pytest.approx([0.0, 0.0], abs=1e-12)
    assert pair_force((1.0 + 1e-9, 0.0), 1.0, 1.0, 3.0) == pytest.approx([0.0, 0.0], abs=1e-6)


def test_outside_max_radius_contributes_nothing():
    assert np.array_equal(pair_force((3.01, 0.0), 1.0, 1.0, 3.0), [0.0, 0.0])


@pytest.mark.parametrize("d", [(0.0, 0.0), (0.05, 0.05), (0.0, 0.0999)])
def test_near_coincident_contributes_nothing(d):
    f = pair_force(d, 1.0, 1.0, 3.0)
    assert np.array_equal(f, [0.0, 0.0])


@pytest.mark.parametrize("attraction", [1.0, -1.0, 0.0])
def test_collision_avoidance_repels(attraction):
    f = pair_force((0.5, 0.0), attraction, 1.0, 3.0)
    expected = R_SMOOTH * 1.0 * (1.0 / (1.0 + R_SMOOTH) - 1.0 / (0.5 + R_SMOOTH))
    assert f[0] == pytest.approx(expected)
    assert f[0] < 0.0  # pushes away from the neighbour at +x
    assert f[1] == 0.0


def test_same_type_pair_at_mid_distance(tent_model, walled_world):
    p = ParticleArray.from_lists([[10.0, 10.0], [12.0, 10.0]])
    vel = _phase_a(walled_world, tent_model, p)
    assert vel == pytest.approx(np.array([[1.0, 0.0], [-1.0, 0.0]]))


def test_coincident_particles_stay_finite(tent_model, walled_world):
    p = ParticleArray.from_lists([[20.0, 20.0], [20.0, 20.0]], vel=[[0.1, 0.0], [0.0, 0.2]])
    out = walled_world.step(tent_model, NO_FRICTION, p)
    assert np.all(np.isfinite(out.pos)) and np.all(np.isfinite(out.vel))
    assert out.vel == pytest.approx(p.vel)


def test_collision_regime_pushes_apart_in_world(walled_world):
    model = TypeInteractionModel.from_matrices([[-1.0]], [[2.0]], [[5.0]])
    p = ParticleArray.from_lists([[30.0, 30.0], [30.0, 31.0]])
    vel = _phase_a(walled_world, model, p)
    assert vel[0, 1] < 0.0 and vel[1, 1] > 0.0
    assert vel[0, 0] == 0.0 and vel[1, 0] == 0.0


def test_wrap_aware_distance(tent_model):
    world = World(100.0, 100.0, wrap=True)
    p = ParticleArray.from_lists([[1.0, 50.0], [99.0, 50.0]])
    vel = _phase_a(world, tent_model, p)
    # separated by 2 across the seam: full peak attraction towards each other
    assert vel == pytest.approx(np.array([[-1.0, 0.0], [1.0, 0.0]]))


def test_no_wrap_correction_with_walls(tent_model):
    world = World(100.0, 100.0, wrap=False)
    p = ParticleArray.from_lists([[1.0, 50.0], [99.0, 50.0]])
    vel = _phase_a(world, tent_model, p)
    assert np.array_equal(vel, np.zeros((2, 2)))


def test_wrap_aware_distance_on_y_axis(tent_model):
    world = World(100.0, 60.0, wrap=True)
    p = ParticleArray.from_lists([[50.0, 59.0], [50.0, 1.0]])
    vel = _phase_a(world, tent_model, p)
    assert vel == pytest.approx(np.array([[0.0, 1.0], [0.0, -1.0]]))


def test_asymmetric_attraction_chases():
    model = TypeInteractionModel.from_matrices(
        [[0.0, 1.0], [-1.0, 0.0]],
        [[1.0, 1.0], [1.0, 1.0]],
        [[3.0, 3.0], [3.0, 3.0]],
    )
    world = World(64.0, 64.0, wrap=True)
    p = ParticleArray.from_lists([[10.0, 10.0], [12.0, 10.0]], types=[0, 1])
    vel = _phase_a(world, model, p)
    # type 0 is drawn to type 1, type 1 flees type 0: both move +x
    assert vel == pytest.approx(np.array([[1.0, 0.0], [1.0, 0.0]]))


def test_phase_a_matches_brute_force():
    rng = np.random.default_rng(9)
    params = PhysicsParams(max_radius_lower=5.0, max_radius_upper=12.0, min_radius_upper=4.0)
    model = TypeInteractionModel(4, params=params, rng=rng)
    world = World(80.0, 50.0, wrap=True)
    p = world.create_particles(model, 300, rng=rng)
    vel = _phase_a(world, model, p)

    expected = p.vel.copy()
    for i in range(len(p)):
        for j in range(len(p)):
            d = world.minimal_displacement(p.pos[i], p.pos[j])
            a = model.attraction(p.types[i], p.types[j])
            lo, hi = model.radii(p.types[i], p.types[j])
            expected[i] += pair_force(d, a, lo, hi)
    assert vel == pytest.approx(expected, abs=1e-9)
