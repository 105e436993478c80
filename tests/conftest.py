import matplotlib

matplotlib.use("Agg")

import pytest

from particle_life.core import PhysicsParams, TypeInteractionModel, World
from particle_life.utils.random import seed_all


@pytest.fixture(autouse=True)
def seeded():
    seed_all(1234)
    yield
    seed_all(None)


@pytest.fixture
def params():
    return PhysicsParams()


@pytest.fixture
def tent_model():
    """One type: attraction 1, min radius 1, max radius 3 (peak at r = 2)."""
    return TypeInteractionModel.from_matrices([[1.0]], [[1.0]], [[3.0]])


@pytest.fixture
def walled_world():
    return World(width=128.0, height=128.0, wrap=False)

