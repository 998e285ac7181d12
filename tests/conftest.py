"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from rigidgeom.transform.se import SE3


@pytest.fixture
def rng():
    """Fixture providing a seeded random generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def random_se3(rng):
    """Fixture providing a random SE3 transform."""
    rvec = rng.uniform(-1.0, 1.0, size=3)
    translation = rng.uniform(-5.0, 5.0, size=3)
    return SE3.from_rotation_vector(rvec, translation)
