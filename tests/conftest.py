"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def spd(rng):
    """Well-conditioned 4x4 symmetric positive definite array."""
    x = rng.standard_normal((4, 4))
    return x @ x.T + 4 * np.eye(4)
