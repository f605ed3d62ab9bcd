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
def invertible_array(rng):
    """Well-conditioned 5x5 matrix (diagonally dominant)."""
    A = rng.standard_normal((5, 5))
    return A + 5.0 * np.eye(5)


@pytest.fixture
def singular_array():
    """3x3 matrix with two identical rows."""
    return np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [1.0, 2.0, 3.0],
    ])


@pytest.fixture
def pivoting_array():
    """Matrix whose leading entry is zero, forcing a row interchange."""
    return np.array([
        [0.0, 2.0, 1.0],
        [1.0, 1.0, 0.0],
        [3.0, 0.0, 1.0],
    ])
