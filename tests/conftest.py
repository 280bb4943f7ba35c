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
def normal_stream(rng):
    """1000 draws from N(2, 3^2)."""
    return rng.normal(2.0, 3.0, size=1000)


@pytest.fixture
def regression_data(rng):
    """Regression dataset with known coefficients and small noise."""
    n, p = 500, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true
