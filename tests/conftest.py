"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinalg.matrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def symmetric_matrix(rng):
    """Random 5x5 real symmetric matrix."""
    A = rng.standard_normal((5, 5))
    return Matrix.from_array((A + A.T) / 2)


@pytest.fixture
def hermitian_matrix(rng):
    """Random 4x4 complex Hermitian matrix."""
    A = rng.standard_normal((4, 4)) + 1j * rng.standard_normal((4, 4))
    return Matrix.from_array((A + A.conj().T) / 2)


@pytest.fixture
def bidiagonal_matrix(rng):
    """Random 5x5 upper bidiagonal matrix."""
    n = 5
    B = np.diag(rng.standard_normal(n)) + np.diag(rng.standard_normal(n - 1), 1)
    return Matrix.from_array(B)


@pytest.fixture
def separated_bidiagonal():
    """Upper bidiagonal matrix with well separated singular values."""
    B = np.diag([4.0, 3.0, 2.0, 1.0]) + np.diag([0.5, 0.4, 0.3], 1)
    return Matrix.from_array(B)
