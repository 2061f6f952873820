"""
Numerical precision constants and utilities.

Provides machine epsilon, the noise threshold used when rounding
near-zero entries, and a couple of scalar helpers shared by the
matrix container and the iterative solvers.
"""

import numpy as np
from numpy.typing import DTypeLike
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7

# Entries below ZERO_THRESHOLD_FACTOR * eps are treated as rounding noise
ZERO_THRESHOLD_FACTOR: float = 100.0


def machine_epsilon(dtype: DTypeLike = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Complex dtypes report the epsilon of their real component.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def zero_threshold(dtype: DTypeLike = np.float64) -> float:
    """
    Magnitude below which an entry is considered numerical noise.

    Args:
        dtype: NumPy dtype or type

    Returns:
        ZERO_THRESHOLD_FACTOR * machine epsilon
    """
    return ZERO_THRESHOLD_FACTOR * machine_epsilon(dtype)


def sign(value: Any) -> float:
    """
    Sign of a real scalar with sign(0) == 0.

    For complex input the sign of the real part is used; the solvers only
    call this on quantities that are real for Hermitian input.
    """
    real = float(np.real(value))
    if real > 0:
        return 1.0
    if real < 0:
        return -1.0
    return 0.0

