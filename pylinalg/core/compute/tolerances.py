"""
Tolerance tiers for numerical validation.

Defines precision expectations for different scalar widths:
- FP64: direct kernels (QR, products) agree to near machine precision
- FP64 iterative: results of 100-sweep QR iterations, where rounding
  accumulates once per sweep
- FP32 / FP32 iterative: relaxed for single-precision arithmetic

Used by the test suite and by is_hermitian() when no atol is given.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='Double precision direct kernels',
)

FP64_ITERATIVE = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='fp64_iterative',
    description='Double precision after a fixed QR iteration budget',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision direct kernels',
)

FP32_ITERATIVE = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='fp32_iterative',
    description='Single precision after a fixed QR iteration budget',
)


def select_tolerance(
    dtype: DTypeLike,
    iterative: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given scalar dtype."""
    # complex64 shares float32's precision
    if np.finfo(dtype).bits <= 32:
        return FP32_ITERATIVE if iterative else FP32
    return FP64_ITERATIVE if iterative else FP64
