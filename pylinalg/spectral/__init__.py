"""
Iterative eigen and singular value solvers.

Public API:
    wilkinson_shift(M)                   - shift from a 2x2 symmetric block
    real_spectral_decomposition(A)       - shifted QR iteration, Hermitian A
    bidiagonal_qr(B)                     - implicit-shift SVD of bidiagonal B
"""

from pylinalg.spectral.shifts import wilkinson_shift
from pylinalg.spectral.solution import (
    SpectralPair,
    DiagBasisQR,
    SpectralSolution,
    SVDSolution,
)
from pylinalg.spectral.solvers import (
    real_spectral_decomposition,
    bidiagonal_qr,
)

__all__ = [
    "wilkinson_shift",
    "real_spectral_decomposition",
    "bidiagonal_qr",
    "SpectralPair",
    "DiagBasisQR",
    "SpectralSolution",
    "SVDSolution",
]
