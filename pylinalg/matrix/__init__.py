"""
Dense matrix container and structural predicates.

Public API:
    Matrix               - row-major dense matrix over float/complex scalars
    is_hermitian(m)      - equality with the conjugate transpose
    is_upper_bidiagonal(m)
"""

from pylinalg.matrix.dense import Matrix
from pylinalg.matrix.checks import is_hermitian, is_upper_bidiagonal

__all__ = [
    "Matrix",
    "is_hermitian",
    "is_upper_bidiagonal",
]
