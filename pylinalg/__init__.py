"""
PyLinalg: dense matrices and iterative spectral solvers for Python.

A row-major dense matrix over real or complex floating point scalars,
Householder QR and Givens rotation kernels, and two iterative solvers
built on them: shifted QR iteration for Hermitian eigen-decomposition
and implicit-shift bulge chasing for the SVD of a bidiagonal matrix.

Submodules:
    matrix: Dense Matrix container and structural predicates
    decomposition: Householder QR and Givens rotations
    spectral: Wilkinson shift and the iterative solvers
    core: Exceptions, validation, result envelope, timing
"""

__version__ = "0.1.0"

from pylinalg import matrix
from pylinalg import decomposition
from pylinalg import spectral
from pylinalg.matrix import Matrix
from pylinalg.spectral import (
    wilkinson_shift,
    real_spectral_decomposition,
    bidiagonal_qr,
)

__all__ = [
    "__version__",
    "matrix",
    "decomposition",
    "spectral",
    "Matrix",
    "wilkinson_shift",
    "real_spectral_decomposition",
    "bidiagonal_qr",
]
