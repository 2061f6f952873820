"""
Factorization and rotation kernels used by the iterative solvers.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy (LAPACK under the hood)
    - GPU functions use PyTorch and return CPU Matrices
    - Each factorization returns a structured result dataclass
    - Contract violations are raised immediately with clear messages

Submodules:
    qr: Householder QR decomposition
    givens: Givens rotations on rows and columns
"""

from pylinalg.decomposition.qr import (
    QRResult,
    householder_qr,
    qr_cpu,
    qr_gpu,
)
from pylinalg.decomposition.givens import (
    GivensRotation,
    givens_rotation,
    rotate_rows,
    rotate_columns,
    givens_left_rotation,
    givens_right_rotation,
)

__all__ = [
    # QR decomposition
    "QRResult",
    "householder_qr",
    "qr_cpu",
    "qr_gpu",
    # Givens rotations
    "GivensRotation",
    "givens_rotation",
    "rotate_rows",
    "rotate_columns",
    "givens_left_rotation",
    "givens_right_rotation",
]
