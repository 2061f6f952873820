"""
Householder QR decomposition.

Provides a consistent QR interface across CPU (LAPACK via NumPy) and
GPU (PyTorch). Both kernels build Q from Householder reflectors
(geqrf/orgqr), which is what the shifted QR iteration relies on: an
already upper-triangular input factors as Q = I, R = input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.backends.device import DeviceInfo, select_device
from pylinalg.core.exceptions import DimensionError, SingularMatrixError, ValidationError
from pylinalg.core.validation import check_finite
from pylinalg.matrix.dense import Matrix


BackendChoice = Literal['auto', 'cpu', 'gpu']


@dataclass(frozen=True)
class QRResult:
    """
    Result of a complete QR decomposition A = QR.

    Attributes:
        Q: Square unitary matrix (rows x rows)
        R: Upper triangular matrix, same shape as A
        rank: Numerical rank determined from the R diagonal
    """
    Q: Matrix
    R: Matrix
    rank: int

    def solve(self, b: Matrix | ArrayLike) -> Matrix:
        """
        Least-squares solution of A x = b from the stored factors.

        Solves min ||b - A x|| as x = R⁻¹ Qᴴ b using back substitution on
        the leading square block of R.

        Args:
            b: Right-hand side, a vector of length rows or a rows x k matrix

        Returns:
            Solution as a columns x k Matrix

        Raises:
            DimensionError: If A has more columns than rows, or b has the
                            wrong number of rows
            SingularMatrixError: If A is rank-deficient
        """
        from scipy.linalg import solve_triangular

        n, p = self.R.shape
        if n < p:
            raise DimensionError(
                f"solve: least squares needs rows >= columns, got {n}x{p}"
            )
        if self.rank < p:
            raise SingularMatrixError(
                f"Matrix is rank-deficient: rank={self.rank}, expected={p}.",
                matrix_name='R',
                rank=self.rank,
                expected_rank=p
            )

        rhs = b.to_numpy() if isinstance(b, Matrix) else np.asarray(b)
        if rhs.ndim == 1:
            rhs = rhs[:, np.newaxis]
        if rhs.shape[0] != n:
            raise DimensionError(
                f"solve: b has {rhs.shape[0]} rows, expected {n}"
            )

        Qhb = self.Q.to_numpy().conj().T @ rhs
        x = solve_triangular(self.R.to_numpy()[:p, :p], Qhb[:p], lower=False)
        return Matrix.from_array(x)


def _numerical_rank(diag_R: np.ndarray, shape: tuple[int, int], eps: float) -> int:
    if len(diag_R) > 0 and diag_R[0] > 0:
        # Tolerance based on matrix size and machine epsilon
        tol = max(shape) * eps * diag_R[0]
        return int(np.sum(diag_R > tol))
    return 0


def qr_cpu(A: Matrix) -> QRResult:
    """
    Complete QR decomposition using LAPACK (via NumPy).

    Args:
        A: Matrix to decompose (rows x columns)

    Returns:
        QRResult with Q (rows x rows), R (rows x columns) and numerical rank
    """
    Q, R = np.linalg.qr(A.to_numpy(), mode='complete')

    diag_R = np.abs(np.diag(R))
    rank = _numerical_rank(diag_R, A.shape, float(np.finfo(A.dtype).eps))

    return QRResult(
        Q=Matrix.from_array(Q, dtype=A.dtype),
        R=Matrix.from_array(R, dtype=A.dtype),
        rank=rank,
    )


def qr_gpu(A: Matrix, device: DeviceInfo) -> QRResult:
    """
    Complete QR decomposition using PyTorch on a GPU.

    Args:
        A: Matrix to decompose
        device: GPU to run on

    Returns:
        QRResult with Q, R moved back to CPU Matrices, and numerical rank

    Raises:
        ValidationError: If a double precision matrix is sent to MPS,
                         which has no float64 support
    """
    import torch

    if device.device_type == 'mps' and np.finfo(A.dtype).bits > 32:
        raise ValidationError(
            f"MPS does not support {A.dtype}; use backend='cpu' or a single precision matrix"
        )

    X = torch.from_numpy(A.to_numpy()).to(device.torch_device)
    Q, R = torch.linalg.qr(X, mode='complete')

    diag_R = torch.abs(torch.diagonal(R)).cpu().numpy()
    rank = _numerical_rank(diag_R, A.shape, float(np.finfo(A.dtype).eps))

    return QRResult(
        Q=Matrix.from_array(Q.cpu().numpy(), dtype=A.dtype),
        R=Matrix.from_array(R.cpu().numpy(), dtype=A.dtype),
        rank=rank,
    )


def householder_qr(matrix: Matrix | Any, backend: BackendChoice = 'cpu') -> QRResult:
    """
    Factor a matrix as Q R with Householder reflections.

    Contract: A == Q R within rounding, Q square unitary of size A.rows,
    R the same shape as A and upper triangular in its leading square block.

    Args:
        matrix: Matrix (or 2-D array-like) to factor
        backend: 'cpu', 'gpu' or 'auto'

    Returns:
        QRResult

    Raises:
        DimensionError: If the matrix has no rows or columns
        ValidationError: If the matrix holds NaN or Inf
    """
    A = matrix if isinstance(matrix, Matrix) else Matrix.from_array(matrix)
    if A.rows == 0 or A.columns == 0:
        raise DimensionError(
            f"householder_qr: matrix must have positive dimensions, got {A.shape}"
        )
    check_finite(A.view(), "matrix")

    device = select_device(backend)
    if device.is_gpu:
        return qr_gpu(A, device)
    return qr_cpu(A)
