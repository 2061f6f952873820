"""
Iterative spectral solvers.

real_spectral_decomposition: shifted QR iteration on a Hermitian matrix.
bidiagonal_qr: implicit-shift QR sweeps (bulge chasing) on an upper
    bidiagonal matrix, producing its singular value decomposition.

Both run a fixed number of iterations by default with no convergence
test and no deflation. Passing tol enables an early exit once the
off-diagonal part is small enough and reports non-convergence through
on_nonconvergence; this is an opt-in extension and does not change the
fixed-budget default.
"""

from __future__ import annotations

import numbers
import warnings
from functools import partial
from typing import Any, Callable, Literal

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.backends.device import select_device
from pylinalg.core.compute.timing import Timer
from pylinalg.core.exceptions import ConvergenceError, ValidationError
from pylinalg.core.result import Result
from pylinalg.core.validation import (
    check_choice,
    check_finite,
    check_iteration_count,
    check_min_shape,
    check_square,
)
from pylinalg.decomposition.givens import givens_rotation, rotate_columns, rotate_rows
from pylinalg.decomposition.qr import BackendChoice, QRResult, qr_cpu, qr_gpu
from pylinalg.matrix.checks import is_hermitian, is_upper_bidiagonal
from pylinalg.matrix.dense import Matrix
from pylinalg.spectral.shifts import wilkinson_shift
from pylinalg.spectral.solution import (
    DiagBasisQR,
    SpectralPair,
    SpectralSolution,
    SVDSolution,
)


NonConvergenceAction = Literal['ignore', 'warn', 'raise']

_NONCONVERGENCE_ACTIONS = ('ignore', 'warn', 'raise')


def _ensure_matrix(data: Matrix | ArrayLike) -> Matrix:
    """Convert raw array to Matrix if needed and reject NaN or Inf entries."""
    matrix = data if isinstance(data, Matrix) else Matrix.from_array(data)
    check_finite(matrix.view(), "matrix")
    return matrix


def _check_tol(tol: float | None) -> None:
    if tol is None:
        return
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real) or not tol >= 0:
        raise ValidationError(f"tol must be a non-negative real number, got {tol!r}")


def _off_diagonal_norm(matrix: Matrix) -> float:
    """Frobenius norm of everything off the main diagonal."""
    off = matrix.to_numpy()
    np.fill_diagonal(off, 0)
    return float(np.linalg.norm(off))


def _report_nonconvergence(
    action: NonConvergenceAction,
    what: str,
    iterations: int,
    off_norm: float,
    tol: float,
) -> tuple[str, ...]:
    """Raise, warn or stay silent; the message is always returned for Result.warnings."""
    message = (
        f"{what} did not converge after {iterations} iterations: "
        f"off-diagonal norm {off_norm:.3e} > tol {tol:.3e}"
    )
    if action == 'raise':
        raise ConvergenceError(
            message,
            iterations=iterations,
            final_change=off_norm,
            reason='max_iterations',
            threshold=tol,
        )
    if action == 'warn':
        warnings.warn(message, RuntimeWarning, stacklevel=3)
    return (message,)


# ═══════════════════════════════════════════════════════════════════════
# Symmetric eigen-decomposition
# ═══════════════════════════════════════════════════════════════════════


def real_spectral_decomposition(
    matrix: Matrix | ArrayLike,
    shift: Any = 0.0,
    iteration_count: int = 100,
    *,
    tol: float | None = None,
    on_nonconvergence: NonConvergenceAction = 'warn',
    backend: BackendChoice = 'cpu',
) -> SpectralSolution:
    """
    Eigen-decomposition of a Hermitian matrix by shifted QR iteration.

    Each iteration factors D - shift·I = QR, sets D = RQ + shift·I,
    accumulates transform = transform·Q and rounds near-zero entries of D
    to zero. D tends to a diagonal matrix of eigenvalues and the
    accumulated transform to the eigenvector basis.

    The shift is constant; no Wilkinson shift is applied automatically,
    so closely spaced or repeated eigenvalues may converge slowly or not
    at all within the budget.

    Parameters
    ----------
    matrix : Matrix or array-like
        Hermitian (real symmetric) matrix.
    shift : scalar
        Constant shift applied every iteration. Default 0.
    iteration_count : int
        Number of iterations. Default 100. Without tol exactly this many
        iterations run.
    tol : float, optional
        Stop early once the off-diagonal Frobenius norm of D is <= tol.
    on_nonconvergence : str
        What to do when tol is given but not reached: 'ignore', 'warn'
        (RuntimeWarning, default) or 'raise' (ConvergenceError).
    backend : str
        Where the Householder QR runs: 'cpu' (default), 'gpu', 'auto'.

    Returns
    -------
    SpectralSolution with D, Q and iteration diagnostics.

    Raises
    ------
    DimensionError
        If the matrix is empty or not square.
    ValidationError
        If the matrix is not Hermitian, holds NaN or Inf, or an option
        is invalid.
    ConvergenceError
        If tol is not reached and on_nonconvergence='raise'.
    """
    A = _ensure_matrix(matrix)
    check_square(A, "matrix")
    if not is_hermitian(A):
        raise ValidationError(
            "matrix: spectral decomposition requires a Hermitian matrix (A == Aᴴ)"
        )
    check_iteration_count(iteration_count, "iteration_count")
    _check_tol(tol)
    check_choice(on_nonconvergence, _NONCONVERGENCE_ACTIONS, "on_nonconvergence")
    if not isinstance(shift, (int, float, complex, np.number)) or isinstance(shift, bool):
        raise ValidationError(f"shift: expected a scalar, got {type(shift).__name__}")
    if np.iscomplexobj(shift) and not A.is_complex:
        raise ValidationError(
            f"shift: complex shift {shift!r} for real matrix of dtype {A.dtype}"
        )

    device = select_device(backend)
    factor: Callable[[Matrix], QRResult]
    if device.is_gpu:
        factor = partial(qr_gpu, device=device)
    else:
        factor = qr_cpu

    timer = Timer(sync_cuda=device.device_type == 'cuda')
    timer.start()

    D = A.copy()
    shift_I = Matrix.identity(D.rows, shift, dtype=D.dtype)
    transform = Matrix.identity(D.rows, dtype=D.dtype)

    iterations = 0
    for _ in range(iteration_count):
        with timer.section('factor'):
            qr = factor(D - shift_I)
        with timer.section('update'):
            D = qr.R * qr.Q + shift_I
            transform *= qr.Q
            D.round_zeroes()
        iterations += 1

        if tol is not None and _off_diagonal_norm(D) <= tol:
            break

    timer.stop()

    off_norm = _off_diagonal_norm(D)
    converged = None if tol is None else off_norm <= tol
    messages: tuple[str, ...] = ()
    if converged is False:
        messages = _report_nonconvergence(
            on_nonconvergence, "Shifted QR iteration", iterations, off_norm, tol
        )

    result = Result(
        params=SpectralPair(D=D, Q=transform),
        info={
            'method': 'shifted_qr',
            'shift': shift,
            'iteration_count': iteration_count,
            'iterations': iterations,
            'converged': converged,
            'tol': tol,
            'off_diagonal_norm': off_norm,
        },
        timing=timer.result(),
        backend_name=f"{device.device_type}_householder_qr",
        warnings=messages,
    )
    return SpectralSolution(_result=result)


# ═══════════════════════════════════════════════════════════════════════
# Bidiagonal SVD
# ═══════════════════════════════════════════════════════════════════════


def _trailing_gram_block(S: Matrix) -> Matrix:
    """
    Trailing 2x2 block of SᴴS for upper bidiagonal S, built from the
    trailing 2x2 minor of S and the superdiagonal entry above it.
    """
    rows, columns = S.shape
    minor = S.get_submatrix((rows - 2, rows), (columns - 2, columns))
    above = S[rows - 3, columns - 2] if rows >= 3 else 0

    BB = Matrix(2, dtype=S.dtype)
    BB[0, 0] = np.abs(minor[0, 0]) ** 2 + np.abs(above) ** 2
    BB[0, 1] = np.conj(minor[0, 0]) * minor[0, 1]
    BB[1, 0] = np.conj(BB[0, 1])
    BB[1, 1] = np.abs(minor[0, 1]) ** 2 + np.abs(minor[1, 1]) ** 2
    return BB


def _chase_bulge(S: Matrix, U: Matrix, VT: Matrix, shift: Any) -> None:
    """
    One implicit-shift QR sweep over S, accumulating into U and VT.

    The first column rotation is driven by the shifted first column of
    SᴴS and creates a bulge below the diagonal; each row rotation removes
    it and pushes a new one right of the superdiagonal, which the next
    column rotation removes in turn. U·S·VT is invariant.
    """
    rows, columns = S.shape

    for i in range(min(rows, columns)):
        if i + 1 < columns:
            if i == 0:
                f = np.abs(S[0, 0]) ** 2 - shift
                s = np.conj(S[0, 0]) * S[0, 1]
            else:
                f = S[i - 1, i]
                s = S[i - 1, i + 1]
            rotation = givens_rotation(np.conj(f), np.conj(s))
            rotate_columns(S, i, i + 1, rotation)
            rotate_rows(VT, i, i + 1, rotation)

        if i + 1 < rows:
            rotation = givens_rotation(S[i, i], S[i + 1, i])
            rotate_rows(S, i, i + 1, rotation)
            rotate_columns(U, i, i + 1, rotation)


def bidiagonal_qr(
    matrix: Matrix | ArrayLike,
    iteration_count: int = 100,
    *,
    tol: float | None = None,
    on_nonconvergence: NonConvergenceAction = 'warn',
) -> SVDSolution:
    """
    Singular value decomposition of an upper bidiagonal matrix.

    Every sweep computes a Wilkinson shift from the trailing 2x2 block of
    the implicit tridiagonal BᴴB, chases the resulting bulge down the
    matrix with Givens rotations, and rounds near-zero entries of S to
    zero. All sweeps cover the whole matrix; converged singular values
    are not deflated.

    Parameters
    ----------
    matrix : Matrix or array-like
        Upper bidiagonal matrix, at least 2x2. Any shape.
    iteration_count : int
        Number of sweeps. Default 100. Without tol exactly this many run.
    tol : float, optional
        Stop early once the off-diagonal Frobenius norm of S is <= tol.
    on_nonconvergence : str
        'ignore', 'warn' (default) or 'raise', used only with tol.

    Returns
    -------
    SVDSolution with U (rows x rows), S and VT (columns x columns) such
    that U·S·VT ≈ matrix. The diagonal of S is not sorted and may hold
    negative values; see SVDSolution.singular_values.

    Raises
    ------
    DimensionError
        If the matrix has fewer than 2 rows or columns.
    ValidationError
        If the matrix is not upper bidiagonal, holds NaN or Inf, or an
        option is invalid.
    ConvergenceError
        If tol is not reached and on_nonconvergence='raise'.
    """
    B = _ensure_matrix(matrix)
    check_min_shape(B, 2, 2, "matrix")
    if not is_upper_bidiagonal(B):
        raise ValidationError(
            "matrix: bidiagonal QR requires an upper bidiagonal matrix "
            "(non-zero entries only on the diagonal and first superdiagonal)"
        )
    check_iteration_count(iteration_count, "iteration_count")
    _check_tol(tol)
    check_choice(on_nonconvergence, _NONCONVERGENCE_ACTIONS, "on_nonconvergence")

    timer = Timer()
    timer.start()

    S = B.copy()
    U = Matrix.identity(S.rows, dtype=S.dtype)
    VT = Matrix.identity(S.columns, dtype=S.dtype)

    iterations = 0
    shift = None
    for _ in range(iteration_count):
        with timer.section('shift'):
            shift = wilkinson_shift(_trailing_gram_block(S))
        with timer.section('sweep'):
            _chase_bulge(S, U, VT, shift)
            S.round_zeroes()
        iterations += 1

        if tol is not None and _off_diagonal_norm(S) <= tol:
            break

    timer.stop()

    off_norm = _off_diagonal_norm(S)
    converged = None if tol is None else off_norm <= tol
    messages: tuple[str, ...] = ()
    if converged is False:
        messages = _report_nonconvergence(
            on_nonconvergence, "Bidiagonal QR", iterations, off_norm, tol
        )

    result = Result(
        params=DiagBasisQR(U=U, D=S, VT=VT),
        info={
            'method': 'implicit_shift_bidiagonal_qr',
            'iteration_count': iteration_count,
            'iterations': iterations,
            'converged': converged,
            'tol': tol,
            'last_shift': shift,
            'off_diagonal_norm': off_norm,
        },
        timing=timer.result(),
        backend_name='cpu_givens',
        warnings=messages,
    )
    return SVDSolution(_result=result)
