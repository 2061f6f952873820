"""
Spectral solver solution types.

Contains the parameter payloads (SpectralPair, DiagBasisQR) and the
user-facing solution wrappers returned by the solvers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.result import Result
from pylinalg.matrix.dense import Matrix


@dataclass(frozen=True)
class SpectralPair:
    """
    Payload of the symmetric eigen-decomposition.

    D converges toward a diagonal matrix of eigenvalues; the columns of Q
    approximate the matching eigenvectors, A ≈ Q D Qᴴ.
    """
    D: Matrix
    Q: Matrix


@dataclass(frozen=True)
class DiagBasisQR:
    """
    Payload of the bidiagonal SVD.

    B ≈ U D VT with U (rows x rows) and VT (columns x columns) unitary and
    D near-diagonal. The diagonal of D is neither sorted nor sign-normalized.
    """
    U: Matrix
    D: Matrix
    VT: Matrix

    @property
    def S(self) -> Matrix:
        return self.D


def _real_diagonal(matrix: Matrix) -> NDArray[np.inexact[Any]]:
    diag = matrix.view().diagonal()
    return np.real(diag) if matrix.is_complex else diag.copy()


@dataclass
class SpectralSolution:
    """
    User-facing symmetric eigen-decomposition results.

    Wraps Result[SpectralPair]; D and Q are available directly.
    """
    _result: Result[SpectralPair]

    @property
    def pair(self) -> SpectralPair:
        return self._result.params

    @property
    def D(self) -> Matrix:
        return self._result.params.D

    @property
    def Q(self) -> Matrix:
        return self._result.params.Q

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        """Diagonal of D, shape (n,). Real parts for complex (Hermitian) input."""
        return _real_diagonal(self.D)

    @property
    def eigenvectors(self) -> Matrix:
        """Columns approximate eigenvectors, in the order of eigenvalues."""
        return self.Q

    @property
    def shift(self) -> Any:
        return self._result.info['shift']

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    @property
    def converged(self) -> bool | None:
        """None when no tolerance was requested (fixed iteration budget)."""
        return self._result.info['converged']

    @property
    def off_diagonal_norm(self) -> float:
        return self._result.info['off_diagonal_norm']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a plain-text summary."""
        lines = [
            "Symmetric Eigen-decomposition (shifted QR iteration)",
            "=" * 60,
            f"Size: {self.D.rows}x{self.D.columns}",
            f"Shift: {self.shift}",
            f"Iterations: {self.iterations}",
            f"Converged: {'n/a (fixed budget)' if self.converged is None else self.converged}",
            f"Off-diagonal norm: {self.off_diagonal_norm:.3e}",
            "",
            "Eigenvalues:",
            "-" * 60,
        ]
        for i, value in enumerate(self.eigenvalues):
            lines.append(f"  λ[{i}]: {value:14.6f}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SpectralSolution(n={self.D.rows}, iterations={self.iterations}, "
            f"converged={self.converged}, off_diagonal_norm={self.off_diagonal_norm:.3e})"
        )


@dataclass
class SVDSolution:
    """
    User-facing bidiagonal SVD results.

    Wraps Result[DiagBasisQR]; U, S (alias D) and VT are available directly.
    """
    _result: Result[DiagBasisQR]

    @property
    def factors(self) -> DiagBasisQR:
        return self._result.params

    @property
    def U(self) -> Matrix:
        return self._result.params.U

    @property
    def S(self) -> Matrix:
        return self._result.params.D

    @property
    def D(self) -> Matrix:
        return self._result.params.D

    @property
    def VT(self) -> Matrix:
        return self._result.params.VT

    @property
    def singular_values(self) -> NDArray[np.floating[Any]]:
        """|diag(S)| sorted in descending order. The factors are left untouched."""
        values = np.abs(self.S.view().diagonal())
        return np.sort(values)[::-1]

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    @property
    def converged(self) -> bool | None:
        """None when no tolerance was requested (fixed iteration budget)."""
        return self._result.info['converged']

    @property
    def off_diagonal_norm(self) -> float:
        return self._result.info['off_diagonal_norm']

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a plain-text summary."""
        lines = [
            "Bidiagonal SVD (implicit-shift QR sweeps)",
            "=" * 60,
            f"Size: {self.S.rows}x{self.S.columns}",
            f"Sweeps: {self.iterations}",
            f"Converged: {'n/a (fixed budget)' if self.converged is None else self.converged}",
            f"Off-diagonal norm: {self.off_diagonal_norm:.3e}",
            "",
            "Singular values:",
            "-" * 60,
        ]
        for i, value in enumerate(self.singular_values):
            lines.append(f"  σ[{i}]: {value:14.6f}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SVDSolution(shape={self.S.shape}, iterations={self.iterations}, "
            f"converged={self.converged}, off_diagonal_norm={self.off_diagonal_norm:.3e})"
        )
