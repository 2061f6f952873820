"""
Generic result container for all PyLinalg solvers.

The Result class provides a standardized envelope that the iterative
solvers use. This enables shared tooling for timing, diagnostics and
reproducibility while allowing each solver to define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (iterations, converged, shift)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library versions that produced a result."""
    from pylinalg import __version__

    return {
        'pylinalg_version': __version__,
        'numpy_version': np.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for solver computations.

    Type Parameters:
        P: The solver-specific payload type

    Attributes:
        params: Solver payload (SpectralPair, DiagBasisQR)
        info: Structured metadata (method, iterations, convergence)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used for the computation

    Examples:
        >>> # Fixed iteration budget
        >>> Result(
        ...     params=SpectralPair(D=D, Q=Q),
        ...     info={'method': 'shifted_qr', 'iterations': 100, 'converged': None},
        ...     timing={'total_seconds': 0.01, 'factor': 0.008},
        ...     backend_name='cpu_householder'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
