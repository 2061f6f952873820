"""
Core infrastructure for PyLinalg.

This module provides shared abstractions and utilities used by the
matrix container, the decomposition collaborators and the solvers.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators (contract checks)
    compute: Timing and tolerance tiers
    backends: Device selection and precision helpers
"""

from pylinalg.core.result import Result
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
