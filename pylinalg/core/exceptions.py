"""
Exception hierarchy for PyLinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Contract violations (bad shapes, bad indices,
non-Hermitian input) are ValidationError subclasses; numerical trouble
is kept in a separate branch so callers can tell "invalid input" apart
from "the iteration did not converge".

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all PyLinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when a caller breaks the contract of an operation: unsupported
    scalar dtype, non-Hermitian input to a symmetric solver, a matrix that
    is not bidiagonal, an unknown option string.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised for zero-sized construction, shape mismatches in arithmetic,
    and non-square input where a square matrix is required.
    """
    pass


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Element, row or column index lies outside the matrix.

    Also an IndexError so that generic sequence code behaves as expected.

    Attributes:
        index: The offending index (int or (row, column) tuple)
        shape: Shape of the matrix that was indexed
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, int] | None = None,
        shape: tuple[int, int] | None = None
    ):
        super().__init__(message)
        self.index = index
        self.shape = shape


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when an operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class ConvergenceError(PyLinalgError):
    """
    Iterative algorithm failed to converge.

    Only raised when the caller asked for a convergence tolerance and
    requested on_nonconvergence='raise'. Fixed-iteration runs never
    detect or report non-convergence.

    Attributes:
        iterations: Number of iterations completed
        final_change: Off-diagonal norm left after the last iteration
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
