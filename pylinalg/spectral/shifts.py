"""
Wilkinson shift.

For a 2x2 Hermitian block M the shift is the eigenvalue of M closer to
M[1, 1]:

    d     = (M00 - M11) / 2
    shift = M11 - sign(d) |M01|² / (|d| + sqrt(d² + |M01|²))

with sign(0) = 0, so a block with equal diagonal entries shifts by M11.
For real symmetric blocks |M01|² = M01² and this is the textbook formula.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pylinalg.core.backends.precision import sign
from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import check_finite, check_shape
from pylinalg.matrix.checks import is_hermitian
from pylinalg.matrix.dense import Matrix


def wilkinson_shift(matrix: Matrix | Any) -> Any:
    """
    Shift toward the eigenvalue of a 2x2 symmetric block nearest M[1, 1].

    Args:
        matrix: 2x2 Matrix (or array-like), exactly symmetric (Hermitian)

    Returns:
        The shift as a scalar of the matrix dtype

    Raises:
        DimensionError: If the matrix is not 2x2
        ValidationError: If the block holds NaN or Inf, M[0, 1] != conj(M[1, 0]),
                         or the diagonal is not real
    """
    M = matrix if isinstance(matrix, Matrix) else Matrix.from_array(matrix)
    check_shape(M, (2, 2), "matrix")
    check_finite(M.view(), "matrix")
    if not is_hermitian(M, atol=0.0):
        raise ValidationError(
            f"matrix: Wilkinson shift requires a symmetric 2x2 block, "
            f"got M[0, 1]={M[0, 1]!r}, M[1, 0]={M[1, 0]!r}"
        )

    scalar = M.dtype.type
    off_squared = np.abs(M[0, 1]) ** 2
    d = np.real(M[0, 0] - M[1, 1]) / 2
    coefficient = np.abs(d) + np.sqrt(d * d + off_squared)

    # Both d and M01 vanish: the block is already diagonal
    if coefficient == 0:
        return scalar(M[1, 1])

    return scalar(M[1, 1] - sign(d) * off_squared / coefficient)
