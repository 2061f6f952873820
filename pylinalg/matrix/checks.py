"""
Structural predicates on matrices.

Both predicates accept a Matrix or any 2-D array-like and never raise on
shape problems: a non-square matrix is simply not Hermitian.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.core.backends.precision import zero_threshold
from pylinalg.core.compute.tolerances import select_tolerance
from pylinalg.core.validation import check_array


def is_hermitian(matrix: Any, atol: float | None = None) -> bool:
    """
    True iff the matrix equals its own conjugate transpose.

    For real matrices this is plain symmetry.

    Args:
        matrix: Matrix or 2-D array-like
        atol: Absolute tolerance. None uses the tolerance tier of the
              matrix dtype; 0 demands exact equality.

    Returns:
        Whether the matrix is square, non-empty and Hermitian
    """
    array = check_array(matrix, "matrix")
    if array.ndim != 2 or array.shape[0] == 0 or array.shape[0] != array.shape[1]:
        return False

    if atol is None:
        tier = select_tolerance(array.dtype)
        rtol, atol = tier.rtol, tier.atol
    else:
        rtol = 0.0

    return bool(np.allclose(array, array.conj().T, rtol=rtol, atol=atol))


def is_upper_bidiagonal(matrix: ArrayLike, atol: float | None = None) -> bool:
    """
    True iff every entry off the main diagonal and first superdiagonal is
    zero (magnitude at most atol).

    Args:
        matrix: Matrix or 2-D array-like, any shape
        atol: Largest magnitude still counted as zero. None uses the
              round-zeroes threshold of the matrix dtype.
    """
    array = check_array(matrix, "matrix")
    if array.ndim != 2:
        return False

    if atol is None:
        atol = zero_threshold(array.dtype)

    outside = np.tril(array, -1) + np.triu(array, 2)
    return bool(np.all(np.abs(outside) <= atol))
