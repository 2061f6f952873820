"""
Input validation utilities for PyLinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Every precondition of the
matrix container and the solvers goes through one of these.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No clamping or auto-correction of dimensions or indices
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages

The shape checks accept anything with a ``shape`` attribute, so they work
on both numpy arrays and Matrix instances.
"""

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray
from typing import Any, Iterable

from pylinalg.core.exceptions import (
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
)


# Real or complex floating point types the LAPACK kernels accept
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.complex64),
    np.dtype(np.complex128),
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.inexact[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    Integer input is promoted to float64; complex input stays complex.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating or complex dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, bool, datetime, etc.)
    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.inexact):
        result = result.astype(np.float64)

    return result


def check_scalar_dtype(dtype: DTypeLike, name: str) -> np.dtype:
    """
    Verify dtype is a supported real or complex floating point type.

    Args:
        dtype: Requested dtype
        name: Parameter name for error messages

    Returns:
        The normalized numpy dtype

    Raises:
        ValidationError: If dtype is not float32, float64, complex64 or complex128
    """
    try:
        normalized = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"{name}: not a dtype: {dtype!r}") from e

    if normalized not in SUPPORTED_DTYPES:
        supported = ", ".join(str(d) for d in SUPPORTED_DTYPES)
        raise ValidationError(
            f"{name}: unsupported scalar dtype {normalized}, expected one of {supported}"
        )
    return normalized


def check_finite(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_2d(array: NDArray[np.inexact[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 2D
    """
    if array.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_positive_size(rows: int, columns: int, name: str) -> None:
    """
    Verify both dimensions of a matrix being constructed are positive.

    Args:
        rows: Requested number of rows
        columns: Requested number of columns
        name: Parameter name for error messages

    Raises:
        DimensionError: If either dimension is not an integer, or is zero
                        or negative
    """
    for label, value in (("rows", rows), ("columns", columns)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise DimensionError(
                f"{name}: number of {label} must be an integer, got {type(value).__name__}"
            )
    if rows <= 0:
        raise DimensionError(
            f"{name}: number of rows must be greater than zero, got {rows}"
        )
    if columns <= 0:
        raise DimensionError(
            f"{name}: number of columns must be greater than zero, got {columns}"
        )


def check_same_shape(lhs: Any, rhs: Any, operation: str) -> None:
    """
    Verify two operands of an element-wise operation have equal shapes.

    Args:
        lhs: Left operand (anything with .shape)
        rhs: Right operand (anything with .shape)
        operation: Operation name for error messages

    Raises:
        DimensionError: If the row or column counts differ
    """
    if lhs.shape[0] != rhs.shape[0]:
        raise DimensionError(
            f"{operation}: number of rows must be equal, got {lhs.shape[0]} and {rhs.shape[0]}"
        )
    if lhs.shape[1] != rhs.shape[1]:
        raise DimensionError(
            f"{operation}: number of columns must be equal, got {lhs.shape[1]} and {rhs.shape[1]}"
        )


def check_matmul_shapes(lhs: Any, rhs: Any) -> None:
    """
    Verify inner dimensions agree for a matrix product.

    Raises:
        DimensionError: If lhs.columns != rhs.rows
    """
    if lhs.shape[1] != rhs.shape[0]:
        raise DimensionError(
            f"matmul: dimension mismatch, {lhs.shape[0]}x{lhs.shape[1]} "
            f"times {rhs.shape[0]}x{rhs.shape[1]}"
        )


def check_square(matrix: Any, name: str) -> None:
    """
    Verify matrix is square and non-empty.

    Raises:
        DimensionError: If matrix is empty or rows != columns
    """
    rows, columns = matrix.shape
    if rows == 0 or rows != columns:
        raise DimensionError(
            f"{name}: expected a non-empty square matrix, got shape ({rows}, {columns})"
        )


def check_shape(matrix: Any, shape: tuple[int, int], name: str) -> None:
    """
    Verify matrix has exactly the given shape.

    Raises:
        DimensionError: If the shape differs
    """
    if tuple(matrix.shape) != shape:
        raise DimensionError(
            f"{name}: expected shape {shape}, got {tuple(matrix.shape)}"
        )


def check_min_shape(matrix: Any, min_rows: int, min_columns: int, name: str) -> None:
    """
    Verify matrix has at least the given number of rows and columns.

    Raises:
        DimensionError: If the matrix is smaller in either dimension
    """
    rows, columns = matrix.shape
    if rows < min_rows or columns < min_columns:
        raise DimensionError(
            f"{name}: requires at least {min_rows}x{min_columns}, got {rows}x{columns}"
        )


def check_index(index: int, bound: int, axis: str, shape: tuple[int, int]) -> None:
    """
    Verify 0 <= index < bound.

    Negative indices are rejected rather than wrapped.

    Args:
        index: Index to check
        bound: Exclusive upper bound
        axis: 'row' or 'column', for error messages
        shape: Shape of the indexed matrix, for error messages

    Raises:
        ValidationError: If index is not an integer
        IndexOutOfRangeError: If index is outside [0, bound)
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise ValidationError(
            f"{axis} index must be an integer, got {type(index).__name__}"
        )
    if not 0 <= index < bound:
        raise IndexOutOfRangeError(
            f"{axis} index {index} is outside the matrix boundaries {shape}",
            index=index,
            shape=shape,
        )


def check_iteration_count(iteration_count: int, name: str) -> None:
    """
    Verify an iteration budget is a non-negative integer.

    Raises:
        ValidationError: If iteration_count is not an int or is negative
    """
    if isinstance(iteration_count, bool) or not isinstance(iteration_count, (int, np.integer)):
        raise ValidationError(
            f"{name}: expected an integer, got {type(iteration_count).__name__}"
        )
    if iteration_count < 0:
        raise ValidationError(
            f"{name}: must be non-negative, got {iteration_count}"
        )


def check_choice(value: str, choices: Iterable[str], name: str) -> None:
    """
    Verify an option string is one of the allowed choices.

    Raises:
        ValidationError: If value is not in choices
    """
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(
            f"{name} must be one of {choices}, got {value!r}"
        )
