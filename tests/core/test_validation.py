"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype promotion, non-numeric rejection
    - check_scalar_dtype: real/complex floating point only
    - check_finite, check_2d
    - check_positive_size, check_same_shape, check_matmul_shapes
    - check_square, check_shape, check_min_shape
    - check_index, check_iteration_count, check_choice
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)
from pylinalg.core.validation import (
    check_2d,
    check_array,
    check_choice,
    check_finite,
    check_index,
    check_iteration_count,
    check_matmul_shapes,
    check_min_shape,
    check_positive_size,
    check_same_shape,
    check_scalar_dtype,
    check_shape,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_int_list_promoted_to_float64(self):
        result = check_array([[1, 2], [3, 4]], "A")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [[1.0, 2.0], [3.0, 4.0]])

    def test_complex_preserved(self):
        result = check_array([1 + 2j, 3], "A")
        assert np.iscomplexobj(result)

    def test_float32_preserved(self):
        result = check_array(np.ones(3, dtype=np.float32), "A")
        assert result.dtype == np.float32

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "A")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "A")

    def test_rejects_bool(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array([True, False], "A")

    def test_error_includes_name(self):
        with pytest.raises(ValidationError, match="^values:"):
            check_array(["a"], "values")


# ═══════════════════════════════════════════════════════════════════════
# check_scalar_dtype
# ═══════════════════════════════════════════════════════════════════════


class TestCheckScalarDtype:

    @pytest.mark.parametrize("dtype", [np.float32, np.float64, np.complex64, np.complex128])
    def test_supported(self, dtype):
        assert check_scalar_dtype(dtype, "dtype") == np.dtype(dtype)

    @pytest.mark.parametrize("dtype", [np.int64, np.float16, np.bool_, np.longdouble])
    def test_unsupported(self, dtype):
        if np.dtype(dtype) == np.dtype(np.float64):
            pytest.skip("longdouble is float64 on this platform")
        with pytest.raises(ValidationError, match="unsupported scalar dtype"):
            check_scalar_dtype(dtype, "dtype")

    def test_not_a_dtype(self):
        with pytest.raises(ValidationError, match="not a dtype"):
            check_scalar_dtype(object(), "dtype")


# ═══════════════════════════════════════════════════════════════════════
# check_finite / check_2d
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "A")

    def test_reports_counts(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf]), "A")


class TestCheck2d:

    def test_2d_passes(self):
        check_2d(np.zeros((2, 3)), "A")

    def test_1d_raises(self):
        with pytest.raises(DimensionError, match="expected 2D array, got 1D"):
            check_2d(np.zeros(3), "A")


# ═══════════════════════════════════════════════════════════════════════
# Shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPositiveSize:

    def test_positive_passes(self):
        check_positive_size(2, 3, "Matrix")

    def test_zero_rows(self):
        with pytest.raises(DimensionError, match="rows must be greater than zero"):
            check_positive_size(0, 3, "Matrix")

    def test_negative_columns(self):
        with pytest.raises(DimensionError, match="columns must be greater than zero"):
            check_positive_size(2, -1, "Matrix")

    def test_non_integer(self):
        with pytest.raises(DimensionError, match="must be an integer"):
            check_positive_size(2.5, 3, "Matrix")

    def test_numpy_integer_accepted(self):
        check_positive_size(np.int64(2), np.int32(3), "Matrix")


class TestCheckSameShape:

    def test_equal_passes(self):
        check_same_shape(np.zeros((2, 3)), np.zeros((2, 3)), "add")

    def test_row_mismatch(self):
        with pytest.raises(DimensionError, match="number of rows must be equal, got 2 and 3"):
            check_same_shape(np.zeros((2, 3)), np.zeros((3, 3)), "add")

    def test_column_mismatch(self):
        with pytest.raises(DimensionError, match="number of columns"):
            check_same_shape(np.zeros((2, 3)), np.zeros((2, 2)), "sub")


class TestCheckMatmulShapes:

    def test_compatible(self):
        check_matmul_shapes(np.zeros((2, 3)), np.zeros((3, 4)))

    def test_incompatible(self):
        with pytest.raises(DimensionError, match="2x3 times 2x3"):
            check_matmul_shapes(np.zeros((2, 3)), np.zeros((2, 3)))


class TestCheckSquare:

    def test_square_passes(self):
        check_square(np.zeros((3, 3)), "A")

    def test_rectangular_raises(self):
        with pytest.raises(DimensionError, match=r"\(2, 3\)"):
            check_square(np.zeros((2, 3)), "A")

    def test_empty_raises(self):
        with pytest.raises(DimensionError):
            check_square(np.zeros((0, 0)), "A")


class TestCheckShape:

    def test_exact_passes(self):
        check_shape(np.zeros((2, 2)), (2, 2), "M")

    def test_mismatch(self):
        with pytest.raises(DimensionError, match=r"expected shape \(2, 2\), got \(3, 3\)"):
            check_shape(np.zeros((3, 3)), (2, 2), "M")


class TestCheckMinShape:

    def test_large_enough(self):
        check_min_shape(np.zeros((2, 5)), 2, 2, "B")

    def test_too_small(self):
        with pytest.raises(DimensionError, match="at least 2x2, got 1x5"):
            check_min_shape(np.zeros((1, 5)), 2, 2, "B")


# ═══════════════════════════════════════════════════════════════════════
# check_index / check_iteration_count / check_choice
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    def test_in_range(self):
        check_index(1, 2, "row", (2, 2))

    def test_past_end(self):
        with pytest.raises(IndexOutOfRangeError, match="row index 2") as exc_info:
            check_index(2, 2, "row", (2, 2))
        assert exc_info.value.index == 2
        assert exc_info.value.shape == (2, 2)

    def test_negative_not_wrapped(self):
        with pytest.raises(IndexOutOfRangeError):
            check_index(-1, 2, "column", (2, 2))

    def test_non_integer(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            check_index(slice(0, 1), 2, "row", (2, 2))


class TestCheckIterationCount:

    def test_zero_allowed(self):
        check_iteration_count(0, "iteration_count")

    def test_negative(self):
        with pytest.raises(ValidationError, match="non-negative"):
            check_iteration_count(-1, "iteration_count")

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_iteration_count(10.0, "iteration_count")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            check_iteration_count(True, "iteration_count")


class TestCheckChoice:

    def test_valid(self):
        check_choice("warn", ("ignore", "warn", "raise"), "on_nonconvergence")

    def test_invalid(self):
        with pytest.raises(ValidationError, match="on_nonconvergence must be one of"):
            check_choice("explode", ("ignore", "warn", "raise"), "on_nonconvergence")
