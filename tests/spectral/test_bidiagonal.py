"""
Tests for bidiagonal_qr (implicit-shift SVD of an upper bidiagonal matrix).

Validates:
    - U·S·VT reproduces the input and U, VT stay unitary
    - S stays upper bidiagonal through every sweep
    - Singular values agree with LAPACK for well separated inputs
    - Square, tall, wide and complex inputs
    - The optional tolerance and the non-convergence policies
    - Contract violations
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import ConvergenceError, DimensionError, ValidationError
from pylinalg.matrix import Matrix, is_upper_bidiagonal
from pylinalg.spectral import SVDSolution, bidiagonal_qr


def _bidiagonal(diag, superdiag, shape=None):
    rows, columns = shape or (len(diag), len(diag))
    B = np.zeros((rows, columns), dtype=np.result_type(np.asarray(diag), np.asarray(superdiag)))
    for i, value in enumerate(diag):
        B[i, i] = value
    for i, value in enumerate(superdiag):
        B[i, i + 1] = value
    return Matrix.from_array(B)


def _assert_factorization(B, solution, atol=1e-10):
    U = solution.U.to_numpy()
    S = solution.S.to_numpy()
    VT = solution.VT.to_numpy()
    rows, columns = B.shape
    assert U.shape == (rows, rows)
    assert S.shape == (rows, columns)
    assert VT.shape == (columns, columns)
    np.testing.assert_allclose(U.conj().T @ U, np.eye(rows), atol=atol)
    np.testing.assert_allclose(VT @ VT.conj().T, np.eye(columns), atol=atol)
    np.testing.assert_allclose(U @ S @ VT, B.to_numpy(), atol=atol)


def _lapack_singular_values(B):
    return np.linalg.svd(B.to_numpy(), compute_uv=False)


# ═══════════════════════════════════════════════════════════════════════
# Factorization properties
# ═══════════════════════════════════════════════════════════════════════


class TestFactorization:

    def test_random_square(self, bidiagonal_matrix):
        solution = bidiagonal_qr(bidiagonal_matrix)
        _assert_factorization(bidiagonal_matrix, solution)

    def test_stays_bidiagonal(self, bidiagonal_matrix):
        for count in (1, 2, 10):
            solution = bidiagonal_qr(bidiagonal_matrix, iteration_count=count)
            assert is_upper_bidiagonal(solution.S)

    def test_separated_singular_values(self, separated_bidiagonal):
        solution = bidiagonal_qr(separated_bidiagonal)
        _assert_factorization(separated_bidiagonal, solution)
        np.testing.assert_allclose(
            solution.singular_values,
            _lapack_singular_values(separated_bidiagonal),
            rtol=1e-10,
        )
        assert solution.off_diagonal_norm < 1e-10

    def test_two_by_two(self):
        B = _bidiagonal([2.0, 1.0], [1.0])
        solution = bidiagonal_qr(B)
        _assert_factorization(B, solution)
        np.testing.assert_allclose(solution.singular_values, _lapack_singular_values(B), rtol=1e-10)

    def test_tall(self):
        B = _bidiagonal([3.0, 2.0, 1.0], [0.5, 0.5], shape=(5, 3))
        solution = bidiagonal_qr(B)
        _assert_factorization(B, solution)
        assert not np.any(np.isnan(solution.S.to_numpy()))
        np.testing.assert_allclose(solution.singular_values, _lapack_singular_values(B), rtol=1e-6)

    def test_wide(self):
        B = _bidiagonal([3.0, 2.0, 1.0], [0.5, 0.5, 0.5], shape=(3, 5))
        solution = bidiagonal_qr(B)
        _assert_factorization(B, solution)
        assert not np.any(np.isnan(solution.S.to_numpy()))

    def test_complex(self):
        B = _bidiagonal([4.0, 3.0j, -2.0, 1.0 + 0.0j], [0.3 + 0.2j, -0.2j, 0.1])
        solution = bidiagonal_qr(B)
        assert solution.U.dtype == np.complex128
        _assert_factorization(B, solution)
        np.testing.assert_allclose(solution.singular_values, _lapack_singular_values(B), rtol=1e-10)

    def test_diagonal_input(self):
        B = Matrix.diagonal([3.0, -1.0, 2.0])
        solution = bidiagonal_qr(B)
        _assert_factorization(B, solution)
        np.testing.assert_allclose(solution.singular_values, [3.0, 2.0, 1.0])

    def test_zero_iterations(self, bidiagonal_matrix):
        solution = bidiagonal_qr(bidiagonal_matrix, iteration_count=0)
        assert solution.S == bidiagonal_matrix
        assert solution.U == Matrix.identity(5)
        assert solution.VT == Matrix.identity(5)
        assert solution.info['last_shift'] is None

    def test_input_not_modified(self, bidiagonal_matrix):
        before = bidiagonal_matrix.copy()
        bidiagonal_qr(bidiagonal_matrix)
        assert bidiagonal_matrix == before


# ═══════════════════════════════════════════════════════════════════════
# Tolerance and non-convergence
# ═══════════════════════════════════════════════════════════════════════


class TestConvergence:

    def test_fixed_budget_by_default(self, separated_bidiagonal):
        solution = bidiagonal_qr(separated_bidiagonal, iteration_count=7)
        assert solution.iterations == 7
        assert solution.converged is None

    def test_early_exit(self, separated_bidiagonal):
        solution = bidiagonal_qr(separated_bidiagonal, iteration_count=200, tol=1e-10)
        assert solution.converged is True
        assert solution.iterations < 200
        assert solution.warnings == ()

    def test_warn(self, separated_bidiagonal):
        with pytest.warns(RuntimeWarning, match="Bidiagonal QR did not converge"):
            solution = bidiagonal_qr(separated_bidiagonal, iteration_count=1, tol=1e-12)
        assert solution.converged is False
        assert 'did not converge after 1 iterations' in solution.warnings[0]

    def test_raise(self, separated_bidiagonal):
        with pytest.raises(ConvergenceError) as exc_info:
            bidiagonal_qr(
                separated_bidiagonal, iteration_count=1, tol=1e-12, on_nonconvergence='raise'
            )
        assert exc_info.value.iterations == 1
        assert exc_info.value.final_change > 1e-12


# ═══════════════════════════════════════════════════════════════════════
# Result envelope
# ═══════════════════════════════════════════════════════════════════════


class TestSolution:

    def test_info(self, separated_bidiagonal):
        solution = bidiagonal_qr(separated_bidiagonal, iteration_count=3)
        assert isinstance(solution, SVDSolution)
        assert solution.info['method'] == 'implicit_shift_bidiagonal_qr'
        assert solution.info['last_shift'] is not None
        assert solution.backend_name == 'cpu_givens'
        assert set(solution.timing) == {'total_seconds', 'shift', 'sweep'}

    def test_aliases(self, separated_bidiagonal):
        solution = bidiagonal_qr(separated_bidiagonal, iteration_count=3)
        assert solution.S is solution.D
        assert solution.factors.S is solution.S

    def test_singular_values_sorted_descending(self, bidiagonal_matrix):
        values = bidiagonal_qr(bidiagonal_matrix).singular_values
        assert np.all(values >= 0)
        assert np.all(np.diff(values) <= 0)

    def test_summary(self, separated_bidiagonal):
        text = bidiagonal_qr(separated_bidiagonal).summary()
        assert "Singular values:" in text
        assert "Backend: cpu_givens" in text

    def test_repr(self, separated_bidiagonal):
        text = repr(bidiagonal_qr(separated_bidiagonal, iteration_count=2))
        assert text.startswith("SVDSolution(shape=(4, 4), iterations=2")


# ═══════════════════════════════════════════════════════════════════════
# Contract violations
# ═══════════════════════════════════════════════════════════════════════


class TestErrors:

    @pytest.mark.parametrize("bad", [np.nan, np.inf])
    def test_non_finite_entry(self, bad):
        B = np.diag([bad, 2.0, 1.0]) + np.diag([0.5, 0.5], 1)
        with pytest.raises(ValidationError, match=r"non-finite values \(\d NaN, \d Inf\)"):
            bidiagonal_qr(B, iteration_count=3)

    def test_non_finite_matrix_instance(self, separated_bidiagonal):
        B = separated_bidiagonal.copy()
        B[0, 1] = np.nan
        with pytest.raises(ValidationError, match="non-finite"):
            bidiagonal_qr(B)

    @pytest.mark.parametrize("shape", [(1, 3), (3, 1), (1, 1)])
    def test_too_small(self, shape):
        with pytest.raises(DimensionError, match="at least 2x2"):
            bidiagonal_qr(Matrix(*shape))

    def test_empty(self):
        with pytest.raises(DimensionError):
            bidiagonal_qr(Matrix())

    def test_subdiagonal_entry(self):
        with pytest.raises(ValidationError, match="upper bidiagonal"):
            bidiagonal_qr(Matrix.from_rows([[1, 0], [1, 1]]))

    def test_full_upper_triangle(self):
        with pytest.raises(ValidationError, match="upper bidiagonal"):
            bidiagonal_qr(Matrix.from_rows([[1, 1, 1], [0, 1, 1], [0, 0, 1]]))

    def test_negative_iteration_count(self, separated_bidiagonal):
        with pytest.raises(ValidationError):
            bidiagonal_qr(separated_bidiagonal, iteration_count=-5)

    def test_bad_policy(self, separated_bidiagonal):
        with pytest.raises(ValidationError, match="on_nonconvergence"):
            bidiagonal_qr(separated_bidiagonal, tol=1e-8, on_nonconvergence='loud')
