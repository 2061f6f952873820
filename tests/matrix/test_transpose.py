"""
Tests for in-place transposition of row-major buffers.
"""

import numpy as np
import pytest

from pylinalg.matrix import Matrix
from pylinalg.matrix._transpose import transpose_in_place


class TestTransposeInPlace:

    @pytest.mark.parametrize("rows, columns", [
        (1, 1), (1, 2), (2, 1), (1, 5), (5, 1),
        (2, 3), (3, 2), (4, 4), (3, 7), (6, 10),
    ])
    def test_matches_numpy_transpose(self, rows, columns):
        buffer = np.arange(rows * columns, dtype=np.float64)
        expected = buffer.reshape(rows, columns).T.reshape(-1).copy()
        transpose_in_place(buffer, rows)
        np.testing.assert_array_equal(buffer, expected)

    def test_empty_buffer(self):
        buffer = np.zeros(0)
        transpose_in_place(buffer, 0)
        assert buffer.shape == (0,)

    def test_complex_buffer_not_conjugated(self):
        buffer = np.array([1 + 1j, 2 - 1j, 3j, 4, 5, 6j])
        transpose_in_place(buffer, 2)
        np.testing.assert_array_equal(buffer, [1 + 1j, 4, 2 - 1j, 5, 3j, 6j])


class TestMatrixTranspose:

    def test_two_by_three(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        m.transpose()
        assert m.shape == (3, 2)
        assert m == Matrix.from_rows([[1, 4], [2, 5], [3, 6]])

    def test_involution(self, rng):
        m = Matrix.from_array(rng.standard_normal((4, 7)))
        original = m.copy()
        m.transpose()
        m.transpose()
        assert m == original

    def test_transposed_leaves_receiver(self):
        m = Matrix.from_rows([[1, 2, 3]])
        t = m.transposed()
        assert m.shape == (1, 3)
        assert t.shape == (3, 1)
        np.testing.assert_array_equal(t.to_numpy(), [[1], [2], [3]])

    def test_real_conjugate_is_transpose(self, rng):
        m = Matrix.from_array(rng.standard_normal((3, 5)))
        assert m.conjugated() == m.transposed()

    def test_complex_conjugate(self):
        m = Matrix.from_rows([[1 + 2j, 3], [4j, 5 - 1j]])
        m.conjugate()
        np.testing.assert_array_equal(
            m.to_numpy(), np.array([[1 - 2j, -4j], [3, 5 + 1j]])
        )

    def test_conjugate_involution(self, hermitian_matrix):
        m = Matrix.from_array(hermitian_matrix.to_numpy() + 1j)
        original = m.copy()
        m.conjugate()
        m.conjugate()
        assert m == original
