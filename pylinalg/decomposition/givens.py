"""
Givens rotations.

A rotation built from a pair (a, b) is the unitary 2x2 matrix

    G = [[c, -conj(s)],
         [s,  conj(c)]],   c = a / r,  s = b / r,  r = sqrt(|a|² + |b|²)

so that Gᴴ [a, b]ᵀ = [r, 0]ᵀ. For real input this is the usual plane
rotation with c² + s² = 1.

rotate_rows applies Gᴴ from the left to two rows; rotate_columns applies
G from the right to two columns. The left/right convenience functions
build the rotation that zeroes the entry paired with b.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import check_index
from pylinalg.matrix.dense import Matrix


@dataclass(frozen=True)
class GivensRotation:
    """Coefficients of a Givens rotation and the norm r of the rotated pair."""
    c: Any
    s: Any
    r: float

    @property
    def is_complex(self) -> bool:
        return bool(np.iscomplexobj(self.c) or np.iscomplexobj(self.s))


def givens_rotation(a: Any, b: Any) -> GivensRotation:
    """
    Rotation mapping (a, b) to (r, 0).

    The zero pair yields the identity rotation.
    """
    r = float(np.hypot(np.abs(a), np.abs(b)))
    if r == 0.0:
        return GivensRotation(c=1.0, s=0.0, r=0.0)
    return GivensRotation(c=a / r, s=b / r, r=r)


def _check_pair(i: int, j: int, bound: int, axis: str, shape: tuple[int, int]) -> None:
    if i == j:
        raise ValidationError(f"Givens rotation needs two distinct {axis}s, got {i} twice")
    check_index(i, bound, axis, shape)
    check_index(j, bound, axis, shape)


def _check_dtype(matrix: Matrix, rotation: GivensRotation) -> None:
    if rotation.is_complex and not matrix.is_complex:
        raise ValidationError(
            f"complex rotation cannot be applied to matrix of dtype {matrix.dtype}"
        )


def rotate_rows(matrix: Matrix, i: int, j: int, rotation: GivensRotation) -> None:
    """Replace rows i, j of matrix by Gᴴ applied to them (in place)."""
    _check_pair(i, j, matrix.rows, "row", matrix.shape)
    _check_dtype(matrix, rotation)

    c, s = rotation.c, rotation.s
    view = matrix.view()
    row_i = view[i].copy()
    row_j = view[j].copy()
    view[i] = np.conj(c) * row_i + np.conj(s) * row_j
    view[j] = -s * row_i + c * row_j


def rotate_columns(matrix: Matrix, i: int, j: int, rotation: GivensRotation) -> None:
    """Replace columns i, j of matrix by themselves times G (in place)."""
    _check_pair(i, j, matrix.columns, "column", matrix.shape)
    _check_dtype(matrix, rotation)

    c, s = rotation.c, rotation.s
    view = matrix.view()
    col_i = view[:, i].copy()
    col_j = view[:, j].copy()
    view[:, i] = c * col_i + s * col_j
    view[:, j] = -np.conj(s) * col_i + np.conj(c) * col_j


def givens_left_rotation(matrix: Matrix, i: int, j: int, a: Any, b: Any) -> GivensRotation:
    """
    Rotate rows i and j so that a column holding (a, b) in those rows
    becomes (r, 0).

    Returns:
        The rotation that was applied
    """
    rotation = givens_rotation(a, b)
    rotate_rows(matrix, i, j, rotation)
    return rotation


def givens_right_rotation(matrix: Matrix, i: int, j: int, a: Any, b: Any) -> GivensRotation:
    """
    Rotate columns i and j so that a row holding (a, b) in those columns
    becomes (r, 0).

    Returns:
        The rotation that was applied (built from conj(a), conj(b))
    """
    rotation = givens_rotation(np.conj(a), np.conj(b))
    rotate_columns(matrix, i, j, rotation)
    return rotation
