"""
Dense matrix container.

A Matrix owns a flat, row-major numpy buffer and a row count; the column
count is derived from the two. All solvers in PyLinalg take and return
Matrix instances.

Binary operators allocate a new Matrix; compound operators (+=, -=, *=)
and the transforms transpose(), conjugate(), apply_to_each() and
round_zeroes() mutate the receiver in place.
"""

from __future__ import annotations

import numbers
from typing import Any, Callable, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pylinalg.core.backends.precision import zero_threshold
from pylinalg.core.exceptions import DimensionError, ValidationError
from pylinalg.core.validation import (
    check_2d,
    check_array,
    check_index,
    check_matmul_shapes,
    check_positive_size,
    check_same_shape,
    check_scalar_dtype,
)
from pylinalg.matrix._transpose import transpose_in_place


Scalar = numbers.Number


def _check_scalar(value: Any, name: str) -> None:
    if not isinstance(value, numbers.Number):
        raise ValidationError(
            f"{name}: expected a scalar, got {type(value).__name__}"
        )


def _default_dtype(value: Any) -> np.dtype:
    return np.dtype(np.complex128 if np.iscomplexobj(value) else np.float64)


class Matrix:
    """
    Dense two-dimensional array over a real or complex floating point type.

    Construction:
        Matrix()                     empty matrix (0 x 0)
        Matrix(n)                    n x n zeros
        Matrix(r, c, value=0)        r x c filled with value
        Matrix.diagonal(values)      square, values on the diagonal
        Matrix.from_rows(rows)       nested-literal rows
        Matrix.from_array(array)     any 2-D array-like
        Matrix.identity(n, value=1)  value * I

    Elements are accessed as m[i, j]. Indices are bounds-checked and
    negative indices are not wrapped.

    Equality is structural. Matrices have no ordering and are unhashable.
    """

    __slots__ = ('_rows', '_buffer')
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        rows: int | None = None,
        columns: int | None = None,
        value: Scalar = 0,
        *,
        dtype: DTypeLike | None = None,
    ):
        _check_scalar(value, "value")
        dtype = check_scalar_dtype(
            _default_dtype(value) if dtype is None else dtype, "dtype"
        )

        if rows is None:
            if columns is not None:
                raise DimensionError(
                    "Matrix: number of rows is required when columns are given"
                )
            self._rows = 0
            self._buffer: NDArray[np.inexact[Any]] = np.zeros(0, dtype=dtype)
            return

        if columns is None:
            columns = rows
        check_positive_size(rows, columns, "Matrix")
        if np.iscomplexobj(value) and dtype.kind != 'c':
            raise ValidationError(
                f"value: complex fill value {value!r} for real dtype {dtype}"
            )

        self._rows = int(rows)
        self._buffer = np.full(self._rows * int(columns), value, dtype=dtype)

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, buffer: NDArray[np.inexact[Any]], rows: int) -> Matrix:
        """Adopt an existing flat buffer without copying or validation."""
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._buffer = buffer
        return matrix

    @classmethod
    def from_array(cls, array: ArrayLike, *, dtype: DTypeLike | None = None) -> Matrix:
        """
        Build a Matrix from any 2-D array-like (always copies).

        Integer input becomes float64. Unsupported floating types such as
        float16 or longdouble are rejected unless an explicit dtype is given.
        """
        data = check_array(array, "array")
        check_2d(data, "array")
        check_positive_size(data.shape[0], data.shape[1], "array")
        dtype = check_scalar_dtype(data.dtype if dtype is None else dtype, "dtype")
        if np.iscomplexobj(data) and dtype.kind != 'c':
            raise ValidationError(
                f"array: complex data cannot be stored as {dtype}"
            )
        return cls._wrap(np.array(data, dtype=dtype, order='C').reshape(-1), data.shape[0])

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Scalar]],
        *,
        dtype: DTypeLike | None = None,
    ) -> Matrix:
        """
        Build a Matrix from a nested sequence of rows.

        Example:
            Matrix.from_rows([[1, 2, 3], [4, 5, 6]])   # 2 x 3

        Raises:
            DimensionError: If there are no rows, no columns, or rows of
                            different lengths
        """
        rows = [list(row) for row in rows]
        if not rows:
            raise DimensionError("rows: number of matrix rows must be greater than zero")
        columns = len(rows[0])
        if columns == 0:
            raise DimensionError("rows: number of matrix columns must be greater than zero")
        for index, row in enumerate(rows):
            if len(row) != columns:
                raise DimensionError(
                    f"rows: row {index} has {len(row)} elements, expected {columns}"
                )
        return cls.from_array(rows, dtype=dtype)

    @classmethod
    def diagonal(cls, values: ArrayLike, *, dtype: DTypeLike | None = None) -> Matrix:
        """Square matrix with values on the diagonal and zeros elsewhere."""
        diag = check_array(values, "values").reshape(-1)
        size = diag.shape[0]
        if size == 0:
            raise DimensionError(
                "values: list to create a diagonal matrix must not be empty"
            )
        dtype = check_scalar_dtype(diag.dtype if dtype is None else dtype, "dtype")
        if np.iscomplexobj(diag) and dtype.kind != 'c':
            raise ValidationError(f"values: complex data cannot be stored as {dtype}")

        buffer = np.zeros(size * size, dtype=dtype)
        buffer[::size + 1] = diag
        return cls._wrap(buffer, size)

    @classmethod
    def identity(
        cls,
        size: int,
        value: Scalar = 1,
        *,
        dtype: DTypeLike | None = None,
    ) -> Matrix:
        """size x size matrix with value on the diagonal (identity by default)."""
        _check_scalar(value, "value")
        check_positive_size(size, size, "identity")
        if dtype is None:
            dtype = _default_dtype(value)
        return cls.diagonal(np.full(size, value, dtype=dtype), dtype=dtype)

    def copy(self) -> Matrix:
        """Deep copy."""
        return Matrix._wrap(self._buffer.copy(), self._rows)

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        return self.copy()

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return 0 if self._rows == 0 else self._buffer.shape[0] // self._rows

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    @property
    def size(self) -> int:
        return self._buffer.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    @property
    def is_complex(self) -> bool:
        return self._buffer.dtype.kind == 'c'

    def _flat_index(self, key: Any) -> int:
        if not isinstance(key, tuple) or len(key) != 2:
            raise ValidationError(
                f"Matrix indices must be a (row, column) pair, got {key!r}"
            )
        row, column = key
        check_index(row, self.rows, "row", self.shape)
        check_index(column, self.columns, "column", self.shape)
        return row * self.columns + column

    def __getitem__(self, key: tuple[int, int]) -> Any:
        return self._buffer[self._flat_index(key)]

    def __setitem__(self, key: tuple[int, int], value: Scalar) -> None:
        _check_scalar(value, "value")
        if np.iscomplexobj(value) and not self.is_complex:
            raise ValidationError(
                f"value: complex value {value!r} for real matrix of dtype {self.dtype}"
            )
        self._buffer[self._flat_index(key)] = value

    def to_numpy(self) -> NDArray[np.inexact[Any]]:
        """2-D copy of the elements."""
        return self._buffer.reshape(self.shape).copy()

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> NDArray[Any]:
        array = self.to_numpy()
        return array if dtype is None else array.astype(dtype)

    def view(self) -> NDArray[np.inexact[Any]]:
        """Writable 2-D view sharing this matrix's buffer (no copy)."""
        return self._buffer.reshape(self.shape)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_inplace_dtype(self, other_dtype: np.dtype, operation: str) -> None:
        if not np.can_cast(other_dtype, self.dtype, casting='same_kind'):
            raise ValidationError(
                f"{operation}: cannot store {other_dtype} result in matrix of dtype {self.dtype}"
            )

    def add(self, other: Matrix) -> Matrix:
        """Element-wise sum; shapes must be equal."""
        check_same_shape(self, other, "add")
        return Matrix._wrap(self._buffer + other._buffer, self._rows)

    def sub(self, other: Matrix) -> Matrix:
        """Element-wise difference; shapes must be equal."""
        check_same_shape(self, other, "sub")
        return Matrix._wrap(self._buffer - other._buffer, self._rows)

    def iadd(self, other: Matrix) -> Matrix:
        check_same_shape(self, other, "add")
        self._check_inplace_dtype(other.dtype, "add")
        np.add(self._buffer, other._buffer, out=self._buffer, casting='same_kind')
        return self

    def isub(self, other: Matrix) -> Matrix:
        check_same_shape(self, other, "sub")
        self._check_inplace_dtype(other.dtype, "sub")
        np.subtract(self._buffer, other._buffer, out=self._buffer, casting='same_kind')
        return self

    def matmul(self, other: Matrix) -> Matrix:
        """Matrix product; requires self.columns == other.rows."""
        check_matmul_shapes(self, other)
        product = self.view() @ other.view()
        return Matrix._wrap(product.reshape(-1), self._rows)

    def imatmul(self, other: Matrix) -> Matrix:
        """self = self * other; the receiver takes the product's shape."""
        product = self.matmul(other)
        self._check_inplace_dtype(product.dtype, "matmul")
        self._buffer = product._buffer.astype(self.dtype, copy=False)
        self._rows = product._rows
        return self

    def mul_scalar(self, scalar: Scalar) -> Matrix:
        """Every element multiplied by scalar."""
        _check_scalar(scalar, "scalar")
        return Matrix._wrap(self._buffer * scalar, self._rows)

    def imul_scalar(self, scalar: Scalar) -> Matrix:
        _check_scalar(scalar, "scalar")
        if np.iscomplexobj(scalar) and not self.is_complex:
            raise ValidationError(
                f"mul: cannot scale real matrix of dtype {self.dtype} by complex {scalar!r}"
            )
        np.multiply(self._buffer, scalar, out=self._buffer, casting='same_kind')
        return self

    def __add__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.sub(other)

    def __iadd__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.iadd(other)

    def __isub__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.isub(other)

    def __mul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, numbers.Number):
            return self.mul_scalar(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        if isinstance(other, numbers.Number):
            return self.mul_scalar(other)
        return NotImplemented

    def __imul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.imatmul(other)
        if isinstance(other, numbers.Number):
            return self.imul_scalar(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __imatmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.imatmul(other)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._buffer, self._rows)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._rows == other._rows and bool(np.array_equal(self._buffer, other._buffer))

    def _unordered(self, other: Any) -> bool:
        raise TypeError("matrices have no ordering")

    __lt__ = __le__ = __gt__ = __ge__ = _unordered

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def get_row(self, index: int) -> Matrix:
        """Row index as a fresh 1 x columns matrix."""
        check_index(index, self.rows, "row", self.shape)
        start = index * self.columns
        return Matrix._wrap(self._buffer[start:start + self.columns].copy(), 1)

    def get_column(self, index: int) -> Matrix:
        """Column index as a fresh rows x 1 matrix."""
        check_index(index, self.columns, "column", self.shape)
        return Matrix._wrap(self._buffer[index::self.columns].copy(), self.rows)

    def get_diag(self, transpose: bool = False) -> Matrix:
        """Main diagonal as a min(rows, columns) x 1 matrix, or 1 x min if transpose."""
        size = min(self.rows, self.columns)
        diag = self.view().diagonal().copy()
        return Matrix._wrap(diag, 1 if transpose else size)

    def get_submatrix(
        self,
        row_range: tuple[int, int],
        column_range: tuple[int, int],
    ) -> Matrix:
        """
        Copy of the block rows [r0, r1) x columns [c0, c1).

        Raises:
            DimensionError: If a range is empty or reversed
            IndexOutOfRangeError: If a range reaches outside the matrix
        """
        (r0, r1), (c0, c1) = row_range, column_range
        if r1 <= r0 or c1 <= c0:
            raise DimensionError(
                f"submatrix: empty range rows [{r0}, {r1}) x columns [{c0}, {c1})"
            )
        check_index(r0, self.rows, "row", self.shape)
        check_index(r1 - 1, self.rows, "row", self.shape)
        check_index(c0, self.columns, "column", self.shape)
        check_index(c1 - 1, self.columns, "column", self.shape)
        block = self.view()[r0:r1, c0:c1]
        return Matrix._wrap(block.copy().reshape(-1), r1 - r0)

    # ------------------------------------------------------------------
    # In-place transforms
    # ------------------------------------------------------------------

    def transpose(self) -> None:
        """Transpose in place without allocating a second buffer."""
        columns = self.columns
        transpose_in_place(self._buffer, self._rows)
        self._rows = columns

    def conjugate(self) -> None:
        """Conjugate transpose in place (plain transpose for real dtypes)."""
        self.transpose()
        if self.is_complex:
            np.conjugate(self._buffer, out=self._buffer)

    def transposed(self) -> Matrix:
        result = self.copy()
        result.transpose()
        return result

    def conjugated(self) -> Matrix:
        result = self.copy()
        result.conjugate()
        return result

    def apply_to_each(self, func: Callable[[Any], Scalar]) -> None:
        """Replace every element x by func(x)."""
        buffer = self._buffer
        for i in range(buffer.shape[0]):
            buffer[i] = func(buffer[i])

    def apply_to_each_indexed(self, func: Callable[[Any, int, int], Scalar]) -> None:
        """Replace every element x at (row, column) by func(x, row, column)."""
        buffer = self._buffer
        columns = self.columns
        for i in range(buffer.shape[0]):
            row, column = divmod(i, columns)
            buffer[i] = func(buffer[i], row, column)

    def round_zeroes(self, atol: float | None = None) -> None:
        """
        Set entries with magnitude below atol to exactly zero.

        Args:
            atol: Noise threshold; defaults to zero_threshold(dtype)
        """
        if atol is None:
            atol = zero_threshold(self.dtype)
        self._buffer[np.abs(self._buffer) < atol] = 0

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        if self._rows == 0:
            return "[]"
        lines = (
            "[" + " ".join(str(value) for value in row) + "]"
            for row in self.view()
        )
        return "[" + "\n".join(lines) + "]"

    def __repr__(self) -> str:
        if self._rows == 0:
            return f"Matrix(dtype={self.dtype})"
        return f"Matrix.from_rows({self.to_numpy().tolist()!r}, dtype={self.dtype})"
