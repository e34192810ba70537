################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Small dense matrices stored column-major

Element (r, c) lives at ``values[c * rows + r]``, the layout expected by
OpenGL-style consumers. Matrices have between 1 and 4 rows and columns; the
single-column and single-row shapes exist so vectors can take part in
products.

Operators follow numpy: ``*`` is scalar or elementwise multiplication and
``@`` is the matrix product (or ``transform`` when the right operand is a
``Vector``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_math import kernels
from oasis_math import lu_decomposition
from oasis_math.config.math_params import LuParams
from oasis_math.errors import DimensionError
from oasis_math.scalar_math import DEFAULT_EPSILON
from oasis_math.scalar_math import approx_equals
from oasis_math.scalar_math import format_number
from oasis_math.vector import Vector


# Largest supported row or column count
MAX_SIZE: int = 4


@dataclass(frozen=True)
class Matrix:
    """Immutable rows x cols matrix with column-major storage."""

    values: tuple[float, ...]
    rows: int
    cols: int

    def __post_init__(self) -> None:
        """Validate the shape and coerce values to float."""
        if not 1 <= self.rows <= MAX_SIZE or not 1 <= self.cols <= MAX_SIZE:
            raise DimensionError(
                f"Matrix shape must be within 1..{MAX_SIZE}, "
                f"got {self.rows}x{self.cols}"
            )
        values: tuple[float, ...] = tuple(float(v) for v in self.values)
        if len(values) != self.rows * self.cols:
            raise DimensionError("Array length has to be equal to rows * columns")
        object.__setattr__(self, "values", values)

    @staticmethod
    def zero(rows: int, cols: int) -> Matrix:
        """Return a matrix of zeros."""
        return Matrix((0.0,) * (rows * cols), rows, cols)

    @staticmethod
    def identity(dim: int) -> Matrix:
        """Return the ``dim x dim`` identity matrix."""
        return Matrix(tuple(kernels.mat_identity(dim, dim)), dim, dim)

    @staticmethod
    def from_array(values: Sequence[float], rows: int, cols: int) -> Matrix:
        """Create a matrix from a column-major buffer."""
        return Matrix(tuple(values), rows, cols)

    @staticmethod
    def from_rows(rows: Sequence[Sequence[float]]) -> Matrix:
        """Create a matrix from a row-major nested sequence."""
        if not rows:
            raise DimensionError("rows must not be empty")
        n_rows: int = len(rows)
        n_cols: int = len(rows[0])
        if any(len(row) != n_cols for row in rows):
            raise DimensionError("rows must all have the same length")
        values: list[float] = [
            float(rows[r][c]) for c in range(n_cols) for r in range(n_rows)
        ]
        return Matrix(tuple(values), n_rows, n_cols)

    @staticmethod
    def from_numpy(array: NDArray[np.float64]) -> Matrix:
        """Create a matrix from a two-dimensional numpy array."""
        arr: NDArray[np.float64] = np.asarray(array, dtype=float)
        if arr.ndim != 2:
            raise DimensionError("array must be two-dimensional")
        rows: int = int(arr.shape[0])
        cols: int = int(arr.shape[1])
        return Matrix(tuple(float(v) for v in arr.flatten(order="F")), rows, cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def element(self, row: int, col: int) -> float:
        """Return the element at (row, col)."""
        if not 0 <= row < self.rows or not 0 <= col < self.cols:
            raise DimensionError("row or column index out of range")
        return self.values[kernels.mat_index(self.rows, row, col)]

    def row(self, r: int) -> tuple[float, ...]:
        return tuple(self.element(r, c) for c in range(self.cols))

    def column(self, c: int) -> tuple[float, ...]:
        return tuple(self.element(r, c) for r in range(self.rows))

    def add(self, other: Matrix | float) -> Matrix:
        """Add a matrix of the same shape or a scalar elementwise."""
        if isinstance(other, Matrix):
            self._check_same_shape(other)
            return self._with_values(kernels.mat_add(self.values, other.values))
        return self._with_values(kernels.vec_add(self.values, float(other)))

    def sub(self, other: Matrix | float) -> Matrix:
        """Subtract a matrix of the same shape or a scalar elementwise."""
        if isinstance(other, Matrix):
            self._check_same_shape(other)
            return self._with_values(kernels.mat_sub(self.values, other.values))
        return self._with_values(kernels.vec_sub(self.values, float(other)))

    def mul(self, other: Matrix | float) -> Matrix:
        """Multiply by a matrix of the same shape or a scalar elementwise."""
        if isinstance(other, Matrix):
            self._check_same_shape(other)
            return self._with_values(kernels.mat_hadamard(self.values, other.values))
        return self._with_values(kernels.mat_scale(self.values, float(other)))

    def matrix_multiply(self, other: Matrix) -> Matrix:
        """Return the matrix product ``self @ other``.

        Raises:
            DimensionError: If the inner dimensions differ
        """
        product: list[float] = kernels.mat_mul(
            self.values, self.rows, self.cols, other.values, other.rows, other.cols
        )
        return Matrix(tuple(product), self.rows, other.cols)

    def transform(self, vec: Vector) -> Vector:
        """Multiply a vector, treated as a column, by this matrix.

        The vector is padded with homogeneous 1s up to ``cols`` components, or
        truncated when longer. The result has ``rows`` components.
        """
        padded: list[float] = list(vec.components[: self.cols])
        padded.extend([1.0] * (self.cols - len(padded)))
        column: Matrix = Matrix(tuple(padded), self.cols, 1)
        return Vector(self.matrix_multiply(column).values)

    def transpose(self) -> Matrix:
        return Matrix(
            tuple(kernels.mat_transpose(self.values, self.rows, self.cols)),
            self.cols,
            self.rows,
        )

    def decompose(self, params: LuParams | None = None) -> lu_decomposition.LuDecomposition:
        """Return the LU factorization of a square matrix."""
        self._check_square()
        return lu_decomposition.decompose(self.values, self.rows, params)

    def determinant(self, params: LuParams | None = None) -> float:
        """Return the determinant of a square matrix."""
        return self.decompose(params).determinant()

    def invert(self, params: LuParams | None = None) -> Matrix:
        """Return the inverse of a square matrix.

        Under the default substitute policy a singular matrix still yields a
        finite result, which is not a true inverse.
        """
        inverse: list[float] = self.decompose(params).inverse()
        return Matrix(tuple(inverse), self.rows, self.cols)

    def solve(self, b: Vector, params: LuParams | None = None) -> Vector:
        """Solve ``self @ x = b`` for ``x``."""
        return Vector(tuple(self.decompose(params).solve(b.components)))

    def approx_equals(self, other: Matrix, epsilon: float = DEFAULT_EPSILON) -> bool:
        """Return True when shapes match and every element is approximately equal."""
        if self.rows != other.rows or self.cols != other.cols:
            return False
        return all(
            approx_equals(a, b, epsilon) for a, b in zip(self.values, other.values)
        )

    def resized(self, dim: int) -> Matrix:
        """Return a ``dim x dim`` copy of a square matrix.

        The upper-left block is kept. New diagonal entries are 1 and other
        new entries are 0, so a 3x3 rotation becomes a 4x4 rotation with no
        translation.
        """
        self._check_square()
        if not 1 <= dim <= MAX_SIZE:
            raise DimensionError(f"dim must be within 1..{MAX_SIZE}")
        values: list[float] = kernels.mat_identity(dim, dim)
        keep: int = min(dim, self.rows)
        for c in range(keep):
            for r in range(keep):
                values[kernels.mat_index(dim, r, c)] = self.element(r, c)
        return Matrix(tuple(values), dim, dim)

    def to_mat2(self) -> Matrix:
        return self.resized(2)

    def to_mat3(self) -> Matrix:
        return self.resized(3)

    def to_mat4(self) -> Matrix:
        return self.resized(4)

    def to_list(self) -> list[float]:
        """Return the column-major buffer as a new list."""
        return list(self.values)

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a float64 array of shape (rows, cols)."""
        return np.array(self.values, dtype=np.float64).reshape(
            (self.rows, self.cols), order="F"
        )

    def to_float32_array(self) -> NDArray[np.float32]:
        """Return the flat column-major buffer as float32 for GPU upload."""
        return np.array(self.values, dtype=np.float32)

    def __add__(self, other: Matrix | float) -> Matrix:
        return self.add(other)

    def __sub__(self, other: Matrix | float) -> Matrix:
        return self.sub(other)

    def __mul__(self, other: Matrix | float) -> Matrix:
        return self.mul(other)

    def __rmul__(self, other: float) -> Matrix:
        return self.mul(other)

    def __neg__(self) -> Matrix:
        return self.mul(-1.0)

    def __matmul__(self, other: Matrix | Vector) -> Matrix | Vector:
        if isinstance(other, Vector):
            return self.transform(other)
        return self.matrix_multiply(other)

    def __str__(self) -> str:
        lines: list[str] = []
        for r in range(self.rows):
            entries: str = "".join(format_number(v) + " " for v in self.row(r))
            lines.append("[ " + entries + "]\n")
        return "".join(lines)

    def _with_values(self, values: list[float]) -> Matrix:
        return Matrix(tuple(values), self.rows, self.cols)

    def _check_same_shape(self, other: Matrix) -> None:
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionError(
                f"Matrix dimensions must match, got {self.rows}x{self.cols} "
                f"and {other.rows}x{other.cols}"
            )

    def _check_square(self) -> None:
        if not self.is_square:
            raise DimensionError(
                f"Operation requires a square matrix, got {self.rows}x{self.cols}"
            )
