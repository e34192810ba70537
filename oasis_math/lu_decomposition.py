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
LU decomposition with partial pivoting for small square matrices

Inputs and outputs use the column-major flat layout of ``kernels``. The
decomposition itself works on a row-major copy and stores L and U in one
table: entries below the diagonal are the multipliers of L (whose unit
diagonal is implicit), the diagonal and above are U.

Pivot handling follows ``LuParams``:

    * ``substitute``: a pivot whose magnitude is at or below the tolerance is
      replaced with a small constant so that the factorization always
      completes. Inverses of singular matrices are then finite but
      meaningless.
    * ``raise``: singular pivots are left in place and the decomposition is
      marked singular. ``solve`` and ``inverse`` raise
      ``SingularMatrixError``; ``determinant`` still returns the product of
      the pivots.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from oasis_math.config.math_params import LuParams
from oasis_math.errors import DimensionError
from oasis_math.errors import SingularMatrixError


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LuDecomposition:
    """Result of factoring ``P A = L U``.

    Attributes:
        lu: Row-major combined L and U factors
        perm: Source row of ``A`` for each row of ``P A``
        toggle: +1 for an even number of row swaps, -1 for odd
        singular: Whether a singular pivot was found under the strict policy
        params: Pivot policy used to build the factorization
    """

    lu: tuple[tuple[float, ...], ...]
    perm: tuple[int, ...]
    toggle: int
    singular: bool
    params: LuParams

    @property
    def size(self) -> int:
        """Matrix dimension."""
        return len(self.perm)

    def determinant(self) -> float:
        """Return ``toggle * prod(diag(U))``."""
        result: float = float(self.toggle)
        for i in range(self.size):
            result *= self.lu[i][i]
        return result

    def solve(self, b: Sequence[float]) -> list[float]:
        """Solve ``A x = b`` by forward and back substitution.

        Args:
            b: Right-hand side with length ``size``

        Returns:
            Solution vector ``x``

        Raises:
            DimensionError: If ``b`` has the wrong length
            SingularMatrixError: If the factorization is singular
        """
        n: int = self.size
        if len(b) != n:
            raise DimensionError(f"b must have length {n}")
        if self.singular:
            raise SingularMatrixError("matrix is singular")

        lu: tuple[tuple[float, ...], ...] = self.lu

        # Forward substitution with the unit lower triangle, on P b
        y: list[float] = [float(b[self.perm[r]]) for r in range(n)]
        for r in range(1, n):
            total: float = y[r]
            for c in range(r):
                total -= lu[r][c] * y[c]
            y[r] = total

        # Back substitution with the upper triangle
        x: list[float] = y
        for r in range(n - 1, -1, -1):
            total = x[r]
            for c in range(r + 1, n):
                total -= lu[r][c] * x[c]
            x[r] = total / self._pivot(r)
        return x

    def inverse(self) -> list[float]:
        """Return the inverse in column-major order.

        Column ``k`` of the inverse is the solution for the ``k``-th unit
        vector, so the columns concatenate directly into the flat layout.
        """
        n: int = self.size
        result: list[float] = []
        for k in range(n):
            unit: list[float] = [1.0 if r == k else 0.0 for r in range(n)]
            result.extend(self.solve(unit))
        return result

    def _pivot(self, r: int) -> float:
        pivot: float = self.lu[r][r]
        if abs(pivot) <= self.params.pivot_tolerance:
            # Only the last pivot can still be singular here, since earlier
            # ones were substituted during elimination
            return _substitute(pivot, self.params)
        return pivot


def _substitute(pivot: float, params: LuParams) -> float:
    return params.pivot_substitute if pivot >= 0.0 else -params.pivot_substitute


def _to_rows(values: Sequence[float], n: int) -> list[list[float]]:
    return [[float(values[c * n + r]) for c in range(n)] for r in range(n)]


def decompose(
    values: Sequence[float], n: int, params: LuParams | None = None
) -> LuDecomposition:
    """Factor a square column-major matrix with partial pivoting.

    Args:
        values: Column-major matrix with ``n * n`` entries
        n: Matrix dimension
        params: Pivot policy, defaults to ``LuParams()``

    Returns:
        The LU factorization

    Raises:
        DimensionError: If the buffer is not ``n x n``
    """
    if n <= 0 or len(values) != n * n:
        raise DimensionError("Cannot decompose non-square matrix")
    lu_params: LuParams = params if params is not None else LuParams()

    matrix: list[list[float]] = _to_rows(values, n)
    perm: list[int] = list(range(n))
    toggle: int = 1
    singular: bool = False

    for c in range(n - 1):
        # Find the largest magnitude in column c at or below the diagonal
        col_max: float = abs(matrix[c][c])
        p_row: int = c
        for r in range(c + 1, n):
            if abs(matrix[r][c]) > col_max:
                col_max = abs(matrix[r][c])
                p_row = r

        if p_row != c:
            matrix[p_row], matrix[c] = matrix[c], matrix[p_row]
            perm[p_row], perm[c] = perm[c], perm[p_row]
            toggle = -toggle

        pivot: float = matrix[c][c]
        if abs(pivot) <= lu_params.pivot_tolerance:
            if lu_params.strict:
                _LOG.debug("Singular pivot %g in column %d", pivot, c)
                singular = True
                if pivot == 0.0:
                    # The whole column below is zero, nothing to eliminate
                    continue
            else:
                _LOG.debug("Substituting pivot %g in column %d", pivot, c)
                pivot = _substitute(pivot, lu_params)
                matrix[c][c] = pivot

        for r in range(c + 1, n):
            factor: float = matrix[r][c] / pivot
            matrix[r][c] = factor
            for k in range(c + 1, n):
                matrix[r][k] -= factor * matrix[c][k]

    if lu_params.strict and abs(matrix[n - 1][n - 1]) <= lu_params.pivot_tolerance:
        _LOG.debug("Singular pivot %g in column %d", matrix[n - 1][n - 1], n - 1)
        singular = True

    return LuDecomposition(
        lu=tuple(tuple(row) for row in matrix),
        perm=tuple(perm),
        toggle=toggle,
        singular=singular,
        params=lu_params,
    )


def determinant(
    values: Sequence[float], n: int, params: LuParams | None = None
) -> float:
    """Return the determinant of a square column-major matrix."""
    return decompose(values, n, params).determinant()


def invert(values: Sequence[float], n: int, params: LuParams | None = None) -> list[float]:
    """Return the inverse of a square column-major matrix in column-major order."""
    return decompose(values, n, params).inverse()


def solve(
    values: Sequence[float],
    n: int,
    b: Sequence[float],
    params: LuParams | None = None,
) -> list[float]:
    """Solve ``A x = b`` for a square column-major matrix ``A``."""
    return decompose(values, n, params).solve(b)
