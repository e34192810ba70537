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
Flat-buffer kernels behind the vector and matrix types

Vectors are plain lists of floats. Matrices are column-major lists of floats:
element (r, c) of a matrix with ``rows`` rows is stored at
``data[c * rows + r]``. This is the layout handed to GPU-facing code.

Every kernel takes an optional ``out`` buffer. When given, it must already
have the length of the result; it is overwritten and returned. Passing one of
the inputs as ``out`` is allowed and gives the same result as the allocating
form.
"""

from __future__ import annotations

from collections.abc import Sequence

from oasis_math.errors import DimensionError
from oasis_math.scalar_math import clamp
from oasis_math.scalar_math import mix
from oasis_math.scalar_math import smooth_step
from oasis_math.scalar_math import step


Buffer = list[float]
Operand = Sequence[float] | float


def _validate_vector_size(x: Sequence[float], size: int, name: str) -> None:
    if len(x) != size:
        raise DimensionError(f"{name} must have length {size}, got {len(x)}")


def _validate_matrix_size(a: Sequence[float], rows: int, cols: int, name: str) -> None:
    if rows <= 0 or cols <= 0:
        raise DimensionError(f"{name} rows and cols must be positive")
    expected: int = rows * cols
    if len(a) != expected:
        raise DimensionError(f"{name} must have length {expected} for {rows}x{cols}")


def _prepare_out(out: Buffer | None, size: int) -> Buffer:
    if out is None:
        return [0.0] * size
    _validate_vector_size(out, size, "out")
    return out


def _combine(a: Sequence[float], b: Operand, name: str) -> Sequence[float]:
    """Broadcast a scalar operand or check the length of a sequence."""
    if isinstance(b, (int, float)):
        return [float(b)] * len(a)
    _validate_vector_size(b, len(a), name)
    return b


def vec_neg(a: Sequence[float], out: Buffer | None = None) -> Buffer:
    """Negate every component."""
    res: Buffer = _prepare_out(out, len(a))
    for i, ai in enumerate(a):
        res[i] = -ai
    return res


def vec_add(a: Sequence[float], b: Operand, out: Buffer | None = None) -> Buffer:
    """Add a vector or scalar componentwise.

    Args:
        a: Left operand
        b: Vector with the length of ``a``, or a scalar
        out: Optional result buffer

    Returns:
        Componentwise sum

    Raises:
        DimensionError: If lengths do not match
    """
    rhs: Sequence[float] = _combine(a, b, "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = a[i] + rhs[i]
    return res


def vec_sub(a: Sequence[float], b: Operand, out: Buffer | None = None) -> Buffer:
    """Subtract a vector or scalar componentwise."""
    rhs: Sequence[float] = _combine(a, b, "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = a[i] - rhs[i]
    return res


def vec_mul(a: Sequence[float], b: Operand, out: Buffer | None = None) -> Buffer:
    """Multiply by a vector or scalar componentwise."""
    rhs: Sequence[float] = _combine(a, b, "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = a[i] * rhs[i]
    return res


def vec_div(a: Sequence[float], b: Operand, out: Buffer | None = None) -> Buffer:
    """Divide by a vector or scalar componentwise.

    Division by a zero component follows Python float semantics and raises
    ``ZeroDivisionError``.
    """
    rhs: Sequence[float] = _combine(a, b, "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = a[i] / rhs[i]
    return res


def vec_dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the dot product of two vectors of equal length."""
    _validate_vector_size(b, len(a), "b")
    total: float = 0.0
    for i in range(len(a)):
        total += a[i] * b[i]
    return total


def vec_len_sqr(a: Sequence[float]) -> float:
    """Return the squared Euclidean length."""
    total: float = 0.0
    for ai in a:
        total += ai * ai
    return total


def vec_cross(
    a: Sequence[float], b: Sequence[float], out: Buffer | None = None
) -> Buffer:
    """Return the cross product of two 3-vectors.

    Raises:
        DimensionError: If either operand is not 3-dimensional
    """
    _validate_vector_size(a, 3, "a")
    _validate_vector_size(b, 3, "b")
    res: Buffer = _prepare_out(out, 3)

    # Read everything before writing so ``out`` may alias an input
    ax: float = a[0]
    ay: float = a[1]
    az: float = a[2]
    bx: float = b[0]
    by: float = b[1]
    bz: float = b[2]

    res[0] = ay * bz - az * by
    res[1] = az * bx - ax * bz
    res[2] = ax * by - ay * bx
    return res


def vec_min(
    a: Sequence[float], b: Sequence[float], out: Buffer | None = None
) -> Buffer:
    """Componentwise minimum."""
    _validate_vector_size(b, len(a), "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = min(a[i], b[i])
    return res


def vec_max(
    a: Sequence[float], b: Sequence[float], out: Buffer | None = None
) -> Buffer:
    """Componentwise maximum."""
    _validate_vector_size(b, len(a), "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = max(a[i], b[i])
    return res


def vec_clamp(
    a: Sequence[float], lower: float, upper: float, out: Buffer | None = None
) -> Buffer:
    """Clamp every component to [lower, upper]."""
    res: Buffer = _prepare_out(out, len(a))
    for i, ai in enumerate(a):
        res[i] = clamp(ai, lower, upper)
    return res


def vec_mix(
    a: Sequence[float], b: Sequence[float], t: float, out: Buffer | None = None
) -> Buffer:
    """Interpolate componentwise from ``a`` (t=0) to ``b`` (t=1)."""
    _validate_vector_size(b, len(a), "b")
    res: Buffer = _prepare_out(out, len(a))
    for i in range(len(a)):
        res[i] = mix(a[i], b[i], t)
    return res


def vec_step(a: Sequence[float], edge: float, out: Buffer | None = None) -> Buffer:
    """Componentwise ``step`` against a common edge."""
    res: Buffer = _prepare_out(out, len(a))
    for i, ai in enumerate(a):
        res[i] = step(ai, edge)
    return res


def vec_smooth_step(
    a: Sequence[float],
    edge_lower: float,
    edge_upper: float,
    out: Buffer | None = None,
) -> Buffer:
    """Componentwise ``smooth_step`` between two common edges."""
    res: Buffer = _prepare_out(out, len(a))
    for i, ai in enumerate(a):
        res[i] = smooth_step(ai, edge_lower, edge_upper)
    return res


def mat_index(rows: int, r: int, c: int) -> int:
    """Return the flat column-major index of element (r, c)."""
    return c * rows + r


def mat_identity(rows: int, cols: int, out: Buffer | None = None) -> Buffer:
    """Return a matrix with ones on the main diagonal and zeros elsewhere."""
    if rows <= 0 or cols <= 0:
        raise DimensionError("rows and cols must be positive")
    res: Buffer = _prepare_out(out, rows * cols)
    for i in range(rows * cols):
        res[i] = 0.0
    for i in range(min(rows, cols)):
        res[mat_index(rows, i, i)] = 1.0
    return res


def mat_add(a: Sequence[float], b: Sequence[float], out: Buffer | None = None) -> Buffer:
    """Add two matrices of the same size.

    Raises:
        DimensionError: If sizes do not match
    """
    if len(a) != len(b):
        raise DimensionError("matrices must have the same length")
    return vec_add(a, b, out)


def mat_sub(a: Sequence[float], b: Sequence[float], out: Buffer | None = None) -> Buffer:
    """Subtract two matrices of the same size."""
    if len(a) != len(b):
        raise DimensionError("matrices must have the same length")
    return vec_sub(a, b, out)


def mat_hadamard(
    a: Sequence[float], b: Sequence[float], out: Buffer | None = None
) -> Buffer:
    """Multiply two matrices of the same size elementwise."""
    if len(a) != len(b):
        raise DimensionError("matrices must have the same length")
    return vec_mul(a, b, out)


def mat_scale(a: Sequence[float], s: float, out: Buffer | None = None) -> Buffer:
    """Scale a matrix by a scalar."""
    return vec_mul(a, s, out)


def mat_mul(
    a: Sequence[float],
    a_rows: int,
    a_cols: int,
    b: Sequence[float],
    b_rows: int,
    b_cols: int,
    out: Buffer | None = None,
) -> Buffer:
    """Multiply two column-major matrices.

    Args:
        a: Left matrix
        a_rows: Number of rows in ``a``
        a_cols: Number of columns in ``a``
        b: Right matrix
        b_rows: Number of rows in ``b``
        b_cols: Number of columns in ``b``
        out: Optional result buffer with length ``a_rows * b_cols``

    Returns:
        Matrix product with shape (a_rows, b_cols)

    Raises:
        DimensionError: If sizes are invalid or inner dimensions mismatch
    """
    _validate_matrix_size(a, a_rows, a_cols, "a")
    _validate_matrix_size(b, b_rows, b_cols, "b")
    if a_cols != b_rows:
        raise DimensionError(
            f"Cannot multiply {a_rows}x{a_cols} matrix with {b_rows}x{b_cols} matrix"
        )
    res: Buffer = _prepare_out(out, a_rows * b_cols)

    # Accumulate into a scratch buffer so ``out`` may alias an input
    product: Buffer = [0.0] * (a_rows * b_cols)
    for r in range(a_rows):
        for c in range(b_cols):
            total: float = 0.0
            for k in range(a_cols):
                total += a[k * a_rows + r] * b[c * b_rows + k]
            product[c * a_rows + r] = total
    res[:] = product
    return res


def mat_transpose(
    a: Sequence[float], rows: int, cols: int, out: Buffer | None = None
) -> Buffer:
    """Return the transpose of a column-major matrix.

    Returns:
        Transposed matrix with shape (cols, rows)
    """
    _validate_matrix_size(a, rows, cols, "a")
    res: Buffer = _prepare_out(out, rows * cols)

    transposed: Buffer = [0.0] * (rows * cols)
    for r in range(rows):
        for c in range(cols):
            transposed[mat_index(cols, c, r)] = a[mat_index(rows, r, c)]
    res[:] = transposed
    return res
