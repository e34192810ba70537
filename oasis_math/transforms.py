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
Transformation matrix factories

All matrices are square, column-major and act on column vectors. Rotations
are right-handed: a positive angle about Z turns +X towards +Y. The
projection matrices follow the OpenGL clip-space convention, mapping the view
volume to [-1, 1] on every axis with the camera looking down -Z.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from oasis_math import kernels
from oasis_math.errors import DimensionError
from oasis_math.errors import DomainError
from oasis_math.matrix import Matrix
from oasis_math.vector import Vector


def _check_dim(dim: int) -> None:
    if dim < 2 or dim > 4:
        raise DimensionError(f"Transform dimension must be 2..4, got {dim}")


def _identity_values(dim: int) -> list[float]:
    _check_dim(dim)
    return kernels.mat_identity(dim, dim)


def identity(dim: int) -> Matrix:
    """Return the ``dim x dim`` identity transform."""
    return Matrix(tuple(_identity_values(dim)), dim, dim)


def translation(dim: int, offsets: Sequence[float]) -> Matrix:
    """Return a translation matrix.

    The offsets go into the last column, one per row, stopping before the
    homogeneous row. Extra offsets are ignored.
    """
    values: list[float] = _identity_values(dim)
    last_col: int = dim - 1
    for i in range(min(len(offsets), dim - 1)):
        values[kernels.mat_index(dim, i, last_col)] = float(offsets[i])
    return Matrix(tuple(values), dim, dim)


def scaling(dim: int, factors: Sequence[float]) -> Matrix:
    """Return a scaling matrix with ``factors`` on the main diagonal."""
    values: list[float] = _identity_values(dim)
    for i in range(min(len(factors), dim)):
        values[kernels.mat_index(dim, i, i)] = float(factors[i])
    return Matrix(tuple(values), dim, dim)


def _rotation(dim: int, axis_a: int, axis_b: int, angle: float) -> Matrix:
    """Rotate in the plane of two axes, turning ``axis_a`` towards ``axis_b``."""
    values: list[float] = _identity_values(dim)
    sin_a: float = math.sin(angle)
    cos_a: float = math.cos(angle)
    values[kernels.mat_index(dim, axis_a, axis_a)] = cos_a
    values[kernels.mat_index(dim, axis_b, axis_a)] = sin_a
    values[kernels.mat_index(dim, axis_a, axis_b)] = -sin_a
    values[kernels.mat_index(dim, axis_b, axis_b)] = cos_a
    return Matrix(tuple(values), dim, dim)


def rotation_x(dim: int, angle: float) -> Matrix:
    """Return a rotation about the X axis.

    Raises:
        DimensionError: If ``dim`` is less than 3
    """
    if dim < 3:
        raise DimensionError(f"Rotation around X-axis not defined for {dim}x{dim} matrix")
    return _rotation(dim, 1, 2, angle)


def rotation_y(dim: int, angle: float) -> Matrix:
    """Return a rotation about the Y axis.

    Raises:
        DimensionError: If ``dim`` is less than 3
    """
    if dim < 3:
        raise DimensionError(f"Rotation around Y-axis not defined for {dim}x{dim} matrix")
    return _rotation(dim, 2, 0, angle)


def rotation_z(dim: int, angle: float) -> Matrix:
    """Return a rotation about the Z axis, or a plain 2D rotation for dim 2."""
    return _rotation(dim, 0, 1, angle)


def perspective(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> Matrix:
    """Return a 4x4 perspective frustum matrix.

    Args:
        left: Left edge of the near plane
        right: Right edge of the near plane
        bottom: Bottom edge of the near plane
        top: Top edge of the near plane
        near: Distance to the near plane, must be positive
        far: Distance to the far plane, must exceed ``near``

    Raises:
        DomainError: If ``near <= 0``, ``near >= far`` or the extents are empty
    """
    if near <= 0.0 or near >= far:
        raise DomainError("near needs to be positive and smaller than far")
    width: float = right - left
    height: float = top - bottom
    depth: float = far - near
    if width == 0.0 or height == 0.0:
        raise DomainError("frustum width and height must be non-zero")
    return Matrix.from_rows(
        [
            [2.0 * near / width, 0.0, (right + left) / width, 0.0],
            [0.0, 2.0 * near / height, (top + bottom) / height, 0.0],
            [0.0, 0.0, -(far + near) / depth, -2.0 * far * near / depth],
            [0.0, 0.0, -1.0, 0.0],
        ]
    )


def orthographic(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> Matrix:
    """Return a 4x4 orthographic projection matrix.

    Raises:
        DomainError: If any extent of the view volume is zero
    """
    if right == left or top == bottom or far == near:
        raise DomainError("orthographic view volume must have non-zero extents")
    inv_width: float = 1.0 / (right - left)
    inv_height: float = 1.0 / (top - bottom)
    inv_depth: float = 1.0 / (far - near)
    return Matrix.from_rows(
        [
            [2.0 * inv_width, 0.0, 0.0, -(right + left) * inv_width],
            [0.0, 2.0 * inv_height, 0.0, -(top + bottom) * inv_height],
            [0.0, 0.0, -2.0 * inv_depth, -(far + near) * inv_depth],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def look_at(direction: Vector, up: Vector) -> Matrix:
    """Return a 4x4 view rotation looking along ``direction``.

    The basis is ``z = norm(-direction)``, ``x = norm(up x z)`` and
    ``y = z x x``. Rows 0, 1 and 2 of the result hold x, y and z, so the
    matrix maps world directions into the camera frame.

    Raises:
        DimensionError: If the inputs are not 3-vectors
        DomainError: If ``direction`` is zero or parallel to ``up``
    """
    z_axis: Vector = direction.inv().norm()
    x_axis: Vector = up.cross(z_axis).norm()
    y_axis: Vector = z_axis.cross(x_axis)
    return Matrix.from_rows(
        [
            [x_axis.x, x_axis.y, x_axis.z, 0.0],
            [y_axis.x, y_axis.y, y_axis.z, 0.0],
            [z_axis.x, z_axis.y, z_axis.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
