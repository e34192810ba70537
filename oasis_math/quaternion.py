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
Quaternions in scalar-first form

Conventions:
    * A quaternion is stored as ``(s, v)`` with ``v`` a 3-vector, representing
      ``s + v.x i + v.y j + v.z k``
    * Products are Hamilton products, so ``(q1 * q2).rotate(v)`` applies
      ``q2`` first
    * ``conjugate(q) = (s, -v)`` and ``inverse(q) = conjugate(q) / |q|^2``, so
      the inverse is exact for quaternions of any length
    * ``rotate`` and ``to_matrix`` normalize their receiver first
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_math.config.math_params import QuaternionParams
from oasis_math.errors import DimensionError
from oasis_math.errors import DomainError
from oasis_math.matrix import Matrix
from oasis_math.scalar_math import DEFAULT_EPSILON
from oasis_math.scalar_math import approx_equals
from oasis_math.scalar_math import format_number
from oasis_math.scalar_math import mix
from oasis_math.vector import Vector


@dataclass(frozen=True)
class Quaternion:
    """Quaternion with scalar part ``s`` and vector part ``v``."""

    s: float
    v: Vector

    def __post_init__(self) -> None:
        """Validate the vector part and coerce the scalar part."""
        if self.v.dimension != 3:
            raise DimensionError("Quaternion vector part must be 3-dimensional")
        object.__setattr__(self, "s", float(self.s))

    @staticmethod
    def identity() -> Quaternion:
        """Return the identity rotation ``(1, [0 0 0])``."""
        return Quaternion(1.0, Vector.zero(3))

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> Quaternion:
        """Create a quaternion from components."""
        return Quaternion(w, Vector.of(x, y, z))

    @staticmethod
    def pure(vec: Vector) -> Quaternion:
        """Return the quaternion ``(0, vec)``."""
        return Quaternion(0.0, vec)

    @staticmethod
    def from_numpy(wxyz: NDArray[np.float64]) -> Quaternion:
        """Create a quaternion from a wxyz array."""
        arr: NDArray[np.float64] = np.asarray(wxyz, dtype=float)
        if arr.shape != (4,):
            raise DimensionError("wxyz must be shape (4,)")
        return Quaternion.from_wxyz(
            float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3])
        )

    @staticmethod
    def from_axis_angle(axis: Vector, angle: float) -> Quaternion:
        """Create a rotation of ``angle`` radians about ``axis``.

        A zero angle or a zero-length axis gives the identity.
        """
        if axis.dimension != 3:
            raise DimensionError("axis must be 3-dimensional")
        if angle == 0.0 or axis.length() == 0.0:
            return Quaternion.identity()

        unit_axis: Vector = axis.norm()
        half_angle: float = 0.5 * angle
        return Quaternion(math.cos(half_angle), unit_axis.mul(math.sin(half_angle)))

    def len_sqr(self) -> float:
        return self.s * self.s + self.v.len_sqr()

    def length(self) -> float:
        return math.hypot(self.s, *self.v.components)

    def is_norm(self, params: QuaternionParams | None = None) -> bool:
        """Return True when the quaternion has unit length within tolerance."""
        quat_params: QuaternionParams = (
            params if params is not None else QuaternionParams()
        )
        return approx_equals(self.len_sqr(), 1.0, quat_params.norm_tolerance)

    def is_real(self) -> bool:
        """Return True when the vector part is zero."""
        return self.v == Vector.zero(3)

    def is_pure(self) -> bool:
        """Return True when the scalar part is zero."""
        return self.s == 0.0

    def normalized(self) -> Quaternion:
        """Return the unit quaternion in the same direction.

        Raises:
            DomainError: If the quaternion has zero length
        """
        length: float = self.length()
        if length == 0.0:
            raise DomainError("Cannot normalize zero quaternion")
        return Quaternion(self.s / length, self.v.div(length))

    def conjugate(self) -> Quaternion:
        return Quaternion(self.s, self.v.inv())

    def inverse(self) -> Quaternion:
        """Return the multiplicative inverse.

        Raises:
            DomainError: If the quaternion has zero length
        """
        length: float = self.length()
        if length == 0.0:
            raise DomainError("Cannot invert zero quaternion")
        return Quaternion(
            self.s / length / length, self.v.inv().div(length).div(length)
        )

    def mul(self, other: Quaternion) -> Quaternion:
        """Return the Hamilton product ``self * other``.

        ``s = s1 s2 - v1.v2`` and ``v = s1 v2 + s2 v1 + v1 x v2``.
        """
        s: float = self.s * other.s - self.v.dot(other.v)
        v: Vector = (
            other.v.mul(self.s).add(self.v.mul(other.s)).add(self.v.cross(other.v))
        )
        return Quaternion(s, v)

    def rotate(self, vec: Vector) -> Vector:
        """Rotate a 3-vector by this rotation."""
        unit: Quaternion = self.normalized()
        return unit.mul(Quaternion.pure(vec)).mul(unit.conjugate()).v

    def to_matrix(self) -> Matrix:
        """Return the equivalent 3x3 rotation matrix."""
        unit: Quaternion = self.normalized()
        w: float = unit.s
        x: float = unit.v.x
        y: float = unit.v.y
        z: float = unit.v.z
        return Matrix.from_rows(
            [
                [
                    1.0 - 2.0 * (y * y + z * z),
                    2.0 * (x * y - z * w),
                    2.0 * (x * z + y * w),
                ],
                [
                    2.0 * (x * y + z * w),
                    1.0 - 2.0 * (x * x + z * z),
                    2.0 * (y * z - x * w),
                ],
                [
                    2.0 * (x * z - y * w),
                    2.0 * (y * z + x * w),
                    1.0 - 2.0 * (x * x + y * y),
                ],
            ]
        )

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return the components as a wxyz array."""
        return np.array([self.s, self.v.x, self.v.y, self.v.z], dtype=float)

    def approx_equals(
        self, other: Quaternion, epsilon: float = DEFAULT_EPSILON
    ) -> bool:
        """Return True when both parts are approximately equal."""
        return approx_equals(self.s, other.s, epsilon) and self.v.approx_equals(
            other.v, epsilon
        )

    def __mul__(self, other: Quaternion) -> Quaternion:
        return self.mul(other)

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.s, self.v.inv())

    def __str__(self) -> str:
        return f"[{format_number(self.s)} {self.v}]"


def _as_vec4(q: Quaternion) -> Vector:
    return Vector.of(q.s, q.v.x, q.v.y, q.v.z)


def _from_vec4(vec: Vector) -> Quaternion:
    return Quaternion.from_wxyz(vec.x, vec.y, vec.z, vec.w)


def lerp(q1: Quaternion, q2: Quaternion, t: float) -> Quaternion:
    """Interpolate the normalized inputs componentwise and renormalize."""
    a: Quaternion = q1.normalized()
    b: Quaternion = q2.normalized()
    return Quaternion(mix(a.s, b.s, t), a.v.mix(b.v, t)).normalized()


def slerp(
    q1: Quaternion,
    q2: Quaternion,
    t: float,
    params: QuaternionParams | None = None,
) -> Quaternion:
    """Spherical linear interpolation along the shorter arc.

    Both inputs are normalized first. When they are nearly parallel the
    trigonometric weights lose precision and normalized lerp is used instead.

    Args:
        q1: Start rotation, returned at t=0
        q2: End rotation, returned at t=1
        t: Interpolation position in [0, 1]
        params: Fallback threshold, defaults to ``QuaternionParams()``

    Returns:
        Unit quaternion between ``q1`` and ``q2``
    """
    quat_params: QuaternionParams = params if params is not None else QuaternionParams()
    v1: Vector = _as_vec4(q1.normalized())
    v2: Vector = _as_vec4(q2.normalized())

    dot: float = v1.dot(v2)
    if dot < 0.0:
        # q and -q are the same rotation, flip one to take the shorter arc
        v1 = v1.inv()
        dot = -dot

    if dot > quat_params.lerp_threshold:
        return lerp(_from_vec4(v1), _from_vec4(v2), t)

    theta_0: float = math.acos(min(dot, 1.0))
    theta: float = theta_0 * t
    sin_theta_0: float = math.sin(theta_0)
    if sin_theta_0 == 0.0:
        return lerp(_from_vec4(v1), _from_vec4(v2), t)

    s1: float = math.sin(theta_0 - theta) / sin_theta_0
    s2: float = math.sin(theta) / sin_theta_0
    return _from_vec4(v1.mul(s1).add(v2.mul(s2)))
