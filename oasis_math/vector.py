################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-dimension vectors with 2, 3 or 4 components."""

from __future__ import annotations

import math
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_math import kernels
from oasis_math.errors import DimensionError
from oasis_math.errors import DomainError
from oasis_math.scalar_math import DEFAULT_EPSILON
from oasis_math.scalar_math import approx_equals
from oasis_math.scalar_math import format_number
from oasis_math.scalar_math import fract


# Supported vector dimensions
MIN_DIMENSION: int = 2
MAX_DIMENSION: int = 4

# Positional names of the first four components
X: int = 0
Y: int = 1
Z: int = 2
W: int = 3


def _check_dimension(dim: int) -> None:
    if dim < MIN_DIMENSION or dim > MAX_DIMENSION:
        raise DimensionError(
            f"Vector dimension must be {MIN_DIMENSION}..{MAX_DIMENSION}, got {dim}"
        )


@dataclass(frozen=True)
class Vector:
    """Immutable vector of 2, 3 or 4 float components.

    Equality (``==``) is exact. Use ``approx_equals`` for tolerant comparison.
    """

    components: tuple[float, ...]

    def __post_init__(self) -> None:
        """Validate the dimension and coerce components to float."""
        values: tuple[float, ...] = tuple(float(c) for c in self.components)
        _check_dimension(len(values))
        object.__setattr__(self, "components", values)

    @staticmethod
    def of(*values: float) -> Vector:
        """Create a vector from its components."""
        return Vector(values)

    @staticmethod
    def zero(dim: int) -> Vector:
        """Return the zero vector of the given dimension."""
        return Vector.unif(dim, 0.0)

    @staticmethod
    def unif(dim: int, value: float) -> Vector:
        """Return a vector with every component set to ``value``."""
        _check_dimension(dim)
        return Vector((value,) * dim)

    @staticmethod
    def from_sequence(values: Sequence[float], dim: int) -> Vector:
        """Create a vector from the first ``dim`` values of a sequence."""
        _check_dimension(dim)
        if len(values) < dim:
            raise DimensionError(f"Expected at least {dim} components")
        return Vector(tuple(values[:dim]))

    @staticmethod
    def from_numpy(array: NDArray[np.float64]) -> Vector:
        """Create a vector from a one-dimensional numpy array."""
        arr: NDArray[np.float64] = np.asarray(array, dtype=float)
        if arr.ndim != 1:
            raise DimensionError("array must be one-dimensional")
        return Vector(tuple(float(value) for value in arr))

    @property
    def dimension(self) -> int:
        """Number of components."""
        return len(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[float]:
        return iter(self.components)

    def __getitem__(self, index: int) -> float:
        return self.components[index]

    def component(self, index: int) -> float:
        """Return the component at ``index``."""
        if index < 0 or index >= self.dimension:
            raise DimensionError(
                f"Component {index} out of range for {self.dimension}D vector"
            )
        return self.components[index]

    @property
    def x(self) -> float:
        return self.component(X)

    @property
    def y(self) -> float:
        return self.component(Y)

    @property
    def z(self) -> float:
        return self.component(Z)

    @property
    def w(self) -> float:
        return self.component(W)

    def with_component(self, index: int, value: float) -> Vector:
        """Return a copy with one component replaced."""
        self.component(index)
        values: list[float] = list(self.components)
        values[index] = value
        return Vector(tuple(values))

    def swizzle(self, *coords: int) -> tuple[float, ...]:
        """Gather components in arbitrary order.

        Indices may repeat, so ``v.swizzle(X, X, Y)`` is valid.
        """
        return tuple(self.component(coord) for coord in coords)

    def len_sqr(self) -> float:
        """Return the squared length."""
        return kernels.vec_len_sqr(self.components)

    def length(self) -> float:
        """Return the Euclidean length without overflow or underflow."""
        return math.hypot(*self.components)

    def inv(self) -> Vector:
        """Return the vector with every component negated."""
        return Vector(tuple(kernels.vec_neg(self.components)))

    def add(self, other: Vector | float) -> Vector:
        """Add a vector or scalar componentwise."""
        return Vector(tuple(kernels.vec_add(self.components, _operand(other))))

    def sub(self, other: Vector | float) -> Vector:
        """Subtract a vector or scalar componentwise."""
        return Vector(tuple(kernels.vec_sub(self.components, _operand(other))))

    def mul(self, other: Vector | float) -> Vector:
        """Multiply by a vector or scalar componentwise."""
        return Vector(tuple(kernels.vec_mul(self.components, _operand(other))))

    def div(self, other: Vector | float) -> Vector:
        """Divide by a vector or scalar componentwise."""
        return Vector(tuple(kernels.vec_div(self.components, _operand(other))))

    def norm(self) -> Vector:
        """Return the unit vector in the same direction.

        Raises:
            DomainError: If the vector has zero length
        """
        length: float = self.length()
        if length == 0.0:
            raise DomainError("Cannot normalize zero vector")
        return self.div(length)

    def dot(self, other: Vector) -> float:
        """Return the dot product with a vector of the same dimension."""
        return kernels.vec_dot(self.components, other.components)

    def cross(self, other: Vector) -> Vector:
        """Return the cross product of two 3-vectors."""
        return Vector(tuple(kernels.vec_cross(self.components, other.components)))

    def abs(self) -> Vector:
        return self._map(abs)

    def floor(self) -> Vector:
        return self._map(math.floor)

    def ceil(self) -> Vector:
        return self._map(math.ceil)

    def round(self) -> Vector:
        """Round each component, with halves going towards positive infinity."""
        return self._map(lambda value: math.floor(value + 0.5))

    def fract(self) -> Vector:
        return self._map(fract)

    def min(self, other: Vector) -> Vector:
        return Vector(tuple(kernels.vec_min(self.components, other.components)))

    def max(self, other: Vector) -> Vector:
        return Vector(tuple(kernels.vec_max(self.components, other.components)))

    def clamp(self, lower: float, upper: float) -> Vector:
        return Vector(tuple(kernels.vec_clamp(self.components, lower, upper)))

    def mix(self, other: Vector, t: float) -> Vector:
        """Interpolate towards ``other``; t=0 gives self and t=1 gives other."""
        return Vector(tuple(kernels.vec_mix(self.components, other.components, t)))

    def step(self, edge: float) -> Vector:
        return Vector(tuple(kernels.vec_step(self.components, edge)))

    def smooth_step(self, edge_lower: float, edge_upper: float) -> Vector:
        return Vector(
            tuple(kernels.vec_smooth_step(self.components, edge_lower, edge_upper))
        )

    def approx_equals(self, other: Vector, epsilon: float = DEFAULT_EPSILON) -> bool:
        """Return True when every component is approximately equal."""
        if self.dimension != other.dimension:
            return False
        return all(
            approx_equals(a, b, epsilon)
            for a, b in zip(self.components, other.components)
        )

    def redim(self, dim: int, pad: float) -> Vector:
        """Truncate or pad to ``dim`` components, padding with ``pad``."""
        _check_dimension(dim)
        values: tuple[float, ...] = self.components[:dim]
        return Vector(values + (pad,) * (dim - len(values)))

    def to_vec2(self) -> Vector:
        """Keep the x and y components."""
        return self.redim(2, 0.0)

    def to_vec3(self, z: float = 0.0) -> Vector:
        """Truncate a 4-vector, or pad a 2-vector with ``z`` (default 0)."""
        return self.redim(3, z)

    def to_vec4(self, z: float = 0.0, w: float = 1.0) -> Vector:
        """Extend to a homogeneous 4-vector.

        A 2-vector gains ``z`` (default 0) and ``w``; a 3-vector gains ``w``
        (default 1, a point rather than a direction).
        """
        if self.dimension == 2:
            return Vector(self.components + (z, w))
        return self.redim(4, w)

    def to_list(self) -> list[float]:
        """Return the components as a new list."""
        return list(self.components)

    def to_numpy(self) -> NDArray[np.float64]:
        """Return the components as a float64 array."""
        return np.array(self.components, dtype=np.float64)

    def to_float32_array(self) -> NDArray[np.float32]:
        """Return the components as a float32 array for GPU upload."""
        return np.array(self.components, dtype=np.float32)

    def __add__(self, other: Vector | float) -> Vector:
        return self.add(other)

    def __radd__(self, other: float) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector | float) -> Vector:
        return self.sub(other)

    def __rsub__(self, other: float) -> Vector:
        return self.inv().add(other)

    def __mul__(self, other: Vector | float) -> Vector:
        return self.mul(other)

    def __rmul__(self, other: float) -> Vector:
        return self.mul(other)

    def __truediv__(self, other: Vector | float) -> Vector:
        return self.div(other)

    def __rtruediv__(self, other: float) -> Vector:
        return Vector.unif(self.dimension, other).div(self)

    def __neg__(self) -> Vector:
        return self.inv()

    def __str__(self) -> str:
        return "[" + " ".join(format_number(c) for c in self.components) + "]"

    def _map(self, oper: Callable[[float], float]) -> Vector:
        return Vector(tuple(float(oper(c)) for c in self.components))


def _operand(other: Vector | float) -> Sequence[float] | float:
    if isinstance(other, Vector):
        return other.components
    return float(other)
