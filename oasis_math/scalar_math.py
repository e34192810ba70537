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
Scalar helpers shared by the vector, matrix and quaternion layers

Approximate equality uses a mixed rule. When either operand is zero the
relative error is meaningless, so the absolute difference is compared against
``epsilon**2`` instead. Otherwise the relative difference
``|x - y| / (|x| + |y|)`` is compared against ``epsilon``.
"""

from __future__ import annotations

import math


# Factors of pi used by rotation code
TWO_PI: float = math.pi * 2.0
PI_OVER_2: float = math.pi / 2.0
PI_OVER_4: float = math.pi / 4.0
PI_OVER_8: float = math.pi / 8.0
PI_OVER_16: float = math.pi / 16.0

# Default tolerance for approximate comparisons
DEFAULT_EPSILON: float = 1.0e-6


def approx_equals(x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """Return True when two values are approximately equal.

    Args:
        x: First value
        y: Second value
        epsilon: Relative tolerance, squared for the absolute check near zero

    Returns:
        True if the values are equal within tolerance
    """
    if x == y:
        return True

    diff: float = abs(x - y)
    if x * y == 0.0:
        return diff < epsilon * epsilon
    return diff / (abs(x) + abs(y)) < epsilon


def clamp(x: float, lower: float, upper: float) -> float:
    """Clamp a value to the range [lower, upper]."""
    if x < lower:
        return lower
    if x > upper:
        return upper
    return x


def mix(start: float, end: float, t: float) -> float:
    """Linearly interpolate from ``start`` to ``end`` at position ``t``."""
    return start + t * (end - start)


def step(value: float, edge: float) -> float:
    """Return 0.0 when ``value`` is below ``edge``, else 1.0."""
    return 0.0 if value < edge else 1.0


def smooth_step(value: float, edge_lower: float, edge_upper: float) -> float:
    """Cubic Hermite interpolation between two edges.

    Degenerates to ``step`` when both edges coincide.
    """
    if edge_lower == edge_upper:
        return step(value, edge_lower)
    t: float = clamp((value - edge_lower) / (edge_upper - edge_lower), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def fract(x: float) -> float:
    """Return the fractional part ``x - floor(x)``."""
    return x - math.floor(x)


def format_number(x: float) -> str:
    """Format a component for the bracketed string forms."""
    if math.isfinite(x) and float(x).is_integer():
        return str(int(x))
    return repr(float(x))
