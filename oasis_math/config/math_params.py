################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for the math kernel."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any


# Replace zero pivots with a small constant instead of failing
LU_POLICY_SUBSTITUTE: str = "substitute"
# Mark zero pivots singular and refuse to invert
LU_POLICY_RAISE: str = "raise"

# Policy applied to singular pivots during LU decomposition
LU_SINGULAR_POLICY: str = LU_POLICY_SUBSTITUTE
# Value written over a singular pivot under the substitute policy
LU_PIVOT_SUBSTITUTE: float = 1.0e-6
# Pivot magnitude at or below which a pivot counts as singular
LU_PIVOT_TOLERANCE: float = 0.0

# Dot product above which slerp falls back to normalized lerp
QUAT_LERP_THRESHOLD: float = 0.99
# Tolerance on the squared length when checking for unit quaternions
QUAT_NORM_TOLERANCE: float = 0.001


class MathParamsError(Exception):
    """Raised when math parameter validation fails."""


def _require_positive(value: float, name: str) -> None:
    """Validate that a numeric value is strictly positive."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise MathParamsError(f"{name} must be a number")
    if value <= 0.0:
        raise MathParamsError(f"{name} must be positive")


def _require_non_negative(value: float, name: str) -> None:
    """Validate that a numeric value is non-negative."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise MathParamsError(f"{name} must be a number")
    if value < 0.0:
        raise MathParamsError(f"{name} must be non-negative")


@dataclass(frozen=True)
class LuParams:
    """Pivot handling for the LU decomposition engine."""

    # Policy identifier, substitute or raise
    singular_policy: str = LU_SINGULAR_POLICY
    # Replacement value for singular pivots
    pivot_substitute: float = LU_PIVOT_SUBSTITUTE
    # Singular pivot threshold on absolute value
    pivot_tolerance: float = LU_PIVOT_TOLERANCE

    @property
    def strict(self) -> bool:
        """True when singular pivots must surface as errors."""
        return self.singular_policy == LU_POLICY_RAISE


@dataclass(frozen=True)
class QuaternionParams:
    """Interpolation and normalization tolerances for quaternions."""

    # Slerp falls back to lerp above this dot product
    lerp_threshold: float = QUAT_LERP_THRESHOLD
    # Allowed deviation of the squared length from 1
    norm_tolerance: float = QUAT_NORM_TOLERANCE


@dataclass(frozen=True)
class MathParams:
    """Complete configuration tree for the math kernel."""

    lu: LuParams
    quaternion: QuaternionParams

    @classmethod
    def defaults(cls) -> MathParams:
        """Return the default parameter tree."""
        return cls(lu=LuParams(), quaternion=QuaternionParams())

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        if self.lu.singular_policy not in {LU_POLICY_SUBSTITUTE, LU_POLICY_RAISE}:
            raise MathParamsError(
                f"lu.singular_policy must be {LU_POLICY_SUBSTITUTE} "
                f"or {LU_POLICY_RAISE}"
            )
        _require_positive(self.lu.pivot_substitute, "lu.pivot_substitute")
        _require_non_negative(self.lu.pivot_tolerance, "lu.pivot_tolerance")
        if (
            self.lu.singular_policy == LU_POLICY_SUBSTITUTE
            and self.lu.pivot_substitute <= self.lu.pivot_tolerance
        ):
            raise MathParamsError(
                "lu.pivot_substitute must exceed lu.pivot_tolerance"
            )

        _require_positive(self.quaternion.lerp_threshold, "quaternion.lerp_threshold")
        if self.quaternion.lerp_threshold > 1.0:
            raise MathParamsError("quaternion.lerp_threshold must not exceed 1")
        _require_positive(self.quaternion.norm_tolerance, "quaternion.norm_tolerance")

    def replace(self, **namespace_overrides: Any) -> MathParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for serialization."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
