################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Exception taxonomy for the math kernel."""

from __future__ import annotations


class MathError(ValueError):
    """Base class for invalid numeric input."""


class DimensionError(MathError):
    """Raised when operand shapes are incompatible."""


class DomainError(MathError):
    """Raised when an input lies outside the domain of an operation."""


class SingularMatrixError(DomainError):
    """Raised when a strict LU decomposition meets a singular pivot."""
