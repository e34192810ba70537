################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration schema for the math kernel."""

from __future__ import annotations

from oasis_math.config.math_params import LuParams
from oasis_math.config.math_params import MathParams
from oasis_math.config.math_params import MathParamsError
from oasis_math.config.math_params import QuaternionParams


__all__ = [
    "LuParams",
    "MathParams",
    "MathParamsError",
    "QuaternionParams",
]
