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
Linear algebra kernel for 3D graphics

Vectors, small column-major matrices, LU-based inversion, transformation
factories and quaternion rotations. Value types are immutable; the flat-buffer
routines in ``kernels`` accept optional output buffers for in-place use.
"""

from __future__ import annotations

from oasis_math import transforms
from oasis_math.config.math_params import LuParams
from oasis_math.config.math_params import MathParams
from oasis_math.config.math_params import QuaternionParams
from oasis_math.errors import DimensionError
from oasis_math.errors import DomainError
from oasis_math.errors import MathError
from oasis_math.errors import SingularMatrixError
from oasis_math.lu_decomposition import LuDecomposition
from oasis_math.matrix import Matrix
from oasis_math.quaternion import Quaternion
from oasis_math.quaternion import lerp
from oasis_math.quaternion import slerp
from oasis_math.vector import Vector


__all__ = [
    "DimensionError",
    "DomainError",
    "LuDecomposition",
    "LuParams",
    "MathError",
    "MathParams",
    "Matrix",
    "Quaternion",
    "QuaternionParams",
    "SingularMatrixError",
    "Vector",
    "lerp",
    "slerp",
    "transforms",
]
