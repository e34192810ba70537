################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the flat-buffer kernels."""

from __future__ import annotations

import numpy as np
import pytest

from oasis_math import kernels
from oasis_math.errors import DimensionError


def test_vec_add_scalar_and_vector() -> None:
    assert kernels.vec_add([1.0, 2.0], 1.0) == [2.0, 3.0]
    assert kernels.vec_add([1.0, 2.0], [3.0, 4.0]) == [4.0, 6.0]


def test_vec_add_length_mismatch() -> None:
    with pytest.raises(DimensionError):
        kernels.vec_add([1.0, 2.0], [1.0, 2.0, 3.0])


def test_vec_add_in_place_aliasing() -> None:
    """Checks that passing an input as ``out`` updates it in place."""
    a: list[float] = [1.0, 2.0, 3.0]

    result: list[float] = kernels.vec_add(a, a, out=a)

    assert result is a
    assert a == [2.0, 4.0, 6.0]


def test_out_buffer_length_checked() -> None:
    with pytest.raises(DimensionError):
        kernels.vec_neg([1.0, 2.0, 3.0], out=[0.0, 0.0])


def test_vec_cross_in_place_aliasing() -> None:
    a: list[float] = [1.0, 0.0, 0.0]
    b: list[float] = [0.0, 1.0, 0.0]

    kernels.vec_cross(a, b, out=a)

    assert a == [0.0, 0.0, 1.0]


def test_vec_cross_requires_three_components() -> None:
    with pytest.raises(DimensionError):
        kernels.vec_cross([1.0, 0.0], [0.0, 1.0])


def test_vec_dot_and_len_sqr() -> None:
    assert kernels.vec_dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0
    assert kernels.vec_len_sqr([3.0, 4.0]) == 25.0


def test_mat_identity_rectangular() -> None:
    assert kernels.mat_identity(2, 3) == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]


def test_mat_transpose_2x3() -> None:
    """Checks transpose of a column-major 2x3 matrix."""
    original: list[float] = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]

    transposed: list[float] = kernels.mat_transpose(original, 2, 3)

    assert transposed == [1.0, 3.0, 5.0, 2.0, 4.0, 6.0]
    assert kernels.mat_transpose(transposed, 3, 2) == original


def test_mat_mul_matches_numpy() -> None:
    """Checks the column-major product against numpy."""
    rng: np.random.Generator = np.random.default_rng(0)
    a: np.ndarray = rng.standard_normal((3, 4))
    b: np.ndarray = rng.standard_normal((4, 2))

    product: list[float] = kernels.mat_mul(
        list(a.flatten(order="F")), 3, 4, list(b.flatten(order="F")), 4, 2
    )

    expected: np.ndarray = a @ b
    assert np.allclose(np.array(product).reshape((3, 2), order="F"), expected)


def test_mat_mul_in_place_aliasing() -> None:
    a: list[float] = [1.0, 3.0, 2.0, 4.0]
    b: list[float] = [0.0, 1.0, 1.0, 0.0]

    kernels.mat_mul(a, 2, 2, b, 2, 2, out=a)

    assert a == [2.0, 4.0, 1.0, 3.0]


def test_mat_mul_dimension_mismatch() -> None:
    with pytest.raises(DimensionError, match="Cannot multiply 2x3 matrix with 2x2"):
        kernels.mat_mul([0.0] * 6, 2, 3, [0.0] * 4, 2, 2)


def test_mat_add_length_mismatch() -> None:
    with pytest.raises(DimensionError):
        kernels.mat_add([1.0] * 4, [1.0] * 9)
