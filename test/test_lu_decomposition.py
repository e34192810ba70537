################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for LU decomposition with partial pivoting."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from oasis_math.config.math_params import LuParams
from oasis_math.errors import DimensionError
from oasis_math.errors import SingularMatrixError
from oasis_math.lu_decomposition import LuDecomposition
from oasis_math.lu_decomposition import decompose
from oasis_math.lu_decomposition import determinant
from oasis_math.lu_decomposition import invert
from oasis_math.lu_decomposition import solve


STRICT: LuParams = LuParams(singular_policy="raise")


def _column_major(array: np.ndarray) -> list[float]:
    return list(array.flatten(order="F"))


def test_row_swap_flips_determinant_sign() -> None:
    """Checks the permutation and toggle for a swap matrix."""
    lu: LuDecomposition = decompose(_column_major(np.array([[0.0, 1.0], [1.0, 0.0]])), 2)

    assert lu.perm == (1, 0)
    assert lu.toggle == -1
    assert lu.determinant() == -1.0
    assert not lu.singular


def test_pivot_uses_largest_magnitude() -> None:
    """Checks that a large negative entry is chosen as pivot."""
    lu: LuDecomposition = decompose(_column_major(np.array([[1.0, 2.0], [-5.0, 1.0]])), 2)

    assert lu.perm == (1, 0)
    assert lu.lu[0][0] == -5.0


@pytest.mark.parametrize("n", [2, 3, 4])
def test_matches_numpy(n: int) -> None:
    rng: np.random.Generator = np.random.default_rng(n)
    array: np.ndarray = rng.standard_normal((n, n)) + n * np.eye(n)
    b: np.ndarray = rng.standard_normal(n)
    values: list[float] = _column_major(array)

    assert math.isclose(determinant(values, n), float(np.linalg.det(array)))
    inverse: np.ndarray = np.array(invert(values, n)).reshape((n, n), order="F")
    assert np.allclose(inverse, np.linalg.inv(array))
    assert np.allclose(solve(values, n, list(b)), np.linalg.solve(array, b))


def test_singular_matrix_determinant_is_zero() -> None:
    values: list[float] = _column_major(np.array([[1.0, 2.0], [2.0, 4.0]]))

    assert determinant(values, 2) == 0.0
    assert determinant(values, 2, STRICT) == 0.0


def test_singular_matrix_substitutes_by_default() -> None:
    """Checks that the default policy still produces a finite result."""
    values: list[float] = _column_major(np.array([[1.0, 2.0], [2.0, 4.0]]))

    result: list[float] = invert(values, 2)

    assert all(math.isfinite(v) for v in result)


def test_singular_matrix_raises_under_strict_policy() -> None:
    values: list[float] = _column_major(
        np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 1.0, 1.0]])
    )

    lu: LuDecomposition = decompose(values, 3, STRICT)

    assert lu.singular
    with pytest.raises(SingularMatrixError):
        lu.inverse()
    with pytest.raises(SingularMatrixError):
        lu.solve([1.0, 2.0, 3.0])


def test_zero_column_strict_and_substitute() -> None:
    """Checks a zero leading column under both policies."""
    values: list[float] = _column_major(np.array([[0.0, 0.0], [0.0, 1.0]]))

    assert decompose(values, 2, STRICT).singular
    lu: LuDecomposition = decompose(values, 2)
    assert not lu.singular
    assert lu.lu[0][0] == LuParams().pivot_substitute


def test_pivot_tolerance_marks_tiny_pivots() -> None:
    values: list[float] = _column_major(np.array([[1.0e-12, 0.0], [0.0, 1.0]]))
    params: LuParams = LuParams(singular_policy="raise", pivot_tolerance=1.0e-9)

    assert decompose(values, 2, params).singular
    assert not decompose(values, 2, STRICT).singular


def test_substitution_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    values: list[float] = _column_major(np.array([[0.0, 0.0], [0.0, 1.0]]))
    caplog.set_level(logging.DEBUG, logger="oasis_math.lu_decomposition")

    decompose(values, 2)

    assert "Substituting pivot" in caplog.text


def test_non_square_input_raises() -> None:
    with pytest.raises(DimensionError):
        decompose([1.0, 2.0, 3.0], 2)


def test_solve_checks_rhs_length() -> None:
    lu: LuDecomposition = decompose([1.0, 0.0, 0.0, 1.0], 2)

    with pytest.raises(DimensionError):
        lu.solve([1.0, 2.0, 3.0])
