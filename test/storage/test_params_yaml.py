################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for math parameter YAML persistence."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from oasis_math.config.math_params import LuParams
from oasis_math.config.math_params import MathParams
from oasis_math.config.math_params import QuaternionParams
from oasis_math.storage.params_yaml import MathParamsYamlError
from oasis_math.storage.params_yaml import dumps_params_yaml
from oasis_math.storage.params_yaml import is_yaml_path
from oasis_math.storage.params_yaml import load_params_yaml
from oasis_math.storage.params_yaml import loads_params_yaml
from oasis_math.storage.params_yaml import save_params_yaml


def _custom_params() -> MathParams:
    """Create non-default parameters for persistence tests."""
    return MathParams(
        lu=LuParams(singular_policy="raise", pivot_tolerance=1.0e-12),
        quaternion=QuaternionParams(lerp_threshold=0.995, norm_tolerance=0.01),
    )


def test_is_yaml_path() -> None:
    assert is_yaml_path("params.yaml")
    assert is_yaml_path(Path("params.YML"))
    assert not is_yaml_path("params.json")


def test_save_and_load(tmp_path: Path) -> None:
    """Ensure saved parameters load back unchanged."""
    params: MathParams = _custom_params()
    path: Path = tmp_path / "math.yaml"

    save_params_yaml(path, params)
    loaded: MathParams = load_params_yaml(path)

    assert loaded == params
    assert [p.name for p in tmp_path.iterdir()] == ["math.yaml"]


def test_save_without_atomic_write(tmp_path: Path) -> None:
    params: MathParams = _custom_params()
    path: Path = tmp_path / "nested" / "math.yml"

    save_params_yaml(path, params, atomic_write=False)

    assert load_params_yaml(path) == params


def test_dumps_uses_nested_layout() -> None:
    text: str = dumps_params_yaml(MathParams.defaults())

    assert yaml.safe_load(text) == MathParams.defaults().as_nested_dict()


def test_missing_keys_take_defaults() -> None:
    """Ensure partial documents are completed with defaults."""
    params: MathParams = loads_params_yaml("lu:\n  singular_policy: raise\n")

    assert params.lu == LuParams(singular_policy="raise")
    assert params.quaternion == QuaternionParams()
    assert loads_params_yaml("") == MathParams.defaults()


def test_integer_values_accepted() -> None:
    params: MathParams = loads_params_yaml("quaternion:\n  lerp_threshold: 1\n")

    assert params.quaternion.lerp_threshold == 1.0
    assert isinstance(params.quaternion.lerp_threshold, float)


@pytest.mark.parametrize(
    "text",
    [
        "unknown: 1\n",
        "lu:\n  pivot: 1.0\n",
        "lu: 3\n",
        "lu:\n  pivot_substitute: small\n",
        "lu:\n  pivot_substitute: true\n",
        "lu:\n  singular_policy: 4\n",
        "quaternion:\n  lerp_threshold: 2.0\n",
        "- 1\n- 2\n",
        "lu: [\n",
    ],
)
def test_invalid_documents_rejected(text: str) -> None:
    with pytest.raises(MathParamsYamlError):
        loads_params_yaml(text)


def test_non_yaml_path_rejected(tmp_path: Path) -> None:
    with pytest.raises(MathParamsYamlError):
        save_params_yaml(tmp_path / "math.json", MathParams.defaults())
    with pytest.raises(MathParamsYamlError):
        load_params_yaml(tmp_path / "math.json")


def test_missing_file_rejected(tmp_path: Path) -> None:
    with pytest.raises(MathParamsYamlError):
        load_params_yaml(tmp_path / "missing.yaml")


def test_invalid_params_not_saved(tmp_path: Path) -> None:
    params: MathParams = MathParams.defaults().replace(
        lu=LuParams(singular_policy="ignore")
    )
    path: Path = tmp_path / "math.yaml"

    with pytest.raises(MathParamsYamlError):
        save_params_yaml(path, params)
    assert not path.exists()


def test_load_and_save_are_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path: Path = tmp_path / "math.yaml"
    caplog.set_level(logging.INFO, logger="oasis_math.storage.params_yaml")

    save_params_yaml(path, MathParams.defaults())
    load_params_yaml(path)

    assert "Saved math parameters" in caplog.text
    assert "Loaded math parameters" in caplog.text


def test_failed_atomic_write_removes_temporary_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Ensure a failed replace leaves no temporary file behind."""

    def _fail_replace(src: object, dst: object) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr("oasis_math.storage.params_yaml.os.replace", _fail_replace)
    path: Path = tmp_path / "math.yaml"

    with pytest.raises(MathParamsYamlError):
        save_params_yaml(path, MathParams.defaults())

    assert list(tmp_path.iterdir()) == []
