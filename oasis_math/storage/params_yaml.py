################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML persistence for math kernel parameters.

Documents mirror ``MathParams.as_nested_dict()``::

    lu:
      singular_policy: substitute
      pivot_substitute: 1.0e-06
      pivot_tolerance: 0.0
    quaternion:
      lerp_threshold: 0.99
      norm_tolerance: 0.001

Missing namespaces and keys take their defaults. Unknown keys are rejected.
"""

from __future__ import annotations

import logging
import numbers
import os
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from oasis_math.config.math_params import LuParams
from oasis_math.config.math_params import MathParams
from oasis_math.config.math_params import MathParamsError
from oasis_math.config.math_params import QuaternionParams


_LOG: logging.Logger = logging.getLogger(__name__)


class MathParamsYamlError(Exception):
    """Raised when a parameter YAML document cannot be read or written."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def _require_mapping(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MathParamsYamlError(f"{name} must be a mapping")
    return value


def _require_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MathParamsYamlError(f"{name} must be a number")
    return float(value)


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise MathParamsYamlError(f"{name} must be a string")
    return value


def _check_keys(data: dict[str, Any], allowed: set[str], name: str) -> None:
    unknown: set[str] = set(data) - allowed
    if unknown:
        raise MathParamsYamlError(f"{name} has unknown keys: {sorted(unknown)}")


def _field_names(cls: type) -> set[str]:
    return {field.name for field in fields(cls)}


def _lu_from_dict(data: dict[str, Any]) -> LuParams:
    _check_keys(data, _field_names(LuParams), "lu")
    defaults: LuParams = LuParams()
    return LuParams(
        singular_policy=_require_str(
            data.get("singular_policy", defaults.singular_policy),
            "lu.singular_policy",
        ),
        pivot_substitute=_require_float(
            data.get("pivot_substitute", defaults.pivot_substitute),
            "lu.pivot_substitute",
        ),
        pivot_tolerance=_require_float(
            data.get("pivot_tolerance", defaults.pivot_tolerance),
            "lu.pivot_tolerance",
        ),
    )


def _quaternion_from_dict(data: dict[str, Any]) -> QuaternionParams:
    _check_keys(data, _field_names(QuaternionParams), "quaternion")
    defaults: QuaternionParams = QuaternionParams()
    return QuaternionParams(
        lerp_threshold=_require_float(
            data.get("lerp_threshold", defaults.lerp_threshold),
            "quaternion.lerp_threshold",
        ),
        norm_tolerance=_require_float(
            data.get("norm_tolerance", defaults.norm_tolerance),
            "quaternion.norm_tolerance",
        ),
    )


def params_from_dict(data: Any) -> MathParams:
    """Build and validate parameters from a nested mapping."""
    root: dict[str, Any] = _require_mapping(data, "document")
    _check_keys(root, _field_names(MathParams), "document")
    params: MathParams = MathParams(
        lu=_lu_from_dict(_require_mapping(root.get("lu"), "lu")),
        quaternion=_quaternion_from_dict(
            _require_mapping(root.get("quaternion"), "quaternion")
        ),
    )
    try:
        params.validate()
    except MathParamsError as exc:
        raise MathParamsYamlError(str(exc)) from exc
    return params


def loads_params_yaml(text: str) -> MathParams:
    """Parse parameters from a YAML string."""
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MathParamsYamlError("Invalid YAML document") from exc
    return params_from_dict(data)


def dumps_params_yaml(params: MathParams) -> str:
    """Serialize parameters to a YAML string."""
    try:
        params.validate()
    except MathParamsError as exc:
        raise MathParamsYamlError(str(exc)) from exc
    return yaml.safe_dump(params.as_nested_dict(), sort_keys=False)


def load_params_yaml(path: str | os.PathLike[str]) -> MathParams:
    """Load parameters from a YAML file."""
    if not is_yaml_path(path):
        raise MathParamsYamlError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    try:
        text: str = path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise MathParamsYamlError(f"Failed to load parameters from {path_obj}") from exc

    params: MathParams = loads_params_yaml(text)
    _LOG.info("Loaded math parameters from %s", path_obj)
    return params


def _remove_tmp_file(tmp_path: Path) -> None:
    try:
        tmp_path.unlink(missing_ok=True)
    except OSError as exc:
        _LOG.warning("Failed to remove temporary file %s: %s", tmp_path, exc)


def save_params_yaml(
    path: str | os.PathLike[str],
    params: MathParams,
    *,
    atomic_write: bool = True,
) -> None:
    """Save parameters to a YAML file."""
    if not is_yaml_path(path):
        raise MathParamsYamlError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    text: str = dumps_params_yaml(params)
    tmp_path: Path = path_obj.with_name(f".{path_obj.name}.tmp.{os.getpid()}")
    try:
        path_obj.parent.mkdir(parents=True, exist_ok=True)
        if atomic_write:
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path_obj)
        else:
            path_obj.write_text(text, encoding="utf-8")
    except OSError as exc:
        if atomic_write:
            _remove_tmp_file(tmp_path)
        raise MathParamsYamlError(f"Failed to save parameters to {path_obj}") from exc

    _LOG.info("Saved math parameters to %s", path_obj)
