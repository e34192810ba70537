################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Persistence helpers for math kernel parameters."""

from __future__ import annotations

from oasis_math.storage.params_yaml import MathParamsYamlError
from oasis_math.storage.params_yaml import dumps_params_yaml
from oasis_math.storage.params_yaml import is_yaml_path
from oasis_math.storage.params_yaml import load_params_yaml
from oasis_math.storage.params_yaml import loads_params_yaml
from oasis_math.storage.params_yaml import params_from_dict
from oasis_math.storage.params_yaml import save_params_yaml


__all__ = [
    "MathParamsYamlError",
    "dumps_params_yaml",
    "is_yaml_path",
    "load_params_yaml",
    "loads_params_yaml",
    "params_from_dict",
    "save_params_yaml",
]
