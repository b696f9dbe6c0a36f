################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema utilities for curve parameters."""

from __future__ import annotations

import numbers
from typing import Any
from typing import cast

import yaml

from oasis_curves.config.curve_params import CurveParams
from oasis_curves.config.curve_params import CurveParamsError
from oasis_curves.config.curve_params import PriorParams
from oasis_curves.config.curve_params import SamplingParams
from oasis_curves.config.curve_params import StorageParams


class CurveYamlError(Exception):
    """Raised when the curve parameter YAML schema is invalid."""


def params_to_dict(params: CurveParams) -> dict[str, object]:
    """Convert curve parameters into a YAML-friendly dictionary."""
    return {
        "sampling": {
            "sampling_ratio": params.sampling.sampling_ratio,
            "min_sampling_period_ns": params.sampling.min_sampling_period_ns,
        },
        "prior": {
            "rotation_sigma_rad": params.prior.rotation_sigma_rad,
            "translation_sigma_m": params.prior.translation_sigma_m,
            "velocity_sigma": params.prior.velocity_sigma,
        },
        "storage": {
            "atomic_write": params.storage.atomic_write,
            "float_format": params.storage.float_format,
        },
    }


def params_from_dict(data: dict[str, object]) -> CurveParams:
    """Build validated curve parameters from a dictionary."""
    _require_keys("root", data, {"sampling", "prior", "storage"})

    sampling_data: dict[str, object] = _require_mapping(data["sampling"], "sampling")
    _require_keys(
        "sampling", sampling_data, {"sampling_ratio", "min_sampling_period_ns"}
    )
    sampling: SamplingParams = SamplingParams(
        sampling_ratio=_require_int(
            sampling_data["sampling_ratio"], "sampling.sampling_ratio"
        ),
        min_sampling_period_ns=_require_int(
            sampling_data["min_sampling_period_ns"],
            "sampling.min_sampling_period_ns",
        ),
    )

    prior_data: dict[str, object] = _require_mapping(data["prior"], "prior")
    _require_keys(
        "prior",
        prior_data,
        {"rotation_sigma_rad", "translation_sigma_m", "velocity_sigma"},
    )
    prior: PriorParams = PriorParams(
        rotation_sigma_rad=_optional_float(
            prior_data["rotation_sigma_rad"], "prior.rotation_sigma_rad"
        ),
        translation_sigma_m=_optional_float(
            prior_data["translation_sigma_m"], "prior.translation_sigma_m"
        ),
        velocity_sigma=_optional_float(
            prior_data["velocity_sigma"], "prior.velocity_sigma"
        ),
    )

    storage_data: dict[str, object] = _require_mapping(data["storage"], "storage")
    _require_keys("storage", storage_data, {"atomic_write", "float_format"})
    storage: StorageParams = StorageParams(
        atomic_write=_require_bool(
            storage_data["atomic_write"], "storage.atomic_write"
        ),
        float_format=_require_str(
            storage_data["float_format"], "storage.float_format"
        ),
    )

    params: CurveParams = CurveParams(sampling=sampling, prior=prior, storage=storage)
    try:
        params.validate()
    except CurveParamsError as exc:
        raise CurveYamlError(str(exc)) from exc
    return params


def dumps_yaml(params: CurveParams) -> str:
    """Serialize curve parameters to deterministic YAML."""
    data: dict[str, object] = params_to_dict(params)
    safe_dump: Any = cast(Any, yaml.safe_dump)
    return safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_yaml(text: str) -> CurveParams:
    """Parse curve parameters from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CurveYamlError("Malformed YAML") from exc
    if not isinstance(loaded, dict):
        raise CurveYamlError("YAML root must be a mapping")
    return params_from_dict(loaded)


def _require_keys(scope: str, data: dict[str, object], required: set[str]) -> None:
    """Ensure a mapping has exactly the required keys."""
    unknown: set[str] = {key for key in data.keys() if key not in required}
    if unknown:
        raise CurveYamlError(
            f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}"
        )
    missing: set[str] = {key for key in required if key not in data}
    if missing:
        raise CurveYamlError(f"Missing keys in {scope}: {', '.join(sorted(missing))}")


def _require_mapping(value: object, name: str) -> dict[str, object]:
    """Ensure the value is a dictionary."""
    if not isinstance(value, dict):
        raise CurveYamlError(f"{name} must be a mapping")
    return value


def _require_str(value: object, name: str) -> str:
    """Ensure the value is a string."""
    if not isinstance(value, str):
        raise CurveYamlError(f"{name} must be a string")
    return value


def _require_bool(value: object, name: str) -> bool:
    """Ensure the value is a boolean."""
    if not isinstance(value, bool):
        raise CurveYamlError(f"{name} must be a boolean")
    return value


def _require_int(value: object, name: str) -> int:
    """Ensure the value is an integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise CurveYamlError(f"{name} must be an integer")
    return int(value)


def _optional_float(value: object, name: str) -> float | None:
    """Ensure the value is a float or null."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise CurveYamlError(f"{name} must be a float or null")
    return float(value)
