################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for trajectory curves."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any


# Number of single-sample extensions merged into one coefficient
SAMPLING_RATIO: int = 1
# Minimum spacing between coefficients in curve time units (advisory)
SAMPLING_MIN_PERIOD_NS: int = 0

# Prior rotation standard deviation in radians (None means constrained)
PRIOR_ROTATION_SIGMA_RAD: float | None = None
# Prior translation standard deviation in meters (None means constrained)
PRIOR_TRANSLATION_SIGMA_M: float | None = None
# Prior tangent standard deviation per curve time unit (None means constrained)
PRIOR_VELOCITY_SIGMA: float | None = None

# Write curve dumps and params through a temporary file
STORAGE_ATOMIC_WRITE: bool = True
# printf-style format for floats in curve dumps
STORAGE_FLOAT_FORMAT: str = "%.17g"


class CurveParamsError(Exception):
    """Raised when curve parameter validation fails."""


def _require_int(value: Any, name: str) -> None:
    """Require an integer that is not a bool."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise CurveParamsError(f"{name} must be an int")


def _require_positive(value: float, name: str) -> None:
    """Require a positive value."""
    if value <= 0:
        raise CurveParamsError(f"{name} must be positive")


def _require_non_negative(value: float, name: str) -> None:
    """Require a non-negative value."""
    if value < 0:
        raise CurveParamsError(f"{name} must be non-negative")


def _validate_optional_positive(value: float | None, name: str) -> None:
    """Validate an optional positive parameter."""
    if value is None:
        return
    _require_positive(value, name)


@dataclass(frozen=True)
class SamplingParams:
    """Extension policy of SE(3) curves."""

    # Number of single-sample extensions merged into one coefficient
    sampling_ratio: int = SAMPLING_RATIO
    # Minimum spacing between coefficients (advisory)
    min_sampling_period_ns: int = SAMPLING_MIN_PERIOD_NS


@dataclass(frozen=True)
class PriorParams:
    """Noise of the prior factors a curve adds for the optimizer."""

    # Rotation standard deviation in radians
    rotation_sigma_rad: float | None = PRIOR_ROTATION_SIGMA_RAD
    # Translation standard deviation in meters
    translation_sigma_m: float | None = PRIOR_TRANSLATION_SIGMA_M
    # Tangent standard deviation, Hermite curves only
    velocity_sigma: float | None = PRIOR_VELOCITY_SIGMA

    def is_constrained(self) -> bool:
        """Return True if priors act as hard constraints."""
        return self.rotation_sigma_rad is None and self.translation_sigma_m is None


@dataclass(frozen=True)
class StorageParams:
    """Persistence parameters for curve dumps."""

    # Use atomic write for persistence
    atomic_write: bool = STORAGE_ATOMIC_WRITE
    # Float format for curve dumps
    float_format: str = STORAGE_FLOAT_FORMAT


@dataclass(frozen=True)
class CurveParams:
    """Complete configuration tree for one curve."""

    sampling: SamplingParams
    prior: PriorParams
    storage: StorageParams

    @classmethod
    def defaults(cls) -> CurveParams:
        """Return the default curve parameter tree."""
        return cls(
            sampling=SamplingParams(),
            prior=PriorParams(),
            storage=StorageParams(),
        )

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_int(self.sampling.sampling_ratio, "sampling.sampling_ratio")
        _require_positive(self.sampling.sampling_ratio, "sampling.sampling_ratio")
        _require_int(
            self.sampling.min_sampling_period_ns, "sampling.min_sampling_period_ns"
        )
        _require_non_negative(
            self.sampling.min_sampling_period_ns, "sampling.min_sampling_period_ns"
        )

        _validate_optional_positive(
            self.prior.rotation_sigma_rad, "prior.rotation_sigma_rad"
        )
        _validate_optional_positive(
            self.prior.translation_sigma_m, "prior.translation_sigma_m"
        )
        _validate_optional_positive(self.prior.velocity_sigma, "prior.velocity_sigma")
        if (self.prior.rotation_sigma_rad is None) != (
            self.prior.translation_sigma_m is None
        ):
            raise CurveParamsError(
                "prior.rotation_sigma_rad and prior.translation_sigma_m must be "
                "set together"
            )
        if self.prior.is_constrained() and self.prior.velocity_sigma is not None:
            raise CurveParamsError(
                "prior.velocity_sigma requires pose sigmas to be set"
            )

        if not isinstance(self.storage.atomic_write, bool):
            raise CurveParamsError("storage.atomic_write must be a bool")
        if not isinstance(self.storage.float_format, str):
            raise CurveParamsError("storage.float_format must be a string")
        try:
            self.storage.float_format % 1.0
        except (TypeError, ValueError) as exc:
            raise CurveParamsError(
                f"storage.float_format {self.storage.float_format!r} cannot "
                "format a float"
            ) from exc

    def replace(self, **namespace_overrides: Any) -> CurveParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value
