################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Prior factors and a minimal factor container for optimizer handoff."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.estimation.values import Values
from oasis_curves.math_utils.se3 import SE3


_LOG: logging.Logger = logging.getLogger(__name__)


class FactorError(Exception):
    """Raised when a factor cannot be built or evaluated."""


def local_coordinates(origin: Any, value: Any) -> NDArray[np.float64]:
    """Return the tangent-space offset of value relative to origin.

    SE(3) offsets are [R_o^T (p - p_o), Log(R_o^T R)]. Hermite offsets append
    the difference of the tangents. Vector offsets are plain differences.
    """
    if isinstance(origin, HermiteCoefficient):
        if not isinstance(value, HermiteCoefficient):
            raise FactorError("Expected a HermiteCoefficient value")
        return np.concatenate(
            (
                local_coordinates(origin.transformation, value.transformation),
                value.velocity - origin.velocity,
            )
        )
    if isinstance(origin, SE3):
        if not isinstance(value, SE3):
            raise FactorError("Expected an SE3 value")
        translation: NDArray[np.float64] = origin.R.T @ (value.p - origin.p)
        rotation: NDArray[np.float64] = origin.relative_rotation_vector(value)
        return np.concatenate((translation, rotation))
    origin_vec: NDArray[np.float64] = np.asarray(origin, dtype=np.float64)
    value_vec: NDArray[np.float64] = np.asarray(value, dtype=np.float64)
    if origin_vec.shape != value_vec.shape:
        raise FactorError(
            f"Shape mismatch between prior {origin_vec.shape} and value "
            f"{value_vec.shape}"
        )
    return value_vec - origin_vec


@dataclass(frozen=True)
class PriorFactor:
    """Anchor one key to a prior value.

    Attributes:
        key: Key of the constrained variable
        prior: Value the variable is pulled towards
        sigmas: Standard deviations per tangent component, or None for a hard
            constraint
    """

    key: Key
    prior: Any
    sigmas: NDArray[np.float64] | None = None

    def __post_init__(self) -> None:
        """Coerce and validate the noise model."""
        if self.sigmas is None:
            return
        sigmas: NDArray[np.float64] = np.array(self.sigmas, dtype=np.float64)
        if sigmas.ndim != 1 or not np.all(np.isfinite(sigmas)):
            raise FactorError("sigmas must be a finite vector")
        if np.any(sigmas <= 0.0):
            raise FactorError("sigmas must be positive")
        object.__setattr__(self, "sigmas", sigmas)

    def is_constrained(self) -> bool:
        """Return True if the factor is a hard constraint."""
        return self.sigmas is None

    def unwhitened_error(self, values: Values) -> NDArray[np.float64]:
        """Return the tangent offset of the current value from the prior."""
        return local_coordinates(self.prior, values.at(self.key))

    def whitened_error(self, values: Values) -> NDArray[np.float64]:
        """Return the offset scaled by the standard deviations."""
        if self.sigmas is None:
            raise FactorError(f"Constrained prior on key {self.key} has no noise")
        error: NDArray[np.float64] = self.unwhitened_error(values)
        if error.shape != self.sigmas.shape:
            raise FactorError(
                f"Prior on key {self.key} has {self.sigmas.size} sigmas for a "
                f"{error.size}-dimensional error"
            )
        return error / self.sigmas

    def error(self, values: Values) -> float:
        """Return 0.5 * |whitened error|^2, or 0 for a hard constraint."""
        if self.sigmas is None:
            return 0.0
        whitened: NDArray[np.float64] = self.whitened_error(values)
        return float(0.5 * whitened @ whitened)


class FactorGraph:
    """Ordered collection of factors handed to an optimizer."""

    def __init__(self) -> None:
        self._factors: list[PriorFactor] = []

    def __len__(self) -> int:
        return len(self._factors)

    def __iter__(self) -> Iterator[PriorFactor]:
        return iter(self._factors)

    def __getitem__(self, index: int) -> PriorFactor:
        return self._factors[index]

    def add(self, factor: PriorFactor) -> None:
        """Append a factor."""
        self._factors.append(factor)

    def keys(self) -> list[Key]:
        """Return the distinct keys of all factors, in first-use order."""
        found: list[Key] = []
        for factor in self._factors:
            if factor.key not in found:
                found.append(factor.key)
        return found

    def total_error(self, values: Values) -> float:
        """Return the summed error of the soft factors."""
        total: float = sum(factor.error(values) for factor in self._factors)
        _LOG.debug("Factor graph error %.6g over %d factors", total, len(self))
        return total

    def constraint_violation(self, values: Values) -> float:
        """Return the largest tangent offset norm among hard constraints."""
        worst: float = 0.0
        for factor in self._factors:
            if factor.is_constrained():
                norm: float = float(np.linalg.norm(factor.unwhitened_error(values)))
                worst = max(worst, norm)
        return worst
