################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Piecewise linear curve over a fixed-dimension vector space."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from oasis_curves.config.curve_params import CurveParams
from oasis_curves.curve_errors import CurveNotImplementedError
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.curves.curve_base import CoefficientCurve
from oasis_curves.evaluation import vector_space
from oasis_curves.timing.time_base import Time
from oasis_curves.timing.time_base import require_time
from oasis_curves.timing.time_base import require_times
from oasis_curves.timing.time_base import validate_matching_lengths
from oasis_curves.timing.time_base import validate_strictly_increasing


_LOG: logging.Logger = logging.getLogger(__name__)


class LinearInterpolationVectorSpaceCurve(CoefficientCurve[NDArray[np.float64]]):
    """Linear blend between vector coefficients of a fixed dimension.

    Only values can be evaluated. Extension and derivatives are not
    available for this curve.
    """

    def __init__(self, dimension: int, params: CurveParams | None = None) -> None:
        if isinstance(dimension, bool) or not isinstance(dimension, int):
            raise CurvePreconditionError("dimension must be an int")
        if dimension < 1:
            raise CurvePreconditionError("dimension must be positive")
        super().__init__(params)
        self._dimension: int = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    def _coerce_coefficient(self, value: Any) -> NDArray[np.float64]:
        vec: NDArray[np.float64] = np.array(value, dtype=np.float64)
        if vec.shape != (self._dimension,):
            raise CurvePreconditionError(
                f"Expected a vector of shape ({self._dimension},), got {vec.shape}"
            )
        if not np.all(np.isfinite(vec)):
            raise CurvePreconditionError("Coefficient must be finite")
        return vec

    def _coefficient_to_row(
        self, coefficient: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        return np.array(coefficient, dtype=np.float64)

    def fit_curve(self, times: Sequence[Time], values: Sequence[Any]) -> list[Key]:
        """Replace the curve with one coefficient per sample."""
        validate_matching_lengths(times, values)
        checked: list[Time] = require_times(times)
        validate_strictly_increasing(checked)
        if not checked:
            return []
        coefficients: list[NDArray[np.float64]] = [
            self._coerce_coefficient(value) for value in values
        ]
        self._manager.clear()
        keys: list[Key] = self._manager.insert_coefficients(checked, coefficients)
        _LOG.info("Fitted vector curve with %d coefficients", len(keys))
        return keys

    def extend(self, times: Sequence[Time], values: Sequence[Any]) -> list[Key]:
        raise CurveNotImplementedError(
            "LinearInterpolationVectorSpaceCurve does not support extend"
        )

    def evaluate(self, time: Time) -> NDArray[np.float64]:
        """Return the interpolated vector at a time."""
        checked: Time = require_time(time)
        lone: NDArray[np.float64] | None = self._lone_coefficient(checked)
        if lone is not None:
            return np.array(lone, dtype=np.float64)
        left: KeyCoefficientTime[NDArray[np.float64]]
        right: KeyCoefficientTime[NDArray[np.float64]]
        left, right = self._manager.coefficients_at(checked)
        return vector_space.interpolate(checked, left, right)

    def evaluate_derivative(self, time: Time, order: int) -> NDArray[np.float64]:
        raise CurveNotImplementedError(
            "LinearInterpolationVectorSpaceCurve does not support derivatives"
        )

    def get_evaluator(self, time: Time) -> Any:
        raise CurveNotImplementedError(
            "LinearInterpolationVectorSpaceCurve does not provide evaluators"
        )
