################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""SE(3) curve with constant velocity between coefficients."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.curves.se3_curve import SE3Curve
from oasis_curves.evaluation import se3_discrete
from oasis_curves.evaluation.se3_discrete import TwistFrame
from oasis_curves.math_utils.se3 import SE3
from oasis_curves.storage.text_format import se3_to_row
from oasis_curves.timing.time_base import Time


class DiscreteSE3Curve(SE3Curve[SE3]):
    """Pose curve that interpolates each segment along its geodesic.

    The first derivative at a stored time is the slope towards the next
    coefficient, except at the last coefficient where it is the slope from
    the previous one. Higher derivatives are zero.
    """

    def _coerce_coefficient(self, value: Any) -> SE3:
        if not isinstance(value, SE3):
            raise CurvePreconditionError(
                f"Expected an SE3 value, got {type(value).__name__}"
            )
        return value

    def _coefficient_to_row(self, coefficient: SE3) -> NDArray[np.float64]:
        return se3_to_row(coefficient)

    def _coefficient_from_pose(self, pose: SE3) -> SE3:
        return pose

    def _pose_of(self, coefficient: SE3) -> SE3:
        return coefficient

    def _transform_coefficient(self, T: SE3, coefficient: SE3) -> SE3:
        return T * coefficient

    def _prior_sigmas(self) -> NDArray[np.float64] | None:
        translation: float | None = self._params.prior.translation_sigma_m
        rotation: float | None = self._params.prior.rotation_sigma_rad
        if translation is None or rotation is None:
            return None
        return np.array([translation] * 3 + [rotation] * 3, dtype=np.float64)

    def _interpolate(
        self,
        time: Time,
        left: KeyCoefficientTime[SE3],
        right: KeyCoefficientTime[SE3],
    ) -> SE3:
        return se3_discrete.interpolate(time, left, right)

    def _derivative(
        self,
        time: Time,
        order: int,
        left: KeyCoefficientTime[SE3],
        right: KeyCoefficientTime[SE3],
        frame: TwistFrame,
    ) -> NDArray[np.float64]:
        return se3_discrete.derivative(order, left, right, frame)
