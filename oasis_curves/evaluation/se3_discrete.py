################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Piecewise constant-velocity interpolation between SE(3) coefficients.

Between two coefficients T_L at t_L and T_R at t_R the pose moves along the
rotation geodesic and the straight translation segment at constant rate.
Twists are 6-vectors [v, w]. Frame A expresses them in the frame of the left
coefficient and frame B in the frame of the right coefficient, so that
twist_A = diag(dR, dR) twist_B with dR = R_L^T R_R.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.evaluation.vector_space import blend_fraction
from oasis_curves.math_utils.se3 import SE3
from oasis_curves.timing.time_base import Time


class TwistFrame(Enum):
    """Coordinate frame a twist is expressed in."""

    A = "A"
    B = "B"


def require_derivative_order(order: int) -> int:
    """Return the order if it names a time derivative."""
    if isinstance(order, bool) or not isinstance(order, int) or order < 1:
        raise CurvePreconditionError(
            f"Derivative order must be a positive integer, got {order!r}"
        )
    return order


def interpolate_pose(alpha: float, T_left: SE3, T_right: SE3) -> SE3:
    """Return the pose a fraction 1 - alpha of the way from left to right."""
    if alpha == 1.0:
        return T_left
    if alpha == 0.0:
        return T_right
    return T_left.interpolate(T_right, 1.0 - alpha)


def velocity_twist(
    duration: float, T_left: SE3, T_right: SE3, frame: TwistFrame
) -> NDArray[np.float64]:
    """Return the constant twist that carries the left pose onto the right."""
    linear_world: NDArray[np.float64] = (T_right.p - T_left.p) / duration
    angular_left: NDArray[np.float64] = (
        T_left.relative_rotation_vector(T_right) / duration
    )
    if frame is TwistFrame.A:
        return np.concatenate((T_left.R.T @ linear_world, angular_left))
    R_right_left: NDArray[np.float64] = T_right.R.T @ T_left.R
    return np.concatenate((T_right.R.T @ linear_world, R_right_left @ angular_left))


def interpolate(
    time: Time,
    left: KeyCoefficientTime[SE3],
    right: KeyCoefficientTime[SE3],
) -> SE3:
    """Evaluate the pose of a bracketing pair at a time."""
    alpha: float = blend_fraction(time, left.time, right.time)
    return interpolate_pose(alpha, left.coefficient, right.coefficient)


def derivative(
    order: int,
    left: KeyCoefficientTime[SE3],
    right: KeyCoefficientTime[SE3],
    frame: TwistFrame = TwistFrame.A,
) -> NDArray[np.float64]:
    """Evaluate a time derivative of a bracketing pair.

    The first derivative is the segment twist. Higher derivatives vanish
    because velocity is constant on every segment.
    """
    require_derivative_order(order)
    if order > 1:
        return np.zeros(6, dtype=float)
    duration: float = float(right.time - left.time)
    if duration <= 0.0:
        raise CurvePreconditionError("Bracket must have positive width")
    return velocity_twist(duration, left.coefficient, right.coefficient, frame)
