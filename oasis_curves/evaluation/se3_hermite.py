################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Cubic Hermite interpolation between SE(3) coefficients with tangents.

Translation uses the standard two-point cubic Hermite blend of positions and
frame-A linear velocities. Rotation is blended in the tangent space at the
left rotation:

    R(s) = R_L Exp(phi(s))
    phi(s) = h10(s) m0 + h01(s) theta + h11(s) m1

with theta = Log(R_L^T R_R), m0 = h R_L^T w_L and m1 = J_r^-1(theta) h R_R^T w_R,
where h is the segment duration and w_L, w_R are the stored angular
velocities. When both tangents equal the secant twist this reduces to the
piecewise constant-velocity model of se3_discrete.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurveNotImplementedError
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.evaluation.se3_discrete import TwistFrame
from oasis_curves.evaluation.se3_discrete import require_derivative_order
from oasis_curves.math_utils.linalg import SO3
from oasis_curves.math_utils.se3 import SE3
from oasis_curves.timing.time_base import Time


# Highest derivative order with an analytic expression
MAX_DERIVATIVE_ORDER: int = 2


def hermite_basis(s: float, order: int = 0) -> tuple[float, float, float, float]:
    """Return (h00, h10, h01, h11) or their derivatives with respect to s."""
    s2: float = s * s
    s3: float = s2 * s
    if order == 0:
        return (
            2.0 * s3 - 3.0 * s2 + 1.0,
            s3 - 2.0 * s2 + s,
            -2.0 * s3 + 3.0 * s2,
            s3 - s2,
        )
    if order == 1:
        return (
            6.0 * s2 - 6.0 * s,
            3.0 * s2 - 4.0 * s + 1.0,
            -6.0 * s2 + 6.0 * s,
            3.0 * s2 - 2.0 * s,
        )
    if order == 2:
        return (
            12.0 * s - 6.0,
            6.0 * s - 4.0,
            -12.0 * s + 6.0,
            6.0 * s - 2.0,
        )
    raise CurveNotImplementedError(f"Hermite basis of order {order} is not available")


@dataclass(frozen=True)
class _Segment:
    """Quantities shared by value and derivative evaluation on one segment."""

    duration: float
    R_left: NDArray[np.float64]
    R_right: NDArray[np.float64]
    p_left: NDArray[np.float64]
    p_right: NDArray[np.float64]
    v_left: NDArray[np.float64]
    v_right: NDArray[np.float64]
    theta: NDArray[np.float64]
    m0: NDArray[np.float64]
    m1: NDArray[np.float64]

    @staticmethod
    def build(
        duration: float, left: HermiteCoefficient, right: HermiteCoefficient
    ) -> "_Segment":
        if duration <= 0.0:
            raise CurvePreconditionError("Bracket must have positive width")
        T_left: SE3 = left.transformation
        T_right: SE3 = right.transformation
        theta: NDArray[np.float64] = T_left.relative_rotation_vector(T_right)
        m0: NDArray[np.float64] = duration * (T_left.R.T @ left.angular_velocity())
        m1: NDArray[np.float64] = SO3.right_jacobian_inverse(theta) @ (
            duration * (T_right.R.T @ right.angular_velocity())
        )
        return _Segment(
            duration=duration,
            R_left=T_left.R,
            R_right=T_right.R,
            p_left=T_left.p,
            p_right=T_right.p,
            v_left=left.linear_velocity(),
            v_right=right.linear_velocity(),
            theta=theta,
            m0=m0,
            m1=m1,
        )

    def position(self, basis: tuple[float, float, float, float]) -> NDArray[np.float64]:
        h00, h10, h01, h11 = basis
        return (
            h00 * self.p_left
            + h10 * self.duration * self.v_left
            + h01 * self.p_right
            + h11 * self.duration * self.v_right
        )

    def rotation_vector(
        self, basis: tuple[float, float, float, float]
    ) -> NDArray[np.float64]:
        _, h10, h01, h11 = basis
        return h10 * self.m0 + h01 * self.theta + h11 * self.m1

    def to_frame(
        self, vector_left: NDArray[np.float64], frame: TwistFrame
    ) -> NDArray[np.float64]:
        """Re-express a vector given in the left frame in the requested frame."""
        if frame is TwistFrame.A:
            return vector_left
        return self.R_right.T @ (self.R_left @ vector_left)


def interpolate_pose(
    s: float, duration: float, left: HermiteCoefficient, right: HermiteCoefficient
) -> SE3:
    """Return the pose at normalized segment time s in [0, 1]."""
    if s == 0.0:
        return left.transformation
    if s == 1.0:
        return right.transformation
    segment: _Segment = _Segment.build(duration, left, right)
    basis: tuple[float, float, float, float] = hermite_basis(s, 0)
    phi: NDArray[np.float64] = segment.rotation_vector(basis)
    return SE3(segment.R_left @ SO3.exp(phi), segment.position(basis))


def derivative_twist(
    order: int,
    s: float,
    duration: float,
    left: HermiteCoefficient,
    right: HermiteCoefficient,
    frame: TwistFrame = TwistFrame.A,
) -> NDArray[np.float64]:
    """Return the analytic derivative [linear, angular] at normalized time s.

    Order 1 is the twist, order 2 the linear and angular acceleration.
    """
    require_derivative_order(order)
    if order > MAX_DERIVATIVE_ORDER:
        raise CurveNotImplementedError(
            f"Hermite curves provide derivatives up to order {MAX_DERIVATIVE_ORDER}"
        )
    segment: _Segment = _Segment.build(duration, left, right)
    phi: NDArray[np.float64] = segment.rotation_vector(hermite_basis(s, 0))
    basis_rate: tuple[float, float, float, float] = hermite_basis(s, 1)
    phi_dot: NDArray[np.float64] = segment.rotation_vector(basis_rate) / duration
    J_left: NDArray[np.float64] = SO3.left_jacobian(phi)

    linear_world: NDArray[np.float64]
    angular_left: NDArray[np.float64]
    if order == 1:
        linear_world = segment.position(basis_rate) / duration
        angular_left = J_left @ phi_dot
    else:
        basis_accel: tuple[float, float, float, float] = hermite_basis(s, 2)
        duration_sq: float = duration * duration
        linear_world = segment.position(basis_accel) / duration_sq
        phi_ddot: NDArray[np.float64] = (
            segment.rotation_vector(basis_accel) / duration_sq
        )
        angular_left = J_left @ phi_ddot + SO3.left_jacobian_rate(phi, phi_dot)

    linear_left: NDArray[np.float64] = segment.R_left.T @ linear_world
    return np.concatenate(
        (segment.to_frame(linear_left, frame), segment.to_frame(angular_left, frame))
    )


def normalized_time(time: Time, left_time: Time, right_time: Time) -> float:
    """Return (time - left_time) / (right_time - left_time)."""
    if right_time <= left_time:
        raise CurvePreconditionError(
            f"Bracket [{left_time}, {right_time}] must have positive width"
        )
    return float(time - left_time) / float(right_time - left_time)


def interpolate(
    time: Time,
    left: KeyCoefficientTime[HermiteCoefficient],
    right: KeyCoefficientTime[HermiteCoefficient],
) -> SE3:
    """Evaluate the pose of a bracketing pair at a time."""
    s: float = normalized_time(time, left.time, right.time)
    return interpolate_pose(
        s, float(right.time - left.time), left.coefficient, right.coefficient
    )


def derivative(
    time: Time,
    order: int,
    left: KeyCoefficientTime[HermiteCoefficient],
    right: KeyCoefficientTime[HermiteCoefficient],
    frame: TwistFrame = TwistFrame.A,
) -> NDArray[np.float64]:
    """Evaluate a derivative of a bracketing pair at a time."""
    s: float = normalized_time(time, left.time, right.time)
    return derivative_twist(
        order,
        s,
        float(right.time - left.time),
        left.coefficient,
        right.coefficient,
        frame,
    )


def secant_velocity(
    left_time: Time, T_left: SE3, right_time: Time, T_right: SE3
) -> NDArray[np.float64]:
    """Return the constant frame-A twist that carries one pose onto the next."""
    duration: float = float(right_time - left_time)
    if duration <= 0.0:
        raise CurvePreconditionError("Secant requires increasing times")
    linear: NDArray[np.float64] = (T_right.p - T_left.p) / duration
    angular: NDArray[np.float64] = (
        T_left.R @ T_left.relative_rotation_vector(T_right) / duration
    )
    return np.concatenate((linear, angular))


def finite_difference_velocities(
    times: Sequence[Time], transforms: Sequence[SE3]
) -> list[NDArray[np.float64]]:
    """Estimate a tangent for each sample from its neighbors.

    End samples take the one-sided secant and interior samples the mean of
    the two adjacent secants. A single sample gets a zero tangent.
    """
    if len(times) != len(transforms):
        raise CurvePreconditionError("Need one transform per time")
    count: int = len(times)
    if count == 0:
        return []
    if count == 1:
        return [np.zeros(6, dtype=float)]
    secants: list[NDArray[np.float64]] = [
        secant_velocity(times[i], transforms[i], times[i + 1], transforms[i + 1])
        for i in range(count - 1)
    ]
    velocities: list[NDArray[np.float64]] = [secants[0]]
    for i in range(1, count - 1):
        velocities.append(0.5 * (secants[i - 1] + secants[i]))
    velocities.append(secants[-1])
    return velocities
