################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for cubic Hermite SE(3) evaluation."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurveNotImplementedError
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.evaluation import se3_discrete
from oasis_curves.evaluation import se3_hermite
from oasis_curves.evaluation.se3_discrete import TwistFrame
from oasis_curves.math_utils.linalg import SO3
from oasis_curves.math_utils.se3 import SE3


def _poses() -> tuple[SE3, SE3]:
    T_left: SE3 = SE3.from_rotvec_translation(
        np.array([0.2, 0.1, -0.4], dtype=float), np.array([0.0, 1.0, 2.0], dtype=float)
    )
    T_right: SE3 = SE3.from_rotvec_translation(
        np.array([-0.1, 0.5, 0.3], dtype=float), np.array([1.5, 0.5, 2.5], dtype=float)
    )
    return T_left, T_right


def _random_bracket() -> tuple[HermiteCoefficient, HermiteCoefficient]:
    rng: np.random.Generator = np.random.default_rng(0)
    T_left, T_right = _poses()
    left: HermiteCoefficient = HermiteCoefficient(T_left, rng.normal(0.0, 0.5, 6))
    right: HermiteCoefficient = HermiteCoefficient(T_right, rng.normal(0.0, 0.5, 6))
    return left, right


def test_basis_properties() -> None:
    """Checks end values and partition of unity of the Hermite basis."""
    assert se3_hermite.hermite_basis(0.0) == (1.0, 0.0, 0.0, 0.0)
    assert se3_hermite.hermite_basis(1.0) == (0.0, 0.0, 1.0, 0.0)
    for s in (0.1, 0.5, 0.9):
        h00, _, h01, _ = se3_hermite.hermite_basis(s)
        assert h00 + h01 == pytest.approx(1.0)
    assert se3_hermite.hermite_basis(0.0, 1) == (0.0, 1.0, 0.0, 0.0)
    with pytest.raises(CurveNotImplementedError):
        se3_hermite.hermite_basis(0.5, 3)


def test_interpolate_returns_stored_ends() -> None:
    """Checks the stored poses are returned at the segment ends."""
    left, right = _random_bracket()
    assert se3_hermite.interpolate_pose(0.0, 4.0, left, right) is left.transformation
    assert (
        se3_hermite.interpolate_pose(1.0, 4.0, left, right) is right.transformation
    )
    near_end: SE3 = se3_hermite.interpolate_pose(1.0 - 1e-9, 4.0, left, right)
    assert near_end.almost_equal(right.transformation, atol=1e-7)


def test_secant_tangents_reduce_to_discrete_model() -> None:
    """Checks secant tangents reproduce constant-velocity interpolation."""
    T_left, T_right = _poses()
    secant: NDArray[np.float64] = se3_hermite.secant_velocity(0, T_left, 40, T_right)
    hermite_left: KeyCoefficientTime[HermiteCoefficient] = KeyCoefficientTime(
        1, 0, HermiteCoefficient(T_left, secant)
    )
    hermite_right: KeyCoefficientTime[HermiteCoefficient] = KeyCoefficientTime(
        2, 40, HermiteCoefficient(T_right, secant)
    )
    discrete_left: KeyCoefficientTime[SE3] = KeyCoefficientTime(1, 0, T_left)
    discrete_right: KeyCoefficientTime[SE3] = KeyCoefficientTime(2, 40, T_right)

    for time in (7, 20, 33):
        hermite_pose: SE3 = se3_hermite.interpolate(time, hermite_left, hermite_right)
        discrete_pose: SE3 = se3_discrete.interpolate(
            time, discrete_left, discrete_right
        )
        assert hermite_pose.almost_equal(discrete_pose, atol=1e-9)
        for frame in (TwistFrame.A, TwistFrame.B):
            hermite_twist: NDArray[np.float64] = se3_hermite.derivative(
                time, 1, hermite_left, hermite_right, frame
            )
            discrete_twist: NDArray[np.float64] = se3_discrete.derivative(
                1, discrete_left, discrete_right, frame
            )
            assert np.allclose(hermite_twist, discrete_twist, atol=1e-9)
        acceleration: NDArray[np.float64] = se3_hermite.derivative(
            time, 2, hermite_left, hermite_right
        )
        assert np.allclose(acceleration, np.zeros(6), atol=1e-9)


def test_end_twists_match_stored_tangents() -> None:
    """Checks the twist at each end is the stored tangent in that frame."""
    left, right = _random_bracket()
    R_left: NDArray[np.float64] = left.transformation.R
    R_right: NDArray[np.float64] = right.transformation.R

    start: NDArray[np.float64] = se3_hermite.derivative_twist(1, 0.0, 3.0, left, right)
    assert np.allclose(start, np.kron(np.eye(2), R_left).T @ left.velocity)

    end_b: NDArray[np.float64] = se3_hermite.derivative_twist(
        1, 1.0, 3.0, left, right, TwistFrame.B
    )
    assert np.allclose(end_b, np.kron(np.eye(2), R_right).T @ right.velocity)


def test_twist_matches_finite_difference() -> None:
    """Checks the analytic twist against central differences of the pose."""
    left, right = _random_bracket()
    duration: float = 2.0
    s: float = 0.3
    ds: float = 1e-6
    T_plus: SE3 = se3_hermite.interpolate_pose(s + ds, duration, left, right)
    T_minus: SE3 = se3_hermite.interpolate_pose(s - ds, duration, left, right)
    dt: float = 2.0 * ds * duration
    R_left: NDArray[np.float64] = left.transformation.R
    linear_world: NDArray[np.float64] = (T_plus.p - T_minus.p) / dt
    angular_world: NDArray[np.float64] = SO3.log(T_plus.R @ T_minus.R.T) / dt

    twist: NDArray[np.float64] = se3_hermite.derivative_twist(
        1, s, duration, left, right
    )
    assert np.allclose(twist[:3], R_left.T @ linear_world, atol=1e-6)
    assert np.allclose(twist[3:], R_left.T @ angular_world, atol=1e-6)


def test_acceleration_matches_finite_difference() -> None:
    """Checks the analytic acceleration against differences of the twist."""
    left, right = _random_bracket()
    duration: float = 2.0
    s: float = 0.6
    ds: float = 1e-5
    dt: float = 2.0 * ds * duration
    for frame in (TwistFrame.A, TwistFrame.B):
        twist_plus: NDArray[np.float64] = se3_hermite.derivative_twist(
            1, s + ds, duration, left, right, TwistFrame.A
        )
        twist_minus: NDArray[np.float64] = se3_hermite.derivative_twist(
            1, s - ds, duration, left, right, TwistFrame.A
        )
        expected_a: NDArray[np.float64] = (twist_plus - twist_minus) / dt
        accel: NDArray[np.float64] = se3_hermite.derivative_twist(
            2, s, duration, left, right, frame
        )
        if frame is TwistFrame.A:
            assert np.allclose(accel, expected_a, atol=1e-6)
        else:
            dR: NDArray[np.float64] = left.transformation.R.T @ right.transformation.R
            assert np.allclose(np.kron(np.eye(2), dR) @ accel, expected_a, atol=1e-6)


def test_derivative_order_limits() -> None:
    """Checks orders above two are unsupported and order zero is invalid."""
    left, right = _random_bracket()
    with pytest.raises(CurveNotImplementedError):
        se3_hermite.derivative_twist(3, 0.5, 1.0, left, right)
    with pytest.raises(CurvePreconditionError):
        se3_hermite.derivative_twist(0, 0.5, 1.0, left, right)
    with pytest.raises(CurvePreconditionError):
        se3_hermite.derivative_twist(1, 0.5, 0.0, left, right)


def test_finite_difference_velocities() -> None:
    """Checks end and interior tangent estimates."""
    times: list[int] = [0, 10, 30]
    transforms: list[SE3] = [
        SE3.from_translation(np.array([x, 0.0, 0.0], dtype=float))
        for x in (0.0, 1.0, 5.0)
    ]
    velocities: list[NDArray[np.float64]] = (
        se3_hermite.finite_difference_velocities(times, transforms)
    )
    assert [float(v[0]) for v in velocities] == pytest.approx([0.1, 0.15, 0.2])
    assert all(np.allclose(v[1:], 0.0) for v in velocities)

    single: list[NDArray[np.float64]] = se3_hermite.finite_difference_velocities(
        [5], [SE3.identity()]
    )
    assert len(single) == 1
    assert np.allclose(single[0], np.zeros(6))
    assert se3_hermite.finite_difference_velocities([], []) == []


def test_secant_velocity_is_world_frame() -> None:
    """Checks the angular secant is expressed in the world frame."""
    T_left: SE3 = SE3.from_rotvec_translation(
        np.array([0.0, 0.0, np.pi / 2.0], dtype=float), np.zeros(3, dtype=float)
    )
    T_right: SE3 = SE3.from_rotvec_translation(
        np.array([0.0, 0.0, np.pi / 2.0], dtype=float), np.zeros(3, dtype=float)
    ) * SE3.from_rotvec_translation(
        np.array([0.2, 0.0, 0.0], dtype=float), np.zeros(3, dtype=float)
    )
    secant: NDArray[np.float64] = se3_hermite.secant_velocity(0, T_left, 2, T_right)
    assert np.allclose(secant[3:], [0.0, 0.1, 0.0])
    with pytest.raises(CurvePreconditionError):
        se3_hermite.secant_velocity(2, T_left, 2, T_right)
