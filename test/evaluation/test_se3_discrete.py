################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for piecewise constant-velocity SE(3) evaluation."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.evaluation import se3_discrete
from oasis_curves.evaluation.se3_discrete import TwistFrame
from oasis_curves.math_utils.linalg import SO3
from oasis_curves.math_utils.se3 import SE3


def _bracket() -> tuple[KeyCoefficientTime[SE3], KeyCoefficientTime[SE3]]:
    T_left: SE3 = SE3.from_rotvec_translation(
        np.array([0.1, -0.2, 0.3], dtype=float), np.array([1.0, 0.0, 0.5], dtype=float)
    )
    T_right: SE3 = SE3.from_rotvec_translation(
        np.array([-0.3, 0.4, 0.2], dtype=float), np.array([2.0, 1.0, 0.0], dtype=float)
    )
    return KeyCoefficientTime(1, 0, T_left), KeyCoefficientTime(2, 20, T_right)


def test_interpolate_returns_stored_ends() -> None:
    """Checks the stored coefficients are returned at the bracket times."""
    left, right = _bracket()
    assert se3_discrete.interpolate(0, left, right) is left.coefficient
    assert se3_discrete.interpolate(20, left, right) is right.coefficient


def test_interpolate_follows_geodesic() -> None:
    """Checks the pose moves at constant rate along the relative rotation."""
    left, right = _bracket()
    pose: SE3 = se3_discrete.interpolate(5, left, right)
    theta: NDArray[np.float64] = left.coefficient.relative_rotation_vector(
        right.coefficient
    )
    assert np.allclose(left.coefficient.relative_rotation_vector(pose), 0.25 * theta)
    expected_p: NDArray[np.float64] = (
        0.75 * left.coefficient.p + 0.25 * right.coefficient.p
    )
    assert np.allclose(pose.p, expected_p)


def test_velocity_frame_a() -> None:
    """Checks the frame A twist is the secant expressed in the left frame."""
    left, right = _bracket()
    twist: NDArray[np.float64] = se3_discrete.derivative(1, left, right)
    R_left: NDArray[np.float64] = left.coefficient.R
    expected_linear: NDArray[np.float64] = (
        R_left.T @ (right.coefficient.p - left.coefficient.p) / 20.0
    )
    expected_angular: NDArray[np.float64] = (
        SO3.log(R_left.T @ right.coefficient.R) / 20.0
    )
    assert twist.shape == (6,)
    assert np.allclose(twist[:3], expected_linear)
    assert np.allclose(twist[3:], expected_angular)


def test_frame_a_and_b_are_consistent() -> None:
    """Checks twist_A = diag(dR, dR) twist_B with dR = R_L^T R_R."""
    left, right = _bracket()
    twist_a: NDArray[np.float64] = se3_discrete.derivative(
        1, left, right, TwistFrame.A
    )
    twist_b: NDArray[np.float64] = se3_discrete.derivative(
        1, left, right, TwistFrame.B
    )
    dR: NDArray[np.float64] = left.coefficient.R.T @ right.coefficient.R
    assert np.allclose(twist_a, np.kron(np.eye(2), dR) @ twist_b)


def test_pure_translation_twist() -> None:
    """Checks a translating bracket gives identical twists in both frames."""
    left: KeyCoefficientTime[SE3] = KeyCoefficientTime(1, 0, SE3.identity())
    right: KeyCoefficientTime[SE3] = KeyCoefficientTime(
        2, 10, SE3.from_translation(np.array([1.0, 0.0, 0.0], dtype=float))
    )
    twist_a: NDArray[np.float64] = se3_discrete.derivative(1, left, right)
    twist_b: NDArray[np.float64] = se3_discrete.derivative(
        1, left, right, TwistFrame.B
    )
    assert np.allclose(twist_a, [0.1, 0.0, 0.0, 0.0, 0.0, 0.0])
    assert np.allclose(twist_b, twist_a)


def test_higher_orders_are_zero() -> None:
    """Checks accelerations vanish for the constant-velocity model."""
    left, right = _bracket()
    for order in (2, 3, 5):
        for frame in (TwistFrame.A, TwistFrame.B):
            result: NDArray[np.float64] = se3_discrete.derivative(
                order, left, right, frame
            )
            assert np.allclose(result, np.zeros(6))


@pytest.mark.parametrize("order", [0, -1, 1.0, True])
def test_invalid_orders(order: object) -> None:
    """Checks non-positive or non-integer orders are rejected."""
    left, right = _bracket()
    with pytest.raises(CurvePreconditionError):
        se3_discrete.derivative(order, left, right)  # type: ignore[arg-type]
