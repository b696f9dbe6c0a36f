################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for curve coefficient types."""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.math_utils.se3 import SE3


def test_at_rest_has_zero_tangent() -> None:
    """Checks at_rest builds a zero tangent."""
    pose: SE3 = SE3.from_translation(np.array([1.0, 2.0, 3.0], dtype=float))
    coefficient: HermiteCoefficient = HermiteCoefficient.at_rest(pose)
    assert coefficient.transformation is pose
    assert np.allclose(coefficient.velocity, np.zeros(6))


def test_velocity_parts() -> None:
    """Checks linear and angular parts of the tangent."""
    velocity: NDArray[np.float64] = np.arange(6, dtype=float)
    coefficient: HermiteCoefficient = HermiteCoefficient(SE3.identity(), velocity)
    assert np.allclose(coefficient.linear_velocity(), [0.0, 1.0, 2.0])
    assert np.allclose(coefficient.angular_velocity(), [3.0, 4.0, 5.0])
    velocity[0] = 100.0
    assert coefficient.velocity[0] == 0.0


def test_with_velocity_keeps_pose() -> None:
    """Checks with_velocity returns a copy with a new tangent."""
    pose: SE3 = SE3.from_rotvec_translation(
        np.array([0.0, 0.0, 0.3], dtype=float), np.zeros(3, dtype=float)
    )
    original: HermiteCoefficient = HermiteCoefficient.at_rest(pose)
    updated: HermiteCoefficient = original.with_velocity(np.ones(6, dtype=float))
    assert updated.transformation.almost_equal(pose)
    assert np.allclose(updated.velocity, 1.0)
    assert np.allclose(original.velocity, 0.0)
    assert not updated.almost_equal(original)


def test_invalid_inputs() -> None:
    """Checks tangent shape and pose type validation."""
    with pytest.raises(ValueError):
        HermiteCoefficient(SE3.identity(), np.zeros(5, dtype=float))
    with pytest.raises(ValueError):
        HermiteCoefficient(np.eye(4), np.zeros(6))  # type: ignore[arg-type]


def test_key_coefficient_time_is_frozen() -> None:
    """Checks slots are immutable records."""
    slot: KeyCoefficientTime[str] = KeyCoefficientTime(3, 10, "value")
    assert (slot.key, slot.time, slot.coefficient) == (3, 10, "value")
    with pytest.raises(dataclasses.FrozenInstanceError):
        slot.time = 11  # type: ignore[misc]
