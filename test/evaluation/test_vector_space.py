################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for vector-space linear blending."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.evaluation import vector_space


def test_blend_fraction() -> None:
    """Checks the left weight across a bracket."""
    assert vector_space.blend_fraction(0, 0, 10) == 1.0
    assert vector_space.blend_fraction(10, 0, 10) == 0.0
    assert vector_space.blend_fraction(4, 0, 10) == pytest.approx(0.6)
    with pytest.raises(CurvePreconditionError):
        vector_space.blend_fraction(0, 5, 5)


def test_interpolate_midpoint_and_ends() -> None:
    """Checks the blend at the ends and middle of a bracket."""
    left: KeyCoefficientTime[NDArray[np.float64]] = KeyCoefficientTime(
        1, 100, np.array([0.0, 2.0], dtype=float)
    )
    right: KeyCoefficientTime[NDArray[np.float64]] = KeyCoefficientTime(
        2, 200, np.array([4.0, -2.0], dtype=float)
    )
    assert np.allclose(vector_space.interpolate(100, left, right), [0.0, 2.0])
    assert np.allclose(vector_space.interpolate(200, left, right), [4.0, -2.0])
    assert np.allclose(vector_space.interpolate(150, left, right), [2.0, 0.0])
    assert np.allclose(vector_space.interpolate(125, left, right), [1.0, 1.0])
