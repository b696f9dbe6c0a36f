################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Linear blend between two vector-space coefficients."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.timing.time_base import Time


def blend_fraction(time: Time, left_time: Time, right_time: Time) -> float:
    """Return the weight of the left coefficient at a time.

    The weight is 1 at the left time and 0 at the right time.
    """
    if right_time <= left_time:
        raise CurvePreconditionError(
            f"Bracket [{left_time}, {right_time}] must have positive width"
        )
    return float(right_time - time) / float(right_time - left_time)


def blend(
    alpha: float, left: NDArray[np.float64], right: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Return alpha * left + (1 - alpha) * right."""
    return alpha * left + (1.0 - alpha) * right


def interpolate(
    time: Time,
    left: KeyCoefficientTime[NDArray[np.float64]],
    right: KeyCoefficientTime[NDArray[np.float64]],
) -> NDArray[np.float64]:
    """Evaluate the linear blend of a bracketing pair."""
    alpha: float = blend_fraction(time, left.time, right.time)
    return blend(alpha, left.coefficient, right.coefficient)
