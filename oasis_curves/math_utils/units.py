################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numeric tolerances and finiteness checks for curve math."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class NumericConstants:
    """Tolerances used by the rotation and transform utilities."""

    # Norm below which a quaternion cannot be normalized
    EPS: float = 1e-12

    # Rotation angle below which series expansions replace closed forms
    SMALL_ANGLE_RAD: float = 1e-8

    # Rotation angle below which Jacobian derivative terms use series forms
    SMALL_ANGLE_JACOBIAN_RAD: float = 1e-3


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")


def as_vector(x: NDArray[np.float64], size: int, name: str) -> NDArray[np.float64]:
    """Return a finite float64 copy of a vector with the given length."""
    vec: NDArray[np.float64] = np.array(x, dtype=np.float64)
    if vec.shape != (size,):
        raise ValueError(f"{name} must be shape ({size},)")
    assert_finite(vec, name)
    return vec
