################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Coefficient of a cubic Hermite SE(3) curve."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from oasis_curves.math_utils.se3 import SE3
from oasis_curves.math_utils.units import as_vector


@dataclass(frozen=True)
class HermiteCoefficient:
    """Pose sample together with its tangent.

    Attributes:
        transformation: Pose T_A_B of the sample
        velocity: Twist [v, w] of the sample, both parts expressed in frame A,
            in distance and radians per curve time unit
    """

    transformation: SE3
    velocity: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate the pose type and coerce the twist."""
        if not isinstance(self.transformation, SE3):
            raise ValueError("transformation must be an SE3")
        object.__setattr__(self, "velocity", as_vector(self.velocity, 6, "velocity"))

    @staticmethod
    def at_rest(transformation: SE3) -> "HermiteCoefficient":
        """Return a coefficient with a zero tangent."""
        return HermiteCoefficient(transformation, np.zeros(6, dtype=float))

    def linear_velocity(self) -> NDArray[np.float64]:
        """Return the linear part of the tangent."""
        return np.array(self.velocity[:3], dtype=float)

    def angular_velocity(self) -> NDArray[np.float64]:
        """Return the angular part of the tangent."""
        return np.array(self.velocity[3:], dtype=float)

    def with_velocity(self, velocity: NDArray[np.float64]) -> "HermiteCoefficient":
        """Return a copy with a new tangent."""
        return HermiteCoefficient(self.transformation, velocity)

    def almost_equal(self, other: "HermiteCoefficient", atol: float = 1e-9) -> bool:
        """Check approximate equality of pose and tangent."""
        return self.transformation.almost_equal(
            other.transformation, atol=atol
        ) and bool(np.allclose(self.velocity, other.velocity, atol=atol))
