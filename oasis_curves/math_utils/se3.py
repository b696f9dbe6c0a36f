################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""SE(3) rigid-body transforms."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .linalg import SO3
from .linalg import Linalg
from .quat import Quaternion
from .units import as_vector
from .units import assert_finite


@dataclass(frozen=True)
class SE3:
    """Rigid-body transform T_A_B with rotation R and translation p.

    Applying the transform maps coordinates in frame B into frame A, so
    composition reads T_A_C = T_A_B * T_B_C.
    """

    R: NDArray[np.float64]
    p: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate and project rotation and translation inputs."""
        R_mat: NDArray[np.float64] = np.asarray(self.R, dtype=float)
        Linalg.ensure_shape(R_mat, (3, 3), "R")
        assert_finite(R_mat, "R")
        p_vec: NDArray[np.float64] = as_vector(self.p, 3, "p")
        object.__setattr__(self, "R", SO3.project_to_so3(R_mat))
        object.__setattr__(self, "p", p_vec)

    @staticmethod
    def identity() -> "SE3":
        """Return the identity transform."""
        return SE3(np.eye(3, dtype=float), np.zeros(3, dtype=float))

    @staticmethod
    def from_translation(p: NDArray[np.float64]) -> "SE3":
        """Create a pure translation."""
        return SE3(np.eye(3, dtype=float), p)

    @staticmethod
    def from_rotvec_translation(
        w: NDArray[np.float64], p: NDArray[np.float64]
    ) -> "SE3":
        """Create a transform from a rotation vector and translation."""
        return SE3(SO3.exp(w), p)

    @staticmethod
    def from_quat_translation(q: Quaternion, p: NDArray[np.float64]) -> "SE3":
        """Create a transform from a quaternion and translation."""
        return SE3(q.as_matrix(), p)

    def quaternion(self) -> Quaternion:
        """Return the rotation as a canonical unit quaternion."""
        return Quaternion.from_matrix(self.R).canonical()

    def inverse(self) -> "SE3":
        """Return the inverse transform."""
        R_inv: NDArray[np.float64] = self.R.T
        return SE3(R_inv, -(R_inv @ self.p))

    def __mul__(self, other: "SE3") -> "SE3":
        """Compose two transforms."""
        return SE3(self.R @ other.R, self.R @ other.p + self.p)

    def transform_vector(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a vector by rotation only."""
        return self.R @ as_vector(v, 3, "v")

    def relative_rotation_vector(self, other: "SE3") -> NDArray[np.float64]:
        """Return Log(R_self^T R_other), expressed in this frame."""
        return SO3.log(self.R.T @ other.R)

    def interpolate(self, other: "SE3", fraction: float) -> "SE3":
        """Move a fraction of the way towards another transform.

        The rotation follows the geodesic of the relative rotation and the
        translation is blended linearly, so fraction 0 returns this transform
        and fraction 1 returns the other one.
        """
        w_rel: NDArray[np.float64] = self.relative_rotation_vector(other)
        R_new: NDArray[np.float64] = self.R @ SO3.exp(fraction * w_rel)
        p_new: NDArray[np.float64] = (1.0 - fraction) * self.p + fraction * other.p
        return SE3(R_new, p_new)

    def almost_equal(self, other: "SE3", atol: float = 1e-9) -> bool:
        """Check approximate equality of rotation and translation."""
        return bool(
            np.allclose(self.R, other.R, atol=atol)
            and np.allclose(self.p, other.p, atol=atol)
        )
