################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion utilities using the wxyz convention."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .linalg import SO3
from .units import NumericConstants
from .units import as_vector


@dataclass(frozen=True)
class Quaternion:
    """Unit quaternion stored in wxyz order."""

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate quaternion inputs and normalize storage."""
        wxyz: NDArray[np.float64] = as_vector(self.wxyz, 4, "wxyz")
        norm: float = float(np.linalg.norm(wxyz))
        if norm < NumericConstants.EPS:
            raise ValueError("Quaternion norm is too small")
        object.__setattr__(self, "wxyz", wxyz / norm)

    @staticmethod
    def identity() -> "Quaternion":
        """Return the identity quaternion."""
        return Quaternion.from_wxyz(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> "Quaternion":
        """Create a quaternion from components."""
        return Quaternion(np.array([w, x, y, z], dtype=float))

    @staticmethod
    def from_rotvec(w: NDArray[np.float64]) -> "Quaternion":
        """Create a quaternion from a rotation vector."""
        vec: NDArray[np.float64] = as_vector(w, 3, "w")
        theta: float = float(np.linalg.norm(vec))
        if theta < NumericConstants.SMALL_ANGLE_RAD:
            return Quaternion(np.concatenate(([1.0], 0.5 * vec)))
        half: float = 0.5 * theta
        axis: NDArray[np.float64] = vec / theta
        return Quaternion(np.concatenate(([np.cos(half)], np.sin(half) * axis)))

    @staticmethod
    def from_matrix(R: NDArray[np.float64]) -> "Quaternion":
        """Create a quaternion from a rotation matrix."""
        mat: NDArray[np.float64] = SO3.project_to_so3(R)
        trace: float = float(np.trace(mat))
        if trace > 0.0:
            s: float = float(np.sqrt(trace + 1.0) * 2.0)
            return Quaternion.from_wxyz(
                0.25 * s,
                float((mat[2, 1] - mat[1, 2]) / s),
                float((mat[0, 2] - mat[2, 0]) / s),
                float((mat[1, 0] - mat[0, 1]) / s),
            )
        idx: int = int(np.argmax(np.diag(mat)))
        if idx == 0:
            s = float(np.sqrt(1.0 + mat[0, 0] - mat[1, 1] - mat[2, 2]) * 2.0)
            return Quaternion.from_wxyz(
                float((mat[2, 1] - mat[1, 2]) / s),
                0.25 * s,
                float((mat[0, 1] + mat[1, 0]) / s),
                float((mat[0, 2] + mat[2, 0]) / s),
            )
        if idx == 1:
            s = float(np.sqrt(1.0 + mat[1, 1] - mat[0, 0] - mat[2, 2]) * 2.0)
            return Quaternion.from_wxyz(
                float((mat[0, 2] - mat[2, 0]) / s),
                float((mat[0, 1] + mat[1, 0]) / s),
                0.25 * s,
                float((mat[1, 2] + mat[2, 1]) / s),
            )
        s = float(np.sqrt(1.0 + mat[2, 2] - mat[0, 0] - mat[1, 1]) * 2.0)
        return Quaternion.from_wxyz(
            float((mat[1, 0] - mat[0, 1]) / s),
            float((mat[0, 2] + mat[2, 0]) / s),
            float((mat[1, 2] + mat[2, 1]) / s),
            0.25 * s,
        )

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the rotation matrix representation."""
        w: float = float(self.wxyz[0])
        x: float = float(self.wxyz[1])
        y: float = float(self.wxyz[2])
        z: float = float(self.wxyz[3])
        return np.array(
            [
                [
                    1.0 - 2.0 * (y * y + z * z),
                    2.0 * (x * y - z * w),
                    2.0 * (x * z + y * w),
                ],
                [
                    2.0 * (x * y + z * w),
                    1.0 - 2.0 * (x * x + z * z),
                    2.0 * (y * z - x * w),
                ],
                [
                    2.0 * (x * z - y * w),
                    2.0 * (y * z + x * w),
                    1.0 - 2.0 * (x * x + y * y),
                ],
            ],
            dtype=float,
        )

    def canonical(self) -> "Quaternion":
        """Return the representative with a non-negative scalar part."""
        if self.wxyz[0] < 0.0:
            return Quaternion(-self.wxyz)
        return self

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return a copy of the quaternion components."""
        return np.array(self.wxyz, dtype=float)

    def almost_equal(self, other: "Quaternion", atol: float = 1e-9) -> bool:
        """Check approximate equality, accounting for sign ambiguity."""
        if np.allclose(self.wxyz, other.wxyz, atol=atol):
            return True
        return bool(np.allclose(self.wxyz, -other.wxyz, atol=atol))
