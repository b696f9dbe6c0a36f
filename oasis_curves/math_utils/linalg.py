################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Linear algebra utilities for rotations and matrices."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .units import NumericConstants
from .units import assert_finite


# Distance from pi below which the rotation log extracts the axis from R + I
_NEAR_PI_RAD: float = 1e-6


class SO3:
    """SO(3) rotation utilities.

    Rotation vectors use the right-handed axis-angle convention. The left
    and right Jacobians follow Exp(phi + d) ~= Exp(phi) Exp(J_r(phi) d) and
    Exp(phi + d) ~= Exp(J_l(phi) d) Exp(phi).
    """

    @staticmethod
    def hat(w: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the skew-symmetric matrix for a rotation vector."""
        vec: NDArray[np.float64] = np.asarray(w, dtype=float)
        Linalg.ensure_shape(vec, (3,), "w")
        assert_finite(vec, "w")
        wx: float = float(vec[0])
        wy: float = float(vec[1])
        wz: float = float(vec[2])
        return np.array(
            [
                [0.0, -wz, wy],
                [wz, 0.0, -wx],
                [-wy, wx, 0.0],
            ],
            dtype=float,
        )

    @staticmethod
    def vee(W: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the rotation vector from a skew-symmetric matrix."""
        mat: NDArray[np.float64] = np.asarray(W, dtype=float)
        Linalg.ensure_shape(mat, (3, 3), "W")
        assert_finite(mat, "W")
        return np.array([mat[2, 1], mat[0, 2], mat[1, 0]], dtype=float)

    @staticmethod
    def exp(w: NDArray[np.float64]) -> NDArray[np.float64]:
        """Exponentiate a rotation vector to a rotation matrix."""
        vec: NDArray[np.float64] = np.asarray(w, dtype=float)
        Linalg.ensure_shape(vec, (3,), "w")
        assert_finite(vec, "w")
        theta: float = float(np.linalg.norm(vec))
        W: NDArray[np.float64] = SO3.hat(vec)
        eye: NDArray[np.float64] = np.eye(3, dtype=float)
        if theta < NumericConstants.SMALL_ANGLE_RAD:
            return eye + W + 0.5 * (W @ W)
        A: float = float(np.sin(theta)) / theta
        B: float = (1.0 - float(np.cos(theta))) / (theta * theta)
        return eye + A * W + B * (W @ W)

    @staticmethod
    def log(R: NDArray[np.float64]) -> NDArray[np.float64]:
        """Compute the rotation vector from a rotation matrix."""
        mat: NDArray[np.float64] = np.asarray(R, dtype=float)
        Linalg.ensure_shape(mat, (3, 3), "R")
        assert_finite(mat, "R")
        cos_theta: float = float((np.trace(mat) - 1.0) * 0.5)
        cos_theta = float(np.clip(cos_theta, -1.0, 1.0))
        theta: float = float(np.arccos(cos_theta))
        if theta < NumericConstants.SMALL_ANGLE_RAD:
            return 0.5 * SO3.vee(mat - mat.T)
        if np.pi - theta < _NEAR_PI_RAD:
            # sin(theta) vanishes, so recover the axis from the symmetric part
            B: NDArray[np.float64] = 0.5 * (mat + np.eye(3, dtype=float))
            idx: int = int(np.argmax(np.diag(B)))
            axis: NDArray[np.float64] = B[:, idx] / np.sqrt(max(B[idx, idx], 0.0))
            axis = axis / float(np.linalg.norm(axis))
            if float(axis @ SO3.vee(mat - mat.T)) < 0.0:
                axis = -axis
            return theta * axis
        scale: float = theta / (2.0 * float(np.sin(theta)))
        return scale * SO3.vee(mat - mat.T)

    @staticmethod
    def project_to_so3(R: NDArray[np.float64]) -> NDArray[np.float64]:
        """Project a matrix to the nearest SO(3) rotation matrix."""
        mat: NDArray[np.float64] = np.asarray(R, dtype=float)
        Linalg.ensure_shape(mat, (3, 3), "R")
        assert_finite(mat, "R")
        U: NDArray[np.float64]
        S: NDArray[np.float64]
        Vt: NDArray[np.float64]
        U, S, Vt = np.linalg.svd(mat)
        R_proj: NDArray[np.float64] = U @ Vt
        if np.linalg.det(R_proj) < 0.0:
            U[:, -1] *= -1.0
            R_proj = U @ Vt
        return R_proj

    @staticmethod
    def angle(R: NDArray[np.float64]) -> float:
        """Return the rotation angle of a rotation matrix."""
        mat: NDArray[np.float64] = np.asarray(R, dtype=float)
        Linalg.ensure_shape(mat, (3, 3), "R")
        assert_finite(mat, "R")
        cos_theta: float = float((np.trace(mat) - 1.0) * 0.5)
        cos_theta = float(np.clip(cos_theta, -1.0, 1.0))
        return float(np.arccos(cos_theta))

    @staticmethod
    def left_jacobian(phi: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the left Jacobian J_l(phi) of the exponential map."""
        a: float
        b: float
        a, b = SO3._jacobian_coefficients(phi)
        W: NDArray[np.float64] = SO3.hat(phi)
        return np.eye(3, dtype=float) + a * W + b * (W @ W)

    @staticmethod
    def right_jacobian(phi: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the right Jacobian J_r(phi) = J_l(-phi)."""
        a: float
        b: float
        a, b = SO3._jacobian_coefficients(phi)
        W: NDArray[np.float64] = SO3.hat(phi)
        return np.eye(3, dtype=float) - a * W + b * (W @ W)

    @staticmethod
    def right_jacobian_inverse(phi: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the inverse of the right Jacobian."""
        vec: NDArray[np.float64] = np.asarray(phi, dtype=float)
        theta: float = float(np.linalg.norm(vec))
        W: NDArray[np.float64] = SO3.hat(vec)
        c: float
        if theta < NumericConstants.SMALL_ANGLE_JACOBIAN_RAD:
            c = 1.0 / 12.0
        else:
            c = 1.0 / (theta * theta) - (1.0 + float(np.cos(theta))) / (
                2.0 * theta * float(np.sin(theta))
            )
        return np.eye(3, dtype=float) + 0.5 * W + c * (W @ W)

    @staticmethod
    def left_jacobian_rate(
        phi: NDArray[np.float64], phi_dot: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Return (d/dt J_l(phi(t))) @ phi_dot for a moving rotation vector."""
        vec: NDArray[np.float64] = np.asarray(phi, dtype=float)
        rate: NDArray[np.float64] = np.asarray(phi_dot, dtype=float)
        Linalg.ensure_shape(rate, (3,), "phi_dot")
        theta: float = float(np.linalg.norm(vec))
        W: NDArray[np.float64] = SO3.hat(vec)
        W_dot: NDArray[np.float64] = SO3.hat(rate)
        b: float = SO3._jacobian_coefficients(vec)[1]

        # Derivatives of the coefficients divided by theta, so that the
        # product with theta_dot = phi . phi_dot / theta stays finite
        da_over_theta: float
        db_over_theta: float
        if theta < NumericConstants.SMALL_ANGLE_JACOBIAN_RAD:
            da_over_theta = -1.0 / 12.0
            db_over_theta = -1.0 / 60.0
        else:
            sin_theta: float = float(np.sin(theta))
            cos_theta: float = float(np.cos(theta))
            da_over_theta = (theta * sin_theta - 2.0 * (1.0 - cos_theta)) / theta**4
            db_over_theta = (
                theta * (1.0 - cos_theta) - 3.0 * (theta - sin_theta)
            ) / theta**5

        phi_dot_phi: float = float(vec @ rate)
        W_rate: NDArray[np.float64] = W @ rate
        return (
            da_over_theta * phi_dot_phi * W_rate
            + db_over_theta * phi_dot_phi * (W @ W_rate)
            + b * (W_dot @ W_rate)
        )

    @staticmethod
    def _jacobian_coefficients(phi: NDArray[np.float64]) -> tuple[float, float]:
        vec: NDArray[np.float64] = np.asarray(phi, dtype=float)
        Linalg.ensure_shape(vec, (3,), "phi")
        assert_finite(vec, "phi")
        theta: float = float(np.linalg.norm(vec))
        if theta < NumericConstants.SMALL_ANGLE_RAD:
            return 0.5, 1.0 / 6.0
        theta_sq: float = theta * theta
        a: float = (1.0 - float(np.cos(theta))) / theta_sq
        b: float = (theta - float(np.sin(theta))) / (theta_sq * theta)
        return a, b


class Linalg:
    """General linear algebra helpers."""

    @staticmethod
    def ensure_shape(x: NDArray[np.float64], shape: tuple[int, ...], name: str) -> None:
        """Ensure an array has the expected shape."""
        if x.shape != shape:
            raise ValueError(f"{name} must have shape {shape}")
