################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""SE(3) curve with cubic Hermite segments and per-coefficient tangents."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.curves.se3_curve import SE3Curve
from oasis_curves.evaluation import se3_hermite
from oasis_curves.evaluation.se3_discrete import TwistFrame
from oasis_curves.math_utils.se3 import SE3
from oasis_curves.storage.text_format import hermite_to_row
from oasis_curves.timing.time_base import Time


_LOG: logging.Logger = logging.getLogger(__name__)


class CubicHermiteSE3Curve(SE3Curve[HermiteCoefficient]):
    """Pose curve with a C1 cubic Hermite blend between coefficients.

    Each coefficient carries a pose and a world-frame tangent. Poses added by
    extend, fit_curve or set_curve get finite-difference tangents that are
    refreshed whenever a neighboring pose changes. Tangents written through
    set_coefficient or update_from_values are kept as given.
    """

    def _coerce_coefficient(self, value: Any) -> HermiteCoefficient:
        if not isinstance(value, HermiteCoefficient):
            raise CurvePreconditionError(
                f"Expected a HermiteCoefficient value, got {type(value).__name__}"
            )
        return value

    def _coefficient_to_row(
        self, coefficient: HermiteCoefficient
    ) -> NDArray[np.float64]:
        return hermite_to_row(coefficient)

    def _coefficient_from_pose(self, pose: SE3) -> HermiteCoefficient:
        return HermiteCoefficient.at_rest(pose)

    def _pose_of(self, coefficient: HermiteCoefficient) -> SE3:
        return coefficient.transformation

    def _transform_coefficient(
        self, T: SE3, coefficient: HermiteCoefficient
    ) -> HermiteCoefficient:
        return HermiteCoefficient(
            T * coefficient.transformation,
            np.concatenate(
                (
                    T.transform_vector(coefficient.linear_velocity()),
                    T.transform_vector(coefficient.angular_velocity()),
                )
            ),
        )

    def _prior_sigmas(self) -> NDArray[np.float64] | None:
        translation: float | None = self._params.prior.translation_sigma_m
        rotation: float | None = self._params.prior.rotation_sigma_rad
        if translation is None or rotation is None:
            return None
        linear: float = translation
        angular: float = rotation
        if self._params.prior.velocity_sigma is not None:
            linear = self._params.prior.velocity_sigma
            angular = self._params.prior.velocity_sigma
        return np.array(
            [translation] * 3 + [rotation] * 3 + [linear] * 3 + [angular] * 3,
            dtype=np.float64,
        )

    def _interpolate(
        self,
        time: Time,
        left: KeyCoefficientTime[HermiteCoefficient],
        right: KeyCoefficientTime[HermiteCoefficient],
    ) -> SE3:
        return se3_hermite.interpolate(time, left, right)

    def _derivative(
        self,
        time: Time,
        order: int,
        left: KeyCoefficientTime[HermiteCoefficient],
        right: KeyCoefficientTime[HermiteCoefficient],
        frame: TwistFrame,
    ) -> NDArray[np.float64]:
        return se3_hermite.derivative(time, order, left, right, frame)

    def _poses_changed(self, keys: Sequence[Key]) -> None:
        affected: dict[Key, None] = {}
        for key in keys:
            for slot in self._manager.neighbors(key, 1):
                affected[slot.key] = None
        self._refresh_tangents(list(affected))

    def remove_coefficient(self, key: Key) -> None:
        """Remove a coefficient and refresh the tangents of its neighbors."""
        neighbors: list[Key] = [
            slot.key for slot in self._manager.neighbors(key, 1) if slot.key != key
        ]
        super().remove_coefficient(key)
        self._refresh_tangents(neighbors)

    def _refresh_tangents(self, keys: Sequence[Key]) -> None:
        """Recompute the finite-difference tangent of each key from its neighbors."""
        tangents: dict[Key, HermiteCoefficient] = {}
        if len(keys) == len(self._manager):
            # Every tangent changes, so difference the whole curve at once
            entries: list[KeyCoefficientTime[HermiteCoefficient]] = (
                self._manager.entries()
            )
            velocities: list[NDArray[np.float64]] = (
                se3_hermite.finite_difference_velocities(
                    [slot.time for slot in entries],
                    [slot.coefficient.transformation for slot in entries],
                )
            )
            for slot, velocity in zip(entries, velocities):
                tangents[slot.key] = slot.coefficient.with_velocity(velocity)
        else:
            for key in keys:
                tangents[key] = self._local_tangent(key)
        self._manager.set_coefficients(tangents)
        _LOG.debug("Refreshed %d tangents", len(tangents))

    def _local_tangent(self, key: Key) -> HermiteCoefficient:
        window: list[KeyCoefficientTime[HermiteCoefficient]] = (
            self._manager.neighbors(key, 1)
        )
        index: int = [slot.key for slot in window].index(key)
        velocities: list[NDArray[np.float64]] = (
            se3_hermite.finite_difference_velocities(
                [slot.time for slot in window],
                [slot.coefficient.transformation for slot in window],
            )
        )
        coefficient: HermiteCoefficient = self._manager.coefficient_by_key(key)
        return coefficient.with_velocity(velocities[index])
