################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Shared facade of curves whose values are SE(3) poses.

Derivatives are 6-vectors [v, w]. Frame A twists describe the motion of
frame B as seen from frame A, expressed in the frame of the left bracketing
coefficient. Frame B twists express the same motion in the frame of the
right bracketing coefficient.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Sequence
from dataclasses import replace
from typing import Any
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from oasis_curves.config.curve_params import CurveParams
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.curves.curve_base import CoefficientCurve
from oasis_curves.estimation.expression import Expression
from oasis_curves.estimation.factors import FactorGraph
from oasis_curves.estimation.factors import PriorFactor
from oasis_curves.evaluation.se3_discrete import TwistFrame
from oasis_curves.evaluation.se3_discrete import require_derivative_order
from oasis_curves.math_utils.se3 import SE3
from oasis_curves.policy.sampling_policy import SamplingPolicy
from oasis_curves.timing.time_base import Time
from oasis_curves.timing.time_base import require_time
from oasis_curves.timing.time_base import require_times
from oasis_curves.timing.time_base import validate_matching_lengths
from oasis_curves.timing.time_base import validate_strictly_increasing


_LOG: logging.Logger = logging.getLogger(__name__)

C = TypeVar("C")


def _require_pose(value: Any) -> SE3:
    if not isinstance(value, SE3):
        raise CurvePreconditionError(
            f"Expected an SE3 value, got {type(value).__name__}"
        )
    return value


class SE3Curve(CoefficientCurve[C]):
    """Pose curve that grows through a SamplingPolicy.

    Subclasses choose the coefficient type and the evaluation formulas.
    The curve is also the SamplingTarget its policy mutates.
    """

    def __init__(self, params: CurveParams | None = None) -> None:
        super().__init__(params)
        self._policy: SamplingPolicy = SamplingPolicy(
            minimum_measurements=self._params.sampling.sampling_ratio,
            min_sampling_period=self._params.sampling.min_sampling_period_ns,
        )

    @property
    def policy(self) -> SamplingPolicy:
        return self._policy

    # Algebra hooks

    def _coefficient_from_pose(self, pose: SE3) -> C:
        raise NotImplementedError

    def _pose_of(self, coefficient: C) -> SE3:
        raise NotImplementedError

    def _transform_coefficient(self, T: SE3, coefficient: C) -> C:
        raise NotImplementedError

    def _prior_sigmas(self) -> NDArray[np.float64] | None:
        raise NotImplementedError

    def _interpolate(
        self, time: Time, left: KeyCoefficientTime[C], right: KeyCoefficientTime[C]
    ) -> SE3:
        raise NotImplementedError

    def _derivative(
        self,
        time: Time,
        order: int,
        left: KeyCoefficientTime[C],
        right: KeyCoefficientTime[C],
        frame: TwistFrame,
    ) -> NDArray[np.float64]:
        raise NotImplementedError

    def _poses_changed(self, keys: Sequence[Key]) -> None:
        """Called after the poses under these keys were created or moved."""

    # SamplingTarget

    def coefficient_count(self) -> int:
        return len(self._manager)

    def insert_coefficients(
        self, times: Sequence[Time], values: Sequence[SE3]
    ) -> list[Key]:
        """Insert one coefficient per pose."""
        validate_matching_lengths(times, values)
        coefficients: list[C] = [
            self._coefficient_from_pose(_require_pose(value)) for value in values
        ]
        keys: list[Key] = self._manager.insert_coefficients(times, coefficients)
        self._poses_changed(keys)
        return keys

    def insert_at_end(self, time: Time, value: SE3) -> Key:
        """Append a coefficient after the last one."""
        key: Key = self._manager.add_coefficient_at_end(
            time, self._coefficient_from_pose(_require_pose(value))
        )
        self._poses_changed([key])
        return key

    def modify_latest(self, time: Time, value: SE3) -> Key:
        """Move the last coefficient to a new time and pose."""
        key: Key = self._manager.latest().key
        self._manager.modify_coefficient(
            key, time, self._coefficient_from_pose(_require_pose(value))
        )
        self._poses_changed([key])
        return key

    # Growth

    def set_min_sampling_period(self, period: Time) -> None:
        self._policy.set_min_sampling_period(period)

    def set_sampling_ratio(self, ratio: int) -> None:
        """Merge every ratio single-sample extensions into one coefficient."""
        self._policy.set_minimum_measurements(ratio)

    def clear(self) -> None:
        super().clear()
        self._policy.reset()

    def extend(self, times: Sequence[Time], values: Sequence[SE3]) -> list[Key]:
        """Grow the curve so it covers the new samples.

        Returns the keys of the coefficients created or modified.
        """
        return self._policy.extend(times, values, self)

    def fit_curve(self, times: Sequence[Time], values: Sequence[SE3]) -> list[Key]:
        """Replace every coefficient with one per sample."""
        validate_matching_lengths(times, values)
        checked: list[Time] = require_times(times)
        validate_strictly_increasing(checked)
        if not checked:
            return []
        poses: list[SE3] = [_require_pose(value) for value in values]
        self._manager.clear()
        keys: list[Key] = self.insert_coefficients(checked, poses)
        _LOG.info("Fitted %s with %d coefficients", type(self).__name__, len(keys))
        return keys

    def set_curve(self, times: Sequence[Time], values: Sequence[SE3]) -> list[Key]:
        """Insert or overwrite coefficients without clearing the curve.

        Samples at stored times replace the value and keep the key. Returns
        the key of every sample in input order.
        """
        validate_matching_lengths(times, values)
        checked: list[Time] = require_times(times)
        validate_strictly_increasing(checked)
        poses: list[SE3] = [_require_pose(value) for value in values]

        existing: dict[int, Key] = {}
        new_times: list[Time] = []
        new_poses: list[SE3] = []
        for index, (time, pose) in enumerate(zip(checked, poses)):
            key: Key | None = self._manager.key_at_time(time)
            if key is None:
                new_times.append(time)
                new_poses.append(pose)
            else:
                existing[index] = key

        for index, key in existing.items():
            self._manager.set_coefficient_by_key(
                key, self._coefficient_from_pose(poses[index])
            )
        new_keys: list[Key] = self._manager.insert_coefficients(
            new_times, [self._coefficient_from_pose(pose) for pose in new_poses]
        )
        self._poses_changed(list(existing.values()) + new_keys)

        inserted: Iterator[Key] = iter(new_keys)
        keys: list[Key] = [
            existing[index] if index in existing else next(inserted)
            for index in range(len(checked))
        ]
        _LOG.info(
            "Set %d coefficients of %s (%d new)",
            len(keys),
            type(self).__name__,
            len(new_keys),
        )
        return keys

    def transform_curve(self, T: SE3) -> None:
        """Left-multiply every coefficient by a rigid transform."""
        transform: SE3 = _require_pose(T)
        self._manager.set_coefficients(
            {
                slot.key: self._transform_coefficient(transform, slot.coefficient)
                for slot in self._manager
            }
        )
        _LOG.info("Transformed %d coefficients of %s", len(self), type(self).__name__)

    # Evaluation

    def evaluate(self, time: Time) -> SE3:
        """Return the pose at a time."""
        checked: Time = require_time(time)
        lone: C | None = self._lone_coefficient(checked)
        if lone is not None:
            return self._pose_of(lone)
        left: KeyCoefficientTime[C]
        right: KeyCoefficientTime[C]
        left, right = self._manager.coefficients_at(checked)
        return self._interpolate(checked, left, right)

    def evaluate_derivative_a(self, order: int, time: Time) -> NDArray[np.float64]:
        """Return the derivative [linear, angular] of the given order in frame A."""
        return self._evaluate_derivative(order, time, TwistFrame.A)

    def evaluate_derivative_b(self, order: int, time: Time) -> NDArray[np.float64]:
        """Return the derivative [linear, angular] of the given order in frame B."""
        return self._evaluate_derivative(order, time, TwistFrame.B)

    def evaluate_derivative(self, time: Time, order: int) -> NDArray[np.float64]:
        """Return the frame A derivative of the given order."""
        return self.evaluate_derivative_a(order, time)

    def evaluate_twist_a(self, time: Time) -> NDArray[np.float64]:
        return self.evaluate_derivative_a(1, time)

    def evaluate_twist_b(self, time: Time) -> NDArray[np.float64]:
        return self.evaluate_derivative_b(1, time)

    def evaluate_linear_velocity_a(self, time: Time) -> NDArray[np.float64]:
        return self.evaluate_twist_a(time)[:3]

    def evaluate_linear_velocity_b(self, time: Time) -> NDArray[np.float64]:
        return self.evaluate_twist_b(time)[:3]

    def evaluate_angular_velocity_a(self, time: Time) -> NDArray[np.float64]:
        return self.evaluate_twist_a(time)[3:]

    def evaluate_angular_velocity_b(self, time: Time) -> NDArray[np.float64]:
        return self.evaluate_twist_b(time)[3:]

    def evaluate_linear_derivative_a(
        self, order: int, time: Time
    ) -> NDArray[np.float64]:
        return self.evaluate_derivative_a(order, time)[:3]

    def evaluate_linear_derivative_b(
        self, order: int, time: Time
    ) -> NDArray[np.float64]:
        return self.evaluate_derivative_b(order, time)[:3]

    def evaluate_angular_derivative_a(
        self, order: int, time: Time
    ) -> NDArray[np.float64]:
        return self.evaluate_derivative_a(order, time)[3:]

    def evaluate_angular_derivative_b(
        self, order: int, time: Time
    ) -> NDArray[np.float64]:
        return self.evaluate_derivative_b(order, time)[3:]

    def _evaluate_derivative(
        self, order: int, time: Time, frame: TwistFrame
    ) -> NDArray[np.float64]:
        require_derivative_order(order)
        checked: Time = require_time(time)
        left: KeyCoefficientTime[C]
        right: KeyCoefficientTime[C]
        left, right = self._manager.coefficients_at(checked)
        return self._derivative(checked, order, left, right, frame)

    # Optimizer exchange

    def value_expression(self, time: Time) -> Expression:
        """Return the pose at a time as an expression of coefficient keys."""
        checked: Time = require_time(time)
        if self._lone_coefficient(checked) is not None:
            lone: KeyCoefficientTime[C] = self._manager.latest()
            return Expression.apply(self._pose_of, Expression.leaf(lone.key))
        left: KeyCoefficientTime[C]
        right: KeyCoefficientTime[C]
        left, right = self._manager.coefficients_at(checked)
        return self._pair_expression(
            left,
            right,
            lambda left_slot, right_slot: self._interpolate(
                checked, left_slot, right_slot
            ),
        )

    def derivative_expression(self, time: Time, order: int) -> Expression:
        """Return the frame A derivative at a time as an expression."""
        require_derivative_order(order)
        checked: Time = require_time(time)
        left: KeyCoefficientTime[C]
        right: KeyCoefficientTime[C]
        left, right = self._manager.coefficients_at(checked)
        return self._pair_expression(
            left,
            right,
            lambda left_slot, right_slot: self._derivative(
                checked, order, left_slot, right_slot, TwistFrame.A
            ),
        )

    def add_prior_factors(self, graph: FactorGraph, time: Time) -> list[Key]:
        """Anchor the coefficients active at a time to their current values.

        Returns the keys that received a prior.
        """
        checked: Time = require_time(time)
        slots: list[KeyCoefficientTime[C]]
        if self._lone_coefficient(checked) is not None:
            slots = [self._manager.latest()]
        else:
            slots = list(self._manager.coefficients_at(checked))
        sigmas: NDArray[np.float64] | None = self._prior_sigmas()
        for slot in slots:
            graph.add(PriorFactor(slot.key, slot.coefficient, sigmas))
        _LOG.debug(
            "Added %d prior factors at time %d (%s)",
            len(slots),
            checked,
            "constrained" if sigmas is None else "soft",
        )
        return [slot.key for slot in slots]

    @staticmethod
    def _pair_expression(
        left: KeyCoefficientTime[C],
        right: KeyCoefficientTime[C],
        function: Callable[[KeyCoefficientTime[C], KeyCoefficientTime[C]], Any],
    ) -> Expression:
        """Wrap a bracket function so it reads coefficient values by key."""

        def evaluate(left_value: C, right_value: C) -> Any:
            return function(
                replace(left, coefficient=left_value),
                replace(right, coefficient=right_value),
            )

        return Expression.apply(
            evaluate, Expression.leaf(left.key), Expression.leaf(right.key)
        )
