################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Decide whether incoming samples add coefficients or merge into the last."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol
from typing import TypeVar

from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.timing.time_base import Time
from oasis_curves.timing.time_base import validate_matching_lengths


_LOG: logging.Logger = logging.getLogger(__name__)

V = TypeVar("V")
V_contra = TypeVar("V_contra", contravariant=True)


class SamplingTarget(Protocol[V_contra]):
    """Operations a curve exposes so the policy can grow it."""

    def coefficient_count(self) -> int:
        """Return the number of stored coefficients."""
        ...

    def insert_coefficients(
        self, times: Sequence[Time], values: Sequence[V_contra]
    ) -> list[Key]:
        """Insert one new coefficient per sample."""
        ...

    def insert_at_end(self, time: Time, value: V_contra) -> Key:
        """Append a new coefficient after the last one."""
        ...

    def modify_latest(self, time: Time, value: V_contra) -> Key:
        """Overwrite time and value of the last coefficient, keeping its key."""
        ...


class SamplingPolicy:
    """Per-curve extension policy.

    With a sampling ratio of N, consecutive single-sample extensions are
    grouped N at a time into one coefficient slot that keeps the latest
    sample of the group.
    """

    def __init__(
        self, *, minimum_measurements: int = 1, min_sampling_period: Time = 0
    ) -> None:
        self._minimum_measurements: int = 1
        self._min_sampling_period: Time = 0
        self._measurements_since_last_extend: int = 0
        self.set_minimum_measurements(minimum_measurements)
        self.set_min_sampling_period(min_sampling_period)

    @property
    def minimum_measurements(self) -> int:
        return self._minimum_measurements

    @property
    def min_sampling_period(self) -> Time:
        return self._min_sampling_period

    @property
    def measurements_since_last_extend(self) -> int:
        return self._measurements_since_last_extend

    def set_minimum_measurements(self, ratio: int) -> None:
        """Set how many extensions are merged into one coefficient."""
        if isinstance(ratio, bool) or not isinstance(ratio, int) or ratio < 1:
            raise CurvePreconditionError(
                f"Sampling ratio must be a positive integer, got {ratio!r}"
            )
        self._minimum_measurements = ratio

    def set_min_sampling_period(self, period: Time) -> None:
        """Record the minimum spacing between coefficients.

        The period is stored for callers that inspect the policy but does not
        change any extension decision.
        """
        if isinstance(period, bool) or not isinstance(period, int) or period < 0:
            raise CurvePreconditionError(
                f"Minimum sampling period must be a non-negative integer, "
                f"got {period!r}"
            )
        if period > 0:
            _LOG.warning(
                "Minimum sampling period %d is recorded but not applied", period
            )
        self._min_sampling_period = period

    def reset(self) -> None:
        """Forget how many samples were merged into the current slot."""
        self._measurements_since_last_extend = 0

    def extend(
        self,
        times: Sequence[Time],
        values: Sequence[V],
        target: SamplingTarget[V],
    ) -> list[Key]:
        """Apply one extension request and return the keys it touched."""
        validate_matching_lengths(times, values)
        if len(times) == 0:
            return []

        # TODO: apply min_sampling_period once batches have a merge rule
        if len(times) != 1:
            return target.insert_coefficients(times, values)

        # A curve with fewer than two coefficients cannot merge yet
        bootstrap: bool = target.coefficient_count() <= 1

        if self._minimum_measurements == 1:
            if bootstrap:
                return target.insert_coefficients(times, values)
            return [target.insert_at_end(times[0], values[0])]

        # Bootstrap samples count towards the slot they open
        count: int = self._measurements_since_last_extend + 1

        keys: list[Key]
        if bootstrap:
            keys = target.insert_coefficients(times, values)
        elif count == 1:
            keys = [target.insert_at_end(times[0], values[0])]
            _LOG.debug("Opened coefficient %d at time %d", keys[0], times[0])
        else:
            keys = [target.modify_latest(times[0], values[0])]
            _LOG.debug(
                "Merged sample %d/%d into coefficient %d at time %d",
                count,
                self._minimum_measurements,
                keys[0],
                times[0],
            )

        self._measurements_since_last_extend = (
            0 if count == self._minimum_measurements else count
        )
        return keys
