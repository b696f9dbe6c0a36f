################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time-ordered coefficient storage with stable keys and local support."""

from __future__ import annotations

from bisect import bisect_left
from bisect import bisect_right
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import replace
from typing import Generic
from typing import Iterator
from typing import TypeVar

from oasis_curves.curve_errors import CurveDomainError
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.manager.key_generator import KeyGenerator
from oasis_curves.timing.time_base import Time
from oasis_curves.timing.time_base import require_time
from oasis_curves.timing.time_base import require_times
from oasis_curves.timing.time_base import validate_matching_lengths
from oasis_curves.timing.time_base import validate_strictly_increasing


C = TypeVar("C")


class CoefficientManager(Generic[C]):
    """Store coefficients in time order and hand out brackets around a time.

    Slots live in a key-indexed table. A separate pair of parallel lists
    holds the keys sorted by time, so inserting or removing one slot never
    changes the key of another.
    """

    def __init__(self) -> None:
        self._slots: dict[Key, KeyCoefficientTime[C]] = {}
        self._times: list[Time] = []
        self._keys: list[Key] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[KeyCoefficientTime[C]]:
        for key in self._keys:
            yield self._slots[key]

    def is_empty(self) -> bool:
        """Return True if no coefficient is stored."""
        return not self._keys

    def clear(self) -> None:
        """Remove every coefficient."""
        self._slots.clear()
        self._times.clear()
        self._keys.clear()

    def insert_coefficients(
        self, times: Sequence[Time], coefficients: Sequence[C]
    ) -> list[Key]:
        """Insert a batch of coefficients and return their new keys.

        The times must be strictly increasing and must not collide with any
        stored time. Keys are returned in input order.
        """
        validate_matching_lengths(times, coefficients)
        checked: list[Time] = require_times(times)
        validate_strictly_increasing(checked)
        for time in checked:
            if self._contains_time(time):
                raise CurvePreconditionError(
                    f"A coefficient already exists at time {time}"
                )

        keys: list[Key] = KeyGenerator.next_keys(len(checked))
        for key, time, coefficient in zip(keys, checked, coefficients):
            index: int = bisect_left(self._times, time)
            self._times.insert(index, time)
            self._keys.insert(index, key)
            self._slots[key] = KeyCoefficientTime(key, time, coefficient)
        return keys

    def add_coefficient_at_end(self, time: Time, coefficient: C) -> Key:
        """Append a coefficient after the current last one."""
        checked: Time = require_time(time)
        if self._times and checked <= self._times[-1]:
            raise CurvePreconditionError(
                f"Time {checked} must be after the back time {self._times[-1]}"
            )
        key: Key = KeyGenerator.next_key()
        self._times.append(checked)
        self._keys.append(key)
        self._slots[key] = KeyCoefficientTime(key, checked, coefficient)
        return key

    def modify_coefficient(self, key: Key, time: Time, coefficient: C) -> None:
        """Move a slot to a new time and value while keeping its key."""
        slot: KeyCoefficientTime[C] = self._slot(key)
        checked: Time = require_time(time)
        if checked != slot.time:
            if self._contains_time(checked):
                raise CurvePreconditionError(
                    f"A coefficient already exists at time {checked}"
                )
            old_index: int = self._index_of(slot)
            del self._times[old_index]
            del self._keys[old_index]
            new_index: int = bisect_left(self._times, checked)
            self._times.insert(new_index, checked)
            self._keys.insert(new_index, key)
        self._slots[key] = KeyCoefficientTime(key, checked, coefficient)

    def remove_coefficient(self, key: Key) -> None:
        """Remove one coefficient, leaving every other key untouched."""
        slot: KeyCoefficientTime[C] = self._slot(key)
        index: int = self._index_of(slot)
        del self._times[index]
        del self._keys[index]
        del self._slots[key]

    def coefficients_at(
        self, time: Time
    ) -> tuple[KeyCoefficientTime[C], KeyCoefficientTime[C]]:
        """Return the bracketing pair (left, right) around a time.

        The left coefficient is the last one at or before the time and the
        right coefficient is its successor. A query at the back time is
        bracketed by the last two coefficients, so the pair always spans a
        non-zero interval.
        """
        checked: Time = require_time(time)
        if len(self._keys) < 2:
            raise CurveDomainError(
                f"Unable to locate bracketing coefficients at time {checked}: "
                f"curve holds {len(self._keys)} coefficient(s)"
            )
        if checked < self._times[0] or checked > self._times[-1]:
            raise CurveDomainError(
                f"Unable to locate bracketing coefficients at time {checked}: "
                f"curve is defined on [{self._times[0]}, {self._times[-1]}]"
            )
        right_index: int
        if checked == self._times[-1]:
            right_index = len(self._times) - 1
        else:
            right_index = bisect_right(self._times, checked)
        left: KeyCoefficientTime[C] = self._slots[self._keys[right_index - 1]]
        right: KeyCoefficientTime[C] = self._slots[self._keys[right_index]]
        return left, right

    def coefficients_in_range(
        self, start_time: Time, end_time: Time
    ) -> list[KeyCoefficientTime[C]]:
        """Return every coefficient with a time in [start_time, end_time]."""
        start: Time = require_time(start_time, "start_time")
        end: Time = require_time(end_time, "end_time")
        first: int = bisect_left(self._times, start)
        last: int = bisect_right(self._times, end)
        return [self._slots[key] for key in self._keys[first:last]]

    def coefficient_by_key(self, key: Key) -> C:
        """Return the coefficient stored under a key."""
        return self._slot(key).coefficient

    def entry_by_key(self, key: Key) -> KeyCoefficientTime[C]:
        """Return the full slot stored under a key."""
        return self._slot(key)

    def time_by_key(self, key: Key) -> Time:
        """Return the time of the coefficient stored under a key."""
        return self._slot(key).time

    def has_key(self, key: Key) -> bool:
        """Return True if the key names a stored coefficient."""
        return key in self._slots

    def set_coefficient_by_key(self, key: Key, coefficient: C) -> None:
        """Replace the value of a slot, keeping its key and time."""
        self._slots[key] = replace(self._slot(key), coefficient=coefficient)

    def set_coefficients(self, coefficients: Mapping[Key, C]) -> None:
        """Replace several values at once; every key must already exist."""
        for key in coefficients:
            self._slot(key)
        for key, coefficient in coefficients.items():
            self.set_coefficient_by_key(key, coefficient)

    def front_time(self) -> Time:
        """Return the earliest stored time."""
        if not self._times:
            raise CurveDomainError("Front time is undefined for an empty curve")
        return self._times[0]

    def back_time(self) -> Time:
        """Return the latest stored time."""
        if not self._times:
            raise CurveDomainError("Back time is undefined for an empty curve")
        return self._times[-1]

    def latest(self) -> KeyCoefficientTime[C]:
        """Return the slot with the latest time."""
        if not self._keys:
            raise CurveDomainError("An empty curve has no latest coefficient")
        return self._slots[self._keys[-1]]

    def key_at_time(self, time: Time) -> Key | None:
        """Return the key stored at exactly this time, if any."""
        checked: Time = require_time(time)
        index: int = bisect_left(self._times, checked)
        if index < len(self._times) and self._times[index] == checked:
            return self._keys[index]
        return None

    def neighbors(self, key: Key, radius: int = 1) -> list[KeyCoefficientTime[C]]:
        """Return the slot and up to radius slots on each side, in time order."""
        index: int = self._index_of(self._slot(key))
        first: int = max(0, index - radius)
        last: int = min(len(self._keys), index + radius + 1)
        return [self._slots[k] for k in self._keys[first:last]]

    def keys(self) -> list[Key]:
        """Return the keys in time order."""
        return list(self._keys)

    def times(self) -> list[Time]:
        """Return the stored times in increasing order."""
        return list(self._times)

    def entries(self) -> list[KeyCoefficientTime[C]]:
        """Return the slots in time order."""
        return [self._slots[key] for key in self._keys]

    def _slot(self, key: Key) -> KeyCoefficientTime[C]:
        slot: KeyCoefficientTime[C] | None = self._slots.get(key)
        if slot is None:
            raise CurvePreconditionError(f"Unknown coefficient key {key}")
        return slot

    def _index_of(self, slot: KeyCoefficientTime[C]) -> int:
        return bisect_left(self._times, slot.time)

    def _contains_time(self, time: Time) -> bool:
        index: int = bisect_left(self._times, time)
        return index < len(self._times) and self._times[index] == time
