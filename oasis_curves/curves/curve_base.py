################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Shared storage and optimizer exchange for coefficient curves."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any
from typing import Generic
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from oasis_curves.config.curve_params import CurveParams
from oasis_curves.curve_errors import CurveDomainError
from oasis_curves.curve_errors import CurveNotImplementedError
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime
from oasis_curves.estimation.values import Values
from oasis_curves.manager.coefficient_manager import CoefficientManager
from oasis_curves.storage.text_format import save_curve_times_and_values
from oasis_curves.timing.time_base import Time


_LOG: logging.Logger = logging.getLogger(__name__)

C = TypeVar("C")


class CoefficientCurve(Generic[C]):
    """Curve backed by a CoefficientManager.

    Subclasses provide the coefficient algebra: coercion of incoming values,
    conversion to and from flat dump rows, and the evaluation formulas.
    """

    def __init__(self, params: CurveParams | None = None) -> None:
        self._params: CurveParams = (
            params if params is not None else CurveParams.defaults()
        )
        self._params.validate()
        self._manager: CoefficientManager[C] = CoefficientManager()

    @property
    def params(self) -> CurveParams:
        return self._params

    def __len__(self) -> int:
        return len(self._manager)

    def __str__(self) -> str:
        return self.describe()

    # Algebra hooks

    def _coerce_coefficient(self, value: Any) -> C:
        """Validate a caller value and return it as a coefficient."""
        raise NotImplementedError

    def _coefficient_to_row(self, coefficient: C) -> NDArray[np.float64]:
        """Flatten a coefficient for text dumps."""
        raise NotImplementedError

    def _lone_coefficient(self, time: Time) -> C | None:
        """Return the coefficient of a one-coefficient curve queried at its time.

        Returns None when the curve holds any other number of coefficients.
        """
        if len(self._manager) != 1:
            return None
        slot: KeyCoefficientTime[C] = self._manager.latest()
        if slot.time != time:
            raise CurveDomainError(
                f"Unable to locate bracketing coefficients at time {time}: "
                f"curve holds a single coefficient at time {slot.time}"
            )
        return slot.coefficient

    # Storage

    def min_time(self) -> Time:
        """Return the first valid time of the curve."""
        return self._manager.front_time()

    def max_time(self) -> Time:
        """Return the last valid time of the curve."""
        return self._manager.back_time()

    def is_empty(self) -> bool:
        return self._manager.is_empty()

    def size(self) -> int:
        return len(self._manager)

    def clear(self) -> None:
        """Remove every coefficient."""
        _LOG.info("Clearing %s with %d coefficients", type(self).__name__, len(self))
        self._manager.clear()

    def time_at_key(self, key: Key) -> Time:
        """Return the time of the coefficient named by a key."""
        return self._manager.time_by_key(key)

    def keys(self) -> list[Key]:
        """Return the keys in time order."""
        return self._manager.keys()

    def times(self) -> list[Time]:
        """Return the coefficient times in increasing order."""
        return self._manager.times()

    def coefficient_by_key(self, key: Key) -> C:
        return self._manager.coefficient_by_key(key)

    def coefficients_at(
        self, time: Time
    ) -> tuple[KeyCoefficientTime[C], KeyCoefficientTime[C]]:
        """Return the bracketing pair of coefficients around a time."""
        return self._manager.coefficients_at(time)

    def coefficients_in_range(
        self, start_time: Time, end_time: Time
    ) -> list[KeyCoefficientTime[C]]:
        return self._manager.coefficients_in_range(start_time, end_time)

    def coefficients(self) -> list[KeyCoefficientTime[C]]:
        """Return every slot in time order."""
        return self._manager.entries()

    def set_coefficient(self, key: Key, value: Any) -> None:
        """Replace the value stored under a key."""
        self._manager.set_coefficient_by_key(key, self._coerce_coefficient(value))

    def set_coefficients(self, values: Mapping[Key, Any]) -> None:
        """Replace several values at once."""
        self._manager.set_coefficients(
            {key: self._coerce_coefficient(value) for key, value in values.items()}
        )

    def remove_coefficient(self, key: Key) -> None:
        self._manager.remove_coefficient(key)

    def set_time_range(self, min_time: Time, max_time: Time) -> None:
        """Restrict the curve to a time range."""
        raise CurveNotImplementedError(
            f"{type(self).__name__} does not support set_time_range"
        )

    # Optimizer exchange

    def initialize_values(
        self, values: Values, keys: Iterable[Key] | None = None
    ) -> None:
        """Insert the current coefficients into an optimizer Values set.

        Args:
            values: Container to fill; a key it already holds is an error
            keys: Keys to export, or None for every coefficient
        """
        selected: list[Key] = self._manager.keys() if keys is None else list(keys)
        for key in selected:
            values.insert(key, self._manager.coefficient_by_key(key))

    def update_from_values(self, values: Values) -> None:
        """Overwrite coefficients whose keys appear in an optimizer Values set.

        Times and keys are unchanged. Keys the container lacks are left alone.
        """
        updates: dict[Key, C] = {
            key: self._coerce_coefficient(values.at(key))
            for key in self._manager.keys()
            if values.exists(key)
        }
        self._manager.set_coefficients(updates)
        _LOG.info(
            "Updated %d of %d coefficients of %s from optimizer values",
            len(updates),
            len(self),
            type(self).__name__,
        )

    # Debugging and persistence

    def describe(self, label: str = "") -> str:
        """Return a multi-line dump of key, time and value per coefficient."""
        lines: list[str] = []
        if label:
            lines.append(label)
        lines.append(f"{type(self).__name__} with {len(self)} coefficients")
        for slot in self._manager:
            row: NDArray[np.float64] = self._coefficient_to_row(slot.coefficient)
            values: str = " ".join(f"{value:.6g}" for value in row)
            lines.append(f"  key {slot.key} time {slot.time}: {values}")
        return "\n".join(lines)

    def save_curve_times_and_values(self, path: str | os.PathLike[str]) -> None:
        """Write one line per coefficient with its time and value."""
        slots: list[KeyCoefficientTime[C]] = self._manager.entries()
        save_curve_times_and_values(
            path,
            [slot.time for slot in slots],
            [self._coefficient_to_row(slot.coefficient) for slot in slots],
            float_format=self._params.storage.float_format,
            atomic_write=self._params.storage.atomic_write,
        )
        _LOG.info("Saved %d coefficients to %s", len(slots), os.fspath(path))
