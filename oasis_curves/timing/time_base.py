################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Integer time validation for curve coefficients."""

from __future__ import annotations

import numbers
from collections.abc import Sequence

from oasis_curves.curve_errors import CurvePreconditionError


# Curve time in integer units, typically nanoseconds
Time = int


def require_time(value: object, name: str = "time") -> Time:
    """Return the value as an integer time, rejecting non-integral input."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise CurvePreconditionError(f"{name} must be an integer, got {value!r}")
    return int(value)


def require_times(values: Sequence[object], name: str = "times") -> list[Time]:
    """Return a list of integer times."""
    return [
        require_time(value, f"{name}[{index}]") for index, value in enumerate(values)
    ]


def validate_strictly_increasing(times: Sequence[Time], name: str = "times") -> None:
    """Require each time to be greater than the one before it."""
    for index in range(1, len(times)):
        if times[index] <= times[index - 1]:
            raise CurvePreconditionError(
                f"{name} must be strictly increasing "
                f"({times[index - 1]} then {times[index]} at index {index})"
            )


def validate_matching_lengths(
    times: Sequence[object], values: Sequence[object]
) -> None:
    """Require one value per time."""
    if len(times) != len(values):
        raise CurvePreconditionError(
            f"Got {len(times)} times but {len(values)} values"
        )
