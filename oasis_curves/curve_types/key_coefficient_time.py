################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Stored coefficient slot with its key and time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic
from typing import TypeVar


# Opaque identifier the optimizer uses to name a coefficient
Key = int

C = TypeVar("C")


@dataclass(frozen=True)
class KeyCoefficientTime(Generic[C]):
    """One coefficient slot of a curve.

    Attributes:
        key: Stable key of the slot, unchanged by edits elsewhere in the curve
        time: Integer time of the coefficient
        coefficient: Value of the coefficient algebra, replaced wholesale
    """

    key: Key
    time: int
    coefficient: C
