################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Process-wide issuance of coefficient keys."""

from __future__ import annotations

import itertools
from typing import Iterator

from oasis_curves.curve_types.key_coefficient_time import Key


class KeyGenerator:
    """Issue keys that are unique across every curve in the process.

    Keys increase monotonically and are never reused, so curves that share
    one optimizer problem never collide.
    """

    _counter: Iterator[int] = itertools.count(1)

    @classmethod
    def next_key(cls) -> Key:
        """Return a fresh key."""
        return next(cls._counter)

    @classmethod
    def next_keys(cls, count: int) -> list[Key]:
        """Return a list of fresh keys in increasing order."""
        return [cls.next_key() for _ in range(count)]
