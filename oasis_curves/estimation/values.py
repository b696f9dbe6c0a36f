################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Key to value container exchanged with an optimizer."""

from __future__ import annotations

from typing import Any
from typing import Iterator

from oasis_curves.curve_types.key_coefficient_time import Key


class ValuesError(KeyError):
    """Raised when a key is missing from or duplicated in a Values set."""


class Values:
    """Mapping from coefficient keys to optimizer variable values.

    Insertion order is kept so that keys() returns keys in the order they
    were first added.
    """

    def __init__(self) -> None:
        self._values: dict[Key, Any] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[Key]:
        return iter(self._values)

    def insert(self, key: Key, value: Any) -> None:
        """Add a value under a new key."""
        if key in self._values:
            raise ValuesError(f"Key {key} already has a value")
        self._values[key] = value

    def update(self, key: Key, value: Any) -> None:
        """Replace the value under an existing key."""
        if key not in self._values:
            raise ValuesError(f"Key {key} has no value to update")
        self._values[key] = value

    def insert_or_assign(self, key: Key, value: Any) -> None:
        """Set the value under a key whether or not it exists."""
        self._values[key] = value

    def at(self, key: Key) -> Any:
        """Return the value stored under a key."""
        try:
            return self._values[key]
        except KeyError as exc:
            raise ValuesError(f"Key {key} has no value") from exc

    def exists(self, key: Key) -> bool:
        """Return True if a value is stored under the key."""
        return key in self._values

    def erase(self, key: Key) -> None:
        """Remove the value under a key."""
        if key not in self._values:
            raise ValuesError(f"Key {key} has no value to erase")
        del self._values[key]

    def keys(self) -> list[Key]:
        """Return the keys in insertion order."""
        return list(self._values)
