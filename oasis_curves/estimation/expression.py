################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Lazy expressions over optimizer keys.

An expression is a tree whose leaves are keys or constants and whose inner
nodes apply a function to the values of their children. Curves use them to
describe a value or derivative at a time in terms of the keys of the
coefficients that support it, so an optimizer can evaluate the same quantity
for any candidate Values set.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.estimation.values import Values


@dataclass(frozen=True)
class Expression:
    """Node of an expression tree.

    Attributes:
        key: Key read by a leaf node, None otherwise
        constant: Value of a constant node
        function: Function applied to the child values of an inner node
        children: Child expressions of an inner node
    """

    key: Key | None = None
    constant: Any = None
    function: Callable[..., Any] | None = None
    children: tuple["Expression", ...] = ()

    @staticmethod
    def leaf(key: Key) -> "Expression":
        """Return an expression that reads one key."""
        return Expression(key=key)

    @staticmethod
    def constant_value(value: Any) -> "Expression":
        """Return an expression that ignores the Values set."""
        return Expression(constant=value)

    @staticmethod
    def apply(function: Callable[..., Any], *children: "Expression") -> "Expression":
        """Return an expression that calls function on the child values."""
        return Expression(function=function, children=tuple(children))

    def is_leaf(self) -> bool:
        return self.key is not None

    def keys(self) -> list[Key]:
        """Return the distinct keys the expression reads, in first-use order."""
        found: list[Key] = []
        self._collect_keys(found)
        return found

    def evaluate(self, values: Values) -> Any:
        """Evaluate the expression for a Values set."""
        if self.key is not None:
            return values.at(self.key)
        if self.function is None:
            return self.constant
        return self.function(*(child.evaluate(values) for child in self.children))

    def _collect_keys(self, found: list[Key]) -> None:
        if self.key is not None:
            if self.key not in found:
                found.append(self.key)
            return
        for child in self.children:
            child._collect_keys(found)
