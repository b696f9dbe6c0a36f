################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Coefficient types stored by trajectory curves."""

from __future__ import annotations

from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curve_types.key_coefficient_time import Key
from oasis_curves.curve_types.key_coefficient_time import KeyCoefficientTime


__all__ = [
    "HermiteCoefficient",
    "Key",
    "KeyCoefficientTime",
]
