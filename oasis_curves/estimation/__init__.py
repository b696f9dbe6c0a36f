################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Types exchanged with an external nonlinear optimizer."""

from __future__ import annotations

from oasis_curves.estimation.expression import Expression
from oasis_curves.estimation.factors import FactorError
from oasis_curves.estimation.factors import FactorGraph
from oasis_curves.estimation.factors import PriorFactor
from oasis_curves.estimation.values import Values
from oasis_curves.estimation.values import ValuesError


__all__ = [
    "Expression",
    "FactorError",
    "FactorGraph",
    "PriorFactor",
    "Values",
    "ValuesError",
]
