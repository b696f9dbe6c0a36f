################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Failure taxonomy shared by the coefficient manager and the curves."""

from __future__ import annotations


class CurveError(Exception):
    """Base class for curve failures."""


class CurvePreconditionError(CurveError, ValueError):
    """Raised when a caller violates an input contract.

    Examples are mismatched input lengths, non-increasing or duplicate times,
    and unknown coefficient keys.
    """


class CurveDomainError(CurveError, ValueError):
    """Raised when a query falls outside the range the curve can answer."""


class CurveNotImplementedError(CurveError, NotImplementedError):
    """Raised when a curve does not support the requested capability."""
