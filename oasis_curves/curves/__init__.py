################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Trajectory curve facades."""

from __future__ import annotations

from oasis_curves.curves.cubic_hermite_se3_curve import CubicHermiteSE3Curve
from oasis_curves.curves.discrete_se3_curve import DiscreteSE3Curve
from oasis_curves.curves.linear_interpolation_vector_space_curve import (
    LinearInterpolationVectorSpaceCurve,
)


__all__ = [
    "CubicHermiteSE3Curve",
    "DiscreteSE3Curve",
    "LinearInterpolationVectorSpaceCurve",
]
