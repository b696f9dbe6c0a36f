################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Continuous-time trajectory curves over sparse, keyed coefficients."""

from __future__ import annotations

from oasis_curves.config.curve_params import CurveParams
from oasis_curves.curve_errors import CurveDomainError
from oasis_curves.curve_errors import CurveError
from oasis_curves.curve_errors import CurveNotImplementedError
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.curves.cubic_hermite_se3_curve import CubicHermiteSE3Curve
from oasis_curves.curves.discrete_se3_curve import DiscreteSE3Curve
from oasis_curves.curves.linear_interpolation_vector_space_curve import (
    LinearInterpolationVectorSpaceCurve,
)
from oasis_curves.math_utils.quat import Quaternion
from oasis_curves.math_utils.se3 import SE3


__all__ = [
    "CubicHermiteSE3Curve",
    "CurveDomainError",
    "CurveError",
    "CurveNotImplementedError",
    "CurveParams",
    "CurvePreconditionError",
    "DiscreteSE3Curve",
    "HermiteCoefficient",
    "LinearInterpolationVectorSpaceCurve",
    "Quaternion",
    "SE3",
]
