################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for prior factors and the factor graph."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.estimation.factors import FactorError
from oasis_curves.estimation.factors import FactorGraph
from oasis_curves.estimation.factors import PriorFactor
from oasis_curves.estimation.factors import local_coordinates
from oasis_curves.estimation.values import Values
from oasis_curves.math_utils.se3 import SE3


def test_local_coordinates_se3() -> None:
    """Checks SE(3) offsets are expressed in the prior frame."""
    origin: SE3 = SE3.from_rotvec_translation(
        np.array([0.0, 0.0, np.pi / 2.0], dtype=float),
        np.array([1.0, 0.0, 0.0], dtype=float),
    )
    value: SE3 = origin * SE3.from_rotvec_translation(
        np.array([0.1, 0.0, 0.0], dtype=float), np.array([0.5, 0.0, 0.0], dtype=float)
    )
    offset: NDArray[np.float64] = local_coordinates(origin, value)
    assert np.allclose(offset, [0.5, 0.0, 0.0, 0.1, 0.0, 0.0])
    assert np.allclose(local_coordinates(origin, origin), np.zeros(6))


def test_local_coordinates_hermite_and_vector() -> None:
    """Checks Hermite offsets append the tangent difference."""
    origin: HermiteCoefficient = HermiteCoefficient.at_rest(SE3.identity())
    value: HermiteCoefficient = origin.with_velocity(np.arange(6, dtype=float))
    offset: NDArray[np.float64] = local_coordinates(origin, value)
    assert offset.shape == (12,)
    assert np.allclose(offset[6:], np.arange(6))

    vector_offset: NDArray[np.float64] = local_coordinates(
        np.array([1.0, 2.0]), np.array([1.5, 1.0])
    )
    assert np.allclose(vector_offset, [0.5, -1.0])
    with pytest.raises(FactorError):
        local_coordinates(np.zeros(2), np.zeros(3))
    with pytest.raises(FactorError):
        local_coordinates(SE3.identity(), np.zeros(6))


def test_soft_prior_error() -> None:
    """Checks the whitened error and cost of a soft prior."""
    factor: PriorFactor = PriorFactor(5, np.zeros(2), np.array([0.5, 2.0]))
    values: Values = Values()
    values.insert(5, np.array([1.0, 2.0]))
    assert not factor.is_constrained()
    assert np.allclose(factor.whitened_error(values), [2.0, 1.0])
    assert factor.error(values) == pytest.approx(2.5)


def test_constrained_prior() -> None:
    """Checks a prior without sigmas is a hard constraint."""
    factor: PriorFactor = PriorFactor(5, np.zeros(2))
    values: Values = Values()
    values.insert(5, np.array([3.0, 4.0]))
    assert factor.is_constrained()
    assert factor.error(values) == 0.0
    with pytest.raises(FactorError):
        factor.whitened_error(values)


def test_invalid_sigmas() -> None:
    """Checks the noise model is validated."""
    with pytest.raises(FactorError):
        PriorFactor(1, np.zeros(2), np.array([1.0, 0.0]))
    with pytest.raises(FactorError):
        PriorFactor(1, np.zeros(2), np.array([1.0, np.inf]))
    factor: PriorFactor = PriorFactor(1, np.zeros(2), np.ones(3))
    values: Values = Values()
    values.insert(1, np.zeros(2))
    with pytest.raises(FactorError):
        factor.error(values)


def test_factor_graph_totals() -> None:
    """Checks the graph sums soft costs and reports constraint violations."""
    graph: FactorGraph = FactorGraph()
    graph.add(PriorFactor(1, np.zeros(1), np.array([1.0])))
    graph.add(PriorFactor(2, np.zeros(2)))
    graph.add(PriorFactor(1, np.ones(1), np.array([1.0])))
    values: Values = Values()
    values.insert(1, np.array([2.0]))
    values.insert(2, np.array([0.0, 0.3]))

    assert len(graph) == 3
    assert graph.keys() == [1, 2]
    assert graph[1].is_constrained()
    assert graph.total_error(values) == pytest.approx(0.5 * 4.0 + 0.5 * 1.0)
    assert graph.constraint_violation(values) == pytest.approx(0.3)
    assert [factor.key for factor in graph] == [1, 2, 1]
