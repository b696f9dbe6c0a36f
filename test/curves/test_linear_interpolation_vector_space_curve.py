################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the piecewise linear vector-space curve."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.curve_errors import CurveDomainError
from oasis_curves.curve_errors import CurveNotImplementedError
from oasis_curves.curve_errors import CurvePreconditionError
from oasis_curves.curves.linear_interpolation_vector_space_curve import (
    LinearInterpolationVectorSpaceCurve,
)
from oasis_curves.estimation.values import Values
from oasis_curves.estimation.values import ValuesError
from oasis_curves.storage.text_format import load_curve_times_and_values


def _make_curve() -> LinearInterpolationVectorSpaceCurve:
    curve: LinearInterpolationVectorSpaceCurve = LinearInterpolationVectorSpaceCurve(2)
    curve.fit_curve(
        [0, 10, 20],
        [np.array([0.0, 0.0]), np.array([1.0, -1.0]), np.array([3.0, 1.0])],
    )
    return curve


def test_evaluate_between_and_at_samples() -> None:
    """Checks linear interpolation inside the curve range."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    assert np.allclose(curve.evaluate(5), [0.5, -0.5])
    assert np.allclose(curve.evaluate(15), [2.0, 0.0])
    assert np.allclose(curve.evaluate(10), [1.0, -1.0])
    assert np.allclose(curve.evaluate(20), [3.0, 1.0])
    assert curve.min_time() == 0
    assert curve.max_time() == 20


def test_evaluate_outside_range() -> None:
    """Checks queries outside the curve fail."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    with pytest.raises(CurveDomainError):
        curve.evaluate(21)
    with pytest.raises(CurveDomainError):
        LinearInterpolationVectorSpaceCurve(2).evaluate(0)
    with pytest.raises(CurvePreconditionError):
        curve.evaluate(5.0)  # type: ignore[arg-type]


def test_single_coefficient_curve() -> None:
    """Checks a one-sample curve answers only at its own time."""
    curve: LinearInterpolationVectorSpaceCurve = LinearInterpolationVectorSpaceCurve(3)
    curve.fit_curve([4], [np.array([1.0, 2.0, 3.0])])
    assert np.allclose(curve.evaluate(4), [1.0, 2.0, 3.0])
    with pytest.raises(CurveDomainError):
        curve.evaluate(5)


def test_fit_replaces_contents() -> None:
    """Checks fitting twice leaves only the second set of samples."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    first_keys: list[int] = curve.keys()
    new_keys: list[int] = curve.fit_curve([100, 200], [np.zeros(2), np.ones(2)])
    assert curve.times() == [100, 200]
    assert curve.keys() == new_keys
    assert not set(first_keys) & set(new_keys)


def test_empty_fit_keeps_contents() -> None:
    """Checks fitting no samples leaves the curve untouched."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    keys: list[int] = curve.keys()
    assert curve.fit_curve([], []) == []
    assert curve.keys() == keys
    assert curve.times() == [0, 10, 20]
    assert np.allclose(curve.evaluate(5), [0.5, -0.5])


def test_fit_rejects_bad_input() -> None:
    """Checks dimension, length and ordering validation."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    with pytest.raises(CurvePreconditionError):
        curve.fit_curve([0, 1], [np.zeros(3), np.zeros(3)])
    with pytest.raises(CurvePreconditionError):
        curve.fit_curve([0, 1], [np.zeros(2)])
    with pytest.raises(CurvePreconditionError):
        curve.fit_curve([1, 0], [np.zeros(2), np.zeros(2)])
    with pytest.raises(CurvePreconditionError):
        curve.fit_curve([0], [np.array([np.nan, 0.0])])
    assert curve.times() == [0, 10, 20]
    with pytest.raises(CurvePreconditionError):
        LinearInterpolationVectorSpaceCurve(0)


def test_unsupported_operations() -> None:
    """Checks extension, derivatives and range restriction are unavailable."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    with pytest.raises(CurveNotImplementedError):
        curve.extend([30], [np.zeros(2)])
    with pytest.raises(CurveNotImplementedError):
        curve.evaluate_derivative(5, 1)
    with pytest.raises(CurveNotImplementedError):
        curve.get_evaluator(5)
    with pytest.raises(CurveNotImplementedError):
        curve.set_time_range(0, 10)


def test_optimizer_round_trip() -> None:
    """Checks coefficients exchanged through Values come back unchanged."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    values: Values = Values()
    curve.initialize_values(values)
    assert values.keys() == curve.keys()

    before: list[NDArray[np.float64]] = [
        curve.coefficient_by_key(key) for key in curve.keys()
    ]
    curve.update_from_values(values)
    after: list[NDArray[np.float64]] = [
        curve.coefficient_by_key(key) for key in curve.keys()
    ]
    assert all(np.array_equal(a, b) for a, b in zip(before, after))

    with pytest.raises(ValuesError):
        curve.initialize_values(values)


def test_update_from_values_changes_selected_keys() -> None:
    """Checks written-back values replace only the keys present."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    keys: list[int] = curve.keys()
    values: Values = Values()
    curve.initialize_values(values, [keys[1]])
    assert values.keys() == [keys[1]]
    values.update(keys[1], np.array([5.0, 5.0]))
    values.insert(10**9, np.array([7.0, 7.0]))

    curve.update_from_values(values)
    assert np.allclose(curve.evaluate(10), [5.0, 5.0])
    assert np.allclose(curve.evaluate(0), [0.0, 0.0])
    assert curve.times() == [0, 10, 20]


def test_coefficient_editing() -> None:
    """Checks key-based edits and removal."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    keys: list[int] = curve.keys()
    curve.set_coefficient(keys[0], [2.0, 2.0])
    assert np.allclose(curve.evaluate(0), [2.0, 2.0])
    with pytest.raises(CurvePreconditionError):
        curve.set_coefficient(keys[0], [1.0])

    curve.remove_coefficient(keys[1])
    assert curve.keys() == [keys[0], keys[2]]
    assert np.allclose(curve.evaluate(10), [2.5, 1.5])
    assert curve.time_at_key(keys[2]) == 20

    curve.clear()
    assert curve.is_empty()
    assert curve.size() == 0


def test_describe_and_dump(tmp_path: Path) -> None:
    """Checks the debug description and the text dump."""
    curve: LinearInterpolationVectorSpaceCurve = _make_curve()
    text: str = curve.describe("trajectory")
    lines: list[str] = text.splitlines()
    assert lines[0] == "trajectory"
    assert lines[1] == "LinearInterpolationVectorSpaceCurve with 3 coefficients"
    assert len(lines) == 5
    assert str(curve) == curve.describe()

    path: Path = tmp_path / "vector.txt"
    curve.save_curve_times_and_values(path)
    times, rows = load_curve_times_and_values(path)
    assert times == [0, 10, 20]
    assert np.allclose(rows[2], [3.0, 1.0])
