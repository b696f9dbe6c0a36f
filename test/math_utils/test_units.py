################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for numeric helpers."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_curves.math_utils.units import as_vector
from oasis_curves.math_utils.units import assert_finite


def test_as_vector_copies() -> None:
    """Checks as_vector returns an independent float64 copy."""
    source: NDArray[np.float64] = np.array([1.0, 2.0, 3.0], dtype=float)
    vec: NDArray[np.float64] = as_vector(source, 3, "source")
    source[0] = 10.0
    assert vec.dtype == np.float64
    assert np.allclose(vec, [1.0, 2.0, 3.0])


def test_as_vector_rejects_bad_input() -> None:
    """Checks shape and finiteness validation."""
    with pytest.raises(ValueError):
        as_vector(np.zeros(2, dtype=float), 3, "short")
    with pytest.raises(ValueError):
        as_vector(np.array([0.0, np.nan, 0.0], dtype=float), 3, "nan")


def test_assert_finite() -> None:
    """Checks infinities are rejected."""
    assert_finite(np.ones(3, dtype=float), "ones")
    with pytest.raises(ValueError):
        assert_finite(np.array([np.inf], dtype=float), "inf")
