################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Flat text dumps of curve times and coefficient values.

Each line holds one coefficient: the integer time followed by the value
components separated by spaces. SE(3) values are written as
px py pz qw qx qy qz, and Hermite values append the six tangent components.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from oasis_curves.curve_types.hermite_coefficient import HermiteCoefficient
from oasis_curves.math_utils.quat import Quaternion
from oasis_curves.math_utils.se3 import SE3
from oasis_curves.storage.persistence import read_text
from oasis_curves.storage.persistence import write_text
from oasis_curves.timing.time_base import Time


# Number of columns after the time for an SE(3) value
SE3_ROW_SIZE: int = 7

# Number of columns after the time for a Hermite value
HERMITE_ROW_SIZE: int = 13


class CurveTextError(Exception):
    """Raised when a curve dump cannot be parsed."""


def se3_to_row(transformation: SE3) -> NDArray[np.float64]:
    """Return [px, py, pz, qw, qx, qy, qz]."""
    return np.concatenate((transformation.p, transformation.quaternion().to_wxyz()))


def se3_from_row(row: NDArray[np.float64]) -> SE3:
    """Build a transform from [px, py, pz, qw, qx, qy, qz]."""
    if row.shape != (SE3_ROW_SIZE,):
        raise CurveTextError(f"SE3 rows need {SE3_ROW_SIZE} values")
    return SE3.from_quat_translation(Quaternion(row[3:7]), row[0:3])


def hermite_to_row(coefficient: HermiteCoefficient) -> NDArray[np.float64]:
    """Return the pose columns followed by the six tangent columns."""
    return np.concatenate(
        (se3_to_row(coefficient.transformation), coefficient.velocity)
    )


def hermite_from_row(row: NDArray[np.float64]) -> HermiteCoefficient:
    """Build a Hermite coefficient from pose and tangent columns."""
    if row.shape != (HERMITE_ROW_SIZE,):
        raise CurveTextError(f"Hermite rows need {HERMITE_ROW_SIZE} values")
    return HermiteCoefficient(se3_from_row(row[:SE3_ROW_SIZE]), row[SE3_ROW_SIZE:])


def format_curve(
    times: Sequence[Time],
    rows: Sequence[NDArray[np.float64]],
    float_format: str = "%.17g",
) -> str:
    """Render one line per coefficient."""
    if len(times) != len(rows):
        raise CurveTextError("Need one row per time")
    lines: list[str] = []
    for time, row in zip(times, rows):
        columns: list[str] = [str(int(time))]
        columns.extend(float_format % float(value) for value in row)
        lines.append(" ".join(columns))
    return "".join(f"{line}\n" for line in lines)


def parse_curve(text: str) -> tuple[list[Time], list[NDArray[np.float64]]]:
    """Parse a dump back into times and value rows.

    Blank lines are skipped. Every row must have the same number of columns.
    """
    times: list[Time] = []
    rows: list[NDArray[np.float64]] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        tokens: list[str] = line.split()
        if not tokens:
            continue
        try:
            time: Time = int(tokens[0])
            row: NDArray[np.float64] = np.array(
                [float(token) for token in tokens[1:]], dtype=np.float64
            )
        except ValueError as exc:
            raise CurveTextError(f"Malformed curve line {line_number}") from exc
        if rows and row.shape != rows[0].shape:
            raise CurveTextError(
                f"Line {line_number} has {row.size} values, expected {rows[0].size}"
            )
        times.append(time)
        rows.append(row)
    return times, rows


def save_curve_times_and_values(
    path: str | os.PathLike[str],
    times: Sequence[Time],
    rows: Sequence[NDArray[np.float64]],
    *,
    float_format: str = "%.17g",
    atomic_write: bool = True,
) -> None:
    """Write a curve dump to disk."""
    write_text(path, format_curve(times, rows, float_format), atomic_write=atomic_write)


def load_curve_times_and_values(
    path: str | os.PathLike[str],
) -> tuple[list[Time], list[NDArray[np.float64]]]:
    """Read a curve dump from disk."""
    return parse_curve(read_text(path))
