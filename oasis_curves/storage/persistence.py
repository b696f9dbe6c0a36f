################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Persistence helpers for curve parameter files and curve dumps."""

from __future__ import annotations

import os
from pathlib import Path

from oasis_curves.config.curve_params import CurveParams
from oasis_curves.storage.yaml_format import CurveYamlError
from oasis_curves.storage.yaml_format import dumps_yaml
from oasis_curves.storage.yaml_format import loads_yaml


class CurvePersistenceError(Exception):
    """Raised when loading or saving curve files fails."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def write_text(
    path: str | os.PathLike[str], text: str, *, atomic_write: bool = True
) -> None:
    """Write text to a file, optionally through a temporary file and rename."""
    path_obj: Path = Path(os.fspath(path))
    try:
        path_obj.parent.mkdir(parents=True, exist_ok=True)
        if atomic_write:
            tmp_name: str = f".{path_obj.name}.tmp.{os.getpid()}"
            tmp_path: Path = path_obj.with_name(tmp_name)
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path_obj)
        else:
            path_obj.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise CurvePersistenceError(f"Failed to write {path_obj}") from exc


def read_text(path: str | os.PathLike[str]) -> str:
    """Read a whole text file."""
    path_obj: Path = Path(os.fspath(path))
    try:
        return path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise CurvePersistenceError(f"Failed to read {path_obj}") from exc


def save_params(
    path: str | os.PathLike[str],
    params: CurveParams,
    *,
    atomic_write: bool = True,
) -> None:
    """Save curve parameters to disk as YAML."""
    if not is_yaml_path(path):
        raise CurvePersistenceError("Path must end with .yaml or .yml")
    write_text(path, dumps_yaml(params), atomic_write=atomic_write)


def load_params(path: str | os.PathLike[str]) -> CurveParams:
    """Load curve parameters from a YAML file."""
    if not is_yaml_path(path):
        raise CurvePersistenceError("Path must end with .yaml or .yml")
    text: str = read_text(path)
    try:
        return loads_yaml(text)
    except CurveYamlError as exc:
        raise CurvePersistenceError(
            f"Failed to load curve parameters from {os.fspath(path)}"
        ) from exc
