"""Seeding and configuration-file helpers shared by the scripts."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

import numpy as np

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    tomllib = None  # type: ignore


def set_seed(seed: int = 0) -> None:
    """Set random seed for reproducibility (global numpy RNG)."""
    np.random.seed(seed)


def load_params(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Load game options from JSON or TOML.

    The returned mapping is meant for ``GameOptions.from_mapping``. TOML
    needs the standard-library ``tomllib`` (Python 3.11+).
    """
    path = str(path)
    with open(path, "rb") as fh:
        data = fh.read()
    suffix = Path(path).suffix.lower()
    if suffix in {".json", ""}:
        return json.loads(data.decode("utf-8"))
    if suffix in {".toml", ".tml"}:
        if tomllib is None:
            raise RuntimeError("tomllib is unavailable; cannot parse TOML files")
        return tomllib.loads(data.decode("utf-8"))
    raise ValueError(f"Unsupported parameter file format: {suffix}")
