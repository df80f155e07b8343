"""Persistence helpers for sweep configurations and result tables."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pandas as pd

from .config import SweepConfig
from .exceptions import InvalidParameter

__all__ = [
    "save_config_json",
    "load_config_json",
    "save_table_csv",
    "load_table_csv",
]


def _nan_to_none(x):
    if isinstance(x, float) and np.isnan(x):
        return None
    if isinstance(x, np.generic):
        return _nan_to_none(x.item())
    return x


def save_config_json(config: SweepConfig, path: str | Path) -> None:
    """Persist every option of ``config`` to a JSON file."""
    payload = {key: _nan_to_none(value) for key, value in config.to_dict().items()}
    Path(path).write_text(json.dumps(payload, indent=2))


def load_config_json(path: str | Path) -> SweepConfig:
    """Load a configuration written by :func:`save_config_json` (or by hand)."""
    raw = json.loads(Path(path).read_text())
    if not isinstance(raw, dict):
        raise InvalidParameter(f"{path}: expected a JSON object of options.")
    return SweepConfig.from_dict(raw)


def save_table_csv(table: pd.DataFrame, path: str | Path) -> Path:
    """
    Write a result table as CSV.

    NaN cells are written empty and floats with ``repr`` precision, so two
    identical tables always produce byte-identical files.
    """
    out = Path(path)
    table.to_csv(out, index=False, na_rep="", float_format="%.17g")
    return out


def load_table_csv(path: str | Path) -> pd.DataFrame:
    """Read a table written by :func:`save_table_csv`; empty cells come back as NaN."""
    return pd.read_csv(Path(path))
