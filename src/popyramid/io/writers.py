"""src/popyramid/io/writers.py"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_csv(df: pd.DataFrame, path: str | Path, *, index: bool = False) -> Path:
    """Write an age-group / summary table to CSV (parent folder is created)."""
    path = Path(path)
    ensure_parent_dir(path)
    df.to_csv(path, index=index)
    return path


def write_json(payload: dict[str, Any], path: str | Path) -> Path:
    """UTF-8 JSON without ASCII escaping, so Cyrillic titles stay readable."""
    path = Path(path)
    ensure_parent_dir(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False)
    return path


def read_json(path: str | Path) -> dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
