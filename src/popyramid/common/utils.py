"""
src/popyramid/common/utils.py

popyramid.common.utils

Small utility helpers used across the codebase.
"""

from __future__ import annotations

import math
import re
from typing import Any

_DIGITS = re.compile(r"(\d+)")


def is_missing(value: Any) -> bool:
    """True for None and float NaN (pandas' empty-cell marker)."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def first_int(text: str) -> int | None:
    """Return the first run of digits in text as an int, or None."""
    m = _DIGITS.search(text)
    return int(m.group(1)) if m else None


def safe_int(value: Any, default: int | None = None) -> int | None:
    """Best-effort int conversion with fallback (accepts 2020, 2020.0, "2020")."""
    if is_missing(value):
        return default
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default
