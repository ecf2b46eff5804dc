"""src/popyramid/reporting/statistics.py"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from popyramid.common.types import PopulationAgeGroup

ScaleMode = Literal["auto", "fit", "custom"]

FALLBACK_SCALE = 100.0
FIT_HEADROOM = 1.1

_STANDARD_STEPS = (1.0, 2.0, 5.0, 10.0)
_TIGHT_STEPS = (1.2, 1.5, 2.0, 2.5, 3.0, 4.0, 5.0, 6.0, 8.0, 10.0)


@dataclass(frozen=True)
class Totals:
    male: float
    female: float
    total: float


def calculate_totals(age_groups: Sequence[PopulationAgeGroup]) -> Totals:
    male = float(sum(g.male for g in age_groups))
    female = float(sum(g.female for g in age_groups))
    return Totals(male=male, female=female, total=male + female)


def calculate_median_age(age_groups: Sequence[PopulationAgeGroup]) -> int:
    """
    Discrete median: age_numeric of the first group (ascending) whose
    cumulative male+female count reaches half the grand total.
    No interpolation inside a bucket; 0 for an empty sequence.
    """
    if not age_groups:
        return 0
    cumulative = np.cumsum([g.male + g.female for g in age_groups], dtype=float)
    half = cumulative[-1] / 2.0
    idx = int(np.searchsorted(cumulative, half, side="left"))
    idx = min(idx, len(age_groups) - 1)
    return int(age_groups[idx].age_numeric)


def find_median_age_index(age_groups: Sequence[PopulationAgeGroup], median_age: float) -> int:
    """
    Index of the group that should carry the median marker.

    Pass the median of the original (ungrouped) data and the groups actually
    displayed: exact age_numeric match first, then the last group whose start
    is <= median (next group starts above it), else the last group.
    Returns -1 for an empty sequence.
    """
    for i, g in enumerate(age_groups):
        if g.age_numeric == median_age:
            return i

    for i in range(len(age_groups)):
        nxt = age_groups[i + 1] if i + 1 < len(age_groups) else None
        if nxt is None or nxt.age_numeric > median_age:
            return i

    return len(age_groups) - 1


def nice_scale(value: float, tight: bool = False) -> float:
    """
    Round an axis maximum up to a human-friendly number.

    Standard: {1, 2, 5, 10} x 10^k  (947 -> 1000, 2300 -> 5000).
    Tight: value x 1.1 first, then {1.2, 1.5, 2, 2.5, 3, 4, 5, 6, 8, 10} x 10^k.
    Zero (or a non-positive/non-finite value) gives 100.
    """
    if tight:
        value = value * FIT_HEADROOM
    if not math.isfinite(value) or value <= 0:
        return FALLBACK_SCALE

    magnitude = 10.0 ** math.floor(math.log10(value))
    normalized = value / magnitude
    steps = _TIGHT_STEPS if tight else _STANDARD_STEPS
    for s in steps:
        candidate = s * magnitude
        # second test guards against float noise in value / magnitude
        if normalized <= s and candidate >= value:
            return candidate
    return steps[0] * magnitude * 10.0


def to_percent(value: float, total: float) -> float:
    return (value / total) * 100.0 if total > 0 else 0.0


def max_value(age_groups: Sequence[PopulationAgeGroup]) -> float:
    """Largest single-sex count (the half-axis extent of a pyramid)."""
    return float(max((max(g.male, g.female) for g in age_groups), default=0.0))


def calculate_scale(mode: ScaleMode, data_max: float, custom_value: float | None = None) -> float:
    """Axis maximum for a scale mode: auto (nice), fit (tight + headroom), custom."""
    if mode == "fit":
        return nice_scale(data_max, tight=True)
    if mode == "custom":
        return float(custom_value) if custom_value else float(data_max)
    return nice_scale(data_max, tight=False)
