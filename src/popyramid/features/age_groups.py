"""
src/popyramid/features/age_groups.py

Custom age-group aggregation.

Purpose:
- Build AgeRangeConfig buckets (explicitly, from presets, or from a "0-19,20-64,65+" spec).
- Regroup a canonical PopulationData into those buckets by summing.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import replace
from typing import Iterable, Mapping, Sequence

import numpy as np

from popyramid.common.types import AgeRangeConfig, PopulationAgeGroup, PopulationData

GROUPED_SUFFIX = " (grouped)"

PRESET_GROUPS: dict[str, tuple[tuple[int, int | None], ...]] = {
    "three_generations": ((0, 19), (20, 64), (65, None)),
    "five_groups": ((0, 14), (15, 29), (30, 49), (50, 69), (70, None)),
    "decades": ((0, 9), (10, 19), (20, 29), (30, 39), (40, 49), (50, 59), (60, 69), (70, 79), (80, None)),
}

_RANGE_TOKEN = re.compile(r"^\s*(-?\d+)\s*(?:(\+)|-\s*(\d+))?\s*$")


def generate_range_label(start: int, end: int | None) -> str:
    if end is None:
        return f"{start}+"
    if start == end:
        return f"{start}"
    return f"{start}-{end}"


def create_age_range_config(start: int, end: int | None) -> AgeRangeConfig:
    return AgeRangeConfig(
        id=uuid.uuid4().hex,
        start=int(start),
        end=None if end is None else int(end),
        label=generate_range_label(int(start), None if end is None else int(end)),
    )


def parse_range_spec(spec: str | Iterable[str]) -> list[AgeRangeConfig]:
    """
    Parse "0-19,20-64,65+" (or an iterable of such tokens) into range configs.

    A bare number ("5") is a single-age range. Order and overlaps are not
    checked here; run validate_age_groups on the result.
    """
    tokens = spec.split(",") if isinstance(spec, str) else list(spec)
    out: list[AgeRangeConfig] = []
    for token in tokens:
        token = str(token)
        if not token.strip():
            continue
        m = _RANGE_TOKEN.match(token)
        if not m:
            raise ValueError(f"Invalid age range {token!r}; expected 'a-b', 'a+' or 'a'")
        start = int(m.group(1))
        if m.group(2):
            end: int | None = None
        elif m.group(3) is not None:
            end = int(m.group(3))
        else:
            end = start
        out.append(create_age_range_config(start, end))
    return out


def preset_ranges(name: str, extra_presets: Mapping[str, Sequence[str]] | None = None) -> list[AgeRangeConfig]:
    """Fresh range configs for a built-in preset (or one defined in config)."""
    if extra_presets and name in extra_presets:
        return parse_range_spec(extra_presets[name])
    if name not in PRESET_GROUPS:
        known = sorted(set(PRESET_GROUPS) | set(extra_presets or {}))
        raise KeyError(f"Unknown preset {name!r}. Known: {known}")
    return [create_age_range_config(a, b) for a, b in PRESET_GROUPS[name]]


def _in_range(ages: np.ndarray, r: AgeRangeConfig) -> np.ndarray:
    mask = ages >= r.start
    if r.end is not None:
        mask &= ages <= r.end
    return mask


def aggregate_by_age_groups(data: PopulationData, ranges: Sequence[AgeRangeConfig]) -> PopulationData:
    """
    Regroup data into the given ranges (processed in ascending start order).

    Each output group sums every source group whose age_numeric lies in
    [start, end] (or [start, inf) for open ranges) and takes age_numeric =
    start. Source groups outside every range are left out. The input is not
    modified; validation is the caller's job (validate_age_groups).
    """
    ordered = sorted(ranges, key=lambda r: r.start)

    ages = np.array([g.age_numeric for g in data.age_groups], dtype=float)
    male = np.array([g.male for g in data.age_groups], dtype=float)
    female = np.array([g.female for g in data.age_groups], dtype=float)

    groups = []
    for r in ordered:
        mask = _in_range(ages, r)
        groups.append(
            PopulationAgeGroup(
                age=r.label,
                age_numeric=r.start,
                male=float(male[mask].sum()),
                female=float(female[mask].sum()),
            )
        )

    title = data.title if data.title.endswith(GROUPED_SUFFIX) else f"{data.title}{GROUPED_SUFFIX}"
    return replace(data, title=title, age_groups=tuple(groups))
