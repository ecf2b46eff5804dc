"""
src/popyramid/reporting/export.py

Compact JSON representation of the canonical model (used for embedding and
sharing). Age groups become [age_numeric, male, female] triples; labels are
rebuilt from age_numeric on expansion, so non-canonical labels such as
"20-29" or "Y_LT1"-derived ones do not survive a round trip.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from popyramid.common.types import PopulationAgeGroup, PopulationData, TimeSeriesPopulationData
from popyramid.io.writers import read_json, write_json

CompactAgeGroup = list[float]
OPEN_LABEL_FROM = 100


def _compact_groups(groups) -> list[CompactAgeGroup]:
    return [[g.age_numeric, g.male, g.female] for g in groups]


def _expand_label(age_numeric: int) -> str:
    return str(age_numeric) if age_numeric < OPEN_LABEL_FROM else f"{age_numeric}+"


def _expand_groups(compact: list[CompactAgeGroup]) -> tuple[PopulationAgeGroup, ...]:
    return tuple(
        PopulationAgeGroup(age=_expand_label(int(a)), age_numeric=int(a), male=float(m), female=float(f))
        for a, m, f in compact
    )


def compact_population_data(data: PopulationData) -> dict[str, Any]:
    out: dict[str, Any] = {
        "title": data.title,
        "date": data.date,
        "source": data.source,
        "ageGroups": _compact_groups(data.age_groups),
    }
    if data.has_gender_data is False:
        out["hasGenderData"] = False
    return out


def expand_population_data(compact: dict[str, Any]) -> PopulationData:
    return PopulationData(
        title=compact.get("title", ""),
        date=compact.get("date"),
        source=compact.get("source"),
        age_groups=_expand_groups(compact.get("ageGroups", [])),
        has_gender_data=False if compact.get("hasGenderData") is False else None,
    )


def compact_time_series_data(series: TimeSeriesPopulationData) -> dict[str, Any]:
    return {
        "years": list(series.years),
        # JSON object keys are strings
        "dataByYear": {str(y): _compact_groups(series.data_by_year[y]) for y in series.years},
    }


def expand_time_series_data(compact: dict[str, Any], title: str) -> TimeSeriesPopulationData:
    years = [int(y) for y in compact.get("years", [])]
    by_year = compact.get("dataByYear", {})
    return TimeSeriesPopulationData(
        title=title,
        years=tuple(years),
        data_by_year={y: _expand_groups(by_year.get(str(y), by_year.get(y, []))) for y in years},
    )


def write_compact_json(
    path: Path,
    data: PopulationData,
    time_series: TimeSeriesPopulationData | None = None,
) -> Path:
    """Write {"data": ..., "timeSeriesData": ...} (ensures parent folder exists)."""
    payload: dict[str, Any] = {"data": compact_population_data(data)}
    if time_series is not None:
        payload["timeSeriesData"] = compact_time_series_data(time_series)
    return write_json(payload, path)


def read_compact_json(path: Path) -> tuple[PopulationData, TimeSeriesPopulationData | None]:
    payload = read_json(path)
    data = expand_population_data(payload["data"])
    ts = payload.get("timeSeriesData")
    return data, (expand_time_series_data(ts, data.title) if ts else None)
