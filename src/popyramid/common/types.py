"""
src/popyramid/common/types.py

Canonical population model shared by every stage of the pipeline.

All entities are frozen value objects: consumers that need a modified view
build a new value (see dataclasses.replace) instead of mutating in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import pandas as pd

from popyramid.common.errors import ErrorCode


class DataFormat(str, Enum):
    SIMPLE = "simple"
    SIMPLE_TOTAL = "simple-total"
    TIMESERIES = "timeseries"
    TIMESERIES_TOTAL = "timeseries-total"
    EUROSTAT = "eurostat"
    UNKNOWN = "unknown"

    @property
    def is_total_only(self) -> bool:
        return self in (DataFormat.SIMPLE_TOTAL, DataFormat.TIMESERIES_TOTAL)

    @property
    def is_time_series(self) -> bool:
        return self in (DataFormat.TIMESERIES, DataFormat.TIMESERIES_TOTAL, DataFormat.EUROSTAT)


class FileKind(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"
    XLS = "xls"

    @property
    def is_spreadsheet(self) -> bool:
        return self is not FileKind.CSV

    @classmethod
    def from_path(cls, path: str | Path) -> "FileKind | None":
        suffix = Path(path).suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            return None


@dataclass(frozen=True)
class PopulationAgeGroup:
    age: str
    age_numeric: int
    male: float
    female: float

    @property
    def total(self) -> float:
        return self.male + self.female


AgeGroups = tuple[PopulationAgeGroup, ...]


def sort_age_groups(groups: Iterable[PopulationAgeGroup]) -> AgeGroups:
    """Stable ascending sort by age_numeric."""
    return tuple(sorted(groups, key=lambda g: g.age_numeric))


@dataclass(frozen=True)
class PopulationData:
    """One population snapshot (a single year or an undated table)."""

    title: str
    age_groups: AgeGroups = ()
    date: str | None = None
    source: str | None = None
    has_gender_data: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "age_groups", tuple(self.age_groups))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(g.age, g.age_numeric, g.male, g.female) for g in self.age_groups],
            columns=["Age", "Age_Numeric", "Male", "Female"],
        )


@dataclass(frozen=True)
class TimeSeriesPopulationData:
    """A family of snapshots indexed by year; `years` is the iteration order."""

    title: str
    years: tuple[int, ...]
    data_by_year: Mapping[int, AgeGroups]
    source: str | None = None
    geo_code: str | None = None
    has_gender_data: bool | None = None

    def __post_init__(self) -> None:
        years = tuple(sorted({int(y) for y in self.years}))
        frozen = {y: tuple(self.data_by_year.get(y, ())) for y in years}
        object.__setattr__(self, "years", years)
        object.__setattr__(self, "data_by_year", MappingProxyType(frozen))

    def snapshot(self, year: int) -> PopulationData:
        if year not in self.data_by_year:
            raise KeyError(f"Year {year} not in time series. Available: {list(self.years)}")
        return PopulationData(
            title=self.title,
            age_groups=self.data_by_year[year],
            date=str(year),
            source=self.source,
            has_gender_data=self.has_gender_data,
        )

    def latest(self) -> PopulationData:
        if not self.years:
            return PopulationData(
                title=self.title,
                source=self.source,
                has_gender_data=self.has_gender_data,
            )
        return self.snapshot(self.years[-1])


@dataclass(frozen=True)
class AgeRangeConfig:
    """User-defined aggregation bucket; `end=None` means open above."""

    id: str
    start: int
    end: int | None
    label: str


@dataclass(frozen=True)
class ParseResult:
    success: bool
    data: PopulationData | None = None
    time_series_data: TimeSeriesPopulationData | None = None
    detected_format: DataFormat | None = None
    error: ErrorCode | None = field(default=None)

    @classmethod
    def ok(
        cls,
        data: PopulationData,
        detected_format: DataFormat,
        time_series_data: TimeSeriesPopulationData | None = None,
    ) -> "ParseResult":
        return cls(success=True, data=data, time_series_data=time_series_data, detected_format=detected_format)

    @classmethod
    def failed(cls, code: ErrorCode) -> "ParseResult":
        return cls(success=False, error=ErrorCode(code))
