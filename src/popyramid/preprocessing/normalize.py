"""
src/popyramid/preprocessing/normalize.py

Turn raw reader rows into the canonical population model.

Two failure policies live side by side here:
- cell level: an unparseable number or age label becomes 0 and the row is kept
- file level: a required column that no header resolves to is fatal
  (see popyramid.preprocessing.columns.require_columns)
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from popyramid.common.types import (
    AgeGroups,
    DataFormat,
    PopulationAgeGroup,
    PopulationData,
    TimeSeriesPopulationData,
    sort_age_groups,
)
from popyramid.common.utils import first_int, is_missing, safe_int
from popyramid.io.readers import RawTable
from popyramid.preprocessing.columns import require_columns, resolve_field
from popyramid.validation.schemas import FORMAT_SPECS

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"\s+")
_KNOWN_SUFFIX = re.compile(r"\.(csv|xlsx|xls)$", re.IGNORECASE)

RowBuilder = Callable[[Mapping[str, Any]], PopulationAgeGroup]


# ---------- cell parsing (lenient) ----------

def age_label(value: Any) -> str:
    """Display label for a raw age cell (2.0 -> "2", None -> "")."""
    if is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_age_numeric(label: Any) -> int:
    """First run of digits in the label; 0 when there is none ("85+" -> 85, "20-29" -> 20)."""
    n = first_int(age_label(label))
    return 0 if n is None else n


def parse_number(value: Any) -> float:
    """
    Locale-tolerant count parsing.

    Numbers pass through as absolute values. Strings lose all whitespace, the
    decimal comma becomes a dot, and the leading numeric prefix is parsed.
    Anything unparseable (or NaN/inf) is 0.
    """
    if is_missing(value):
        return 0.0
    if isinstance(value, numbers.Number):
        x = abs(float(value))
        return x if math.isfinite(x) else 0.0

    cleaned = _WHITESPACE.sub("", str(value)).replace(",", ".", 1)
    m = _LEADING_NUMBER.match(cleaned)
    if not m:
        return 0.0
    x = abs(float(m.group(0)))
    return x if math.isfinite(x) else 0.0


def split_total(total: float) -> tuple[float, float]:
    """Even split of a total: male = round-half-up(total / 2), female = the rest."""
    male = float(math.floor(total / 2 + 0.5))
    return male, total - male


def title_from_filename(file_name: str | Path) -> str:
    return _KNOWN_SUFFIX.sub("", Path(file_name).name)


# ---------- row builders ----------

def gendered_row_builder(columns: Mapping[str, str]) -> RowBuilder:
    age_col, male_col, female_col = columns["age"], columns["male"], columns["female"]

    def build(row: Mapping[str, Any]) -> PopulationAgeGroup:
        label = age_label(row.get(age_col))
        return PopulationAgeGroup(
            age=label,
            age_numeric=parse_age_numeric(label),
            male=parse_number(row.get(male_col)),
            female=parse_number(row.get(female_col)),
        )

    return build


def total_only_row_builder(columns: Mapping[str, str]) -> RowBuilder:
    age_col, total_col = columns["age"], columns["total"]

    def build(row: Mapping[str, Any]) -> PopulationAgeGroup:
        label = age_label(row.get(age_col))
        male, female = split_total(parse_number(row.get(total_col)))
        return PopulationAgeGroup(age=label, age_numeric=parse_age_numeric(label), male=male, female=female)

    return build


def normalize_rows(rows: Iterable[Mapping[str, Any]], build: RowBuilder) -> AgeGroups:
    """One age group per row, stable-sorted by age_numeric."""
    return sort_age_groups(build(row) for row in rows)


def normalize_gendered_rows(rows: Iterable[Mapping[str, Any]], columns: Mapping[str, str]) -> AgeGroups:
    return normalize_rows(rows, gendered_row_builder(columns))


def normalize_total_only_rows(rows: Iterable[Mapping[str, Any]], columns: Mapping[str, str]) -> AgeGroups:
    return normalize_rows(rows, total_only_row_builder(columns))


def group_rows_by_year(
    rows: Iterable[Mapping[str, Any]],
    year_col: str,
    build: RowBuilder,
) -> tuple[tuple[int, ...], dict[int, AgeGroups]]:
    """Bucket rows by year; each bucket is sorted independently. Rows without a year are dropped."""
    buckets: dict[int, list[PopulationAgeGroup]] = defaultdict(list)
    skipped = 0
    for row in rows:
        year = safe_int(row.get(year_col))
        if year is None:
            skipped += 1
            continue
        buckets[year].append(build(row))

    if skipped:
        logger.warning("Skipped %d row(s) without a parseable %r value", skipped, year_col)

    years = tuple(sorted(buckets))
    return years, {y: sort_age_groups(buckets[y]) for y in years}


# ---------- table -> canonical model ----------

def normalize_table(
    table: RawTable,
    fmt: DataFormat,
    *,
    title: str,
    columns: Mapping[str, str] | None = None,
) -> tuple[PopulationData, TimeSeriesPopulationData | None]:
    """
    Build the canonical model for a non-Eurostat table.

    Returns the snapshot to display (the latest year for time series) and the
    full series when the format is time-indexed. `columns` are the resolved
    semantic headers; they are resolved here when not supplied.
    """
    if columns is None:
        columns = require_columns(table.headers, FORMAT_SPECS[fmt])
    build = total_only_row_builder(columns) if fmt.is_total_only else gendered_row_builder(columns)
    has_gender_data = False if fmt.is_total_only else None

    year_col = resolve_field(table.headers, "year") if fmt.is_time_series else None
    if fmt.is_time_series and year_col is None:
        # header sniffing is case-insensitive, the resolver is not
        logger.warning("No exact year column in %s; treating it as a single snapshot", list(table.headers))

    if year_col is None:
        data = PopulationData(
            title=title,
            age_groups=normalize_rows(table.rows, build),
            has_gender_data=has_gender_data,
        )
        return data, None

    years, by_year = group_rows_by_year(table.rows, year_col, build)
    series = TimeSeriesPopulationData(
        title=title,
        years=years,
        data_by_year=by_year,
        has_gender_data=has_gender_data,
    )
    return series.latest(), series