"""
src/popyramid/preprocessing/eurostat.py

Eurostat / SDMX exports (e.g. demo_pjan):

    DATAFLOW, LAST UPDATE, freq, unit, age, sex, geo, TIME_PERIOD, OBS_VALUE, OBS_FLAG, CONF_STATUS

Age tokens are coded (Y0, Y1, ..., Y_LT1, Y_GE100, Y_OPEN, TOTAL, UNK) and
every (year, age) appears once per sex, including a total-across-sexes row
(sex = T) that must be dropped to avoid double counting.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

import pandas as pd

from popyramid.common.errors import ErrorCode, PopulationFileError
from popyramid.common.types import PopulationAgeGroup, TimeSeriesPopulationData
from popyramid.common.utils import first_int, is_missing, safe_int
from popyramid.io.readers import RawTable
from popyramid.preprocessing.normalize import parse_number, title_from_filename

logger = logging.getLogger(__name__)

EUROSTAT_SOURCE = "Eurostat"
SKIP_TOKENS = frozenset({"TOTAL", "UNK"})
KEPT_SEXES = ("M", "F")

_SINGLE_YEAR = re.compile(r"^Y(\d+)$")
_OPEN_ENDED = re.compile(r"^Y_GE(\d+)$")
_OPEN_ALIAS = {"Y_OPEN": 100}


def decode_eurostat_age(token: Any) -> tuple[str, int] | None:
    """
    Decode one age token to (label, age_numeric).

    None means "skip this row" (TOTAL / UNK aggregates). Tokens with no digits
    at all decode to numeric -1, which callers also exclude.
    """
    t = "" if is_missing(token) else str(token).strip()
    if t in SKIP_TOKENS:
        return None

    m = _OPEN_ENDED.match(t)
    if m:
        n = int(m.group(1))
        return f"{n}+", n
    if t in _OPEN_ALIAS:
        n = _OPEN_ALIAS[t]
        return f"{n}+", n
    if t == "Y_LT1":
        return "0", 0
    m = _SINGLE_YEAR.match(t)
    if m:
        n = int(m.group(1))
        return str(n), n

    n = first_int(t)
    if n is None:
        return t, -1
    return str(n), n


def eurostat_title(file_name: str) -> str:
    return title_from_filename(file_name).replace("_", " ")


def require_eurostat_columns(headers: Sequence[str]) -> dict[str, str]:
    """Resolve the SDMX columns case-insensitively (lower-case name -> actual header)."""
    by_lower = {h.strip().lower(): h for h in headers}
    if "age" not in by_lower:
        raise PopulationFileError(ErrorCode.AGE_COLUMN_NOT_FOUND, f"found {list(headers)}")
    missing = [c for c in ("sex", "time_period", "obs_value") if c not in by_lower]
    if missing:
        raise PopulationFileError(ErrorCode.UNKNOWN_FILE_FORMAT, f"not an SDMX export; missing {missing}")
    return {c: by_lower[c] for c in ("age", "sex", "geo", "time_period", "obs_value") if c in by_lower}


def _geo_code(table: RawTable, geo_col: str | None) -> str:
    if geo_col is None or not table.rows:
        return "Unknown"
    first = table.rows[0].get(geo_col)
    code = "Unknown" if is_missing(first) or str(first).strip() == "" else str(first).strip()

    distinct = {str(r.get(geo_col)).strip() for r in table.rows if not is_missing(r.get(geo_col))}
    if len(distinct) > 1:
        logger.warning(
            "Eurostat file holds %d geo codes %s; values are summed across all of them and labelled %r",
            len(distinct), sorted(distinct), code,
        )
    return code


def eurostat_frame(table: RawTable, columns: dict[str, str]) -> pd.DataFrame:
    """
    Long frame of usable observations:
        Year, Age, Age_Numeric, Sex, Value

    Drops sex other than M/F, TOTAL/UNK ages, undecodable ages and rows without a year.
    """
    records: list[tuple[int, str, int, str, float]] = []
    for row in table.rows:
        sex_raw = row.get(columns["sex"])
        sex = "" if is_missing(sex_raw) else str(sex_raw).strip().upper()
        if sex not in KEPT_SEXES:
            continue
        decoded = decode_eurostat_age(row.get(columns["age"]))
        if decoded is None or decoded[1] < 0:
            continue
        year = safe_int(row.get(columns["time_period"]))
        if year is None:
            continue
        label, numeric = decoded
        records.append((year, label, numeric, sex, parse_number(row.get(columns["obs_value"]))))

    return pd.DataFrame.from_records(records, columns=["Year", "Age", "Age_Numeric", "Sex", "Value"])


def build_eurostat_series(
    table: RawTable,
    *,
    file_name: str,
    columns: dict[str, str] | None = None,
) -> TimeSeriesPopulationData:
    """Sum M/F observations per (year, decoded age label) into a time series."""
    columns = columns or require_eurostat_columns(table.headers)
    title = eurostat_title(file_name)
    geo_code = _geo_code(table, columns.get("geo"))

    frame = eurostat_frame(table, columns)
    if frame.empty:
        return TimeSeriesPopulationData(title=title, years=(), data_by_year={}, source=EUROSTAT_SOURCE, geo_code=geo_code)

    wide = (
        frame.pivot_table(
            index=["Year", "Age_Numeric", "Age"],
            columns="Sex",
            values="Value",
            aggfunc="sum",
            fill_value=0.0,
        )
        .reindex(columns=list(KEPT_SEXES), fill_value=0.0)
        .reset_index()
        .sort_values(["Year", "Age_Numeric"], kind="stable")
    )

    data_by_year: dict[int, tuple[PopulationAgeGroup, ...]] = {}
    for year, g in wide.groupby("Year", sort=True):
        data_by_year[int(year)] = tuple(
            PopulationAgeGroup(age=str(r.Age), age_numeric=int(r.Age_Numeric), male=float(r.M), female=float(r.F))
            for r in g.itertuples(index=False)
        )

    return TimeSeriesPopulationData(
        title=title,
        years=tuple(data_by_year),
        data_by_year=data_by_year,
        source=EUROSTAT_SOURCE,
        geo_code=geo_code,
    )
