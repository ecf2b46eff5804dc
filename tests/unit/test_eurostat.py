"""tests/unit/test_eurostat.py"""

from __future__ import annotations

import logging

import pytest

from popyramid.common.errors import ErrorCode, PopulationFileError
from popyramid.common.types import PopulationAgeGroup
from popyramid.io.readers import RawTable
from popyramid.preprocessing.eurostat import (
    build_eurostat_series,
    decode_eurostat_age,
    eurostat_title,
    require_eurostat_columns,
)

HEADERS = ("freq", "age", "sex", "geo", "TIME_PERIOD", "OBS_VALUE")


def _table(*rows: tuple) -> RawTable:
    return RawTable(headers=HEADERS, rows=tuple(dict(zip(HEADERS, ("A",) + r)) for r in rows))


@pytest.mark.parametrize(
    "token, expected",
    [
        ("Y0", ("0", 0)),
        ("Y42", ("42", 42)),
        ("Y_LT1", ("0", 0)),
        ("Y_GE100", ("100+", 100)),
        ("Y_GE85", ("85+", 85)),
        ("Y_OPEN", ("100+", 100)),
        ("TOTAL", None),
        ("UNK", None),
        ("abc", ("abc", -1)),
    ],
)
def test_decode_eurostat_age(token: str, expected) -> None:
    assert decode_eurostat_age(token) == expected


def test_eurostat_title() -> None:
    assert eurostat_title("demo_pjan_FR.csv") == "demo pjan FR"


def test_single_year_single_age() -> None:
    table = _table(("Y0", "M", "FR", 2020, 367500), ("Y0", "F", "FR", 2020, 351200))
    series = build_eurostat_series(table, file_name="demo_pjan.csv")
    assert series.years == (2020,)
    assert series.data_by_year[2020] == (
        PopulationAgeGroup(age="0", age_numeric=0, male=367500.0, female=351200.0),
    )
    assert series.source == "Eurostat"
    assert series.geo_code == "FR"


def test_aggregates_and_other_sexes_are_excluded() -> None:
    table = _table(
        ("Y0", "M", "FR", 2020, 10),
        ("Y0", "F", "FR", 2020, 20),
        ("Y0", "T", "FR", 2020, 30),
        ("TOTAL", "M", "FR", 2020, 9999),
        ("UNK", "F", "FR", 2020, 7),
        ("zzz", "F", "FR", 2020, 7),
    )
    series = build_eurostat_series(table, file_name="x.csv")
    assert len(series.data_by_year[2020]) == 1
    g = series.data_by_year[2020][0]
    assert (g.male, g.female) == (10.0, 20.0)


def test_duplicate_observations_are_summed_and_sorted() -> None:
    table = _table(
        ("Y_GE100", "F", "FR", 2020, 3),
        ("Y10", "M", "FR", 2020, 1),
        ("Y2", "M", "FR", 2020, 4),
        ("Y2", "M", "FR", 2020, 5),
        ("Y2", "F", "FR", "2020", "6"),
    )
    groups = build_eurostat_series(table, file_name="x.csv").data_by_year[2020]
    assert [g.age for g in groups] == ["2", "10", "100+"]
    assert groups[0].male == 9.0
    assert groups[0].female == 6.0
    # a sex with no observation for the age is 0
    assert groups[1].female == 0.0
    assert groups[2].male == 0.0


def test_multiple_geo_codes_warn_and_use_first(caplog) -> None:
    table = _table(("Y0", "M", "DE", 2020, 1), ("Y0", "M", "FR", 2020, 2))
    with caplog.at_level(logging.WARNING):
        series = build_eurostat_series(table, file_name="x.csv")
    assert series.geo_code == "DE"
    assert series.data_by_year[2020][0].male == 3.0
    assert "geo codes" in caplog.text


def test_years_are_ascending_and_latest_is_last() -> None:
    table = _table(("Y0", "M", "FR", 2021, 1), ("Y0", "M", "FR", 2019, 2))
    series = build_eurostat_series(table, file_name="x.csv")
    assert series.years == (2019, 2021)
    assert series.latest().date == "2021"


def test_column_lookup_is_case_insensitive() -> None:
    cols = require_eurostat_columns(["AGE", "Sex", "geo", "time_period", "obs_value"])
    assert cols["age"] == "AGE"
    assert cols["time_period"] == "time_period"


def test_missing_age_column_is_fatal() -> None:
    with pytest.raises(PopulationFileError) as exc:
        require_eurostat_columns(["sex", "geo", "TIME_PERIOD", "OBS_VALUE"])
    assert exc.value.code is ErrorCode.AGE_COLUMN_NOT_FOUND

    with pytest.raises(PopulationFileError) as exc:
        require_eurostat_columns(["age", "geo", "TIME_PERIOD", "OBS_VALUE"])
    assert exc.value.code is ErrorCode.UNKNOWN_FILE_FORMAT
