"""tests/unit/test_detect.py"""

from __future__ import annotations

from pathlib import Path

import pytest

from popyramid.common.types import DataFormat, FileKind
from popyramid.io.detect import classify_delimited_headers, detect_format, detect_format_from_headers


@pytest.mark.parametrize(
    "headers, expected",
    [
        (["DATAFLOW", "freq", "age", "sex", "geo", "TIME_PERIOD", "OBS_VALUE"], DataFormat.EUROSTAT),
        (["year", "age", "male", "female"], DataFormat.TIMESERIES),
        (["age", "male", "female", "total"], DataFormat.SIMPLE),
        (["Возраст", "Мужчины", "Женщины"], DataFormat.SIMPLE),
        (["Year", "Age", "Population"], DataFormat.TIMESERIES_TOTAL),
        (["age", "count"], DataFormat.SIMPLE_TOTAL),
        ([" AGE ", "Total "], DataFormat.SIMPLE_TOTAL),
        (["foo", "bar"], DataFormat.UNKNOWN),
        ([], DataFormat.UNKNOWN),
    ],
)
def test_classify_delimited_headers(headers: list[str], expected: DataFormat) -> None:
    assert classify_delimited_headers(headers) is expected


def test_spreadsheets_only_know_simple_and_simple_total() -> None:
    assert detect_format_from_headers(FileKind.XLSX, ["year", "age", "male", "female"]) is DataFormat.SIMPLE
    assert detect_format_from_headers(FileKind.XLSX, ["age", "total"]) is DataFormat.SIMPLE_TOTAL
    assert detect_format_from_headers(FileKind.XLS, ["foo"]) is DataFormat.SIMPLE
    assert detect_format_from_headers(FileKind.XLSX, None) is DataFormat.SIMPLE


def test_unrecognized_extension_is_unknown(data_dir: Path) -> None:
    path = data_dir / "pyramid.txt"
    path.write_text("age,male,female\n0,1,2\n", encoding="utf-8")
    assert detect_format(path) is DataFormat.UNKNOWN
    assert detect_format_from_headers(None, ["age", "male", "female"]) is DataFormat.UNKNOWN


def test_detect_format_reads_files(simple_csv: Path, eurostat_csv: Path, simple_xlsx: Path, total_xlsx: Path) -> None:
    assert detect_format(simple_csv) is DataFormat.SIMPLE
    assert detect_format(eurostat_csv) is DataFormat.EUROSTAT
    assert detect_format(simple_xlsx) is DataFormat.SIMPLE
    assert detect_format(total_xlsx) is DataFormat.SIMPLE_TOTAL


def test_unreadable_spreadsheet_degrades_to_simple(broken_xlsx: Path) -> None:
    assert detect_format(broken_xlsx) is DataFormat.SIMPLE


def test_semicolon_csv_is_detected(data_dir: Path) -> None:
    path = data_dir / "semi.csv"
    path.write_text("Year;Age;Total\n2020;0;5\n", encoding="utf-8")
    assert detect_format(path) is DataFormat.TIMESERIES_TOTAL
