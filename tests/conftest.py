"""tests/conftest.py"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest

from popyramid.common.types import PopulationAgeGroup, PopulationData


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data"
    d.mkdir(parents=True, exist_ok=True)
    return d


@pytest.fixture
def simple_csv(data_dir: Path) -> Path:
    return write_text(data_dir / "france.csv", "age,male,female\n0,893000,847000\n1,889000,845000\n")


@pytest.fixture
def simple_total_csv(data_dir: Path) -> Path:
    return write_text(data_dir / "totals.csv", "age,population\n1,7\n0,10\n85+,3\n")


@pytest.fixture
def timeseries_csv(data_dir: Path) -> Path:
    return write_text(
        data_dir / "series.csv",
        "year,age,male,female\n"
        "2021,1,110,100\n"
        "2020,0,100,90\n"
        "2021,0,105,95\n"
        "2020,1,98,97\n",
    )


@pytest.fixture
def timeseries_total_csv(data_dir: Path) -> Path:
    return write_text(
        data_dir / "series_total.csv",
        "Year,Age,Total\n"
        "2019,0,11\n"
        "2019,1,20\n"
        "2020,0,13\n",
    )


@pytest.fixture
def eurostat_csv(data_dir: Path) -> Path:
    header = "DATAFLOW,LAST UPDATE,freq,unit,age,sex,geo,TIME_PERIOD,OBS_VALUE,OBS_FLAG\n"
    rows = [
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y0,M,FR,2020,367500,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y0,F,FR,2020,351200,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y0,T,FR,2020,718700,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,TOTAL,M,FR,2020,33000000,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,UNK,F,FR,2020,12,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y_GE100,F,FR,2020,25000,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y_GE100,M,FR,2020,5000,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y0,M,FR,2021,360000,",
        "ESTAT:DEMO_PJAN(1.0),24/03/24,A,NR,Y0,F,FR,2021,340000,",
    ]
    return write_text(data_dir / "demo_pjan_FR.csv", header + "\n".join(rows) + "\n")


@pytest.fixture
def simple_xlsx(data_dir: Path) -> Path:
    path = data_dir / "sheet.xlsx"
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame({"Age": [1, 0, 2], "Male": [11, 10, 12], "Female": [21, 20, 22]}).to_excel(
            writer, sheet_name="pyramid", index=False
        )
        pd.DataFrame({"ignored": [1]}).to_excel(writer, sheet_name="notes", index=False)
    return path


@pytest.fixture
def total_xlsx(data_dir: Path) -> Path:
    path = data_dir / "sheet_total.xlsx"
    pd.DataFrame({"age": ["0", "1", "2"], "count": [5, 8, 3]}).to_excel(path, index=False)
    return path


@pytest.fixture
def broken_xlsx(data_dir: Path) -> Path:
    path = data_dir / "broken.xlsx"
    path.write_bytes(b"this is not a zip container")
    return path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return write_text(
        tmp_path / "configs" / "config.yaml",
        "logging:\n"
        "  level: DEBUG\n"
        "  file: logs/test.log\n"
        "ingest:\n"
        "  csv_encoding: utf-8\n"
        "  csv_delimiters: [';', ',']\n"
        "  stage_progress:\n"
        "    reading: 10\n"
        "aggregation:\n"
        "  max_age: 90\n"
        "  presets:\n"
        "    kids_adults: ['0-17', '18+']\n",
    )


@pytest.fixture
def reset_root_logging():
    yield
    root = logging.getLogger()
    for h in root.handlers[:]:
        h.close()
        root.removeHandler(h)


@pytest.fixture
def single_year_data() -> PopulationData:
    # ages 0..99, male = 10, female = 20 each
    groups = [PopulationAgeGroup(age=str(a), age_numeric=a, male=10.0, female=20.0) for a in range(100)]
    return PopulationData(title="Testland", age_groups=groups)
