"""tests/unit/test_export.py"""

from __future__ import annotations

import json
from pathlib import Path

from popyramid.common.types import PopulationAgeGroup, PopulationData, TimeSeriesPopulationData
from popyramid.reporting.export import (
    compact_population_data,
    compact_time_series_data,
    expand_population_data,
    read_compact_json,
    write_compact_json,
)


def _data(**kwargs) -> PopulationData:
    groups = (
        PopulationAgeGroup(age="0", age_numeric=0, male=10.0, female=12.0),
        PopulationAgeGroup(age="20-29", age_numeric=20, male=5.5, female=6.0),
        PopulationAgeGroup(age="100+", age_numeric=100, male=1.0, female=3.0),
    )
    return PopulationData(title="FR", age_groups=groups, date="2020", source="Eurostat", **kwargs)


def test_compact_shape() -> None:
    compact = compact_population_data(_data())
    assert compact["ageGroups"][1] == [20, 5.5, 6.0]
    assert "hasGenderData" not in compact
    assert compact_population_data(_data(has_gender_data=False))["hasGenderData"] is False


def test_expand_keeps_counts_and_rebuilds_labels() -> None:
    restored = expand_population_data(compact_population_data(_data(has_gender_data=False)))
    assert [(g.age_numeric, g.male, g.female) for g in restored.age_groups] == [
        (0, 10.0, 12.0),
        (20, 5.5, 6.0),
        (100, 1.0, 3.0),
    ]
    # range labels are not kept
    assert [g.age for g in restored.age_groups] == ["0", "20", "100+"]
    assert (restored.title, restored.date, restored.source) == ("FR", "2020", "Eurostat")
    assert restored.has_gender_data is False


def test_time_series_keys_are_strings() -> None:
    series = TimeSeriesPopulationData(
        title="FR",
        years=(2020, 2019),
        data_by_year={2019: (), 2020: (PopulationAgeGroup("0", 0, 1.0, 2.0),)},
    )
    compact = compact_time_series_data(series)
    assert compact["years"] == [2019, 2020]
    assert compact["dataByYear"]["2020"] == [[0, 1.0, 2.0]]


def test_write_and_read_json(tmp_path: Path) -> None:
    series = TimeSeriesPopulationData(
        title="FR",
        years=(2020,),
        data_by_year={2020: (PopulationAgeGroup("0", 0, 1.0, 2.0),)},
    )
    out = write_compact_json(tmp_path / "out" / "fr.json", _data(), series)
    assert out.exists()
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert set(payload) == {"data", "timeSeriesData"}

    data, ts = read_compact_json(out)
    assert data.title == "FR"
    assert ts is not None
    assert ts.years == (2020,)
    assert ts.data_by_year[2020][0].female == 2.0


def test_write_json_without_series(tmp_path: Path) -> None:
    out = write_compact_json(tmp_path / "fr.json", _data())
    data, ts = read_compact_json(out)
    assert ts is None
    assert len(data.age_groups) == 3
