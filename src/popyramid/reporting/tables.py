"""src/popyramid/reporting/tables.py"""

from __future__ import annotations

import pandas as pd

from popyramid.common.types import PopulationData, TimeSeriesPopulationData
from popyramid.reporting.statistics import calculate_median_age, calculate_totals

AGE_GROUP_COLUMNS = ["Age", "Age_Numeric", "Male", "Female", "Total", "Male_Pct", "Female_Pct"]
SERIES_SUMMARY_COLUMNS = ["Year", "Male", "Female", "Total", "Median_Age"]


def make_age_group_table(data: PopulationData) -> pd.DataFrame:
    """
    One row per age group:
        Age, Age_Numeric, Male, Female, Total, Male_Pct, Female_Pct

    Percentages are shares of the grand total (both sexes), 0 when it is 0.
    """
    d = data.to_frame()
    if d.empty:
        return pd.DataFrame(columns=AGE_GROUP_COLUMNS)

    d["Total"] = d["Male"] + d["Female"]
    grand_total = calculate_totals(data.age_groups).total
    if grand_total > 0:
        d["Male_Pct"] = d["Male"] / grand_total * 100.0
        d["Female_Pct"] = d["Female"] / grand_total * 100.0
    else:
        d["Male_Pct"] = 0.0
        d["Female_Pct"] = 0.0
    return d[AGE_GROUP_COLUMNS].reset_index(drop=True)


def make_time_series_summary_table(series: TimeSeriesPopulationData) -> pd.DataFrame:
    """
    One row per year:
        Year, Male, Female, Total, Median_Age
    """
    rows = []
    for year in series.years:
        groups = series.data_by_year[year]
        totals = calculate_totals(groups)
        rows.append(
            {
                "Year": year,
                "Male": totals.male,
                "Female": totals.female,
                "Total": totals.total,
                "Median_Age": calculate_median_age(groups),
            }
        )
    return pd.DataFrame(rows, columns=SERIES_SUMMARY_COLUMNS)
