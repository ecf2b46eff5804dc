"""src/popyramid/reporting/__init__.py"""

from __future__ import annotations

from .export import (
    compact_population_data,
    compact_time_series_data,
    expand_population_data,
    expand_time_series_data,
    read_compact_json,
    write_compact_json,
)
from .statistics import (
    Totals,
    calculate_median_age,
    calculate_scale,
    calculate_totals,
    find_median_age_index,
    max_value,
    nice_scale,
    to_percent,
)
from .tables import make_age_group_table, make_time_series_summary_table

__all__ = [
    "compact_population_data",
    "compact_time_series_data",
    "expand_population_data",
    "expand_time_series_data",
    "read_compact_json",
    "write_compact_json",
    "Totals",
    "calculate_median_age",
    "calculate_scale",
    "calculate_totals",
    "find_median_age_index",
    "max_value",
    "nice_scale",
    "to_percent",
    "make_age_group_table",
    "make_time_series_summary_table",
]
