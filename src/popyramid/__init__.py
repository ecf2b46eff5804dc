"""src/popyramid/__init__.py"""

from __future__ import annotations

from popyramid.common.errors import ErrorCode, PopulationFileError
from popyramid.common.types import (
    AgeRangeConfig,
    DataFormat,
    ParseResult,
    PopulationAgeGroup,
    PopulationData,
    TimeSeriesPopulationData,
)
from popyramid.features.age_groups import aggregate_by_age_groups
from popyramid.io.detect import detect_format
from popyramid.pipelines.parse_file import parse_population_file
from popyramid.reporting.statistics import (
    calculate_median_age,
    calculate_totals,
    find_median_age_index,
    nice_scale,
    to_percent,
)
from popyramid.validation.checks import validate_age_groups

__version__ = "0.1.0"

__all__ = [
    "AgeRangeConfig",
    "DataFormat",
    "ErrorCode",
    "ParseResult",
    "PopulationAgeGroup",
    "PopulationData",
    "PopulationFileError",
    "TimeSeriesPopulationData",
    "aggregate_by_age_groups",
    "calculate_median_age",
    "calculate_totals",
    "detect_format",
    "find_median_age_index",
    "nice_scale",
    "parse_population_file",
    "to_percent",
    "validate_age_groups",
]
