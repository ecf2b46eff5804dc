"""src/popyramid/preprocessing/__init__.py"""

from .columns import MISSING, find_column_value, require_columns, resolve_column
from .eurostat import build_eurostat_series, decode_eurostat_age
from .normalize import (
    normalize_gendered_rows,
    normalize_table,
    normalize_total_only_rows,
    parse_age_numeric,
    parse_number,
    title_from_filename,
)

__all__ = [
    "MISSING",
    "find_column_value",
    "require_columns",
    "resolve_column",
    "build_eurostat_series",
    "decode_eurostat_age",
    "normalize_gendered_rows",
    "normalize_table",
    "normalize_total_only_rows",
    "parse_age_numeric",
    "parse_number",
    "title_from_filename",
]
