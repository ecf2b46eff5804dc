"""src/popyramid/validation/schemas.py"""

from __future__ import annotations

from dataclasses import dataclass

from popyramid.common.errors import ErrorCode
from popyramid.common.types import DataFormat


# ---- Column aliases (exact, case-sensitive; append literals to extend) ----

COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "age": ("age", "возраст", "Age", "AGE", "Возраст"),
    "male": ("male", "males", "мужчины", "м", "Male", "Males", "MALE", "Мужчины", "М"),
    "female": ("female", "females", "женщины", "ж", "Female", "Females", "FEMALE", "Женщины", "Ж"),
    "total": (
        "total", "population", "value", "count",
        "Total", "Population", "Value", "Count", "TOTAL", "POPULATION", "VALUE", "COUNT",
        "всего", "население", "число", "Всего", "Население", "Число",
    ),
    "year": ("year", "год", "Year", "YEAR", "Год", "TIME_PERIOD"),
    "sex": ("sex", "пол", "Sex", "SEX", "Пол"),
    "geo": ("geo", "country", "region", "страна", "регион"),
    "value": ("OBS_VALUE", "value", "значение", "Value", "VALUE"),
}

EUROSTAT_REQUIRED_LOWER: tuple[str, ...] = ("age", "sex", "geo", "time_period", "obs_value")


def lowered_aliases(field: str) -> frozenset[str]:
    """Lower-cased alias set used by header sniffing (format detection only)."""
    return frozenset(a.lower() for a in COLUMN_ALIASES[field])


@dataclass(frozen=True)
class FormatSpec:
    """Semantic columns a data format needs, with the error raised when one is absent."""
    name: str
    required_fields: tuple[str, ...]
    missing_codes: dict[str, ErrorCode]


_MISSING_CODES: dict[str, ErrorCode] = {
    "age": ErrorCode.AGE_COLUMN_NOT_FOUND,
    "male": ErrorCode.MALE_COLUMN_NOT_FOUND,
    "female": ErrorCode.FEMALE_COLUMN_NOT_FOUND,
    "total": ErrorCode.TOTAL_COLUMN_NOT_FOUND,
}

GENDERED = FormatSpec(
    name="gendered",
    required_fields=("age", "male", "female"),
    missing_codes=_MISSING_CODES,
)

TOTAL_ONLY = FormatSpec(
    name="total_only",
    required_fields=("age", "total"),
    missing_codes=_MISSING_CODES,
)

# Year is optional at this layer: rows without a parseable year are skipped.
FORMAT_SPECS: dict[DataFormat, FormatSpec] = {
    DataFormat.SIMPLE: GENDERED,
    DataFormat.TIMESERIES: GENDERED,
    DataFormat.UNKNOWN: GENDERED,
    DataFormat.SIMPLE_TOTAL: TOTAL_ONLY,
    DataFormat.TIMESERIES_TOTAL: TOTAL_ONLY,
}
