"""
src/popyramid/preprocessing/columns.py

Column resolution: map loosely-named headers onto semantic fields.

Lookups are exact and case-sensitive against the literal alias tables in
popyramid.validation.schemas. Single-letter gender markers ("м", "Ж") are
shared across languages, so there is no fuzzy or case-folding fallback here.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from popyramid.common.errors import PopulationFileError
from popyramid.validation.schemas import COLUMN_ALIASES, FormatSpec


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def find_column_value(row: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """
    Return the value under the first alias present in row, else MISSING.

    Per-row lookup for callers holding loose row mappings. The ingestion
    pipeline resolves headers once per file instead (require_columns) and
    reads rows by the resolved header.
    """
    for alias in aliases:
        if alias in row:
            return row[alias]
    return MISSING


def resolve_column(headers: Sequence[str], aliases: Sequence[str]) -> str | None:
    """Return the first alias that is one of headers, else None."""
    present = set(headers)
    for alias in aliases:
        if alias in present:
            return alias
    return None


def resolve_field(headers: Sequence[str], field: str) -> str | None:
    return resolve_column(headers, COLUMN_ALIASES[field])


def require_columns(headers: Sequence[str], spec: FormatSpec) -> dict[str, str]:
    """
    Resolve every required field of a FormatSpec once for the whole file.

    Raises PopulationFileError with the field's code on the first absent field
    (checked in declaration order: age first, then male/female or total).
    """
    resolved: dict[str, str] = {}
    for field in spec.required_fields:
        header = resolve_field(headers, field)
        if header is None:
            raise PopulationFileError(spec.missing_codes[field], f"no header matches {field!r}; found {list(headers)}")
        resolved[field] = header
    return resolved
