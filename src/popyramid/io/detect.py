"""
src/popyramid/io/detect.py

Classify a population file into a DataFormat from its header row.

Priority (first match wins):
    eurostat -> timeseries -> simple -> timeseries-total -> simple-total -> unknown

Gendered signatures are tested before total-only ones because a gendered file
may also carry a "total" column. Spreadsheets only distinguish simple and
simple-total and fall back to simple when the header row cannot be read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from popyramid.common.config import IngestSettings
from popyramid.common.errors import PopulationFileError
from popyramid.common.types import DataFormat, FileKind
from popyramid.io.readers import get_reader
from popyramid.validation.schemas import EUROSTAT_REQUIRED_LOWER, lowered_aliases

logger = logging.getLogger(__name__)


def _normalize_headers(headers: Sequence[str]) -> set[str]:
    return {str(h).strip().lower() for h in headers}


def is_eurostat_format(headers: Sequence[str]) -> bool:
    normalized = _normalize_headers(headers)
    return all(col in normalized for col in EUROSTAT_REQUIRED_LOWER)


def _has(normalized: set[str], field: str) -> bool:
    return not normalized.isdisjoint(lowered_aliases(field))


def classify_delimited_headers(headers: Sequence[str]) -> DataFormat:
    if is_eurostat_format(headers):
        return DataFormat.EUROSTAT

    h = _normalize_headers(headers)
    has_age = _has(h, "age")
    has_year = _has(h, "year")
    gendered = _has(h, "male") and _has(h, "female")
    has_total = _has(h, "total")

    if has_year and has_age and gendered:
        return DataFormat.TIMESERIES
    if has_age and gendered:
        return DataFormat.SIMPLE
    if has_year and has_age and has_total:
        return DataFormat.TIMESERIES_TOTAL
    if has_age and has_total:
        return DataFormat.SIMPLE_TOTAL
    return DataFormat.UNKNOWN


def classify_spreadsheet_headers(headers: Sequence[str] | None) -> DataFormat:
    if headers:
        h = _normalize_headers(headers)
        if _has(h, "male") and _has(h, "female"):
            return DataFormat.SIMPLE
        if _has(h, "age") and _has(h, "total"):
            return DataFormat.SIMPLE_TOTAL
    return DataFormat.SIMPLE


def detect_format_from_headers(kind: FileKind | None, headers: Sequence[str] | None) -> DataFormat:
    if kind is None:
        return DataFormat.UNKNOWN
    if kind.is_spreadsheet:
        return classify_spreadsheet_headers(headers)
    return classify_delimited_headers(headers or [])


def detect_format(path: str | Path, settings: IngestSettings | None = None) -> DataFormat:
    """Detect the data format of a file by reading only its header row."""
    path = Path(path)
    kind = FileKind.from_path(path)
    if kind is None:
        return DataFormat.UNKNOWN

    try:
        headers = get_reader(kind).read_headers(path, settings)
    except PopulationFileError as e:
        logger.warning("Header read failed for %s (%s); format detection degrades", path, e.code.value)
        headers = None

    fmt = detect_format_from_headers(kind, headers)
    logger.debug("Detected %s for %s", fmt.value, path.name)
    return fmt
