"""src/popyramid/common/errors.py"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes surfaced to callers (never free-text messages)."""

    AGE_COLUMN_NOT_FOUND = "AGE_COLUMN_NOT_FOUND"
    MALE_COLUMN_NOT_FOUND = "MALE_COLUMN_NOT_FOUND"
    FEMALE_COLUMN_NOT_FOUND = "FEMALE_COLUMN_NOT_FOUND"
    TOTAL_COLUMN_NOT_FOUND = "TOTAL_COLUMN_NOT_FOUND"
    CSV_PARSE_ERROR = "CSV_PARSE_ERROR"
    EXCEL_PARSE_ERROR = "EXCEL_PARSE_ERROR"
    UNKNOWN_FILE_FORMAT = "UNKNOWN_FILE_FORMAT"


class PopulationFileError(Exception):
    """Fatal, file-level ingestion failure carrying an ErrorCode."""

    def __init__(self, code: ErrorCode, detail: str | None = None) -> None:
        self.code = ErrorCode(code)
        self.detail = detail
        super().__init__(self.code.value if not detail else f"{self.code.value}: {detail}")
