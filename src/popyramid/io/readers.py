"""src/popyramid/io/readers.py"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence

import pandas as pd

from popyramid.common.config import IngestSettings
from popyramid.common.errors import ErrorCode, PopulationFileError
from popyramid.common.types import FileKind

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@dataclass(frozen=True)
class RawTable:
    """Header row plus data rows as header -> primitive mappings (no semantics)."""
    headers: tuple[str, ...]
    rows: tuple[Row, ...]


# ---------- generic helpers ----------

def _clean_headers(columns: Sequence[Any]) -> list[str]:
    return [str(c).strip() for c in columns]


def _frame_to_table(df: pd.DataFrame) -> RawTable:
    d = df.copy()
    d.columns = _clean_headers(d.columns)
    d = d.dropna(how="all")
    # object dtype so ints/floats come out as Python scalars; NaN -> None
    d = d.astype(object).where(d.notna(), None)
    return RawTable(headers=tuple(d.columns), rows=tuple(d.to_dict(orient="records")))


def sniff_delimiter(header_line: str, candidates: Sequence[str] = (",", ";", "\t")) -> str:
    """Pick the candidate occurring most often in the header line (ties -> first listed)."""
    best = candidates[0] if candidates else ","
    best_count = 0
    for c in candidates:
        n = header_line.count(c)
        if n > best_count:
            best, best_count = c, n
    return best


def _first_line(path: Path, encoding: str) -> str:
    with path.open("r", encoding=encoding, newline="") as f:
        for line in f:
            if line.strip():
                return line
    return ""


# ---------- delimited text ----------

def _read_csv_frame(path: Path, settings: IngestSettings, *, header_only: bool) -> pd.DataFrame:
    sep = sniff_delimiter(_first_line(path, settings.csv_encoding), settings.csv_delimiters)
    return pd.read_csv(
        path,
        sep=sep,
        encoding=settings.csv_encoding,
        skip_blank_lines=True,
        # only truly empty cells are missing ("NA" is Namibia in geo columns)
        keep_default_na=False,
        na_values=[""],
        nrows=0 if header_only else None,
    )


def read_csv_table(path: Path, settings: IngestSettings | None = None) -> RawTable:
    settings = settings or IngestSettings()
    try:
        df = _read_csv_frame(path, settings, header_only=False)
    except pd.errors.EmptyDataError:
        return RawTable(headers=(), rows=())
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, ValueError) as e:
        logger.warning("CSV read failed for %s: %s", path, e)
        raise PopulationFileError(ErrorCode.CSV_PARSE_ERROR, str(e)) from e
    return _frame_to_table(df)


def read_csv_headers(path: Path, settings: IngestSettings | None = None) -> list[str]:
    settings = settings or IngestSettings()
    try:
        df = _read_csv_frame(path, settings, header_only=True)
    except pd.errors.EmptyDataError:
        return []
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, ValueError) as e:
        logger.warning("CSV header read failed for %s: %s", path, e)
        raise PopulationFileError(ErrorCode.CSV_PARSE_ERROR, str(e)) from e
    return _clean_headers(df.columns)


# ---------- spreadsheets (first sheet only) ----------

def read_excel_table(path: Path, settings: IngestSettings | None = None) -> RawTable:
    try:
        df = pd.read_excel(path, sheet_name=0)
    except Exception as e:
        # openpyxl / xlrd / zipfile all raise their own types for broken containers
        logger.warning("Excel read failed for %s: %s", path, e)
        raise PopulationFileError(ErrorCode.EXCEL_PARSE_ERROR, str(e)) from e
    return _frame_to_table(df)


def read_excel_headers(path: Path, settings: IngestSettings | None = None) -> list[str]:
    try:
        df = pd.read_excel(path, sheet_name=0, nrows=0)
    except Exception as e:
        logger.warning("Excel header read failed for %s: %s", path, e)
        raise PopulationFileError(ErrorCode.EXCEL_PARSE_ERROR, str(e)) from e
    return _clean_headers(df.columns)


@dataclass(frozen=True)
class TabularReader:
    """Interchangeable reader pair for one container kind."""
    read_table: Callable[[Path, IngestSettings | None], RawTable]
    read_headers: Callable[[Path, IngestSettings | None], list[str]]


CSV_READER = TabularReader(read_table=read_csv_table, read_headers=read_csv_headers)
EXCEL_READER = TabularReader(read_table=read_excel_table, read_headers=read_excel_headers)


def get_reader(kind: FileKind) -> TabularReader:
    return EXCEL_READER if kind.is_spreadsheet else CSV_READER
