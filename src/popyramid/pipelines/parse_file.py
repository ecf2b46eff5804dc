"""src/popyramid/pipelines/parse_file.py"""

from __future__ import annotations

import logging
from pathlib import Path

from popyramid.common.config import IngestSettings
from popyramid.common.errors import ErrorCode, PopulationFileError
from popyramid.common.types import DataFormat, FileKind, ParseResult, PopulationData, TimeSeriesPopulationData
from popyramid.io.detect import detect_format_from_headers
from popyramid.io.readers import RawTable, get_reader
from popyramid.pipelines.progress import ProgressCallback, ProgressTracker, Stage
from popyramid.preprocessing.columns import require_columns
from popyramid.preprocessing.eurostat import build_eurostat_series, require_eurostat_columns
from popyramid.preprocessing.normalize import normalize_table, title_from_filename
from popyramid.validation.schemas import FORMAT_SPECS

logger = logging.getLogger(__name__)


def _build(
    table: RawTable,
    fmt: DataFormat,
    columns: dict[str, str],
    path: Path,
) -> tuple[PopulationData, TimeSeriesPopulationData | None]:
    if fmt is DataFormat.EUROSTAT:
        series = build_eurostat_series(table, file_name=path.name, columns=columns)
        return series.latest(), series
    return normalize_table(table, fmt, title=title_from_filename(path.name), columns=columns)


def _validate(table: RawTable, fmt: DataFormat) -> dict[str, str]:
    if fmt is DataFormat.EUROSTAT:
        return require_eurostat_columns(table.headers)
    return require_columns(table.headers, FORMAT_SPECS[fmt])


def parse_population_file(
    path: str | Path,
    *,
    settings: IngestSettings | None = None,
    on_progress: ProgressCallback | None = None,
) -> ParseResult:
    """
    Ingest one CSV / Excel population file into the canonical model.

    Stages: reading (full table read) -> detecting -> validating (required
    columns) -> building -> done. Any file-level failure ends in the error
    stage and a ParseResult carrying only the error code; no partial model is
    returned. For time-indexed formats `data` is the latest year.
    """
    path = Path(path)
    settings = settings or IngestSettings()
    tracker = ProgressTracker(settings, on_progress)

    tracker.advance(Stage.READING)
    kind = FileKind.from_path(path)
    try:
        if kind is None:
            raise PopulationFileError(ErrorCode.UNKNOWN_FILE_FORMAT, f"unsupported extension {path.suffix!r}")
        table = get_reader(kind).read_table(path, settings)

        fmt = detect_format_from_headers(kind, table.headers)
        tracker.advance(Stage.DETECTING, detected_format=fmt)

        tracker.advance(Stage.VALIDATING)
        columns = _validate(table, fmt)

        tracker.advance(Stage.BUILDING)
        data, series = _build(table, fmt, columns, path)
    except PopulationFileError as e:
        tracker.fail(e.code)
        logger.info("Failed to parse %s: %s", path.name, e)
        return ParseResult.failed(e.code)

    tracker.advance(Stage.DONE)
    logger.info(
        "Parsed %s as %s: %d age groups%s",
        path.name,
        fmt.value,
        len(data.age_groups),
        f", years {series.years[0]}-{series.years[-1]}" if series is not None and series.years else "",
    )
    return ParseResult.ok(data, fmt, time_series_data=series)
