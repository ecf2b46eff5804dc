"""src/popyramid/pipelines/session.py"""

from __future__ import annotations

import logging
from pathlib import Path

from popyramid.common.config import IngestSettings
from popyramid.common.errors import ErrorCode
from popyramid.common.types import DataFormat, ParseResult, PopulationData, TimeSeriesPopulationData
from popyramid.pipelines.parse_file import parse_population_file
from popyramid.pipelines.progress import ProcessingState, ProgressCallback, Stage

logger = logging.getLogger(__name__)


class PopulationSession:
    """
    Holds the currently loaded dataset for one user session.

    Each load starts a fresh run from idle. Loads are synchronous; a load
    started while another is in flight (e.g. from its progress callback)
    supersedes it, and the older result is dropped instead of being committed.
    A fatal error clears the previously loaded dataset.
    """

    def __init__(self, settings: IngestSettings | None = None) -> None:
        self.settings = settings or IngestSettings()
        self.data: PopulationData | None = None
        self.time_series_data: TimeSeriesPopulationData | None = None
        self.detected_format: DataFormat | None = None
        self.error: ErrorCode | None = None
        self.state: ProcessingState | None = None
        self._generation = 0

    @property
    def is_loading(self) -> bool:
        return self.state is not None and self.state.stage not in (Stage.DONE, Stage.ERROR)

    def load(self, path: str | Path, on_progress: ProgressCallback | None = None) -> ParseResult:
        self._generation += 1
        generation = self._generation

        def track(state: ProcessingState) -> None:
            if generation == self._generation:
                self.state = state
            if on_progress is not None:
                on_progress(state)

        result = parse_population_file(path, settings=self.settings, on_progress=track)

        if generation != self._generation:
            logger.debug("Dropping superseded result for %s", path)
            return result
        if result.success:
            self.data = result.data
            self.time_series_data = result.time_series_data
            self.detected_format = result.detected_format
            self.error = None
        else:
            self.clear()
            self.error = result.error
        return result

    def clear(self) -> None:
        self.data = None
        self.time_series_data = None
        self.detected_format = None
        self.error = None
