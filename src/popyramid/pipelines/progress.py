"""
src/popyramid/pipelines/progress.py

Per-invocation processing stages:

    idle -> reading -> detecting -> validating -> building -> done

    any started stage (reading .. building) -> error

A tracker is created for each ingestion run, so repeated or overlapping runs
never share progress state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from popyramid.common.config import IngestSettings
from popyramid.common.errors import ErrorCode
from popyramid.common.types import DataFormat

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    IDLE = "idle"
    READING = "reading"
    DETECTING = "detecting"
    VALIDATING = "validating"
    BUILDING = "building"
    DONE = "done"
    ERROR = "error"

    @property
    def message_key(self) -> str:
        return f"processing.{self.value}"


STAGE_ORDER: tuple[Stage, ...] = (
    Stage.IDLE,
    Stage.READING,
    Stage.DETECTING,
    Stage.VALIDATING,
    Stage.BUILDING,
    Stage.DONE,
)


@dataclass(frozen=True)
class ProcessingState:
    stage: Stage
    progress: int
    message_key: str
    detected_format: DataFormat | None = None
    error: ErrorCode | None = None


ProgressCallback = Callable[[ProcessingState], None]


class ProgressTracker:
    """Strictly ordered stage machine for one ingestion run."""

    def __init__(self, settings: IngestSettings | None = None, on_progress: ProgressCallback | None = None) -> None:
        self._settings = settings or IngestSettings()
        self._on_progress = on_progress
        self._detected_format: DataFormat | None = None
        self.history: list[ProcessingState] = []
        self.state = self._make(Stage.IDLE)

    def _make(self, stage: Stage, error: ErrorCode | None = None) -> ProcessingState:
        progress = self.state.progress if stage is Stage.ERROR else self._settings.progress_for(stage.value)
        return ProcessingState(
            stage=stage,
            progress=progress,
            message_key=stage.message_key,
            detected_format=self._detected_format,
            error=error,
        )

    def _emit(self, state: ProcessingState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug("stage=%s progress=%d", state.stage.value, state.progress)
        if self._on_progress is not None:
            self._on_progress(state)

    def advance(self, stage: Stage, *, detected_format: DataFormat | None = None) -> ProcessingState:
        if self.state.stage in (Stage.DONE, Stage.ERROR):
            raise RuntimeError(f"Run already finished ({self.state.stage.value}); start a new tracker")
        expected = STAGE_ORDER[STAGE_ORDER.index(self.state.stage) + 1]
        if stage is not expected:
            raise RuntimeError(f"Illegal stage transition {self.state.stage.value} -> {stage.value}")
        if detected_format is not None:
            self._detected_format = detected_format
        state = self._make(stage)
        self._emit(state)
        return state

    def fail(self, code: ErrorCode) -> ProcessingState:
        if self.state.stage is Stage.IDLE:
            raise RuntimeError("Cannot fail a run that has not started")
        if self.state.stage in (Stage.DONE, Stage.ERROR):
            raise RuntimeError(f"Run already finished ({self.state.stage.value})")
        state = self._make(Stage.ERROR, error=code)
        self._emit(state)
        return state
