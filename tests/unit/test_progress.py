"""tests/unit/test_progress.py"""

from __future__ import annotations

import warnings
from pathlib import Path

import pytest

from popyramid.common.config import IngestSettings
from popyramid.common.errors import ErrorCode
from popyramid.common.types import DataFormat
from popyramid.pipelines import progress
from popyramid.pipelines.progress import ProcessingState, ProgressTracker, Stage


def test_stages_advance_in_order() -> None:
    seen: list[ProcessingState] = []
    tracker = ProgressTracker(on_progress=seen.append)
    assert tracker.state.stage is Stage.IDLE
    assert tracker.state.progress == 0

    tracker.advance(Stage.READING)
    tracker.advance(Stage.DETECTING, detected_format=DataFormat.SIMPLE)
    tracker.advance(Stage.VALIDATING)
    tracker.advance(Stage.BUILDING)
    tracker.advance(Stage.DONE)

    assert [s.stage for s in seen] == [Stage.READING, Stage.DETECTING, Stage.VALIDATING, Stage.BUILDING, Stage.DONE]
    assert [s.progress for s in seen] == [20, 40, 60, 80, 100]
    assert seen[-1].message_key == "processing.done"
    assert seen[0].detected_format is None
    assert seen[-1].detected_format is DataFormat.SIMPLE


def test_skipping_a_stage_is_rejected() -> None:
    tracker = ProgressTracker()
    tracker.advance(Stage.READING)
    with pytest.raises(RuntimeError):
        tracker.advance(Stage.BUILDING)


def test_error_keeps_progress_and_ends_the_run() -> None:
    tracker = ProgressTracker()
    tracker.advance(Stage.READING)
    tracker.advance(Stage.DETECTING)
    state = tracker.fail(ErrorCode.MALE_COLUMN_NOT_FOUND)

    assert state.stage is Stage.ERROR
    assert state.progress == 40
    assert state.error is ErrorCode.MALE_COLUMN_NOT_FOUND
    assert state.message_key == "processing.error"
    with pytest.raises(RuntimeError):
        tracker.advance(Stage.VALIDATING)
    with pytest.raises(RuntimeError):
        tracker.fail(ErrorCode.CSV_PARSE_ERROR)


def test_error_needs_a_started_run() -> None:
    with pytest.raises(RuntimeError):
        ProgressTracker().fail(ErrorCode.CSV_PARSE_ERROR)


def test_progress_values_come_from_settings() -> None:
    settings = IngestSettings(stage_progress=(("reading", 5), ("detecting", 50)))
    tracker = ProgressTracker(settings)
    assert tracker.advance(Stage.READING).progress == 5
    assert tracker.advance(Stage.DETECTING).progress == 50
    # unspecified stages keep their defaults
    assert tracker.advance(Stage.VALIDATING).progress == 60
    assert len(tracker.history) == 3


def test_module_source_compiles_without_warnings() -> None:
    source = Path(progress.__file__).read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, progress.__file__, "exec")
