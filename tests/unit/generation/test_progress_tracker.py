"""Tests for ProgressTracker."""

from __future__ import annotations

from pbnstudio.core.generation.progress import (
    NORMALIZE_DONE,
    NORMALIZE_START,
    UPLOAD_START,
    ProgressTracker,
)


def test_monotonic_and_capped() -> None:
    seen: list[float] = []
    tracker = ProgressTracker(seen.append)
    tracker.report(NORMALIZE_START)
    tracker.report(NORMALIZE_DONE)
    tracker.report(15.0)  # backwards, dropped
    tracker.report(NORMALIZE_DONE)  # repeat, dropped
    tracker.report(150.0)
    assert seen == [10.0, 20.0, 99.0]
    assert not tracker.completed


def test_upload_span() -> None:
    tracker = ProgressTracker()
    tracker.report(UPLOAD_START)
    tracker.report_upload(50, 100)
    assert tracker.current == 50.0
    tracker.report_upload(100, 100)
    assert tracker.current == 70.0
    tracker.report_upload(1, 0)  # unknown total, ignored
    assert tracker.history == [30.0, 50.0, 70.0]


def test_complete_reports_100_once() -> None:
    seen: list[float] = []
    tracker = ProgressTracker(seen.append)
    tracker.report(NORMALIZE_START)
    tracker.complete()
    tracker.complete()
    tracker.report(50.0)
    assert seen == [10.0, 100.0]
    assert tracker.completed


def test_zero_is_reportable_first() -> None:
    tracker = ProgressTracker()
    tracker.report(0.0)
    assert tracker.history == [0.0]
