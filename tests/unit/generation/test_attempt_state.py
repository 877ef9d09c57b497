"""Tests for the per-attempt state machine."""

from __future__ import annotations

import pytest

from pbnstudio.core.generation.attempt import (
    AttemptState,
    GenerationAttempt,
    InvalidTransitionError,
)
from pbnstudio.core.generation.errors import GenerationError, GenerationErrorKind
from pbnstudio.core.generation.models import GenerationResult

RESULT = GenerationResult.model_validate(
    {"preview": "p", "template": "t", "dimensions": {"width": 1, "height": 1}}
)


def _drive_to_awaiting(attempt: GenerationAttempt) -> None:
    for state in (
        AttemptState.VALIDATING,
        AttemptState.NORMALIZING,
        AttemptState.UPLOADING,
        AttemptState.AWAITING_RESULT,
    ):
        attempt.advance(state)


def test_success_path() -> None:
    attempt = GenerationAttempt()
    _drive_to_awaiting(attempt)
    attempt.succeed(RESULT)
    assert attempt.state is AttemptState.SUCCEEDED
    assert attempt.result is RESULT
    assert attempt.history[0] is AttemptState.IDLE
    assert len(attempt.history) == 6


def test_cannot_skip_states() -> None:
    attempt = GenerationAttempt()
    with pytest.raises(InvalidTransitionError):
        attempt.advance(AttemptState.UPLOADING)
    with pytest.raises(InvalidTransitionError):
        attempt.succeed(RESULT)


def test_fail_from_any_non_terminal_state() -> None:
    attempt = GenerationAttempt()
    attempt.advance(AttemptState.VALIDATING)
    error = GenerationError(GenerationErrorKind.MISSING_IMAGE, "no image")
    attempt.fail(error)
    assert attempt.state is AttemptState.FAILED
    assert attempt.error is error
    assert attempt.result is None


def test_terminal_states_are_final() -> None:
    attempt = GenerationAttempt()
    _drive_to_awaiting(attempt)
    attempt.succeed(RESULT)
    with pytest.raises(InvalidTransitionError):
        attempt.fail(GenerationError(GenerationErrorKind.TIMEOUT, "late"))


def test_ids_are_unique() -> None:
    assert GenerationAttempt().attempt_id != GenerationAttempt().attempt_id
