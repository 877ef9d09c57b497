"""Per-attempt state machine for generation requests."""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pbnstudio.core.generation.errors import GenerationError
from pbnstudio.core.generation.models import GenerationResult
from pbnstudio.core.utils.logging import get_logger


class AttemptState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    NORMALIZING = "normalizing"
    UPLOADING = "uploading"
    AWAITING_RESULT = "awaiting_result"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (AttemptState.SUCCEEDED, AttemptState.FAILED)


_FORWARD: dict[AttemptState, AttemptState] = {
    AttemptState.IDLE: AttemptState.VALIDATING,
    AttemptState.VALIDATING: AttemptState.NORMALIZING,
    AttemptState.NORMALIZING: AttemptState.UPLOADING,
    AttemptState.UPLOADING: AttemptState.AWAITING_RESULT,
    AttemptState.AWAITING_RESULT: AttemptState.SUCCEEDED,
}


class InvalidTransitionError(RuntimeError):
    """An attempt was driven out of order."""


class GenerationAttempt:
    """One pass through Idle -> Validating -> Normalizing -> Uploading ->
    AwaitingResult -> Succeeded, or to Failed from any non-terminal state.

    Attempts are single-use; a retry is a new instance with a new id.

    Args:
        attempt_id: Identifier used in logs and for discarding stale results.
    """

    def __init__(self, attempt_id: str | None = None) -> None:
        self.attempt_id = attempt_id or uuid4().hex[:12]
        self.state = AttemptState.IDLE
        self.history: list[AttemptState] = [AttemptState.IDLE]
        self.result: GenerationResult | None = None
        self.error: GenerationError | None = None
        self._log = get_logger(__name__, attempt_id=self.attempt_id)

    def advance(self, state: AttemptState) -> None:
        """Move to the next state in the success path.

        Raises:
            InvalidTransitionError: If ``state`` isn't the next state.
        """
        if _FORWARD.get(self.state) is not state or state is AttemptState.SUCCEEDED:
            raise InvalidTransitionError(f"Cannot move from {self.state.value} to {state.value}")
        self._set(state)

    def succeed(self, result: GenerationResult) -> None:
        if self.state is not AttemptState.AWAITING_RESULT:
            raise InvalidTransitionError(f"Cannot succeed from {self.state.value}")
        self.result = result
        self._set(AttemptState.SUCCEEDED)

    def fail(self, error: GenerationError) -> None:
        if self.state.terminal:
            raise InvalidTransitionError(f"Attempt already {self.state.value}")
        self.error = error
        self._log.warning(
            "Generation failed in %s: %s (%s)", self.state.value, error.message, error.kind.value
        )
        self._set(AttemptState.FAILED)

    def _set(self, state: AttemptState) -> None:
        self._log.debug("Attempt %s: %s -> %s", self.attempt_id, self.state.value, state.value)
        self.state = state
        self.history.append(state)
