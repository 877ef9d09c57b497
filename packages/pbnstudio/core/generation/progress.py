"""Progress reporting contract for generation attempts.

Listeners receive percentages in [0, 100]. Within one attempt the values
never decrease, and 100 is only reported once the success response has
been received and validated.
"""

from __future__ import annotations

from typing import Protocol

# Stage checkpoints for one generation attempt
NORMALIZE_START = 10.0
NORMALIZE_DONE = 20.0
UPLOAD_START = 30.0
UPLOAD_SPAN = 40.0
COMPLETE = 100.0

# Highest value reportable before completion
_CEILING = 99.0


class ProgressListener(Protocol):
    def __call__(self, percent: float) -> None: ...


class ProgressTracker:
    """Enforces the progress contract in front of an optional listener.

    Out-of-order or repeated values are dropped rather than forwarded, and
    anything reported before complete() is capped below 100.

    Args:
        listener: Receives each accepted value.
    """

    def __init__(self, listener: ProgressListener | None = None) -> None:
        self._listener = listener
        self._current = 0.0
        self._completed = False
        self.history: list[float] = []

    @property
    def current(self) -> float:
        return self._current

    @property
    def completed(self) -> bool:
        return self._completed

    def report(self, percent: float) -> None:
        """Report progress; values at or below the current value are ignored."""
        if self._completed:
            return
        value = min(max(percent, 0.0), _CEILING)
        if value <= self._current and self.history:
            return
        self._emit(value)

    def report_upload(self, sent: int, total: int) -> None:
        """Map body bytes sent onto the upload span of the scale."""
        if total <= 0:
            return
        self.report(UPLOAD_START + (sent / total) * UPLOAD_SPAN)

    def complete(self) -> None:
        """Report 100; only call once the success response is in hand."""
        if self._completed:
            return
        self._completed = True
        self._emit(COMPLETE)

    def _emit(self, value: float) -> None:
        self._current = value
        self.history.append(value)
        if self._listener is not None:
            self._listener(value)
