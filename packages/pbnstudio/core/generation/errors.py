"""Typed failures of a generation attempt.

Every failure falls in one of four categories:

- validation: a precondition checked locally, before any network traffic
- processing: decode/encode/surface failure on the chosen image
- transport: no response was obtained (connectivity or timeout)
- remote: the service answered with a non-success status or an unusable body

All kinds are terminal for the attempt; nothing is retried automatically.
"""

from __future__ import annotations

from enum import Enum

from pbnstudio.core.api.http.errors import ApiError, DecodeError, NetworkError, RequestTimeoutError


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    PROCESSING = "processing"
    TRANSPORT = "transport"
    REMOTE = "remote"


class GenerationErrorKind(str, Enum):
    """Specific failure kinds, each belonging to one ErrorCategory."""

    MISSING_IMAGE = "missing-image"
    PALETTE_TOO_SMALL = "palette-too-small"
    DETAIL_OUT_OF_RANGE = "detail-out-of-range"
    UNSUPPORTED_IMAGE_TYPE = "unsupported-image-type"
    IMAGE_TOO_LARGE = "image-too-large"
    ATTEMPT_IN_PROGRESS = "attempt-in-progress"
    PROCESSING = "processing"
    CONNECTIVITY = "connectivity"
    TIMEOUT = "timeout"
    INVALID_REQUEST = "invalid-request"
    PAYLOAD_TOO_LARGE = "payload-too-large"
    UNSUPPORTED_MEDIA_TYPE = "unsupported-media-type"
    SERVER_ERROR = "server-error"
    REQUEST_FAILED = "request-failed"
    MALFORMED_RESPONSE = "malformed-response"

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self]


_CATEGORIES: dict[GenerationErrorKind, ErrorCategory] = {
    GenerationErrorKind.MISSING_IMAGE: ErrorCategory.VALIDATION,
    GenerationErrorKind.PALETTE_TOO_SMALL: ErrorCategory.VALIDATION,
    GenerationErrorKind.DETAIL_OUT_OF_RANGE: ErrorCategory.VALIDATION,
    GenerationErrorKind.UNSUPPORTED_IMAGE_TYPE: ErrorCategory.VALIDATION,
    GenerationErrorKind.IMAGE_TOO_LARGE: ErrorCategory.VALIDATION,
    GenerationErrorKind.ATTEMPT_IN_PROGRESS: ErrorCategory.VALIDATION,
    GenerationErrorKind.PROCESSING: ErrorCategory.PROCESSING,
    GenerationErrorKind.CONNECTIVITY: ErrorCategory.TRANSPORT,
    GenerationErrorKind.TIMEOUT: ErrorCategory.TRANSPORT,
    GenerationErrorKind.INVALID_REQUEST: ErrorCategory.REMOTE,
    GenerationErrorKind.PAYLOAD_TOO_LARGE: ErrorCategory.REMOTE,
    GenerationErrorKind.UNSUPPORTED_MEDIA_TYPE: ErrorCategory.REMOTE,
    GenerationErrorKind.SERVER_ERROR: ErrorCategory.REMOTE,
    GenerationErrorKind.REQUEST_FAILED: ErrorCategory.REMOTE,
    GenerationErrorKind.MALFORMED_RESPONSE: ErrorCategory.REMOTE,
}

CONNECTIVITY_MESSAGE = "Could not reach the server. Please check your internet connection."
TIMEOUT_MESSAGE = (
    "The server took too long to respond. Please check your connection and try again."
)
PAYLOAD_TOO_LARGE_MESSAGE = "Image is too large for the server. Please use a smaller image."
UNSUPPORTED_MEDIA_TYPE_MESSAGE = "Unsupported file type. Please use a PNG, JPEG, or WEBP image."
INVALID_REQUEST_FALLBACK = "Invalid request"
SERVER_ERROR_FALLBACK = "Server error while generating paint-by-number"
MALFORMED_RESPONSE_MESSAGE = "The server returned an unexpected response."


class GenerationError(Exception):
    """A terminal failure of one generation, analysis, or health attempt.

    Attributes:
        kind: Specific failure kind.
        message: Human-readable message for display.
        status_code: HTTP status, for remote failures with a response.
        detail: Server-provided detail text, when present.
    """

    def __init__(
        self,
        kind: GenerationErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)

    @property
    def category(self) -> ErrorCategory:
        return self.kind.category

    @property
    def retryable_input(self) -> bool:
        """Whether retrying with the same image could succeed."""
        return self.category is not ErrorCategory.PROCESSING

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


def error_from_api_error(error: ApiError) -> GenerationError:
    """Map an HTTP-layer failure to a GenerationError.

    400 and 500 echo the server's ``detail``; 413 and 415 use fixed
    messages; any other status reports status plus detail. No response at
    all is a connectivity failure, a timeout is its own kind.
    """
    if isinstance(error, RequestTimeoutError):
        return GenerationError(GenerationErrorKind.TIMEOUT, TIMEOUT_MESSAGE)
    if isinstance(error, NetworkError) or error.status_code is None:
        return GenerationError(GenerationErrorKind.CONNECTIVITY, CONNECTIVITY_MESSAGE)

    status = error.status_code
    detail = error.detail
    if isinstance(error, DecodeError) and status < 400:
        return GenerationError(
            GenerationErrorKind.MALFORMED_RESPONSE, MALFORMED_RESPONSE_MESSAGE, status_code=status
        )
    if status == 400:
        return GenerationError(
            GenerationErrorKind.INVALID_REQUEST,
            detail or INVALID_REQUEST_FALLBACK,
            status_code=status,
            detail=detail,
        )
    if status == 413:
        return GenerationError(
            GenerationErrorKind.PAYLOAD_TOO_LARGE,
            PAYLOAD_TOO_LARGE_MESSAGE,
            status_code=status,
            detail=detail,
        )
    if status == 415:
        return GenerationError(
            GenerationErrorKind.UNSUPPORTED_MEDIA_TYPE,
            UNSUPPORTED_MEDIA_TYPE_MESSAGE,
            status_code=status,
            detail=detail,
        )
    if status == 500:
        return GenerationError(
            GenerationErrorKind.SERVER_ERROR,
            detail or SERVER_ERROR_FALLBACK,
            status_code=status,
            detail=detail,
        )
    message = f"Request failed with status {status}"
    if detail:
        message = f"{message}: {detail}"
    return GenerationError(
        GenerationErrorKind.REQUEST_FAILED, message, status_code=status, detail=detail
    )
