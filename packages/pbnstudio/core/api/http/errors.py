"""Failures raised by AsyncApiClient.

Every request either returns a response below 400 or raises one of these.
The generation layer maps them onto its own error kinds, so the split here
only tracks what the caller can tell apart: no response at all, no response
in time, an error status, or a body that could not be decoded.
"""

from __future__ import annotations

import json


class ApiError(Exception):
    """Base class for transport and status failures.

    Attributes:
        message: Short description of what went wrong
        method: HTTP method of the failed request
        url: Absolute request URL
        status_code: Response status, or None when nothing came back
        request_id: X-Request-Id sent with (or echoed for) the request
        body_snippet: Leading part of the response body, decoded leniently
        cause: Underlying HTTPX or asyncio exception, if any
    """

    def __init__(
        self,
        *,
        message: str,
        method: str,
        url: str,
        status_code: int | None = None,
        request_id: str | None = None,
        body_snippet: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.request_id = request_id
        self.body_snippet = body_snippet
        self.cause = cause
        super().__init__(str(self))

    @property
    def detail(self) -> str | None:
        """The service's ``{"detail": "..."}`` text, when the body carries one."""
        if not self.body_snippet:
            return None
        try:
            body = json.loads(self.body_snippet)
        except ValueError:
            return None
        detail = body.get("detail") if isinstance(body, dict) else None
        return detail if isinstance(detail, str) and detail else None

    def __str__(self) -> str:
        text = f"{self.message} ({self.method} {self.url}"
        if self.status_code is not None:
            text += f", status {self.status_code}"
        if self.request_id:
            text += f", request {self.request_id}"
        return text + ")"


class NetworkError(ApiError):
    """No response: DNS failure, refused or reset connection."""


class RequestTimeoutError(ApiError):
    """No response within the HTTPX timeouts or the overall budget."""


class HttpStatusError(ApiError):
    """The service answered with a status of 400 or above."""


class DecodeError(ApiError):
    """A response body that should have been JSON was not."""
