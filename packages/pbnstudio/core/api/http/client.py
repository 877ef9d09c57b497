"""Async transport for the generation service, built on HTTPX.

Each call sends exactly one request. HTTPX's per-operation timeouts are
capped by a wall-clock budget so a slow upload cannot outlive it, and
every failure surfaces as an ApiError subclass.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Mapping
from typing import Any

import httpx

from pbnstudio.core.api.http.config import HttpClientConfig
from pbnstudio.core.api.http.errors import (
    ApiError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
)

logger = logging.getLogger(__name__)


def _new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class AsyncApiClient:
    """One HTTPX AsyncClient bound to the service's base URL.

    Args:
        config: Base URL and timeouts
        transport: Optional HTTPX transport (MockTransport in tests)

    Example:
        >>> async with AsyncApiClient(HttpClientConfig(base_url="http://localhost:8000")) as c:
        ...     status = c.json(await c.get("/health"))
    """

    def __init__(
        self, config: HttpClientConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _error(
        self,
        cls: type[ApiError],
        message: str,
        response: httpx.Response,
        cause: BaseException | None = None,
    ) -> ApiError:
        content = response.content or b""
        return cls(
            message=message,
            method=response.request.method,
            url=str(response.request.url),
            status_code=response.status_code,
            request_id=response.headers.get("x-request-id")
            or response.request.headers.get("x-request-id"),
            body_snippet=content[: self.config.max_error_body_bytes].decode(
                "utf-8", errors="replace"
            ),
            cause=cause,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        files: Mapping[str, Any] | None = None,
        content: Any = None,
    ) -> httpx.Response:
        """Send one request and return a response with status below 400.

        Args:
            method: HTTP method
            path: Path under the base URL, e.g. "/generate"
            headers: Extra request headers
            data: Form fields, sent multipart when ``files`` is given
            files: Multipart files
            content: Pre-encoded body (bytes or an async byte iterator)

        Raises:
            RequestTimeoutError: No response within the timeouts
            NetworkError: The request could not be sent
            HttpStatusError: The service answered 400 or above
        """
        method = method.upper()
        url = f"{self.config.base_url}/{path.lstrip('/')}"
        request_id = _new_request_id()
        send_headers = {"X-Request-Id": request_id, **(headers or {})}

        logger.debug(
            "HTTP %s %s",
            method,
            url,
            extra={"request_id": request_id, "body_bytes": send_headers.get("Content-Length")},
        )
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self._client.request(
                    method, url, headers=send_headers, data=data, files=files, content=content
                ),
                timeout=self.config.overall_timeout_s,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise RequestTimeoutError(
                message="Request timed out",
                method=method,
                url=url,
                request_id=request_id,
                cause=e,
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(
                message="Could not send request",
                method=method,
                url=url,
                request_id=request_id,
                cause=e,
            ) from e

        logger.debug(
            "HTTP %s %s -> %d",
            method,
            url,
            response.status_code,
            extra={
                "request_id": request_id,
                "elapsed_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        if response.status_code >= 400:
            raise self._error(HttpStatusError, "HTTP error response", response)
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    def json(self, response: httpx.Response) -> Any:
        """Decode a JSON body; an empty body decodes to None.

        Raises:
            DecodeError: If the body is not declared as JSON or does not parse
        """
        if not response.content:
            return None
        ctype = response.headers.get("content-type", "")
        if "application/json" not in ctype and "+json" not in ctype:
            message = f"Expected JSON, got {ctype or 'no content-type'}"
            raise self._error(DecodeError, message, response)
        try:
            return response.json()
        except ValueError as e:
            raise self._error(DecodeError, "Response body is not valid JSON", response, e) from e
