from __future__ import annotations

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpClientConfig(BaseModel):
    """Connection settings for the generation service.

    Generation is compute-heavy on the server, so both budgets default to
    minutes rather than the few seconds an interactive API would use.

    Args:
        base_url: Service root, e.g. "http://localhost:8000"
        timeout: HTTPX per-operation timeouts (connect, read, write, pool)
        overall_timeout_s: Wall-clock budget for one request, upload included
        user_agent: Sent with every request
        max_error_body_bytes: How much of an error body is kept on ApiError
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str
    timeout: httpx.Timeout = Field(default_factory=lambda: httpx.Timeout(120.0, connect=10.0))
    overall_timeout_s: float = Field(default=120.0, gt=0.0)
    user_agent: str = "pbnstudio/0.1"
    max_error_body_bytes: int = Field(default=4096, gt=0)

    @field_validator("base_url")
    @classmethod
    def require_http_scheme(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http:// or https:// URL")
        return v.rstrip("/")
