"""HTTPX transport used to talk to the generation service."""

from pbnstudio.core.api.http.client import AsyncApiClient
from pbnstudio.core.api.http.config import HttpClientConfig
from pbnstudio.core.api.http.errors import (
    ApiError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
)

__all__ = [
    "AsyncApiClient",
    "HttpClientConfig",
    "ApiError",
    "NetworkError",
    "RequestTimeoutError",
    "HttpStatusError",
    "DecodeError",
]
