"""Multipart encoding and chunked streaming for image uploads."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping

import httpx

UPLOAD_CHUNK_SIZE = 64 * 1024


def encode_multipart(
    data: Mapping[str, str], files: Mapping[str, tuple[str, bytes, str]]
) -> tuple[bytes, str]:
    """Encode form fields and files as a multipart/form-data body.

    Encoding up front lets the caller stream the body and observe upload
    progress instead of handing the whole form to the transport at once.

    Args:
        data: Plain form fields
        files: Field name to (filename, content, content_type)

    Returns:
        Tuple of (body bytes, Content-Type header value with boundary)
    """
    request = httpx.Request("POST", "http://multipart.invalid/", data=dict(data), files=dict(files))
    return request.read(), request.headers["Content-Type"]


async def iter_upload_chunks(
    body: bytes,
    on_sent: Callable[[int, int], None] | None = None,
    chunk_size: int = UPLOAD_CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    """Yield ``body`` in slices, calling ``on_sent(sent, total)`` after each."""
    total = len(body)
    sent = 0
    for offset in range(0, total, chunk_size):
        chunk = body[offset : offset + chunk_size]
        yield chunk
        sent += len(chunk)
        if on_sent is not None:
            on_sent(sent, total)
