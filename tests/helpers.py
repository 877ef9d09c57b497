"""Test helpers shared across unit and integration tests."""

from __future__ import annotations

import re
from io import BytesIO
from typing import Any

import httpx
from PIL import Image

BASE_URL = "http://pbn.test"


def image_bytes(
    width: int = 64,
    height: int = 48,
    color: tuple[int, ...] = (200, 30, 30),
    fmt: str = "PNG",
    mode: str = "RGB",
) -> bytes:
    """Encode a solid-color image."""
    buf = BytesIO()
    Image.new(mode, (width, height), color).save(buf, fmt)
    return buf.getvalue()


def parse_multipart(request: httpx.Request) -> dict[str, tuple[str | None, bytes]]:
    """Split a multipart/form-data request into {field: (filename, content)}."""
    ctype = request.headers["content-type"]
    boundary = ctype.split("boundary=", 1)[1].strip('"').encode("ascii")
    parts: dict[str, tuple[str | None, bytes]] = {}
    for raw in request.content.split(b"--" + boundary):
        if not raw.startswith(b"\r\n"):
            continue  # preamble or closing "--"
        head, _, content = raw[2:].partition(b"\r\n\r\n")
        disposition = head.decode("utf-8")
        name = re.search(r'name="([^"]*)"', disposition)
        filename = re.search(r'filename="([^"]*)"', disposition)
        assert name is not None
        parts[name.group(1)] = (filename.group(1) if filename else None, content[:-2])
    return parts


def form_fields(request: httpx.Request) -> dict[str, str]:
    """Plain (non-file) multipart fields decoded as text."""
    return {
        name: content.decode("utf-8")
        for name, (filename, content) in parse_multipart(request).items()
        if filename is None
    }


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)
