"""Helpers for the data URLs the generation service returns."""

from __future__ import annotations

import base64
import binascii
from pathlib import Path
from urllib.parse import unquote_to_bytes


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Encode bytes as a base64 data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(url: str) -> tuple[str, bytes]:
    """Decode a ``data:`` URL.

    Args:
        url: Data URL, base64 or percent-encoded.

    Returns:
        Tuple of (mime type, payload bytes). The MIME type defaults to
        ``text/plain`` as the data URL scheme specifies.

    Raises:
        ValueError: If the string is not a well-formed data URL.
    """
    if not url.startswith("data:"):
        raise ValueError("Not a data URL")
    header, sep, payload = url[5:].partition(",")
    if not sep:
        raise ValueError("Malformed data URL: missing ','")

    params = header.split(";")
    mime = params[0] or "text/plain"
    if params[-1] == "base64":
        try:
            return mime, base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Malformed base64 payload: {e}") from e
    return mime, unquote_to_bytes(payload)


def save_data_url(url: str, path: Path | str) -> Path:
    """Write the payload of a data URL to disk.

    Returns:
        The written path.
    """
    _, data = decode_data_url(url)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    return out
