"""Tests for data URL helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from pbnstudio.core.utils.data_url import decode_data_url, encode_data_url, save_data_url


def test_base64() -> None:
    url = encode_data_url(b"\x89PNG", "image/png")
    assert url == "data:image/png;base64,iVBORw=="
    assert decode_data_url(url) == ("image/png", b"\x89PNG")


def test_percent_encoded_svg() -> None:
    url = "data:image/svg+xml;charset=utf-8,%3Csvg%2F%3E"
    assert decode_data_url(url) == ("image/svg+xml", b"<svg/>")


def test_default_mime() -> None:
    assert decode_data_url("data:,hello") == ("text/plain", b"hello")


@pytest.mark.parametrize("url", ["http://x/a.png", "data:image/png;base64", "data:;base64,***"])
def test_malformed(url: str) -> None:
    with pytest.raises(ValueError):
        decode_data_url(url)


def test_save(tmp_path: Path) -> None:
    out = save_data_url(encode_data_url(b"abc", "image/png"), tmp_path / "out" / "a.png")
    assert out.read_bytes() == b"abc"
