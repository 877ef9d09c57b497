"""Tests for RGB/hex helpers."""

from __future__ import annotations

import pytest

from pbnstudio.core.utils.color import hex_to_rgb, rgb_to_hex


def test_rgb_to_hex() -> None:
    assert rgb_to_hex((255, 0, 128)) == "#ff0080"
    assert rgb_to_hex((0, 0, 0)) == "#000000"


@pytest.mark.parametrize("value", ["#FF0080", "ff0080", "  #ff0080 "])
def test_hex_to_rgb(value: str) -> None:
    assert hex_to_rgb(value) == (255, 0, 128)


@pytest.mark.parametrize("value", ["#fff", "#gg0000", "", "#ff00801"])
def test_hex_to_rgb_invalid(value: str) -> None:
    with pytest.raises(ValueError):
        hex_to_rgb(value)
