"""RGB / hex conversions used by palette editing."""

from __future__ import annotations

import re

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    """Format an RGB triple as a lowercase ``#rrggbb`` string.

    Example:
        >>> rgb_to_hex((255, 0, 128))
        '#ff0080'
    """
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` (leading ``#`` optional) into an RGB triple.

    Raises:
        ValueError: If the value is not a six-digit hex color.
    """
    match = _HEX_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid hex color: {value!r}")
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
