"""Point-sampled color averaging for palette color acquisition.

A single-pixel read from a camera capture is noisy (sensor dithering, JPEG
block artifacts), so the swatch is the mean of a square neighborhood
around the sample point.
"""

from __future__ import annotations

import asyncio
import logging
import math

import numpy as np
from PIL import Image

from pbnstudio.core.imaging.source import decode_image

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 10
_HALF = SAMPLE_SIZE // 2

RGB = tuple[int, int, int]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_color(img: Image.Image, x: int | None = None, y: int | None = None) -> RGB:
    """Average the RGB channels of the neighborhood around (x, y).

    The window covers offsets -5..+5 on both axes around the center. Each
    coordinate is clamped to the image bounds individually, so windows near
    an edge re-read the border pixels instead of reading outside the raster.

    Args:
        img: Decoded image.
        x: Sample column; defaults to the image center.
        y: Sample row; defaults to the image center.

    Returns:
        (r, g, b), each channel mean rounded half up.
    """
    width, height = img.size
    cx = width // 2 if x is None else x
    cy = height // 2 if y is None else y

    pixels = np.asarray(img.convert("RGB"), dtype=np.float64)
    offsets = np.arange(-_HALF, _HALF + 1)
    rows = np.clip(cy + offsets, 0, height - 1)
    cols = np.clip(cx + offsets, 0, width - 1)
    window = pixels[np.ix_(rows, cols)]

    means = window.reshape(-1, 3).mean(axis=0)
    r, g, b = (_round_half_up(m) for m in means)
    return (r, g, b)


def sample_color(data: bytes, x: int | None = None, y: int | None = None) -> RGB:
    """Decode image bytes and sample a representative color.

    Args:
        data: Encoded image bytes.
        x: Sample column; defaults to the image center.
        y: Sample row; defaults to the image center.

    Returns:
        (r, g, b) triple.

    Raises:
        ImageDecodeError: If the bytes can't be decoded.
        SurfaceError: If the image can't be rendered to RGB.
    """
    img = decode_image(data)
    rgb = average_color(img, x, y)
    logger.debug("Sampled %s at (%s, %s) from %dx%d image", rgb, x, y, *img.size)
    return rgb


async def sample_color_async(data: bytes, x: int | None = None, y: int | None = None) -> RGB:
    """Async wrapper around sample_color; decoding runs in a worker thread."""
    return await asyncio.to_thread(sample_color, data, x, y)
