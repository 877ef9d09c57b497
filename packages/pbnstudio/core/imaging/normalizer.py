"""Downscale-and-recompress transform applied before upload.

Bounds upload size and server-side processing cost regardless of the
source camera's resolution.
"""

from __future__ import annotations

import asyncio
import logging
import math
from io import BytesIO

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from pbnstudio.core.imaging.errors import ImageEncodeError
from pbnstudio.core.imaging.source import decode_image

logger = logging.getLogger(__name__)

UPLOAD_FORMAT = "JPEG"
UPLOAD_MIME_TYPE = "image/jpeg"


class NormalizeOptions(BaseModel):
    """Bounds for the normalized upload image.

    Attributes:
        max_width: Maximum output width in pixels.
        max_height: Maximum output height in pixels.
        quality: Encoder quality on a 0..1 scale.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_width: int = Field(default=1200, gt=0)
    max_height: int = Field(default=1200, gt=0)
    quality: float = Field(default=0.8, ge=0.0, le=1.0)


class NormalizedImage(BaseModel):
    """Encoded upload payload derived from exactly one source image.

    Attributes:
        data: Encoded bytes.
        width: Pixel width.
        height: Pixel height.
        mime_type: MIME type of ``data``.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False, min_length=1)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    mime_type: str = UPLOAD_MIME_TYPE

    @property
    def size_bytes(self) -> int:
        return len(self.data)


def scaled_size(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Compute the downscale-only target size preserving aspect ratio.

    scale = min(1, max_width / width, max_height / height), applied to both
    dimensions and rounded half up to whole pixels (never below 1).

    Example:
        >>> scaled_size(2000, 1000, 1200, 1200)
        (1200, 600)
        >>> scaled_size(800, 600, 1200, 1200)
        (800, 600)
    """
    scale = min(1.0, max_width / width, max_height / height)
    if scale >= 1.0:
        return width, height
    new_w = max(1, int(math.floor(width * scale + 0.5)))
    new_h = max(1, int(math.floor(height * scale + 0.5)))
    return min(new_w, max_width), min(new_h, max_height)


def _encoder_quality(quality: float) -> int:
    # Pillow's JPEG quality scale is 1..95
    return max(1, min(95, int(math.floor(quality * 100 + 0.5))))


def normalize_image(data: bytes, options: NormalizeOptions | None = None) -> NormalizedImage:
    """Decode, downscale, and re-encode an image for upload.

    Args:
        data: Source image bytes in any format Pillow can read.
        options: Size/quality bounds (defaults 1200x1200, quality 0.8).

    Returns:
        NormalizedImage holding JPEG bytes.

    Raises:
        ImageDecodeError: If the source can't be decoded.
        SurfaceError: If the decoded image can't be rendered to RGB.
        ImageEncodeError: If re-encoding fails or produces no bytes.
    """
    opts = options or NormalizeOptions()
    img = decode_image(data)

    target = scaled_size(img.width, img.height, opts.max_width, opts.max_height)
    if target != img.size:
        logger.debug("Downscaling %dx%d -> %dx%d", img.width, img.height, *target)
        img = img.resize(target, Image.Resampling.LANCZOS)

    buf = BytesIO()
    try:
        img.save(buf, UPLOAD_FORMAT, quality=_encoder_quality(opts.quality))
    except (OSError, ValueError) as e:
        raise ImageEncodeError(f"Compression failed: {e}") from e

    encoded = buf.getvalue()
    if not encoded:
        raise ImageEncodeError("Compression failed: encoder produced no output")

    logger.debug(
        "Normalized image: %dx%d, %d -> %d bytes", img.width, img.height, len(data), len(encoded)
    )
    return NormalizedImage(data=encoded, width=img.width, height=img.height)


async def normalize_image_async(
    data: bytes, options: NormalizeOptions | None = None
) -> NormalizedImage:
    """Async wrapper around normalize_image; Pillow work runs in a worker thread."""
    return await asyncio.to_thread(normalize_image, data, options)
