"""Source images and the local constraints checked before any upload."""

from __future__ import annotations

import logging
import mimetypes
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field

from pbnstudio.core.imaging.errors import ImageDecodeError, SurfaceError

logger = logging.getLogger(__name__)

ACCEPTED_MIME_TYPES: frozenset[str] = frozenset({"image/png", "image/jpeg", "image/webp"})
MAX_SOURCE_BYTES = 10 * 1024 * 1024

UNSUPPORTED_TYPE_MESSAGE = "Unsupported image type. Please use a PNG, JPEG, or WEBP image."
TOO_LARGE_MESSAGE = "Image is too large. Maximum file size is 10MB."

# Pillow format name -> MIME type
_FORMAT_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "MPO": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}


class SourceImage(BaseModel):
    """A captured or selected photo, as handed over by the capture facility.

    Attributes:
        name: File name used when uploading.
        data: Raw encoded bytes.
        mime_type: Declared or sniffed MIME type.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="image", min_length=1)
    data: bytes = Field(repr=False)
    mime_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @classmethod
    def from_bytes(
        cls, data: bytes, name: str = "image", mime_type: str | None = None
    ) -> SourceImage:
        """Wrap raw bytes, sniffing the MIME type from content when not given."""
        return cls(name=name, data=data, mime_type=mime_type or sniff_mime_type(data))

    @classmethod
    def from_path(cls, path: Path | str) -> SourceImage:
        """Read an image file from disk.

        The MIME type is sniffed from content; the file extension is only
        used when the content cannot be identified.
        """
        path = Path(path)
        data = path.read_bytes()
        mime = sniff_mime_type(data)
        if mime == "application/octet-stream":
            guessed, _ = mimetypes.guess_type(path.name)
            mime = guessed or mime
        return cls(name=path.name, data=data, mime_type=mime)


def sniff_mime_type(data: bytes) -> str:
    """Identify the image MIME type from its header bytes.

    Returns:
        MIME type, or "application/octet-stream" when Pillow can't identify it.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            return _FORMAT_MIME.get(img.format or "", "application/octet-stream")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        return "application/octet-stream"


def decode_image(data: bytes) -> Image.Image:
    """Decode image bytes into an upright RGB Pillow image.

    EXIF orientation is applied, so camera captures come out the way they
    were shot. Transparent pixels are composited onto white.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
        SurfaceError: If the decoded image can't be converted to RGB.
    """
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to load image: {e}") from e

    try:
        img = ImageOps.exif_transpose(img) or img
        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            rgba = img.convert("RGBA")
            surface = Image.new("RGB", rgba.size, (255, 255, 255))
            surface.paste(rgba, mask=rgba.getchannel("A"))
            return surface
        return img.convert("RGB")
    except (OSError, ValueError) as e:
        raise SurfaceError(f"Drawing surface not available: {e}") from e
