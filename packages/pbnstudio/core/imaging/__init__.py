"""Local image handling: decoding, color sampling, and upload normalization."""

from pbnstudio.core.imaging.errors import (
    ImageDecodeError,
    ImageEncodeError,
    ImageProcessingError,
    SurfaceError,
)
from pbnstudio.core.imaging.normalizer import (
    NormalizedImage,
    NormalizeOptions,
    normalize_image,
    normalize_image_async,
    scaled_size,
)
from pbnstudio.core.imaging.sampler import (
    SAMPLE_SIZE,
    average_color,
    sample_color,
    sample_color_async,
)
from pbnstudio.core.imaging.source import (
    ACCEPTED_MIME_TYPES,
    MAX_SOURCE_BYTES,
    SourceImage,
    decode_image,
)

__all__ = [
    "ACCEPTED_MIME_TYPES",
    "MAX_SOURCE_BYTES",
    "SAMPLE_SIZE",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageProcessingError",
    "NormalizeOptions",
    "NormalizedImage",
    "SourceImage",
    "SurfaceError",
    "average_color",
    "decode_image",
    "normalize_image",
    "normalize_image_async",
    "sample_color",
    "sample_color_async",
    "scaled_size",
]
