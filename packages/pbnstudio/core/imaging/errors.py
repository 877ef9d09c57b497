"""Errors raised while decoding, sampling, or re-encoding images."""

from __future__ import annotations


class ImageProcessingError(RuntimeError):
    """Base class for local image processing failures.

    Processing failures are tied to the input image; retrying the same
    image will not help.
    """


class ImageDecodeError(ImageProcessingError):
    """Source bytes could not be decoded as an image."""


class ImageEncodeError(ImageProcessingError):
    """Re-encoding produced no output."""


class SurfaceError(ImageProcessingError):
    """The decoded image could not be rendered to an RGB drawing surface."""
