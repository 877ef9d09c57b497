"""Client for the remote paint-by-number generation service.

Packages a normalized image, a palette snapshot, and a detail level into a
multipart request, reports progress while uploading, and maps the response
(or failure) into a GenerationResult or a GenerationError.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import PurePath
from typing import Any

import httpx
from pydantic import ValidationError

from pbnstudio.core.api.http.client import AsyncApiClient
from pbnstudio.core.api.http.config import HttpClientConfig
from pbnstudio.core.api.http.errors import ApiError
from pbnstudio.core.api.http.upload import encode_multipart, iter_upload_chunks
from pbnstudio.core.generation.attempt import AttemptState, GenerationAttempt
from pbnstudio.core.generation.errors import (
    MALFORMED_RESPONSE_MESSAGE,
    GenerationError,
    GenerationErrorKind,
    error_from_api_error,
)
from pbnstudio.core.generation.models import AnalysisResult, GenerationResult, HealthStatus
from pbnstudio.core.generation.normalize import canonical_fields
from pbnstudio.core.generation.profiles import THRESHOLD_PROFILE, FlowProfile
from pbnstudio.core.generation.progress import (
    NORMALIZE_DONE,
    NORMALIZE_START,
    UPLOAD_START,
    ProgressListener,
    ProgressTracker,
)
from pbnstudio.core.imaging.errors import ImageProcessingError
from pbnstudio.core.imaging.normalizer import (
    NormalizedImage,
    NormalizeOptions,
    normalize_image_async,
)
from pbnstudio.core.imaging.source import (
    ACCEPTED_MIME_TYPES,
    MAX_SOURCE_BYTES,
    TOO_LARGE_MESSAGE,
    UNSUPPORTED_TYPE_MESSAGE,
    SourceImage,
)
from pbnstudio.core.palette.models import PaletteColor

logger = logging.getLogger(__name__)

ANALYZE_ENDPOINT = "/analyze"
HEALTH_ENDPOINT = "/health"


def serialize_palette(colors: Iterable[PaletteColor]) -> str:
    """JSON wire form of a palette: ``[{"id", "rgb": [r, g, b], "note"}, ...]``."""
    return json.dumps([c.to_wire() for c in colors])


def _upload_file(image: SourceImage, normalized: NormalizedImage) -> tuple[str, bytes, str]:
    """Multipart file tuple named after the source, with the upload's extension."""
    stem = PurePath(image.name).stem or "image"
    ext = ".jpg" if normalized.mime_type == "image/jpeg" else ""
    return f"{stem}{ext}", normalized.data, normalized.mime_type


def _malformed(message: str = MALFORMED_RESPONSE_MESSAGE, **kwargs: Any) -> GenerationError:
    return GenerationError(GenerationErrorKind.MALFORMED_RESPONSE, message, **kwargs)


class GenerationClient:
    """Talks to the generation service on behalf of one flow profile.

    Each call to generate() is one independent attempt: it validates
    locally, normalizes the image, makes exactly one request, and either
    returns a complete GenerationResult or raises a GenerationError. No
    results are cached and the caller's palette and image are never mutated.

    Args:
        http_config: Service base URL and timeouts.
        profile: Flow profile (detail range, palette minimum, outputs).
        normalize_options: Upload image bounds.
        transport: Optional HTTPX transport (for tests).
        http_client: Pre-built AsyncApiClient; overrides http_config/transport.

    Example:
        >>> config = HttpClientConfig(base_url="http://localhost:8000")
        >>> async with GenerationClient(config) as client:
        ...     result = await client.generate(image, palette, detail=50)
    """

    def __init__(
        self,
        http_config: HttpClientConfig,
        *,
        profile: FlowProfile = THRESHOLD_PROFILE,
        normalize_options: NormalizeOptions | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: AsyncApiClient | None = None,
    ) -> None:
        self.profile = profile
        self.normalize_options = normalize_options or NormalizeOptions()
        self._http = http_client or AsyncApiClient(http_config, transport=transport)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> GenerationClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _check_image(self, image: SourceImage | None) -> SourceImage:
        if image is None:
            raise GenerationError(
                GenerationErrorKind.MISSING_IMAGE, "Please select or capture an image first"
            )
        if image.mime_type not in ACCEPTED_MIME_TYPES:
            raise GenerationError(
                GenerationErrorKind.UNSUPPORTED_IMAGE_TYPE, UNSUPPORTED_TYPE_MESSAGE
            )
        if image.size_bytes > MAX_SOURCE_BYTES:
            raise GenerationError(GenerationErrorKind.IMAGE_TOO_LARGE, TOO_LARGE_MESSAGE)
        return image

    def _check_palette(
        self, palette: Iterable[PaletteColor], minimum: int
    ) -> tuple[PaletteColor, ...]:
        colors = tuple(palette)
        if len(colors) < minimum:
            noun = "color" if minimum == 1 else "colors"
            raise GenerationError(
                GenerationErrorKind.PALETTE_TOO_SMALL,
                f"Please add at least {minimum} {noun} to your palette",
            )
        return colors

    def validate(
        self,
        image: SourceImage | None,
        palette: Iterable[PaletteColor],
        detail: int,
    ) -> tuple[SourceImage, tuple[PaletteColor, ...]]:
        """Check every local precondition of a generation request.

        Returns:
            The image and an immutable palette snapshot.

        Raises:
            GenerationError: Validation kind naming the violated precondition.
        """
        checked = self._check_image(image)
        colors = self._check_palette(palette, self.profile.min_palette_size)
        if isinstance(detail, bool) or not isinstance(detail, int):
            raise GenerationError(
                GenerationErrorKind.DETAIL_OUT_OF_RANGE, "Detail level must be a whole number"
            )
        if not self.profile.accepts_detail(detail):
            raise GenerationError(
                GenerationErrorKind.DETAIL_OUT_OF_RANGE,
                f"Detail level must be between {self.profile.detail_min} "
                f"and {self.profile.detail_max}",
            )
        return checked, colors

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def _normalize(self, image: SourceImage) -> NormalizedImage:
        try:
            return await normalize_image_async(image.data, self.normalize_options)
        except ImageProcessingError as e:
            raise GenerationError(GenerationErrorKind.PROCESSING, str(e)) from e

    def _form_fields(
        self,
        colors: tuple[PaletteColor, ...],
        detail: int,
        show_numbers: bool,
        fill_regions: bool,
    ) -> dict[str, str]:
        fields = {"palette": serialize_palette(colors), "threshold": str(detail)}
        if self.profile.vector_output:
            fields["show_numbers"] = "true" if show_numbers else "false"
            fields["fill_regions"] = "true" if fill_regions else "false"
        return fields

    def _parse_generation(self, payload: Any, palette_size: int) -> GenerationResult:
        if not isinstance(payload, Mapping):
            raise _malformed()
        fields = canonical_fields(payload)
        if fields.get("success") is False:
            detail = fields.get("detail")
            raise _malformed(detail if isinstance(detail, str) and detail else "Generation failed")
        try:
            result = GenerationResult.model_validate(fields)
        except ValidationError as e:
            logger.debug("Generation response failed validation: %s", e)
            raise _malformed() from e
        if result.colors_used > palette_size:
            raise _malformed(
                f"Server reported {result.colors_used} colors used for a "
                f"{palette_size}-color palette"
            )
        return result

    async def generate(
        self,
        image: SourceImage | None,
        palette: Iterable[PaletteColor],
        detail: int,
        *,
        on_progress: ProgressListener | None = None,
        show_numbers: bool = True,
        fill_regions: bool = False,
        attempt: GenerationAttempt | None = None,
    ) -> GenerationResult:
        """Run one generation attempt.

        Args:
            image: Source photo; None fails validation.
            palette: Palette entries; snapshotted before use.
            detail: Detail level within the profile's range.
            on_progress: Receives monotonic percentages ending at 100 on success.
            show_numbers: Vector flows only: draw region numbers.
            fill_regions: Vector flows only: fill regions with color.
            attempt: State holder to drive; a fresh one is created if omitted.

        Returns:
            The canonical GenerationResult.

        Raises:
            GenerationError: On any validation, processing, transport or
                remote failure.
        """
        attempt = attempt or GenerationAttempt()
        tracker = ProgressTracker(on_progress)
        try:
            attempt.advance(AttemptState.VALIDATING)
            checked, colors = self.validate(image, palette, detail)

            attempt.advance(AttemptState.NORMALIZING)
            tracker.report(NORMALIZE_START)
            normalized = await self._normalize(checked)
            tracker.report(NORMALIZE_DONE)

            attempt.advance(AttemptState.UPLOADING)
            body, content_type = encode_multipart(
                self._form_fields(colors, detail, show_numbers, fill_regions),
                {"file": _upload_file(checked, normalized)},
            )
            tracker.report(UPLOAD_START)

            def _on_sent(sent: int, total: int) -> None:
                tracker.report_upload(sent, total)
                if sent >= total and attempt.state is AttemptState.UPLOADING:
                    attempt.advance(AttemptState.AWAITING_RESULT)

            logger.info(
                "Generating with %d colors, detail=%d, upload=%d bytes (%dx%d)",
                len(colors),
                detail,
                len(body),
                normalized.width,
                normalized.height,
            )
            response = await self._http.post(
                self.profile.endpoint,
                content=iter_upload_chunks(body, _on_sent),
                headers={"Content-Type": content_type, "Content-Length": str(len(body))},
            )
            if attempt.state is AttemptState.UPLOADING:
                attempt.advance(AttemptState.AWAITING_RESULT)

            result = self._parse_generation(self._http.json(response), len(colors))
            attempt.succeed(result)
            tracker.complete()
            logger.info(
                "Generated %dx%d template with %d regions",
                result.dimensions.width,
                result.dimensions.height,
                result.region_count,
            )
            return result

        except GenerationError as e:
            attempt.fail(e)
            raise
        except ApiError as e:
            error = error_from_api_error(e)
            attempt.fail(error)
            raise error from e

    # ------------------------------------------------------------------
    # Secondary endpoints
    # ------------------------------------------------------------------

    async def analyze(
        self, image: SourceImage | None, palette: Iterable[PaletteColor]
    ) -> AnalysisResult:
        """Ask the service how well a palette covers an image.

        Raises:
            GenerationError: Same taxonomy as generate().
        """
        checked = self._check_image(image)
        colors = self._check_palette(palette, 1)
        normalized = await self._normalize(checked)
        try:
            response = await self._http.post(
                ANALYZE_ENDPOINT,
                data={"palette": serialize_palette(colors)},
                files={"file": _upload_file(checked, normalized)},
            )
            payload = self._http.json(response)
        except ApiError as e:
            raise error_from_api_error(e) from e

        if not isinstance(payload, Mapping):
            raise _malformed()
        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as e:
            raise _malformed() from e

    async def health(self) -> HealthStatus | None:
        """Check that the service is up.

        Returns:
            The reported status, or None when the service is unavailable.
            Never raises for service problems.
        """
        try:
            response = await self._http.get(HEALTH_ENDPOINT)
            return HealthStatus.model_validate(self._http.json(response))
        except ApiError as e:
            logger.warning("Generation service unavailable: %s", e)
        except ValidationError as e:
            logger.warning("Generation service returned an invalid health payload: %s", e)
        return None
