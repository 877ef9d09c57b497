"""Studio session: the single owner of palette, current image, and result.

The session enforces one generation attempt at a time and makes sure a
response that arrives after the image was cleared (or replaced) is
discarded instead of being applied to stale state.
"""

from __future__ import annotations

import logging

from pbnstudio.core.generation.attempt import GenerationAttempt
from pbnstudio.core.generation.client import GenerationClient
from pbnstudio.core.generation.errors import GenerationError, GenerationErrorKind
from pbnstudio.core.generation.models import GenerationResult
from pbnstudio.core.generation.progress import ProgressListener
from pbnstudio.core.imaging.sampler import sample_color_async
from pbnstudio.core.imaging.source import SourceImage
from pbnstudio.core.palette.models import DEFAULT_RGB, PaletteColor
from pbnstudio.core.palette.store import PaletteStore

logger = logging.getLogger(__name__)


class StudioSession:
    """Coordinates the palette, the target image, and generation attempts.

    A failed attempt leaves the previous successful result untouched and
    records the error in ``last_error``. Changing the palette or the image
    clears the result and supersedes any attempt in flight.

    Args:
        client: Generation client used for attempts.
        palette: Palette store to use; a new empty one by default.
    """

    def __init__(self, client: GenerationClient, palette: PaletteStore | None = None) -> None:
        self.client = client
        self.palette = palette if palette is not None else PaletteStore()
        self.image: SourceImage | None = None
        self.result: GenerationResult | None = None
        self.last_error: GenerationError | None = None
        self.progress = 0.0
        self._current: GenerationAttempt | None = None
        self.palette.subscribe(self._on_palette_changed)

    @property
    def processing(self) -> bool:
        return self._current is not None

    def _on_palette_changed(self, _store: PaletteStore) -> None:
        # A result generated from the old palette no longer applies
        self.result = None
        self._current = None

    def set_image(self, image: SourceImage) -> None:
        """Select a new target image, clearing result and error.

        An attempt still in flight for the previous image is superseded.
        """
        self.image = image
        self.result = None
        self.last_error = None
        self._current = None

    def clear_image(self) -> None:
        """Drop the target image, result and error; a pending attempt's response is discarded."""
        self.image = None
        self.result = None
        self.last_error = None
        self._current = None

    def add_manual_color(self) -> PaletteColor:
        """Add a mid-gray entry for the user to adjust."""
        return self.palette.add(DEFAULT_RGB)

    async def scan_color(
        self, source: SourceImage, x: int | None = None, y: int | None = None
    ) -> PaletteColor:
        """Sample a color from a photo and append it to the palette.

        Raises:
            ImageProcessingError: If the photo can't be decoded.
        """
        rgb = await sample_color_async(source.data, x, y)
        return self.palette.add(rgb)

    async def generate(
        self, detail: int, on_progress: ProgressListener | None = None
    ) -> GenerationResult | None:
        """Run a generation attempt for the current image and palette.

        Returns:
            The new result, or None if the attempt was superseded while in
            flight (its response or failure is discarded).

        Raises:
            GenerationError: If the attempt fails, or ATTEMPT_IN_PROGRESS if
                another attempt is still running.
        """
        if self._current is not None:
            raise GenerationError(
                GenerationErrorKind.ATTEMPT_IN_PROGRESS,
                "A generation is already in progress",
            )

        attempt = GenerationAttempt()
        self._current = attempt
        self.progress = 0.0
        self.last_error = None

        def _track(percent: float) -> None:
            if self._current is attempt:
                self.progress = percent
            if on_progress is not None:
                on_progress(percent)

        try:
            result = await self.client.generate(
                self.image,
                self.palette.snapshot(),
                detail,
                on_progress=_track,
                attempt=attempt,
            )
        except GenerationError as e:
            if self._current is not attempt:
                logger.info("Discarding failure of superseded attempt %s", attempt.attempt_id)
                return None
            self.last_error = e
            raise
        finally:
            superseded = self._current is not attempt
            if not superseded:
                self._current = None

        if superseded:
            logger.info("Discarding result of superseded attempt %s", attempt.attempt_id)
            return None
        self.result = result
        return result
