"""Ordered, id-addressed palette collection."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

from pbnstudio.core.palette.ids import allocate_id
from pbnstudio.core.palette.models import DEFAULT_RGB, PaletteColor
from pbnstudio.core.utils.color import hex_to_rgb

logger = logging.getLogger(__name__)

PaletteListener = Callable[["PaletteStore"], None]


class DuplicateColorIdError(ValueError):
    """A caller-supplied id is already used in the palette."""


class PaletteStore:
    """Ordered collection of PaletteColor entries with unique ids.

    Entries are immutable; edits replace an entry in place, keeping its
    position. Removing or editing an unknown id is a no-op.

    Example:
        >>> store = PaletteStore()
        >>> red = store.add((255, 0, 0), note="cadmium red")
        >>> red.id
        '1'
        >>> store.update_note("1", "cadmium red + white")
        >>> store.remove("missing")
    """

    def __init__(self, colors: list[PaletteColor] | None = None) -> None:
        self._colors: list[PaletteColor] = []
        self._listeners: list[PaletteListener] = []
        for color in colors or []:
            self.add_color(color)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[PaletteColor]:
        return iter(tuple(self._colors))

    def __contains__(self, color_id: object) -> bool:
        return any(c.id == color_id for c in self._colors)

    @property
    def ids(self) -> list[str]:
        return [c.id for c in self._colors]

    def get(self, color_id: str) -> PaletteColor | None:
        for color in self._colors:
            if color.id == color_id:
                return color
        return None

    def snapshot(self) -> tuple[PaletteColor, ...]:
        """Immutable copy of the current entries, in order."""
        return tuple(self._colors)

    def subscribe(self, listener: PaletteListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def add(
        self,
        rgb: tuple[int, int, int] = DEFAULT_RGB,
        note: str = "",
        color_id: str | None = None,
    ) -> PaletteColor:
        """Append a color, allocating an id unless one is supplied.

        Args:
            rgb: Color channels; defaults to mid gray.
            note: Optional annotation.
            color_id: Caller-chosen id. Must not collide.

        Returns:
            The stored entry.

        Raises:
            DuplicateColorIdError: If ``color_id`` is already in use.
            pydantic.ValidationError: If a channel is outside 0..255.
        """
        if color_id is None:
            color_id = allocate_id(self.ids)
        return self.add_color(PaletteColor(id=color_id, rgb=rgb, note=note))

    def add_color(self, color: PaletteColor) -> PaletteColor:
        """Append a fully formed entry.

        Raises:
            DuplicateColorIdError: If its id is already in use.
        """
        if color.id in self:
            raise DuplicateColorIdError(f"Palette already contains id {color.id!r}")
        self._colors.append(color)
        logger.debug("Added palette color %s %s", color.id, color.rgb)
        self._changed()
        return color

    def remove(self, color_id: str) -> None:
        """Remove the entry with ``color_id``; absent ids are ignored."""
        before = len(self._colors)
        self._colors = [c for c in self._colors if c.id != color_id]
        if len(self._colors) != before:
            logger.debug("Removed palette color %s", color_id)
            self._changed()

    def _replace(self, color_id: str, **update: Any) -> None:
        for i, color in enumerate(self._colors):
            if color.id == color_id:
                self._colors[i] = PaletteColor.model_validate(
                    {**color.model_dump(), **update}
                )
                self._changed()
                return

    def update_note(self, color_id: str, note: str) -> None:
        """Replace the note of an entry; unknown ids are ignored."""
        self._replace(color_id, note=note)

    def update_color(self, color_id: str, rgb: tuple[int, int, int]) -> None:
        """Replace the color of an entry; unknown ids are ignored.

        Raises:
            pydantic.ValidationError: If a channel is outside 0..255.
        """
        self._replace(color_id, rgb=rgb)

    def update_color_hex(self, color_id: str, value: str) -> None:
        """Replace the color of an entry from a ``#rrggbb`` picker value.

        Raises:
            ValueError: If ``value`` is not a hex color.
        """
        self.update_color(color_id, hex_to_rgb(value))

    def clear(self) -> None:
        if self._colors:
            self._colors = []
            self._changed()

    def to_wire(self) -> list[dict[str, Any]]:
        return [c.to_wire() for c in self._colors]

    def to_wire_json(self) -> str:
        return json.dumps(self.to_wire())
