"""Palette entities, id allocation, and the palette store."""

from pbnstudio.core.palette.ids import allocate_id
from pbnstudio.core.palette.models import DEFAULT_RGB, PaletteColor
from pbnstudio.core.palette.store import DuplicateColorIdError, PaletteStore

__all__ = [
    "DEFAULT_RGB",
    "DuplicateColorIdError",
    "PaletteColor",
    "PaletteStore",
    "allocate_id",
]
