"""Reading and writing palette files (JSON or YAML)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pbnstudio.core.config.loader import load_config
from pbnstudio.core.palette.models import DEFAULT_RGB, PaletteColor
from pbnstudio.core.palette.store import PaletteStore

logger = logging.getLogger(__name__)


def palette_from_data(data: Any) -> PaletteStore:
    """Build a PaletteStore from parsed palette data.

    Accepts either a list of ``{id?, rgb, note?}`` entries or a mapping with
    a ``colors`` list. Entries without an id are given one in file order,
    after the explicit ids are placed.

    Raises:
        ValueError: If the data has neither shape.
        DuplicateColorIdError: If two entries share an id.
        pydantic.ValidationError: If an entry is invalid.
    """
    entries = data.get("colors") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError("Palette must be a list of colors or a mapping with a 'colors' list")

    store = PaletteStore()
    pending: list[dict[str, Any]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"Palette entry must be a mapping, got {type(entry).__name__}")
        if entry.get("id") in (None, ""):
            pending.append(entry)
        else:
            store.add_color(PaletteColor.model_validate({**entry, "id": str(entry["id"])}))

    for entry in pending:
        rgb = tuple(entry["rgb"]) if "rgb" in entry else DEFAULT_RGB
        store.add(rgb=rgb, note=entry.get("note") or "")  # type: ignore[arg-type]

    return store


def load_palette(path: str | Path) -> PaletteStore:
    """Load a palette file (.json, .yaml or .yml).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a valid palette.
    """
    store = palette_from_data(load_config(path))
    logger.debug("Loaded %d palette colors from %s", len(store), path)
    return store


def save_palette(store: PaletteStore, path: str | Path) -> Path:
    """Write a palette as JSON in its wire form."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(store.to_wire(), indent=2), encoding="utf-8")
    return out
