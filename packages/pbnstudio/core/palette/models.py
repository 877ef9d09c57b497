"""Palette entity model."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pbnstudio.core.utils.color import rgb_to_hex

Channel = Annotated[int, Field(ge=0, le=255)]

DEFAULT_RGB: tuple[int, int, int] = (128, 128, 128)


class PaletteColor(BaseModel):
    """One paintable color in a user palette.

    Attributes:
        id: Short token, unique within its palette and stable for the
            lifetime of the entry.
        rgb: Red, green, blue channels, each 0..255.
        note: Free-text annotation such as a mixing recipe. Never None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    rgb: tuple[Channel, Channel, Channel] = DEFAULT_RGB
    note: str = ""

    @field_validator("note", mode="before")
    @classmethod
    def _none_note_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.rgb)

    def to_wire(self) -> dict[str, Any]:
        """Wire form sent to the generation service: ``{id, rgb: [r, g, b], note}``."""
        return {"id": self.id, "rgb": list(self.rgb), "note": self.note}
