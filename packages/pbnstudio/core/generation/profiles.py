"""Generation flow profiles.

Two flows exist with different detail ranges: the capture-to-template
"threshold" flow (10..150, preview and template only) and the slider-driven
"complexity" flow (1..100, optional SVG and color key). The active range is
configuration, selected per deployment.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FlowProfile(BaseModel):
    """Client-side contract for one generation flow.

    Attributes:
        name: Profile name.
        detail_min: Smallest accepted detail value (inclusive).
        detail_max: Largest accepted detail value (inclusive).
        default_detail: Detail value offered by default.
        min_palette_size: Smallest palette accepted for generation.
        endpoint: Path of the generation endpoint.
        vector_output: Whether to request SVG/color-key output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    detail_min: int
    detail_max: int
    default_detail: int
    min_palette_size: int = Field(ge=1)
    endpoint: str = "/generate"
    vector_output: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> FlowProfile:
        if self.detail_min > self.detail_max:
            raise ValueError("detail_min must be <= detail_max")
        if not self.detail_min <= self.default_detail <= self.detail_max:
            raise ValueError("default_detail must lie within the detail range")
        return self

    def accepts_detail(self, detail: int) -> bool:
        return self.detail_min <= detail <= self.detail_max


THRESHOLD_PROFILE = FlowProfile(
    name="threshold",
    detail_min=10,
    detail_max=150,
    default_detail=50,
    min_palette_size=2,
)

COMPLEXITY_PROFILE = FlowProfile(
    name="complexity",
    detail_min=1,
    detail_max=100,
    default_detail=50,
    min_palette_size=1,
    vector_output=True,
)

PROFILES: dict[str, FlowProfile] = {p.name: p for p in (THRESHOLD_PROFILE, COMPLEXITY_PROFILE)}


def get_profile(name: str) -> FlowProfile:
    """Look up a built-in profile by name.

    Raises:
        ValueError: If no profile has that name.
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown flow profile {name!r}; expected one of {sorted(PROFILES)}"
        ) from None
