"""Canonical shapes of service responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pbnstudio.core.generation.normalize import canonical_fields


class WireModel(BaseModel):
    """Base for response models.

    Accepts either naming convention on input; attributes are snake_case.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _canonicalize(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return canonical_fields(data)
        return data


class Dimensions(WireModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class GenerationResult(WireModel):
    """Output of one successful generation.

    Attributes:
        success: Success flag reported by the service.
        preview: Colored rendition, as an encoded raster (data URL).
        template: Numbered line-art, as an encoded raster (data URL).
        template_svg: Vector template, when the flow produces one.
        color_key: Legend raster or vector, when present.
        region_count: Number of paintable regions (0 when not reported).
        colors_used: Palette colors used (0 when not reported).
        dimensions: Output size in pixels.
    """

    success: bool = True
    preview: str = Field(min_length=1)
    template: str = Field(min_length=1)
    template_svg: str | None = None
    color_key: str | None = None
    region_count: int = Field(default=0, ge=0)
    colors_used: int = Field(default=0, ge=0)
    dimensions: Dimensions


class ColorCoverage(WireModel):
    pixel_count: int = Field(default=0, ge=0)
    percentage: float = Field(default=0.0, ge=0.0)
    avg_distance: float = Field(default=0.0, ge=0.0)


class QualityMetrics(WireModel):
    """Aggregate palette fit metrics; unknown metrics are ignored."""

    overall_score: float = 0.0
    avg_distance: float = 0.0
    unmatched_percentage: float = 0.0
    total_pixels: int = Field(default=0, ge=0)


class Recommendation(WireModel):
    type: str
    message: str
    severity: str = "info"


class AnalysisResult(WireModel):
    """Palette coverage statistics for an image.

    Attributes:
        coverage: Per palette id coverage statistics.
        quality_metrics: Aggregate metrics.
        recommendations: Suggestions such as colors to add or drop.
    """

    success: bool = True
    coverage: dict[str, ColorCoverage] = Field(default_factory=dict)
    quality_metrics: QualityMetrics = Field(default_factory=QualityMetrics)
    recommendations: list[Recommendation] = Field(default_factory=list)


class HealthStatus(WireModel):
    status: str
    version: str | None = None
    features: list[str] | dict[str, Any] = Field(default_factory=list)

