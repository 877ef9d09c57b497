"""Configuration models for pbnstudio."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pbnstudio.core.imaging.normalizer import NormalizeOptions


class ApiConfig(BaseModel):
    """Generation service connection settings."""

    model_config = ConfigDict(extra="forbid")

    base_url: str | None = Field(
        default=None, description="Service base URL; falls back to PBNSTUDIO_API_URL"
    )
    timeout_seconds: float = Field(
        default=120.0, gt=0, description="Overall budget for one generation request"
    )
    connect_timeout_seconds: float = Field(default=10.0, gt=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(
        default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$"
    )
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False
    filename: str | None = None


class AppConfig(BaseModel):
    """Application-level configuration.

    Attributes:
        api: Service connection settings.
        imaging: Upload normalization bounds.
        flow: Generation flow profile name ("threshold" or "complexity").
        logging: Logging settings.
    """

    model_config = ConfigDict(extra="forbid")

    api: ApiConfig = Field(default_factory=ApiConfig)
    imaging: NormalizeOptions = Field(default_factory=NormalizeOptions)
    flow: str = Field(default="threshold", pattern="^(threshold|complexity)$")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
