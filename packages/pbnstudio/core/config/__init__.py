"""Application configuration models and loaders."""

from pbnstudio.core.config.loader import (
    build_http_config,
    detect_format,
    load_app_config,
    load_config,
)
from pbnstudio.core.config.models import ApiConfig, AppConfig, LoggingConfig

__all__ = [
    "ApiConfig",
    "AppConfig",
    "LoggingConfig",
    "build_http_config",
    "detect_format",
    "load_app_config",
    "load_config",
]
