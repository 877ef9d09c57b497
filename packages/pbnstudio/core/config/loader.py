"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import httpx
import yaml

from pbnstudio.core.api.http.config import HttpClientConfig
from pbnstudio.core.config.models import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
API_URL_ENV_VAR = "PBNSTUDIO_API_URL"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("palette.json")
        'json'
        >>> detect_format("config.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    if suffix == ".json":
        return "json"
    elif suffix in (".yaml", ".yml"):
        return "yaml"
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> Any:
    """Load a JSON or YAML file, auto-detecting the format from its extension.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    text = path.read_text(encoding="utf-8")
    if fmt == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    try:
        content = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    # safe_load returns None for empty files
    return content if content is not None else {}


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    No path yields defaults. ``api.base_url`` is taken from the
    PBNSTUDIO_API_URL environment variable only when the file leaves it unset.

    Raises:
        FileNotFoundError: If ``path`` names a file that does not exist
        ValueError: If the file content is invalid
        pydantic.ValidationError: If the config doesn't validate
    """
    if path is not None:
        config = AppConfig.model_validate(load_config(path))
    else:
        config = AppConfig()

    if config.api.base_url is None:
        env_url = os.getenv(API_URL_ENV_VAR)
        if env_url:
            logger.debug("Loaded %s from environment", API_URL_ENV_VAR)
        config.api = config.api.model_copy(update={"base_url": env_url or DEFAULT_API_URL})

    return config


def build_http_config(config: AppConfig) -> HttpClientConfig:
    """Translate app-level API settings into an HttpClientConfig."""
    return HttpClientConfig(
        base_url=config.api.base_url or DEFAULT_API_URL,
        timeout=httpx.Timeout(
            config.api.timeout_seconds, connect=config.api.connect_timeout_seconds
        ),
        overall_timeout_s=config.api.timeout_seconds,
    )
