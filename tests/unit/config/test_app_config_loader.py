"""Tests for app config loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from pbnstudio.core.config.loader import (
    API_URL_ENV_VAR,
    DEFAULT_API_URL,
    build_http_config,
    detect_format,
    load_app_config,
    load_config,
)


@pytest.fixture(autouse=True)
def _no_env_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(API_URL_ENV_VAR, raising=False)


def test_detect_format() -> None:
    assert detect_format("a.json") == "json"
    assert detect_format("a.YML") == "yaml"
    with pytest.raises(ValueError, match="Unsupported config format"):
        detect_format("a.toml")


def test_defaults_without_file() -> None:
    config = load_app_config(None)
    assert config.api.base_url == DEFAULT_API_URL
    assert config.api.timeout_seconds == 120.0
    assert config.flow == "threshold"
    assert config.imaging.max_width == 1200
    assert config.imaging.quality == 0.8


def test_env_url_used_when_file_leaves_it_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(API_URL_ENV_VAR, "https://pbn.example.com")
    assert load_app_config().api.base_url == "https://pbn.example.com"


def test_file_url_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(API_URL_ENV_VAR, "https://env.example.com")
    path = tmp_path / "pbnstudio.yaml"
    path.write_text(
        "api:\n"
        "  base_url: http://10.0.0.5:8000\n"
        "  timeout_seconds: 30\n"
        "flow: complexity\n"
        "imaging:\n"
        "  max_width: 800\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    config = load_app_config(path)
    assert config.api.base_url == "http://10.0.0.5:8000"
    assert config.flow == "complexity"
    assert config.imaging.max_width == 800
    assert config.imaging.max_height == 1200
    assert config.logging.level == "DEBUG"


def test_invalid_values(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"flow": "fastest"}))
    with pytest.raises(ValidationError):
        load_app_config(path)


def test_unknown_keys_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"api": {"base_url": "http://x", "retries": 3}}))
    with pytest.raises(ValidationError):
        load_app_config(path)


def test_load_config_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="Invalid JSON"):
        load_config(path)


def test_empty_yaml_is_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_build_http_config(tmp_path: Path) -> None:
    path = tmp_path / "c.json"
    path.write_text(
        json.dumps(
            {
                "api": {
                    "base_url": "http://pbn.test",
                    "timeout_seconds": 45,
                    "connect_timeout_seconds": 3,
                }
            }
        )
    )
    http = build_http_config(load_app_config(path))
    assert http.base_url == "http://pbn.test"
    assert http.overall_timeout_s == 45
    assert http.timeout.read == 45
    assert http.timeout.connect == 3


def test_named_file_must_exist(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config file does not exist"):
        load_app_config(tmp_path / "missing.yaml")
