"""Shared pytest fixtures for pbnstudio tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pbnstudio.core.api.http.config import HttpClientConfig
from pbnstudio.core.palette.store import PaletteStore
from tests.helpers import BASE_URL, image_bytes

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def http_config() -> HttpClientConfig:
    return HttpClientConfig(base_url=BASE_URL)


@pytest.fixture
def success_payload() -> dict[str, Any]:
    """Canonical camelCase success response for a two-color palette."""
    return {
        "success": True,
        "preview": "data:image/png;base64,iVBORw0KGgo=",
        "template": "data:image/png;base64,iVBORw0KGgo=",
        "regionCount": 120,
        "colorsUsed": 2,
        "dimensions": {"width": 800, "height": 400},
    }


# ============================================================================
# Image / Palette Fixtures
# ============================================================================


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for encoded solid-color images."""
    return image_bytes


@pytest.fixture
def two_color_palette() -> PaletteStore:
    store = PaletteStore()
    store.add((255, 0, 0), note="cadmium red")
    store.add((0, 0, 255), note="ultramarine")
    return store
