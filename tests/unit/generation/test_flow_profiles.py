"""Tests for generation flow profiles."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pbnstudio.core.generation.profiles import (
    COMPLEXITY_PROFILE,
    THRESHOLD_PROFILE,
    FlowProfile,
    get_profile,
)


def test_threshold_profile() -> None:
    assert (THRESHOLD_PROFILE.detail_min, THRESHOLD_PROFILE.detail_max) == (10, 150)
    assert THRESHOLD_PROFILE.default_detail == 50
    assert THRESHOLD_PROFILE.min_palette_size == 2
    assert not THRESHOLD_PROFILE.vector_output


def test_complexity_profile() -> None:
    assert (COMPLEXITY_PROFILE.detail_min, COMPLEXITY_PROFILE.detail_max) == (1, 100)
    assert COMPLEXITY_PROFILE.min_palette_size == 1
    assert COMPLEXITY_PROFILE.vector_output


@pytest.mark.parametrize("detail,ok", [(9, False), (10, True), (150, True), (151, False)])
def test_accepts_detail_inclusive(detail: int, ok: bool) -> None:
    assert THRESHOLD_PROFILE.accepts_detail(detail) is ok


def test_get_profile() -> None:
    assert get_profile("complexity") is COMPLEXITY_PROFILE
    with pytest.raises(ValueError, match="Unknown flow profile"):
        get_profile("fast")


def test_invalid_range() -> None:
    with pytest.raises(ValidationError):
        FlowProfile(name="x", detail_min=5, detail_max=1, default_detail=3, min_palette_size=1)
    with pytest.raises(ValidationError):
        FlowProfile(name="x", detail_min=1, detail_max=5, default_detail=9, min_palette_size=1)
