"""Tests for PaletteStore."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pbnstudio.core.palette.models import DEFAULT_RGB, PaletteColor
from pbnstudio.core.palette.store import DuplicateColorIdError, PaletteStore


class TestAdd:
    def test_allocates_sequential_ids(self) -> None:
        store = PaletteStore()
        assert [store.add((i, i, i)).id for i in range(3)] == ["1", "2", "3"]

    def test_defaults_to_mid_gray(self) -> None:
        color = PaletteStore().add()
        assert color.rgb == DEFAULT_RGB == (128, 128, 128)
        assert color.note == ""

    def test_reuses_removed_id(self) -> None:
        store = PaletteStore()
        for _ in range(3):
            store.add()
        store.remove("2")
        assert store.add().id == "2"
        assert store.ids == ["1", "3", "2"]

    def test_duplicate_explicit_id(self) -> None:
        store = PaletteStore()
        store.add(color_id="7")
        with pytest.raises(DuplicateColorIdError):
            store.add(color_id="7")

    def test_channel_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            PaletteStore().add((256, 0, 0))
        with pytest.raises(ValidationError):
            PaletteStore().add((0, -1, 0))

    def test_initial_colors(self) -> None:
        store = PaletteStore([PaletteColor(id="A", rgb=(1, 2, 3))])
        assert store.get("A") == PaletteColor(id="A", rgb=(1, 2, 3))


class TestEdit:
    def test_update_keeps_position_and_id(self) -> None:
        store = PaletteStore()
        store.add((1, 1, 1))
        store.add((2, 2, 2))
        store.update_color("1", (9, 9, 9))
        store.update_note("1", "mix with white")
        assert store.ids == ["1", "2"]
        assert store.get("1") == PaletteColor(id="1", rgb=(9, 9, 9), note="mix with white")

    def test_update_from_hex(self) -> None:
        store = PaletteStore()
        store.add()
        store.update_color_hex("1", "#FF8000")
        assert store.get("1").rgb == (255, 128, 0)

    def test_unknown_id_is_noop(self) -> None:
        store = PaletteStore()
        store.add()
        before = store.snapshot()
        store.update_note("nope", "x")
        store.update_color("nope", (0, 0, 0))
        store.remove("nope")
        assert store.snapshot() == before

    def test_snapshot_is_detached(self) -> None:
        store = PaletteStore()
        store.add()
        snap = store.snapshot()
        store.add()
        store.update_note("1", "changed")
        assert len(snap) == 1
        assert snap[0].note == ""

    def test_clear(self) -> None:
        store = PaletteStore()
        store.add()
        store.clear()
        assert len(store) == 0
        assert store.add().id == "1"


class TestListeners:
    def test_notified_on_every_change(self) -> None:
        store = PaletteStore()
        seen: list[int] = []
        store.subscribe(lambda s: seen.append(len(s)))
        store.add()
        store.add()
        store.update_note("1", "n")
        store.remove("2")
        store.remove("2")  # no-op, no notification
        assert seen == [1, 2, 2, 1]

    def test_unsubscribe(self) -> None:
        store = PaletteStore()
        seen: list[int] = []
        unsubscribe = store.subscribe(lambda s: seen.append(len(s)))
        store.add()
        unsubscribe()
        store.add()
        assert seen == [1]


def test_wire_form() -> None:
    store = PaletteStore()
    store.add((255, 0, 0), note="cadmium red")
    store.add((0, 0, 255))
    assert json.loads(store.to_wire_json()) == [
        {"id": "1", "rgb": [255, 0, 0], "note": "cadmium red"},
        {"id": "2", "rgb": [0, 0, 255], "note": ""},
    ]


def test_color_hex_and_none_note() -> None:
    color = PaletteColor(id="1", rgb=(0, 128, 255), note=None)
    assert color.hex == "#0080ff"
    assert color.note == ""
