from __future__ import annotations

import json

import pytest

from sixelgrid.models import TerminalProfile, TerminalProfileRegistry
from sixelgrid.rendering import SizeInfo
from sixelgrid.settings import RenderSettings


def test_default_registry_ships_profiles() -> None:
    registry = TerminalProfileRegistry.load()
    names = [profile.name for profile in registry.profiles]
    assert "vt340" in names
    vt340 = registry.require("vt340")
    assert (vt340.screen_width, vt340.screen_height) == (800, 480)
    assert vt340.size_info() == SizeInfo(10, 20, 800, 480)


def test_lookup_is_case_insensitive() -> None:
    registry = TerminalProfileRegistry.load()
    assert registry.get("VT340") is registry.get("vt340")
    assert registry.get("nope") is None


def test_require_unknown_profile_raises() -> None:
    with pytest.raises(RuntimeError):
        TerminalProfileRegistry.load().require("nope")


def test_load_custom_profiles(tmp_path) -> None:
    path = tmp_path / "profiles.json"
    path.write_text(
        json.dumps([{"name": "tiny", "cell_width": 4, "cell_height": 8, "columns": 10, "rows": 5}]),
        encoding="utf-8",
    )
    registry = TerminalProfileRegistry.load(path)
    assert registry.profiles == [TerminalProfile("tiny", 4, 8, 10, 5)]
    assert TerminalProfileRegistry.load(path) is registry


def test_render_settings_override_cell_size() -> None:
    profile = TerminalProfile("tiny", 4, 8, 10, 5)
    assert RenderSettings().resolve_size_info(profile) == SizeInfo(4, 8, 40, 40)
    settings = RenderSettings(cell_width=6, cell_height=6)
    assert settings.resolve_size_info(profile) == SizeInfo(6, 6, 60, 30)
