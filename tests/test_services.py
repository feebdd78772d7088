from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from syncscope.core.folder import classify
from syncscope.services.export import format_listing, result_to_dict, write_json
from syncscope.services.settings import (
    ApplicationSettings,
    SettingsError,
    SettingsManager,
)

from conftest import record


@pytest.fixture
def result():
    return classify(
        [record("a.txt", 1), record("b.txt", 2), record("old/c.txt", 3)],
        [record("a.txt", 1), record("b.txt", 5), record("new/c.txt", 3)],
        check_length=True,
    )


# =============================================================================
# Settings
# =============================================================================

def test_missing_settings_file_yields_defaults(tmp_path: Path) -> None:
    settings = SettingsManager(tmp_path / "settings.json").load()

    assert settings == ApplicationSettings()
    assert settings.comparison.check_length is False
    assert settings.comparison.progress_interval == 1000


def test_settings_round_trip(tmp_path: Path) -> None:
    manager = SettingsManager(tmp_path / "nested" / "settings.json")
    settings = ApplicationSettings()
    settings.comparison.check_length = True
    settings.comparison.exclude_patterns = ["*.tmp"]
    settings.logging.level = "DEBUG"

    assert manager.save(settings)
    loaded = SettingsManager(manager.settings_path).load()

    assert loaded == settings


def test_partial_settings_fill_in_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"comparison": {"check_length": True}, "unknown": 1}))

    settings = SettingsManager(path).load()

    assert settings.comparison.check_length is True
    assert settings.comparison.include_hidden is True
    assert settings.logging.level == "WARNING"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_invalid_settings_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "settings.json"
    path.write_text(content)

    with pytest.raises(SettingsError):
        SettingsManager(path).load()


@pytest.mark.parametrize(
    "content",
    [
        '{"comparison": null}',
        '{"comparison": {"progress_interval": "1000"}}',
        '{"comparison": {"progress_interval": true}}',
        '{"comparison": {"include_patterns": ["*.txt", 3]}}',
        '{"logging": {"log_file": 5}}',
        '{"recent_comparisons": [["/a"]]}',
        '{"recent_limit": "10"}',
    ],
)
def test_wrongly_typed_settings_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "settings.json"
    path.write_text(content)

    with pytest.raises(SettingsError, match="Invalid settings file"):
        SettingsManager(path).load()


def test_unknown_settings_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"theme": "dark", "comparison": {"check_length": true, "color": 1}}')

    assert SettingsManager(path).load().comparison.check_length is True


@pytest.mark.skipif(os.name == "nt", reason="uses APPDATA on Windows")
def test_default_settings_path_follows_xdg_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert SettingsManager().settings_path == tmp_path / "syncscope" / "settings.json"


def test_recent_comparisons_are_deduplicated_and_limited(tmp_path: Path) -> None:
    manager = SettingsManager(tmp_path / "settings.json")
    manager.settings.recent_limit = 2

    manager.add_recent_comparison("/a", "/b")
    manager.add_recent_comparison("/c", "/d")
    manager.add_recent_comparison("/a", "/b")
    manager.add_recent_comparison("/e", "/f")

    assert manager.settings.recent_comparisons == [("/e", "/f"), ("/a", "/b")]
    assert SettingsManager(manager.settings_path).load().recent_comparisons == [("/e", "/f"), ("/a", "/b")]


def test_settings_convert_to_core_options() -> None:
    settings = ApplicationSettings()
    settings.comparison.check_length = True
    settings.comparison.include_hidden = False
    settings.comparison.exclude_patterns = ["*.log"]

    compare_options = settings.comparison.to_compare_options()
    scan_options = settings.comparison.to_scan_options()

    assert compare_options.check_length is True
    assert scan_options.include_hidden is False
    assert scan_options.exclude_patterns == ["*.log"]


# =============================================================================
# Export
# =============================================================================

def test_result_to_dict(result) -> None:
    data = result_to_dict(result)

    assert data["check_length"] is True
    assert data["summary"] == {
        "source": 3, "target": 3, "identical": 1, "different": 1,
        "missing": 1, "extra": 1, "similar": 1,
    }
    assert data["identical"] == ["a.txt"]
    assert data["different"] == ["b.txt"]
    assert data["missing"] == ["old/c.txt"]
    assert data["extra"] == ["new/c.txt"]
    assert data["similar"] == [{"missing": "old/c.txt", "extra": "new/c.txt"}]


def test_write_json_creates_parent_and_leaves_no_temp_files(tmp_path: Path, result) -> None:
    path = write_json(result, tmp_path / "out" / "result.json")

    assert json.loads(path.read_text(encoding="utf-8")) == result_to_dict(result)
    assert [p.name for p in path.parent.iterdir()] == ["result.json"]


def test_format_listing_skips_identical_by_default(result) -> None:
    listing = format_listing(result)

    assert "Identical files" not in listing
    assert "Different files (1):\n\tb.txt (2.0 B)" in listing
    assert "Missing files (only in source) (1):" in listing
    assert "Similar files (1):\n\told/c.txt -> new/c.txt" in listing
    assert "Identical files (1):" in format_listing(result, include_identical=True)
