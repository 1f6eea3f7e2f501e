"""
Tests for config_manager: JSON settings with defaults.
"""

import json

import pytest

from Atmos import config_manager


@pytest.fixture
def config_paths(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    strings_file = tmp_path / "ui_strings.json"
    monkeypatch.setattr(config_manager, "config_json", config_file)
    monkeypatch.setattr(config_manager, "ui_strings", strings_file)
    return config_file, strings_file


class TestLoad:
    """Reading settings"""

    def test_missing_file_gives_defaults(self, config_paths) -> None:
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
        assert config_manager.load_setting_value("max_depth") == 32

    def test_file_overrides_defaults(self, config_paths) -> None:
        config_file, _ = config_paths
        config_file.write_text(json.dumps({"darkmode": True, "extra": "kept"}), encoding="utf-8")
        settings = config_manager.load_setting_value("all")
        assert settings["darkmode"] is True
        assert settings["extra"] == "kept"
        assert settings["decimal_places"] == 6

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_broken_file_gives_defaults(self, config_paths, content) -> None:
        config_file, _ = config_paths
        config_file.write_text(content, encoding="utf-8")
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS

    def test_unknown_key(self, config_paths) -> None:
        assert config_manager.load_setting_value("does_not_exist") == 0

    def test_descriptions(self, config_paths) -> None:
        _, strings_file = config_paths
        strings_file.write_text(json.dumps({"darkmode": "Darkmode"}), encoding="utf-8")
        assert config_manager.load_setting_description("darkmode") == "Darkmode"
        assert config_manager.load_setting_description("max_depth") == "max_depth"


class TestSave:
    """Writing settings"""

    def test_round_trip(self, config_paths) -> None:
        settings = config_manager.load_setting_value("all")
        settings["decimal_places"] = 3
        assert config_manager.save_setting(settings) == settings
        assert config_manager.load_setting_value("decimal_places") == 3

    def test_unwritable(self, config_paths, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing_dir" / "config.json")
        assert config_manager.save_setting({"darkmode": True}) == {}


class TestResolverLimits:
    """Depth and pass limits for the resolver"""

    def test_defaults(self, config_paths) -> None:
        assert config_manager.resolver_limits() == (32, 64)

    def test_clamped_and_invalid(self, config_paths) -> None:
        config_file, _ = config_paths
        config_file.write_text(json.dumps({"max_depth": 0, "max_passes": 5}), encoding="utf-8")
        assert config_manager.resolver_limits() == (1, 5)
        config_file.write_text(json.dumps({"max_depth": "deep", "max_passes": 5}), encoding="utf-8")
        assert config_manager.resolver_limits() == (32, 64)
