"""Tests for palette settings and catalog files."""

import json

import pytest

from cmdpal.config.catalog_file import load_catalog_file, parse_catalog
from cmdpal.config.palette_config import (
    DEFAULT_CONFIG,
    PaletteSettings,
    get_config_path,
    get_palette_settings,
    load_palette_config,
    save_palette_config,
    update_palette_settings,
)
from cmdpal.exceptions import CatalogFileError, ConfigurationError
from cmdpal.ui.command_palette import CategoryInfo


class TestPaletteConfig:
    """Tests for the JSON settings file."""

    def test_path_inside_config_dir(self, isolated_config_dir):
        assert get_config_path() == isolated_config_dir / "palette_config.json"

    def test_defaults_when_missing(self):
        assert load_palette_config() == DEFAULT_CONFIG
        settings = get_palette_settings()
        assert settings == PaletteSettings()
        assert settings.max_results == 10
        assert settings.show_recent is True
        assert settings.placeholder == "Type a command or search..."

    def test_invalid_json_falls_back(self, isolated_config_dir):
        isolated_config_dir.mkdir(parents=True)
        get_config_path().write_text("{not json")
        assert load_palette_config() == DEFAULT_CONFIG

    def test_non_object_falls_back(self, isolated_config_dir):
        isolated_config_dir.mkdir(parents=True)
        get_config_path().write_text("[1, 2]")
        assert load_palette_config() == DEFAULT_CONFIG

    def test_partial_file_merged_with_defaults(self, isolated_config_dir):
        isolated_config_dir.mkdir(parents=True)
        get_config_path().write_text(json.dumps({"max_results": 4}))
        settings = get_palette_settings()
        assert settings.max_results == 4
        assert settings.show_categories is True

    def test_save_and_load_round_trip(self):
        save_palette_config({**DEFAULT_CONFIG, "show_recent": False})
        assert get_palette_settings().show_recent is False

    @pytest.mark.parametrize(
        "key,value",
        [
            ("max_results", 0),
            ("max_results", "ten"),
            ("max_results", True),
            ("debounce_ms", -1),
            ("show_recent", "yes"),
            ("show_categories", 1),
            ("placeholder", 42),
        ],
    )
    def test_invalid_values_rejected(self, key, value):
        with pytest.raises(ConfigurationError) as exc_info:
            PaletteSettings.from_dict({key: value})
        assert exc_info.value.context["key"] == key

    def test_update_persists(self):
        settings = update_palette_settings(max_results=5, placeholder=None)
        assert settings.max_results == 5
        assert json.loads(get_config_path().read_text())["max_results"] == 5
        assert get_palette_settings().placeholder == DEFAULT_CONFIG["placeholder"]

    def test_update_rejects_bad_value_without_saving(self):
        with pytest.raises(ConfigurationError):
            update_palette_settings(max_results=0)
        assert not get_config_path().exists()

    def test_update_rejects_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown setting"):
            update_palette_settings(colour="red")


class TestCatalogFile:
    """Tests for YAML catalog files."""

    def test_load(self, catalog_yaml):
        catalog = load_catalog_file(catalog_yaml)
        assert [c.id for c in catalog.commands] == ["git-commit", "git-push", "open-file"]
        assert catalog.categories == {
            "git": CategoryInfo("Git", "🌿"),
            "file": CategoryInfo("Files", "🗂"),
        }
        commit = catalog.commands[0]
        assert commit.description == "Commit staged changes"
        assert commit.shortcut == "⌘K"
        assert commit.is_executable
        assert catalog.skipped == 0

    def test_default_action_logs(self, catalog_yaml, caplog):
        catalog = load_catalog_file(catalog_yaml)
        with caplog.at_level("INFO"):
            catalog.commands[1].action()
        assert "git-push" in caplog.text

    def test_custom_action_factory(self, catalog_yaml):
        ran = []
        catalog = load_catalog_file(
            catalog_yaml,
            action_factory=lambda entry: lambda: ran.append(entry["id"]),
        )
        catalog.commands[2].action()
        assert ran == ["open-file"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogFileError, match="not found") as exc_info:
            load_catalog_file(tmp_path / "nope.yaml")
        assert exc_info.value.suggestion

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("commands: [unclosed\n")
        with pytest.raises(CatalogFileError, match="not valid YAML"):
            load_catalog_file(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        catalog = load_catalog_file(path)
        assert catalog.commands == []
        assert catalog.categories == {}

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(CatalogFileError, match="must contain a mapping"):
            parse_catalog(["a", "b"], tmp_path / "x.yaml")

    def test_commands_must_be_list(self, tmp_path):
        with pytest.raises(CatalogFileError, match="must be a list"):
            parse_catalog({"commands": {"id": "a"}}, tmp_path / "x.yaml")

    def test_categories_need_label(self, tmp_path):
        with pytest.raises(CatalogFileError, match="label"):
            parse_catalog({"categories": {"git": {"icon": "🌿"}}}, tmp_path / "x.yaml")

    def test_malformed_entries_skipped(self, tmp_path):
        data = {
            "commands": [
                {"label": "No id"},
                {"id": "no-label"},
                "just a string",
                {"id": "ok", "label": "OK"},
                {"id": "ok", "label": "Duplicate"},
            ]
        }
        catalog = parse_catalog(data, tmp_path / "x.yaml")
        assert [c.label for c in catalog.commands] == ["OK"]
        assert catalog.skipped == 4

    def test_values_converted_to_text(self, tmp_path):
        data = {"commands": [{"id": "n", "label": "Number", "shortcut": 1}]}
        catalog = parse_catalog(data, tmp_path / "x.yaml")
        assert catalog.commands[0].shortcut == "1"
