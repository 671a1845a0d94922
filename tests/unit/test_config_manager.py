"""Unit tests for the Configuration Manager."""

import json
import tempfile
from pathlib import Path

import pytest

from clause_editor.config import (
    DEFAULT_CLAUSE_LIBRARY,
    ClausePreset,
    ConfigurationError,
    ConfigurationManager,
    EditorConfiguration,
    ValidationResult,
)


class TestEditorSettings:
    """Tests for editor settings configuration."""

    def test_defaults(self):
        """Test the built-in editor defaults."""
        config = ConfigurationManager().configuration

        assert config.history_limit == 100
        assert config.default_clause_title == "New Section"
        assert config.copy_suffix == " Copy"
        assert config.list_placeholder == "Clause text"
        assert config.heading_placeholder == "Heading"
        assert len(config.clause_library) == len(DEFAULT_CLAUSE_LIBRARY)

    def test_load_settings_from_dict(self):
        """Test loading editor settings from a dictionary."""
        manager = ConfigurationManager()

        result = manager.load_editor_settings({
            "history_limit": 25,
            "default_clause_title": "Untitled",
            "list_placeholder": "Item",
        })

        assert result.is_valid
        assert manager.is_loaded
        assert manager.configuration.history_limit == 25
        assert manager.configuration.default_clause_title == "Untitled"
        assert manager.configuration.list_placeholder == "Item"
        # Untouched keys keep their defaults
        assert manager.configuration.heading_placeholder == "Heading"

    def test_history_limit_must_be_positive(self):
        """Test that a zero history limit is rejected."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_editor_settings({"history_limit": 0})

        assert not exc_info.value.validation_result.is_valid
        assert manager.configuration.history_limit == 100

    def test_history_limit_must_be_integer(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_editor_settings({"history_limit": "50"})

        with pytest.raises(ConfigurationError):
            manager.load_editor_settings({"history_limit": True})

    def test_large_history_limit_warns(self):
        manager = ConfigurationManager()

        result = manager.load_editor_settings({"history_limit": 5000})

        assert result.is_valid
        assert len(result.warnings) == 1

    def test_empty_placeholder_rejected(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_editor_settings({"heading_placeholder": "   "})

    def test_empty_copy_suffix_allowed(self):
        """An empty copy suffix keeps duplicated titles unchanged."""
        manager = ConfigurationManager()

        result = manager.load_editor_settings({"copy_suffix": ""})

        assert result.is_valid
        assert manager.configuration.copy_suffix == ""

    def test_unknown_keys_warn(self):
        manager = ConfigurationManager()

        result = manager.load_editor_settings({"theme": "dark"})

        assert result.is_valid
        assert any("theme" in w for w in result.warnings)

    def test_settings_must_be_object(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_editor_settings([{"history_limit": 10}])


class TestClauseLibrary:
    """Tests for the common clause library."""

    def test_load_library_from_dict(self):
        """Test loading clause presets from a dictionary."""
        manager = ConfigurationManager()

        result = manager.load_clause_library({
            "clauses": [
                {
                    "id": "nda",
                    "title": "Non-Disclosure",
                    "content": "Keep it **secret**.",
                    "required": True,
                    "description": "Standard NDA clause",
                }
            ]
        })

        assert result.is_valid
        preset = manager.get_clause_preset("nda")
        assert preset.title == "Non-Disclosure"
        assert preset.required is True
        assert preset.description == "Standard NDA clause"

    def test_load_single_preset(self):
        manager = ConfigurationManager()

        manager.load_clause_library({"id": "one", "title": "One", "content": "x"})

        assert [p.id for p in manager.configuration.clause_library] == ["one"]

    def test_missing_fields(self):
        """Test that missing required fields are reported."""
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_clause_library([{"id": "one"}])

        errors = exc_info.value.validation_result.errors
        assert any("'title'" in e for e in errors)
        assert any("'content'" in e for e in errors)

    def test_duplicate_ids_rejected(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_clause_library([
                {"id": "dup", "title": "A", "content": "a"},
                {"id": "dup", "title": "B", "content": "b"},
            ])

        # Library is untouched on failure
        assert len(manager.configuration.clause_library) == len(DEFAULT_CLAUSE_LIBRARY)

    def test_duplicate_titles_warn(self):
        manager = ConfigurationManager()

        result = manager.load_clause_library([
            {"id": "a", "title": "Same", "content": "a"},
            {"id": "b", "title": "same", "content": "b"},
        ])

        assert result.is_valid
        assert result.warnings

    def test_required_must_be_boolean(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_clause_library([
                {"id": "a", "title": "A", "content": "a", "required": "yes"},
            ])

    def test_empty_content_warns(self):
        manager = ConfigurationManager()

        result = manager.load_clause_library([{"id": "a", "title": "A", "content": ""}])

        assert result.is_valid
        assert any("empty" in w for w in result.warnings)

    def test_load_library_from_file(self):
        """Test loading the clause library from a JSON file."""
        manager = ConfigurationManager()
        library = {"clauses": [{"id": "a", "title": "A", "content": "text"}]}

        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump(library, f)
            temp_path = f.name

        try:
            result = manager.load_clause_library(temp_path)
            assert result.is_valid
            assert len(manager.configuration.clause_library) == 1
        finally:
            Path(temp_path).unlink()

    def test_missing_file(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigurationError):
            manager.load_clause_library("/nonexistent/clauses.json")

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "clauses.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigurationManager().load_clause_library(path)

    def test_default_required_presets(self):
        config = EditorConfiguration()

        required = {p.id for p in config.get_required_presets()}

        assert required == {"confidentiality", "termination", "governing-law", "payment-terms"}

    def test_preset_to_initial(self):
        preset = ClausePreset(id="p", title="T", content="C", required=True)
        assert preset.to_initial() == {"title": "T", "required": True, "content": "C"}


class TestConfigurationPersistence:
    """Tests for configuration directories."""

    def test_save_and_load_directory(self):
        """Test saving and reloading configuration."""
        manager = ConfigurationManager()
        manager.load_editor_settings({"history_limit": 10})
        manager.load_clause_library([{"id": "a", "title": "A", "content": "text"}])

        with tempfile.TemporaryDirectory() as temp_dir:
            manager.save_to_directory(temp_dir)

            assert (Path(temp_dir) / "editor.json").exists()
            assert (Path(temp_dir) / "clauses.json").exists()

            new_manager = ConfigurationManager()
            result = new_manager.load_from_directory(temp_dir)

            assert result.is_valid
            assert new_manager.configuration.history_limit == 10
            assert [p.id for p in new_manager.configuration.clause_library] == ["a"]

    def test_load_directory_collects_errors(self, tmp_path):
        (tmp_path / "editor.json").write_text(json.dumps({"history_limit": -1}))

        result = ConfigurationManager().load_from_directory(tmp_path)

        assert not result.is_valid
        assert any("Editor settings" in e for e in result.errors)

    def test_save_without_directory(self):
        with pytest.raises(ConfigurationError):
            ConfigurationManager().save_to_directory()

    def test_to_dict_export(self):
        config_dict = ConfigurationManager().to_dict()

        assert config_dict["editor"]["history_limit"] == 100
        assert len(config_dict["clauses"]) == len(DEFAULT_CLAUSE_LIBRARY)

    def test_reset_configuration(self):
        manager = ConfigurationManager()
        manager.load_editor_settings({"history_limit": 5})

        manager.reset()

        assert not manager.is_loaded
        assert manager.configuration.history_limit == 100


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_merge(self):
        first = ValidationResult(is_valid=True, warnings=["w"])
        second = ValidationResult(is_valid=True)
        second.add_error("e")

        merged = first.merge(second)

        assert not merged.is_valid
        assert merged.errors == ["e"]
        assert merged.warnings == ["w"]
