"""Configuration Manager implementation for the template clause editor.

This module provides functionality to load, validate, and manage the editor
settings (history depth, placeholders, default titles) and the library of
common clauses offered when building a template.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .models import (
    ClausePreset,
    ConfigurationError,
    EditorConfiguration,
    ValidationResult,
)


logger = logging.getLogger(__name__)

SETTINGS_FILE = "editor.json"
LIBRARY_FILE = "clauses.json"

_STRING_SETTINGS = [
    "default_clause_title",
    "copy_suffix",
    "list_placeholder",
    "heading_placeholder",
]


class ConfigurationManager:
    """
    Manager for editor configuration.

    Handles loading, validation, and access to editor settings and the
    common clause library.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional directory path for configuration files.
        """
        self._config_dir = Path(config_dir) if config_dir else None
        self._configuration = EditorConfiguration()
        self._is_loaded = False

    @property
    def configuration(self) -> EditorConfiguration:
        """Get the current editor configuration."""
        return self._configuration

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._is_loaded

    # =========================================================================
    # Editor Settings
    # =========================================================================

    def load_editor_settings(
        self,
        source: Union[str, Path, Dict[str, Any]]
    ) -> ValidationResult:
        """
        Load and validate editor settings.

        Unknown keys are reported as warnings and ignored. Missing keys keep
        their current values.

        Args:
            source: JSON file path or dictionary.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails and settings cannot be applied.
        """
        data = self._parse_source(source)
        result = ValidationResult(is_valid=True)

        if not isinstance(data, dict):
            result.add_error("Editor settings must be a JSON object")
            raise ConfigurationError(
                "Editor settings validation failed",
                validation_result=result
            )

        known = set(_STRING_SETTINGS) | {"history_limit", "version", "metadata"}
        for key in data:
            if key not in known:
                result.add_warning(f"Unknown editor setting '{key}' ignored")

        if "history_limit" in data:
            limit = data["history_limit"]
            if isinstance(limit, bool) or not isinstance(limit, int):
                result.add_error("'history_limit' must be an integer")
            elif limit < 1:
                result.add_error("'history_limit' must be at least 1")
            elif limit > 1000:
                result.add_warning(
                    f"'history_limit' of {limit} keeps many full draft snapshots in memory"
                )

        for key in _STRING_SETTINGS:
            if key not in data:
                continue
            value = data[key]
            if not isinstance(value, str):
                result.add_error(f"'{key}' must be a string")
            elif key != "copy_suffix" and not value.strip():
                result.add_error(f"'{key}' must be a non-empty string")

        if not result.is_valid:
            raise ConfigurationError(
                "Editor settings validation failed",
                validation_result=result
            )

        config = self._configuration
        config.history_limit = data.get("history_limit", config.history_limit)
        for key in _STRING_SETTINGS:
            if key in data:
                setattr(config, key, data[key])
        config.version = data.get("version", config.version)
        config.metadata = data.get("metadata", config.metadata)
        self._is_loaded = True

        return result

    # =========================================================================
    # Clause Library
    # =========================================================================

    def load_clause_library(
        self,
        source: Union[str, Path, Dict[str, Any], List[Dict[str, Any]]]
    ) -> ValidationResult:
        """
        Load and validate the common clause library.

        Supports loading from:
        - JSON file path
        - Dictionary with a "clauses" list
        - List of clause dictionaries

        Args:
            source: File path, dictionary, or list of dictionaries.

        Returns:
            ValidationResult indicating success or failure with details.

        Raises:
            ConfigurationError: If validation fails and the library cannot be applied.
        """
        raw_data = self._parse_source(source)

        # Handle both single dict and list formats
        if isinstance(raw_data, dict):
            if "clauses" in raw_data:
                presets_data = raw_data["clauses"]
            else:
                presets_data = [raw_data]
        else:
            presets_data = raw_data

        result = ValidationResult(is_valid=True)
        presets: List[ClausePreset] = []

        for i, preset_dict in enumerate(presets_data):
            preset_result, preset = self._validate_clause_preset(preset_dict, index=i)
            result = result.merge(preset_result)
            if preset:
                presets.append(preset)

        # Check for duplicate IDs
        ids = [p.id for p in presets]
        duplicates = [id for id in ids if ids.count(id) > 1]
        if duplicates:
            result.add_error(f"Duplicate clause preset IDs found: {set(duplicates)}")

        # Check for duplicate titles (warning only)
        titles = [p.title.lower() for p in presets]
        if len(titles) != len(set(titles)):
            result.add_warning(
                "Multiple clause presets share the same title. "
                "Authors may not be able to tell them apart."
            )

        if not result.is_valid:
            raise ConfigurationError(
                "Clause library validation failed",
                validation_result=result
            )

        self._configuration.clause_library = presets
        self._is_loaded = True

        return result

    def _validate_clause_preset(
        self,
        data: Dict[str, Any],
        index: int = 0
    ) -> tuple[ValidationResult, Optional[ClausePreset]]:
        """Validate a single clause preset dictionary."""
        result = ValidationResult(is_valid=True)
        prefix = f"Clause preset [{index}]"

        if not isinstance(data, dict):
            result.add_error(f"{prefix}: must be an object")
            return result, None

        # Required fields
        for field in ["id", "title", "content"]:
            if field not in data:
                result.add_error(f"{prefix}: Missing required field '{field}'")

        if not result.is_valid:
            return result, None

        if not isinstance(data["id"], str) or not data["id"].strip():
            result.add_error(f"{prefix}: 'id' must be a non-empty string")

        if not isinstance(data["title"], str) or not data["title"].strip():
            result.add_error(f"{prefix}: 'title' must be a non-empty string")

        if not isinstance(data["content"], str):
            result.add_error(f"{prefix}: 'content' must be a string")
        elif not data["content"].strip():
            result.add_warning(f"{prefix}: 'content' is empty")

        if "required" in data and not isinstance(data["required"], bool):
            result.add_error(f"{prefix}: 'required' must be a boolean")

        if not result.is_valid:
            return result, None

        preset = ClausePreset(
            id=data["id"].strip(),
            title=data["title"].strip(),
            content=data["content"],
            required=data.get("required", False),
            description=data.get("description"),
        )

        return result, preset

    def get_clause_preset(self, preset_id: str) -> Optional[ClausePreset]:
        """Get a clause preset by ID."""
        return self._configuration.get_preset(preset_id)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _parse_source(
        self,
        source: Union[str, Path, Dict[str, Any], List[Dict[str, Any]]]
    ) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """Parse configuration source to raw data."""
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")

            with open(path, "r", encoding="utf-8") as f:
                try:
                    return json.load(f)
                except json.JSONDecodeError as e:
                    raise ConfigurationError(
                        f"Configuration file is not valid JSON: {path} ({e})"
                    ) from e

        return source

    def load_from_directory(self, config_dir: Union[str, Path]) -> ValidationResult:
        """
        Load all configuration files from a directory.

        Expects files named:
        - editor.json
        - clauses.json

        Args:
            config_dir: Directory containing configuration files.

        Returns:
            Combined ValidationResult for all loaded configurations.
        """
        config_dir = Path(config_dir)
        result = ValidationResult(is_valid=True)

        settings_file = config_dir / SETTINGS_FILE
        if settings_file.exists():
            try:
                result = result.merge(self.load_editor_settings(settings_file))
            except ConfigurationError as e:
                result.add_error(f"Editor settings loading failed: {e.message}")
                if e.validation_result:
                    result = result.merge(e.validation_result)

        library_file = config_dir / LIBRARY_FILE
        if library_file.exists():
            try:
                result = result.merge(self.load_clause_library(library_file))
            except ConfigurationError as e:
                result.add_error(f"Clause library loading failed: {e.message}")
                if e.validation_result:
                    result = result.merge(e.validation_result)

        for warning in result.warnings:
            logger.warning(warning)
        if result.is_valid:
            logger.info(f"Loaded editor configuration from {config_dir}")

        self._config_dir = config_dir
        return result

    def save_to_directory(
        self,
        config_dir: Optional[Union[str, Path]] = None
    ) -> None:
        """
        Save current configuration to a directory.

        Args:
            config_dir: Directory to save to. Uses current config_dir if None.
        """
        config_dir = Path(config_dir) if config_dir else self._config_dir
        if not config_dir:
            raise ConfigurationError("No configuration directory specified")

        config_dir.mkdir(parents=True, exist_ok=True)
        data = self.to_dict()

        with open(config_dir / SETTINGS_FILE, "w", encoding="utf-8") as f:
            json.dump(data["editor"], f, indent=2, ensure_ascii=False)

        with open(config_dir / LIBRARY_FILE, "w", encoding="utf-8") as f:
            json.dump({"clauses": data["clauses"]}, f, indent=2, ensure_ascii=False)

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._configuration = EditorConfiguration()
        self._is_loaded = False

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        config = self._configuration
        return {
            "editor": {
                "version": config.version,
                "history_limit": config.history_limit,
                "default_clause_title": config.default_clause_title,
                "copy_suffix": config.copy_suffix,
                "list_placeholder": config.list_placeholder,
                "heading_placeholder": config.heading_placeholder,
                "metadata": config.metadata,
            },
            "clauses": [preset.to_dict() for preset in config.clause_library],
        }
