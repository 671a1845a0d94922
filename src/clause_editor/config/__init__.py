"""Configuration management for the template clause editor."""

from .config_manager import ConfigurationManager
from .models import (
    DEFAULT_CLAUSE_LIBRARY,
    ClausePreset,
    EditorConfiguration,
    ConfigurationError,
    ValidationResult,
)

__all__ = [
    "ConfigurationManager",
    "DEFAULT_CLAUSE_LIBRARY",
    "ClausePreset",
    "EditorConfiguration",
    "ConfigurationError",
    "ValidationResult",
]
