"""
Template Clause Editor

Editing core for contract templates: an ordered clause store, toolbar
markup transforms, undo/redo history and a markdown-lite preview renderer.
"""

__version__ = "0.1.0"

# Export main components
from .models.clause import Clause, TemplateRecord
from .models.enums import MemberRole, MoveDirection, ToolbarAction, Visibility
from .editor import (
    ClauseStore,
    HistoryManager,
    TextSelection,
    TransformResult,
    apply_toolbar_action,
    insert_heading,
    insert_list,
    wrap_selection,
    EditorError,
    InvalidSelectionError,
    TemplatePersistenceError,
    TemplateValidationError,
)
from .rendering import PreviewRenderer, render
from .interfaces.repository import ITemplateRepository
from .persistence import DatabaseManager, TemplateRepository
from .config import (
    ConfigurationManager,
    ClausePreset,
    EditorConfiguration,
    ConfigurationError,
    ValidationResult,
)
from .session import SaveResult, TemplateEditorSession

__all__ = [
    "Clause",
    "TemplateRecord",
    "MemberRole",
    "MoveDirection",
    "ToolbarAction",
    "Visibility",
    "ClauseStore",
    "HistoryManager",
    "TextSelection",
    "TransformResult",
    "apply_toolbar_action",
    "insert_heading",
    "insert_list",
    "wrap_selection",
    "EditorError",
    "InvalidSelectionError",
    "TemplatePersistenceError",
    "TemplateValidationError",
    "PreviewRenderer",
    "render",
    "ITemplateRepository",
    "DatabaseManager",
    "TemplateRepository",
    "ConfigurationManager",
    "ClausePreset",
    "EditorConfiguration",
    "ConfigurationError",
    "ValidationResult",
    "SaveResult",
    "TemplateEditorSession",
]
