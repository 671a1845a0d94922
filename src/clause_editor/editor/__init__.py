"""Editing core for the template clause editor."""

from .clause_store import ClauseStore, generate_clause_id
from .history import HistoryManager
from .transforms import (
    TextSelection,
    TransformResult,
    apply_toolbar_action,
    insert_heading,
    insert_list,
    wrap_selection,
)
from .exceptions import (
    EditorError,
    InvalidSelectionError,
    TemplatePersistenceError,
    TemplateValidationError,
)

__all__ = [
    "ClauseStore",
    "generate_clause_id",
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
]
