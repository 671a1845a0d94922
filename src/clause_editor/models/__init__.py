"""Data models and enums for the template clause editor."""

from .enums import MemberRole, MoveDirection, ToolbarAction, Visibility
from .clause import Clause, TemplateRecord

__all__ = [
    # Enums
    "MemberRole",
    "MoveDirection",
    "ToolbarAction",
    "Visibility",
    # Models
    "Clause",
    "TemplateRecord",
]
