"""Custom exceptions for the template clause editor."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class EditorError(Exception):
    """
    Base exception for editor errors.

    Attributes:
        message: Human-readable error description, suitable for display.
        template_id: Template the error relates to, if any.
        details: Additional error details.
    """
    message: str
    template_id: Optional[str] = None
    details: Optional[dict] = field(default_factory=dict)

    def __post_init__(self):
        if self.details is None:
            self.details = {}
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.template_id:
            return f"{self.message} | Template: {self.template_id}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "template_id": self.template_id,
            "details": self.details,
        }


@dataclass
class InvalidSelectionError(EditorError, ValueError):
    """
    Raised when a selection range does not fit its text buffer.

    Selections must satisfy ``0 <= start <= end <= len(buffer)``.
    """

    @classmethod
    def for_range(cls, start: int, end: int, length: int) -> "InvalidSelectionError":
        return cls(
            message=f"Invalid selection ({start}, {end}) for text of length {length}",
            details={"start": start, "end": end, "length": length},
        )


@dataclass
class TemplateValidationError(EditorError):
    """
    Raised when a draft cannot be saved because its metadata is incomplete.

    The in-memory draft is left untouched; the message is meant for the user.
    """
    field_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field_name
        return data


@dataclass
class TemplatePersistenceError(EditorError):
    """
    Raised when the template store rejects a read or a write.

    Recoverable: the caller keeps its draft and may retry.
    """
    operation: str = "save"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["operation"] = self.operation
        return data
