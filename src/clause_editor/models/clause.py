"""Clause and template data models for the template clause editor."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .enums import Visibility


@dataclass
class Clause:
    """
    One unit of editable legal text.

    The ``id`` is the only stable handle for a clause: reordering, removal
    and undo/redo all correlate clauses by it. ``content`` carries the
    inline markup tokens produced by the toolbar transforms.
    """
    id: str
    title: str = ""
    required: bool = False
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the plain record stored in a template's sections."""
        return {
            "id": self.id,
            "title": self.title,
            "required": self.required,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Clause":
        """Build a clause from a stored section record."""
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            required=bool(data.get("required", False)),
            content=data.get("content") or "",
        )


@dataclass
class TemplateRecord:
    """
    Persisted contract template.

    Mirrors a row of the ``templates`` table: the draft's clauses are
    stored in order under ``sections``.
    """
    id: str
    organization_id: str
    name: str
    description: str = ""
    visibility: Visibility = Visibility.ORGANIZATION
    sections: List[Clause] = field(default_factory=list)
    branch_office_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.sections is None:
            self.sections = []
        if isinstance(self.visibility, str):
            self.visibility = Visibility(self.visibility)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "organization_id": self.organization_id,
            "branch_office_id": self.branch_office_id,
            "name": self.name,
            "description": self.description,
            "visibility": self.visibility.value,
            "sections": [clause.to_dict() for clause in self.sections],
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
