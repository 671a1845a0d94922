"""SQLAlchemy models for template persistence."""

from datetime import datetime, timezone
import uuid

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Text,
    Index,
    CheckConstraint,
    JSON,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class JSONType(TypeDecorator):
    """Platform-independent JSON type.

    Uses JSONB for PostgreSQL and JSON for other databases (like SQLite).
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TemplateModel(Base):
    """Contract templates table model."""
    __tablename__ = "templates"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), nullable=False)
    branch_office_id = Column(Uuid(as_uuid=True), nullable=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    sections = Column(JSONType, nullable=False, default=list)
    created_by = Column(Uuid(as_uuid=True), nullable=True)
    visibility = Column(String(20), nullable=False, default="organization")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "visibility IN ('organization', 'branch')",
            name="check_template_visibility",
        ),
        Index("templates_org_idx", "organization_id"),
        Index("templates_branch_idx", "branch_office_id"),
    )
