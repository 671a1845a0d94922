"""SQLAlchemy-backed template repository."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError

from ..editor.exceptions import TemplatePersistenceError
from ..interfaces.repository import ITemplateRepository
from ..models.clause import Clause, TemplateRecord
from ..models.enums import Visibility
from .database import DatabaseManager
from .models import TemplateModel, utcnow


logger = logging.getLogger(__name__)


def _as_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _as_aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back without tzinfo
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TemplateRepository(ITemplateRepository):
    """
    Template repository with a relational backend.

    Stores each template as one row of the ``templates`` table with its
    clauses serialized, in order, into the ``sections`` JSON column.
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the template repository.

        Args:
            db_manager: Optional database manager. If not provided,
                       a new one will be created.
            clock: Source of server timestamps. Defaults to UTC now.
        """
        self._db_manager = db_manager or DatabaseManager()
        self._clock = clock or utcnow

    def _to_model(self, template: TemplateRecord, model: TemplateModel) -> TemplateModel:
        """Copy a TemplateRecord onto a SQLAlchemy model."""
        model.organization_id = _as_uuid(template.organization_id)
        model.branch_office_id = _as_uuid(template.branch_office_id)
        model.name = template.name
        model.description = template.description
        model.visibility = template.visibility.value
        model.sections = [clause.to_dict() for clause in template.sections]
        model.created_by = _as_uuid(template.created_by)
        return model

    def _from_model(self, model: TemplateModel) -> TemplateRecord:
        """Convert SQLAlchemy model to TemplateRecord dataclass."""
        return TemplateRecord(
            id=str(model.id),
            organization_id=str(model.organization_id),
            branch_office_id=str(model.branch_office_id) if model.branch_office_id else None,
            name=model.name,
            description=model.description or "",
            visibility=Visibility(model.visibility),
            sections=[Clause.from_dict(section) for section in model.sections or []],
            created_by=str(model.created_by) if model.created_by else None,
            created_at=_as_aware(model.created_at),
            updated_at=_as_aware(model.updated_at),
        )

    def fetch_templates(
        self,
        organization_id: Optional[str],
        branch_office_id: Optional[str] = None,
    ) -> List[TemplateRecord]:
        """
        List the templates visible to an organization member.

        Args:
            organization_id: Organization whose templates are listed.
            branch_office_id: Branch office of the member, if any.

        Returns:
            Templates ordered by most recently updated first. Empty when
            no organization is given.

        Raises:
            TemplatePersistenceError: If the query fails.
        """
        if not organization_id:
            return []

        try:
            query = select(TemplateModel).where(
                TemplateModel.organization_id == _as_uuid(organization_id)
            )
            if branch_office_id:
                query = query.where(
                    or_(
                        TemplateModel.branch_office_id.is_(None),
                        TemplateModel.branch_office_id == _as_uuid(branch_office_id),
                    )
                )
            else:
                query = query.where(
                    TemplateModel.visibility == Visibility.ORGANIZATION.value
                )
            query = query.order_by(TemplateModel.updated_at.desc())

            with self._db_manager.get_session() as db:
                models = db.execute(query).scalars().all()
                return [self._from_model(m) for m in models]
        except (SQLAlchemyError, ValueError, KeyError, TypeError) as exc:
            raise TemplatePersistenceError(
                message="Unable to load templates.",
                operation="fetch",
                details={"organization_id": organization_id, "error": str(exc)},
            ) from exc

    def get_template(self, template_id: str) -> Optional[TemplateRecord]:
        """
        Retrieve a template by ID.

        Returns:
            The template, or None if it does not exist or the id is malformed.
        """
        try:
            key = _as_uuid(template_id)
        except ValueError:
            return None

        try:
            with self._db_manager.get_session() as db:
                model = db.get(TemplateModel, key)
                return self._from_model(model) if model else None
        except (SQLAlchemyError, KeyError, TypeError) as exc:
            raise TemplatePersistenceError(
                message="Unable to load template.",
                template_id=template_id,
                operation="get",
                details={"error": str(exc)},
            ) from exc

    def save_template(self, template: TemplateRecord) -> TemplateRecord:
        """
        Insert or update a template by ID.

        The original creation time is kept on update; ``updated_at`` is
        always stamped by the repository.

        Args:
            template: Complete template record.

        Returns:
            The stored record.

        Raises:
            TemplatePersistenceError: If the write fails.
        """
        now = self._clock()
        try:
            with self._db_manager.get_session() as db:
                model = db.get(TemplateModel, _as_uuid(template.id))
                if model is None:
                    model = TemplateModel(
                        id=_as_uuid(template.id),
                        created_at=template.created_at or now,
                    )
                    db.add(model)
                self._to_model(template, model)
                model.updated_at = now
                db.flush()
                saved = self._from_model(model)
        except (SQLAlchemyError, ValueError, KeyError, TypeError) as exc:
            raise TemplatePersistenceError(
                message="Unable to save template.",
                template_id=template.id,
                operation="save",
                details={"error": str(exc)},
            ) from exc

        logger.info(f"Saved template {saved.id} ({len(saved.sections)} sections)")
        return saved
