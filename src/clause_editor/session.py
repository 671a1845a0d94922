"""Template editing session.

This module wires the clause store, the markup transforms, the undo/redo
history, the preview renderer and the template repository together into
the state behind one template builder screen: one active draft, its
history, the focused clause and the template metadata.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config.models import EditorConfiguration
from .editor.clause_store import ClauseStore, generate_clause_id
from .editor.exceptions import (
    EditorError,
    TemplatePersistenceError,
    TemplateValidationError,
)
from .editor.history import HistoryManager
from .editor.transforms import TransformResult, apply_toolbar_action, validate_selection
from .interfaces.repository import ITemplateRepository
from .models.clause import Clause, TemplateRecord
from .models.enums import MemberRole, MoveDirection, ToolbarAction, Visibility
from .rendering.preview_renderer import PreviewRenderer


logger = logging.getLogger(__name__)

EDITOR_ROLES = (MemberRole.ORG_ADMIN, MemberRole.BRANCH_ADMIN)
NEW_TEMPLATE_NAME = "New Template"


@dataclass
class SaveResult:
    """Outcome of saving the active draft."""

    success: bool
    template: Optional[TemplateRecord] = None
    errors: List[str] = field(default_factory=list)
    error: Optional[EditorError] = None


class TemplateEditorSession:
    """
    In-memory editing state for one template at a time.

    Toolbar markup actions and clause removal are recorded in the undo
    history. Typing into a clause title or body, adding, duplicating,
    moving and toggling the required flag are not. The history is emptied
    whenever the active draft is replaced.
    """

    def __init__(
        self,
        repository: Optional[ITemplateRepository] = None,
        config: Optional[EditorConfiguration] = None,
        id_factory: Optional[Callable[[], str]] = None,
        template_id_factory: Optional[Callable[[], str]] = None,
        member_role: MemberRole = MemberRole.ORG_ADMIN,
        organization_id: Optional[str] = None,
        branch_office_id: Optional[str] = None,
        user_id: Optional[str] = None,
        preview_renderer: Optional[PreviewRenderer] = None,
    ):
        """
        Initialize the editing session.

        Args:
            repository: Template store used by load_templates and save.
            config: Editor configuration. Defaults to built-in settings.
            id_factory: Generator for clause ids.
            template_id_factory: Generator for ids of newly saved templates.
            member_role: Role of the editing user.
            organization_id: Organization the user is working in.
            branch_office_id: Branch office of the user, if any.
            user_id: Id recorded as the template author.
            preview_renderer: Renderer for the preview page.
        """
        self._repository = repository
        self.config = config or EditorConfiguration()
        self._id_factory = id_factory or generate_clause_id
        self._template_id_factory = template_id_factory or generate_clause_id
        self.member_role = MemberRole(member_role)
        self.organization_id = organization_id
        self.branch_office_id = branch_office_id
        self.user_id = user_id
        self._preview_renderer = preview_renderer

        self._store = self._new_store([])
        self._history: HistoryManager[List[Clause]] = HistoryManager(
            max_depth=self.config.history_limit
        )
        self._loaded_record: Optional[TemplateRecord] = None

        self.templates: List[TemplateRecord] = []
        self.active_template_id: Optional[str] = None
        self.active_clause_id: Optional[str] = None
        self.name = ""
        self.description = ""
        self.visibility = Visibility.ORGANIZATION
        self.preview_mode = False
        self.last_error: Optional[str] = None
        self.last_message: Optional[str] = None

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def repository(self) -> Optional[ITemplateRepository]:
        return self._repository

    @property
    def store(self) -> ClauseStore:
        return self._store

    @property
    def history(self) -> HistoryManager:
        return self._history

    @property
    def clauses(self) -> Tuple[Clause, ...]:
        return self._store.clauses

    @property
    def is_org_admin(self) -> bool:
        return self.member_role == MemberRole.ORG_ADMIN

    @property
    def can_edit(self) -> bool:
        """Org admins and branch admins may edit templates."""
        return self.member_role in EDITOR_ROLES

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    # =========================================================================
    # Draft lifecycle
    # =========================================================================

    def load_template(self, template: TemplateRecord) -> None:
        """Make ``template`` the active draft, discarding the current one."""
        self._replace_draft(template.sections)
        self._loaded_record = template
        self.active_template_id = template.id
        self.name = template.name
        self.description = template.description or ""
        self.visibility = template.visibility
        logger.info(f"Loaded template {template.id} ({len(template.sections)} sections)")

    def new_template(self) -> bool:
        """
        Start an empty, unsaved draft under a fresh template id.

        The draft is listed first in ``templates`` until it is saved.
        Branch admins get a branch template and need a branch office.

        Returns:
            True if a draft was started. A refusal is reported through
            ``last_error``.
        """
        self.last_error = None
        if not self.can_edit:
            return False
        is_branch_admin = self.member_role == MemberRole.BRANCH_ADMIN
        if is_branch_admin and not self.branch_office_id:
            self.last_error = "Branch templates require an assigned office."
            return False

        record = TemplateRecord(
            id=self._template_id_factory(),
            organization_id=self.organization_id or "",
            name=NEW_TEMPLATE_NAME,
            visibility=Visibility.BRANCH if is_branch_admin else Visibility.ORGANIZATION,
            created_by=self.user_id,
        )
        self.load_template(record)
        self._remember(record)
        return True

    def load_templates(self) -> List[TemplateRecord]:
        """
        Fetch the templates visible to this user and activate the first one.

        A failed fetch is reported through ``last_error`` and leaves the
        current draft in place.

        Returns:
            The fetched templates (empty on failure or without an organization).
        """
        self.last_error = None
        if self._repository is None or not self.organization_id:
            self.templates = []
            return []

        try:
            templates = self._repository.fetch_templates(
                organization_id=self.organization_id,
                branch_office_id=self.branch_office_id,
            )
        except TemplatePersistenceError as e:
            self.last_error = e.message
            logger.warning(f"Failed to load templates: {e}")
            return []

        self.templates = templates
        if templates:
            self.load_template(templates[0])
        return templates

    def switch_template(self, template_id: str) -> bool:
        """
        Activate one of the loaded templates.

        The current draft and its history are discarded without confirmation.

        Returns:
            True if the template was found and activated.
        """
        for template in self.templates:
            if template.id == template_id:
                self.load_template(template)
                return True
        return False

    def set_metadata(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        visibility: Optional[Visibility] = None,
    ) -> None:
        """Update the template name, description or visibility."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if visibility is not None:
            self.visibility = Visibility(visibility)

    # =========================================================================
    # Clause operations
    # =========================================================================

    def focus_clause(self, clause_id: Optional[str]) -> None:
        """Mark the clause whose text area has focus."""
        if clause_id is None or self._store.get_clause(clause_id) is not None:
            self.active_clause_id = clause_id

    def add_clause(self, initial: Optional[Dict[str, Any]] = None) -> str:
        return self._store.add_clause(initial)

    def add_common_section(self, preset_id: str) -> Optional[str]:
        """
        Append a copy of a clause from the common clause library.

        Returns:
            The new clause id, or None if the user cannot edit or the
            preset does not exist.
        """
        if not self.can_edit:
            return None
        preset = self.config.get_preset(preset_id)
        if preset is None:
            return None
        return self._store.add_clause(preset.to_initial())

    def duplicate_clause(self, clause_id: str) -> Optional[str]:
        return self._store.duplicate_clause(clause_id)

    def move_clause(self, clause_id: str, direction: MoveDirection) -> None:
        self._store.move_clause(clause_id, direction)

    def update_field(self, clause_id: str, field_name: str, value: Any) -> None:
        """Free-text edit of a clause field. Not recorded in history."""
        self._store.update_field(clause_id, field_name, value)

    def remove_clause(self, clause_id: str) -> None:
        """Remove a clause, recording the draft beforehand so it can be undone."""
        if self._store.get_clause(clause_id) is None:
            return
        self._history.record_before_edit(self._store.snapshot())
        self._store.remove_clause(clause_id)
        if self.active_clause_id == clause_id:
            self.active_clause_id = None

    def apply_toolbar_action(
        self,
        action: ToolbarAction,
        selection_start: int,
        selection_end: int,
    ) -> Optional[TransformResult]:
        """
        Apply a toolbar markup action to the focused clause.

        Falls back to the first clause when none has focus. The draft is
        recorded in history once before the transform is applied.

        Args:
            action: Toolbar action to apply.
            selection_start: Selection start in the clause content.
            selection_end: Selection end in the clause content.

        Returns:
            The transform result, whose selection the host should restore,
            or None when the user cannot edit or the draft is empty.

        Raises:
            InvalidSelectionError: If the selection does not fit the clause.
            ValueError: If the action is unknown.
        """
        if not self.can_edit or len(self._store) == 0:
            return None

        action = ToolbarAction(action)
        target = self._target_clause()
        validate_selection(target.content, selection_start, selection_end)

        self._history.record_before_edit(self._store.snapshot())
        result = apply_toolbar_action(
            action,
            target.content,
            selection_start,
            selection_end,
            list_placeholder=self.config.list_placeholder,
            heading_placeholder=self.config.heading_placeholder,
        )
        self._store.update_field(target.id, "content", result.text)
        logger.debug(f"Applied {action.value} to clause {target.id}")
        return result

    # =========================================================================
    # History
    # =========================================================================

    def undo(self) -> bool:
        """Restore the draft as it was before the last recorded edit."""
        previous = self._history.undo(self._store.snapshot())
        if previous is None:
            return False
        self._restore(previous)
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone edit."""
        following = self._history.redo(self._store.snapshot())
        if following is None:
            return False
        self._restore(following)
        return True

    # =========================================================================
    # Preview and save
    # =========================================================================

    def toggle_preview(self) -> bool:
        self.preview_mode = not self.preview_mode
        return self.preview_mode

    def render_preview(self) -> str:
        """Render the draft as a read-only HTML page."""
        if self._preview_renderer is None:
            self._preview_renderer = PreviewRenderer()
        return self._preview_renderer.render_draft(
            name=self.name,
            description=self.description,
            clauses=self._store.clauses,
        )

    def build_save_payload(self) -> TemplateRecord:
        """
        Build the complete template record for the active draft.

        Non-org-admins always save branch templates.

        Raises:
            TemplateValidationError: If the draft cannot be saved as is.
        """
        if not self.organization_id:
            raise TemplateValidationError(
                message="An organization is required to save templates.",
                template_id=self.active_template_id,
                field_name="organization_id",
            )
        if not self.name.strip():
            raise TemplateValidationError(
                message="Template name is required.",
                template_id=self.active_template_id,
                field_name="name",
            )

        visibility = self.visibility if self.is_org_admin else Visibility.BRANCH
        branch_target = self.branch_office_id if visibility == Visibility.BRANCH else None
        if visibility == Visibility.BRANCH and not branch_target:
            raise TemplateValidationError(
                message="Branch templates require a branch office context.",
                template_id=self.active_template_id,
                field_name="visibility",
            )

        created_at: Optional[datetime] = None
        created_by = self.user_id
        if self._loaded_record is not None:
            created_at = self._loaded_record.created_at
            created_by = self._loaded_record.created_by or created_by

        return TemplateRecord(
            id=self.active_template_id or self._template_id_factory(),
            organization_id=self.organization_id,
            branch_office_id=branch_target,
            name=self.name.strip(),
            description=self.description.strip(),
            visibility=visibility,
            sections=self._store.snapshot(),
            created_by=created_by,
            created_at=created_at,
        )

    def save(self) -> SaveResult:
        """
        Validate and persist the active draft.

        The in-memory draft is never modified here; on failure the error
        message is exposed via ``last_error`` and the result.

        Raises:
            RuntimeError: If the session has no repository.
        """
        if self._repository is None:
            raise RuntimeError("No template repository configured for this session")

        self.last_error = None
        self.last_message = None

        try:
            payload = self.build_save_payload()
            saved = self._repository.save_template(payload)
        except (TemplateValidationError, TemplatePersistenceError) as e:
            self.last_error = e.message
            logger.warning(f"Template save rejected: {e}")
            return SaveResult(success=False, errors=[e.message], error=e)

        self.last_message = "Template saved."
        if self.active_template_id is None:
            self.active_template_id = saved.id
        self._loaded_record = saved
        self._remember(saved)
        return SaveResult(success=True, template=saved)

    # =========================================================================
    # Internals
    # =========================================================================

    def _new_store(self, clauses: List[Clause]) -> ClauseStore:
        return ClauseStore(
            clauses=clauses,
            id_factory=self._id_factory,
            default_title=self.config.default_clause_title,
            copy_suffix=self.config.copy_suffix,
        )

    def _replace_draft(self, clauses: List[Clause]) -> None:
        self._store = self._new_store(clauses)
        self._history.clear()
        self.active_clause_id = None

    def _restore(self, clauses: List[Clause]) -> None:
        self._store.replace_all(clauses)
        if self.active_clause_id and self._store.get_clause(self.active_clause_id) is None:
            self.active_clause_id = None

    def _target_clause(self) -> Clause:
        if self.active_clause_id:
            clause = self._store.get_clause(self.active_clause_id)
            if clause is not None:
                return clause
        return self._store.clauses[0]

    def _remember(self, saved: TemplateRecord) -> None:
        """Put the saved record at the front of the cached template list."""
        self.templates = [saved] + [t for t in self.templates if t.id != saved.id]
