"""Template repository interface for the template clause editor."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.clause import TemplateRecord


class ITemplateRepository(ABC):
    """
    Abstract interface for template persistence.

    The editor hands complete template records to an implementation of
    this interface on save; it never writes partial drafts.
    """

    @abstractmethod
    def fetch_templates(
        self,
        organization_id: Optional[str],
        branch_office_id: Optional[str] = None,
    ) -> List[TemplateRecord]:
        """
        List the templates visible to an organization member.

        Args:
            organization_id: Organization whose templates are listed.
            branch_office_id: Branch office of the member, if any. Members
                              with a branch see organization-wide templates
                              and their own branch's templates; members
                              without one see organization-visible templates.

        Returns:
            Templates ordered by most recently updated first.
        """
        pass

    @abstractmethod
    def get_template(self, template_id: str) -> Optional[TemplateRecord]:
        """
        Retrieve a template by ID.

        Returns:
            The template, or None if it does not exist.
        """
        pass

    @abstractmethod
    def save_template(self, template: TemplateRecord) -> TemplateRecord:
        """
        Insert or update a template by ID.

        Args:
            template: Complete template record.

        Returns:
            The stored record, including server-assigned timestamps.

        Raises:
            TemplatePersistenceError: If the store rejects the write.
        """
        pass
