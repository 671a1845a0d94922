"""Preview page rendering for a whole template draft."""

import os
from typing import Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models.clause import Clause
from .markdown_lite import render


DEFAULT_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")


class PreviewRenderer:
    """
    Renders a read-only preview of a template draft.

    Uses Jinja2 templates; clause content goes through the markdown-lite
    renderer before it reaches the page.
    """

    def __init__(self, template_dir: Optional[str] = None):
        """
        Initialize the preview renderer.

        Args:
            template_dir: Directory containing Jinja2 templates.
                         If not provided, uses the bundled templates.
        """
        self.template_dir = template_dir or DEFAULT_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(['html', 'xml'])
        )

    def render_draft(
        self,
        name: str,
        clauses: Iterable[Clause],
        description: str = "",
    ) -> str:
        """
        Render the preview page for a draft.

        Args:
            name: Template name shown as the page title.
            clauses: Clauses in draft order.
            description: Optional template description.

        Returns:
            HTML string for the preview.
        """
        template = self.env.get_template('preview.html')
        return template.render(
            name=name,
            description=description,
            clauses=self._prepare_clauses(clauses),
        )

    def _prepare_clauses(self, clauses: Iterable[Clause]) -> List[Dict]:
        """Convert clauses to template-friendly format."""
        return [
            {
                'id': clause.id,
                'title': clause.title,
                'required': clause.required,
                'html': render(clause.content),
            }
            for clause in clauses
        ]
