"""Enumerations for the template clause editor."""

from enum import Enum


class MoveDirection(Enum):
    """Direction for reordering a clause within a draft."""
    UP = "up"
    DOWN = "down"


class ToolbarAction(Enum):
    """Markup actions offered by the clause editor toolbar."""
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    BULLET = "bullet"
    NUMBERED = "numbered"
    HEADING_2 = "h2"
    HEADING_3 = "h3"


class Visibility(Enum):
    """Who can see a saved template."""
    ORGANIZATION = "organization"
    BRANCH = "branch"


class MemberRole(Enum):
    """Organization membership roles relevant to template editing."""
    ORG_ADMIN = "org_admin"
    BRANCH_ADMIN = "branch_admin"
    MEMBER = "member"
