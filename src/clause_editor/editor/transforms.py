"""Selection-relative markup transforms for clause text.

Every transform is a pure function of ``(buffer, selection_start,
selection_end, params)`` returning a :class:`TransformResult`. The input
buffer is never modified; the caller applies ``result.text`` to the clause
and restores the returned selection in its text area.
"""

from dataclasses import dataclass

from ..models.enums import ToolbarAction
from .exceptions import InvalidSelectionError


BOLD_MARKER = "**"
ITALIC_MARKER = "*"
UNDERLINE_MARKER = "__"

BULLET_PREFIX = "• "
LIST_PLACEHOLDER = "Clause text"
HEADING_PLACEHOLDER = "Heading"

HEADING_PREFIXES = {
    2: "## ",
    3: "### ",
}


@dataclass(frozen=True)
class TextSelection:
    """A text buffer with a selected range, as captured from a text area."""
    buffer: str
    start: int
    end: int

    def __post_init__(self):
        validate_selection(self.buffer, self.start, self.end)

    @property
    def selected_text(self) -> str:
        return self.buffer[self.start:self.end]

    @property
    def is_collapsed(self) -> bool:
        """True when the selection is a bare caret."""
        return self.start == self.end


@dataclass(frozen=True)
class TransformResult:
    """New buffer and the selection to restore after applying a transform."""
    text: str
    selection_start: int
    selection_end: int


def validate_selection(buffer: str, start: int, end: int) -> None:
    """Raise InvalidSelectionError unless 0 <= start <= end <= len(buffer)."""
    if not 0 <= start <= end <= len(buffer):
        raise InvalidSelectionError.for_range(start, end, len(buffer))


def wrap_selection(buffer: str, start: int, end: int, marker: str) -> TransformResult:
    """
    Surround the selection with ``marker`` on both sides.

    The originally selected text stays selected between the markers.
    Applying the same marker again adds a second pair; there is no unwrap.

    Args:
        buffer: Current clause text.
        start: Selection start offset.
        end: Selection end offset.
        marker: Marker inserted before and after the selection.

    Returns:
        TransformResult with both selection bounds shifted by ``len(marker)``.
    """
    validate_selection(buffer, start, end)
    before = buffer[:start]
    selected = buffer[start:end]
    after = buffer[end:]
    offset = len(marker)
    return TransformResult(
        text=f"{before}{marker}{selected}{marker}{after}",
        selection_start=start + offset,
        selection_end=end + offset,
    )


def insert_list(
    buffer: str,
    start: int,
    end: int,
    numbered: bool = False,
    placeholder: str = LIST_PLACEHOLDER,
) -> TransformResult:
    """
    Turn the selected lines into a bulleted or numbered list.

    Whitespace-only lines (including an empty selection) are replaced with
    ``placeholder``. Bulleted lines get a ``"• "`` prefix, numbered lines
    ``"1. "``, ``"2. "`` and so on.

    Args:
        buffer: Current clause text.
        start: Selection start offset.
        end: Selection end offset.
        numbered: Produce a numbered list instead of bullets.
        placeholder: Text substituted for blank lines.

    Returns:
        TransformResult selecting exactly the inserted block.
    """
    validate_selection(buffer, start, end)
    before = buffer[:start]
    selected = buffer[start:end]
    after = buffer[end:]

    formatted_lines = []
    for index, line in enumerate(selected.split("\n"), start=1):
        content = line if line.strip() else placeholder
        prefix = f"{index}. " if numbered else BULLET_PREFIX
        formatted_lines.append(f"{prefix}{content}")

    insertion = "\n".join(formatted_lines)
    new_start = len(before)
    return TransformResult(
        text=f"{before}{insertion}{after}",
        selection_start=new_start,
        selection_end=new_start + len(insertion),
    )


def insert_heading(
    buffer: str,
    start: int,
    end: int,
    level: int,
    placeholder: str = HEADING_PLACEHOLDER,
) -> TransformResult:
    """
    Prefix the selection with a level 2 or level 3 heading marker.

    An empty selection is replaced with ``placeholder``.

    Raises:
        ValueError: If ``level`` is not 2 or 3.
    """
    if level not in HEADING_PREFIXES:
        raise ValueError(f"Unsupported heading level: {level}")
    validate_selection(buffer, start, end)

    before = buffer[:start]
    selected = buffer[start:end] or placeholder
    after = buffer[end:]
    prefix = HEADING_PREFIXES[level]

    new_start = len(before)
    return TransformResult(
        text=f"{before}{prefix}{selected}{after}",
        selection_start=new_start,
        selection_end=new_start + len(prefix) + len(selected),
    )


def apply_toolbar_action(
    action: ToolbarAction,
    buffer: str,
    start: int,
    end: int,
    list_placeholder: str = LIST_PLACEHOLDER,
    heading_placeholder: str = HEADING_PLACEHOLDER,
) -> TransformResult:
    """
    Apply the transform behind a toolbar button.

    Args:
        action: Toolbar action (or its string value, e.g. ``"bold"``).
        buffer: Current clause text.
        start: Selection start offset.
        end: Selection end offset.
        list_placeholder: Placeholder for blank list lines.
        heading_placeholder: Placeholder for empty headings.

    Returns:
        TransformResult for the action.

    Raises:
        ValueError: If the action is unknown.
    """
    action = ToolbarAction(action)
    if action == ToolbarAction.BOLD:
        return wrap_selection(buffer, start, end, BOLD_MARKER)
    if action == ToolbarAction.ITALIC:
        return wrap_selection(buffer, start, end, ITALIC_MARKER)
    if action == ToolbarAction.UNDERLINE:
        return wrap_selection(buffer, start, end, UNDERLINE_MARKER)
    if action in (ToolbarAction.BULLET, ToolbarAction.NUMBERED):
        return insert_list(
            buffer,
            start,
            end,
            numbered=action == ToolbarAction.NUMBERED,
            placeholder=list_placeholder,
        )
    level = 2 if action == ToolbarAction.HEADING_2 else 3
    return insert_heading(buffer, start, end, level, placeholder=heading_placeholder)


def apply_to_selection(action: ToolbarAction, selection: TextSelection) -> TransformResult:
    """Apply a toolbar action to a captured :class:`TextSelection`."""
    return apply_toolbar_action(action, selection.buffer, selection.start, selection.end)
