"""Linear undo/redo history of whole-draft snapshots."""

import copy
import logging
from typing import Generic, List, Optional, TypeVar


logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100

State = TypeVar("State")


class HistoryManager(Generic[State]):
    """
    Undo/redo stacks over full snapshots of a document draft.

    ``undo_stack`` is ordered oldest first; ``redo_stack`` is ordered
    nearest first. Recording a new edit clears ``redo_stack``. When the
    undo stack grows beyond ``max_depth`` the oldest entries are evicted.
    """

    def __init__(self, max_depth: int = DEFAULT_HISTORY_LIMIT):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._max_depth = max_depth
        self._undo_stack: List[State] = []
        self._redo_stack: List[State] = []

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def undo_stack(self) -> List[State]:
        return list(self._undo_stack)

    @property
    def redo_stack(self) -> List[State]:
        return list(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def record_before_edit(self, current_state: State) -> None:
        """
        Snapshot the draft before a discrete edit is applied.

        Call once per user action, before mutating the draft.
        """
        self._undo_stack.append(copy.deepcopy(current_state))
        self._redo_stack.clear()
        self._evict_oldest()

    def undo(self, current_state: State) -> Optional[State]:
        """
        Step back one edit.

        Args:
            current_state: The draft as it is now; becomes the next redo state.

        Returns:
            The previous draft, or None when there is nothing to undo.
        """
        if not self._undo_stack:
            return None
        previous = self._undo_stack.pop()
        self._redo_stack.insert(0, copy.deepcopy(current_state))
        return previous

    def redo(self, current_state: State) -> Optional[State]:
        """
        Re-apply the most recently undone edit.

        Args:
            current_state: The draft as it is now; pushed back onto the undo stack.

        Returns:
            The next draft, or None when there is nothing to redo.
        """
        if not self._redo_stack:
            return None
        following = self._redo_stack.pop(0)
        self._undo_stack.append(copy.deepcopy(current_state))
        self._evict_oldest()
        return following

    def clear(self) -> None:
        """Forget all history (called when the active draft is replaced)."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    def _evict_oldest(self) -> None:
        overflow = len(self._undo_stack) - self._max_depth
        if overflow > 0:
            del self._undo_stack[:overflow]
            logger.debug(f"History limit reached, evicted {overflow} oldest entries")
