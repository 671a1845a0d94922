"""Ordered clause store backing a template draft."""

import copy
import logging
import uuid
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from ..models.clause import Clause
from ..models.enums import MoveDirection


logger = logging.getLogger(__name__)

DEFAULT_CLAUSE_TITLE = "New Section"
COPY_SUFFIX = " Copy"

EDITABLE_FIELDS = ("title", "required", "content")


def generate_clause_id() -> str:
    """Default id factory: a random UUID string."""
    return str(uuid.uuid4())


class ClauseStore:
    """
    Ordered sequence of clauses for one document draft.

    Ordering is only changed by explicit add, remove and move calls.
    Operations that reference an unknown clause id are silent no-ops.
    New clause ids come from the injected ``id_factory`` and are never
    reused within a store, even after removal.
    """

    def __init__(
        self,
        clauses: Optional[List[Clause]] = None,
        id_factory: Optional[Callable[[], str]] = None,
        default_title: str = DEFAULT_CLAUSE_TITLE,
        copy_suffix: str = COPY_SUFFIX,
    ):
        """
        Initialize the clause store.

        Args:
            clauses: Initial clauses, copied into the store.
            id_factory: Zero-argument callable returning fresh clause ids.
            default_title: Title given to clauses created by add_clause.
            copy_suffix: Suffix appended to duplicated clause titles.
        """
        self._id_factory = id_factory or generate_clause_id
        self._default_title = default_title
        self._copy_suffix = copy_suffix
        self._clauses: List[Clause] = []
        self._issued_ids: set = set()
        self.replace_all(clauses or [])

    @property
    def clauses(self) -> Tuple[Clause, ...]:
        """Read-only view of the clauses in draft order."""
        return tuple(self._clauses)

    @property
    def ids(self) -> List[str]:
        return [clause.id for clause in self._clauses]

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self._clauses)

    def get_clause(self, clause_id: str) -> Optional[Clause]:
        """Get a clause by ID."""
        index = self.index_of(clause_id)
        return self._clauses[index] if index is not None else None

    def index_of(self, clause_id: str) -> Optional[int]:
        """Position of a clause in the draft, or None if absent."""
        for index, clause in enumerate(self._clauses):
            if clause.id == clause_id:
                return index
        return None

    def add_clause(self, initial: Optional[Dict[str, Any]] = None) -> str:
        """
        Append a new clause.

        Args:
            initial: Optional overrides for ``title``, ``required`` and
                     ``content``. Any ``id`` key is ignored.

        Returns:
            The fresh id of the new clause.
        """
        overrides = {
            key: value
            for key, value in (initial or {}).items()
            if key in EDITABLE_FIELDS
        }
        clause = Clause(
            id=self._new_id(),
            title=overrides.get("title", self._default_title),
            required=bool(overrides.get("required", False)),
            content=overrides.get("content", ""),
        )
        self._clauses.append(clause)
        logger.debug(f"Added clause {clause.id}")
        return clause.id

    def duplicate_clause(self, clause_id: str) -> Optional[str]:
        """
        Append a copy of a clause with a fresh id and a suffixed title.

        Returns:
            The new clause id, or None if ``clause_id`` is unknown.
        """
        original = self.get_clause(clause_id)
        if original is None:
            return None

        duplicate = Clause(
            id=self._new_id(),
            title=f"{original.title}{self._copy_suffix}",
            required=original.required,
            content=original.content,
        )
        self._clauses.append(duplicate)
        logger.debug(f"Duplicated clause {clause_id} as {duplicate.id}")
        return duplicate.id

    def remove_clause(self, clause_id: str) -> None:
        """Remove a clause, keeping the order of the others."""
        index = self.index_of(clause_id)
        if index is None:
            return
        del self._clauses[index]
        logger.debug(f"Removed clause {clause_id}")

    def move_clause(self, clause_id: str, direction: MoveDirection) -> None:
        """
        Swap a clause with its neighbour in the given direction.

        Moving the first clause up or the last clause down does nothing.
        """
        direction = MoveDirection(direction)
        index = self.index_of(clause_id)
        if index is None:
            return

        target = index - 1 if direction == MoveDirection.UP else index + 1
        if target < 0 or target >= len(self._clauses):
            return

        self._clauses[index], self._clauses[target] = (
            self._clauses[target],
            self._clauses[index],
        )

    def update_field(self, clause_id: str, field: str, value: Any) -> None:
        """
        Set one field of a clause in place.

        Raises:
            ValueError: If ``field`` is not an editable clause field.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(
                f"Unknown clause field '{field}'. Expected one of {EDITABLE_FIELDS}"
            )
        clause = self.get_clause(clause_id)
        if clause is None:
            return
        setattr(clause, field, bool(value) if field == "required" else value)

    def snapshot(self) -> List[Clause]:
        """Deep copy of the current draft."""
        return copy.deepcopy(self._clauses)

    def replace_all(self, clauses: List[Clause]) -> None:
        """Replace the draft with a copy of ``clauses`` (e.g. a history state)."""
        self._clauses = copy.deepcopy(list(clauses))
        self._issued_ids.update(clause.id for clause in self._clauses)

    def _new_id(self) -> str:
        clause_id = self._id_factory()
        while clause_id in self._issued_ids:
            clause_id = self._id_factory()
        self._issued_ids.add(clause_id)
        return clause_id
