"""Unit tests for the Clause Store."""

import pytest

from clause_editor.editor.clause_store import ClauseStore
from clause_editor.models.clause import Clause
from clause_editor.models.enums import MoveDirection


def sequential_ids(*ids):
    """Id factory returning the given ids in order."""
    iterator = iter(ids)
    return lambda: next(iterator)


class TestAddClause:
    """Tests for appending clauses."""

    def test_add_clause_defaults(self):
        """A new clause gets the default title and empty content."""
        store = ClauseStore(id_factory=sequential_ids("c1"))

        clause_id = store.add_clause()

        assert clause_id == "c1"
        clause = store.get_clause("c1")
        assert clause.title == "New Section"
        assert clause.required is False
        assert clause.content == ""

    def test_add_clause_with_initial_values(self):
        """Initial values override the defaults; a supplied id is ignored."""
        store = ClauseStore(id_factory=sequential_ids("c1"))

        clause_id = store.add_clause({
            "id": "ignored",
            "title": "Confidentiality",
            "required": True,
            "content": "Keep it secret.",
        })

        assert clause_id == "c1"
        assert store.get_clause("ignored") is None
        clause = store.get_clause("c1")
        assert clause.title == "Confidentiality"
        assert clause.required is True
        assert clause.content == "Keep it secret."

    def test_add_appends_at_end(self):
        """Clauses are appended in call order."""
        store = ClauseStore(id_factory=sequential_ids("a", "b", "c"))

        for _ in range(3):
            store.add_clause()

        assert store.ids == ["a", "b", "c"]

    def test_ids_are_never_reused(self):
        """An id already issued is skipped, even after the clause is removed."""
        store = ClauseStore(id_factory=sequential_ids("a", "a", "b"))

        first = store.add_clause()
        store.remove_clause(first)
        second = store.add_clause()

        assert first == "a"
        assert second == "b"

    def test_ids_from_initial_clauses_are_reserved(self):
        """Ids of clauses passed at construction are never handed out again."""
        store = ClauseStore(
            clauses=[Clause(id="x", title="Existing")],
            id_factory=sequential_ids("x", "y"),
        )

        assert store.add_clause() == "y"

    def test_custom_default_title(self):
        store = ClauseStore(id_factory=sequential_ids("a"), default_title="Untitled")
        store.add_clause()
        assert store.get_clause("a").title == "Untitled"


class TestDuplicateClause:
    """Tests for duplicating clauses."""

    def test_duplicate_copies_fields_with_suffix(self):
        """The copy is appended with a fresh id and a suffixed title."""
        store = ClauseStore(id_factory=sequential_ids("a", "b", "c"))
        store.add_clause({"title": "Termination", "required": True, "content": "30 days"})
        store.add_clause({"title": "Payment"})

        copy_id = store.duplicate_clause("a")

        assert copy_id == "c"
        assert store.ids == ["a", "b", "c"]
        copy = store.get_clause("c")
        assert copy.title == "Termination Copy"
        assert copy.required is True
        assert copy.content == "30 days"

    def test_duplicate_is_independent(self):
        """Editing the copy leaves the original untouched."""
        store = ClauseStore(id_factory=sequential_ids("a", "b"))
        store.add_clause({"content": "original"})
        store.duplicate_clause("a")

        store.update_field("b", "content", "changed")

        assert store.get_clause("a").content == "original"

    def test_duplicate_unknown_id(self):
        """Duplicating an unknown id does nothing."""
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause()

        assert store.duplicate_clause("missing") is None
        assert store.ids == ["a"]


class TestRemoveClause:
    """Tests for removing clauses."""

    def test_remove_keeps_relative_order(self):
        store = ClauseStore(id_factory=sequential_ids("a", "b", "c"))
        for _ in range(3):
            store.add_clause()

        store.remove_clause("b")

        assert store.ids == ["a", "c"]

    def test_remove_first_of_two_leaves_second(self):
        store = ClauseStore()
        first = store.add_clause()
        second = store.add_clause()

        store.remove_clause(first)

        assert store.ids == [second]

    def test_remove_unknown_id_is_noop(self):
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause()

        store.remove_clause("missing")

        assert store.ids == ["a"]


class TestMoveClause:
    """Tests for reordering clauses."""

    @pytest.fixture
    def store(self):
        store = ClauseStore(id_factory=sequential_ids("a", "b", "c"))
        for _ in range(3):
            store.add_clause()
        return store

    def test_move_up_swaps_with_previous(self, store):
        store.move_clause("b", MoveDirection.UP)
        assert store.ids == ["b", "a", "c"]

    def test_move_down_swaps_with_next(self, store):
        store.move_clause("b", MoveDirection.DOWN)
        assert store.ids == ["a", "c", "b"]

    def test_move_accepts_string_direction(self, store):
        store.move_clause("c", "up")
        assert store.ids == ["a", "c", "b"]

    def test_move_up_then_down_restores_order(self, store):
        store.move_clause("b", MoveDirection.UP)
        store.move_clause("b", MoveDirection.DOWN)
        assert store.ids == ["a", "b", "c"]

    def test_move_first_up_is_noop(self, store):
        """Moving past the start of the draft leaves the order unchanged."""
        store.move_clause("a", MoveDirection.UP)
        assert store.ids == ["a", "b", "c"]

    def test_move_last_down_is_noop(self, store):
        """Moving past the end of the draft leaves the order unchanged."""
        store.move_clause("c", MoveDirection.DOWN)
        assert store.ids == ["a", "b", "c"]

    def test_move_unknown_id_is_noop(self, store):
        store.move_clause("missing", MoveDirection.UP)
        assert store.ids == ["a", "b", "c"]

    def test_move_preserves_ids_and_fields(self, store):
        """A move is a permutation: ids and clause data are unchanged."""
        store.update_field("a", "content", "first")
        before = {c.id: c.content for c in store.clauses}

        store.move_clause("a", MoveDirection.DOWN)

        assert sorted(store.ids) == ["a", "b", "c"]
        assert {c.id: c.content for c in store.clauses} == before


class TestUpdateField:
    """Tests for field edits."""

    def test_update_changes_only_target(self):
        store = ClauseStore(id_factory=sequential_ids("a", "b"))
        store.add_clause({"title": "One"})
        store.add_clause({"title": "Two"})

        store.update_field("b", "title", "Second")

        assert store.get_clause("a").title == "One"
        assert store.get_clause("b").title == "Second"
        assert store.ids == ["a", "b"]

    def test_update_required_coerces_to_bool(self):
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause()

        store.update_field("a", "required", 1)

        assert store.get_clause("a").required is True

    def test_update_unknown_field_raises(self):
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause()

        with pytest.raises(ValueError):
            store.update_field("a", "id", "b")

    def test_update_unknown_id_is_noop(self):
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause({"title": "Kept"})

        store.update_field("missing", "title", "Changed")

        assert store.get_clause("a").title == "Kept"


class TestSnapshots:
    """Tests for snapshot and replace_all."""

    def test_snapshot_is_deep_copy(self):
        """Mutating a snapshot never affects the store."""
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause({"content": "text"})

        snapshot = store.snapshot()
        snapshot[0].content = "mutated"

        assert store.get_clause("a").content == "text"

    def test_replace_all_copies_input(self):
        store = ClauseStore()
        clauses = [Clause(id="x", title="X")]

        store.replace_all(clauses)
        clauses[0].title = "mutated"

        assert store.get_clause("x").title == "X"

    def test_clauses_view_is_tuple(self):
        store = ClauseStore(id_factory=sequential_ids("a"))
        store.add_clause()

        assert isinstance(store.clauses, tuple)
        assert len(store) == 1
        assert [c.id for c in store] == ["a"]
