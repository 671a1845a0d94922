"""Unit tests for the History Manager."""

import pytest

from clause_editor.editor.history import DEFAULT_HISTORY_LIMIT, HistoryManager


class TestUndoRedo:
    """Tests for linear undo and redo."""

    def test_undo_returns_recorded_state(self):
        history = HistoryManager()
        history.record_before_edit(["v0"])

        assert history.undo(["v1"]) == ["v0"]
        assert history.can_redo

    def test_undo_then_redo_restores_state(self):
        """Undo followed by redo gets back to where we started."""
        history = HistoryManager()
        history.record_before_edit(["v0"])

        previous = history.undo(["v1"])
        following = history.redo(previous)

        assert following == ["v1"]
        assert history.undo_depth == 1
        assert history.redo_depth == 0

    def test_round_trip_sequence(self):
        """Undo, redo, undo yields S0, S1, S0."""
        history = HistoryManager()
        s0, s1 = ["S0"], ["S1"]
        history.record_before_edit(s0)

        assert history.undo(s1) == s0
        assert history.redo(s0) == s1
        assert history.undo(s1) == s0

    def test_multiple_undos_walk_back_in_order(self):
        history = HistoryManager()
        history.record_before_edit("v0")
        history.record_before_edit("v1")

        assert history.undo("v2") == "v1"
        assert history.undo("v1") == "v0"
        assert history.undo("v0") is None
        assert history.redo_stack == ["v1", "v2"]

    def test_new_edit_clears_redo(self):
        """Recording an edit after an undo discards the redo branch."""
        history = HistoryManager()
        history.record_before_edit("v0")
        history.undo("v1")

        history.record_before_edit("v0")

        assert not history.can_redo
        assert history.redo("anything") is None

    def test_empty_history(self):
        history = HistoryManager()

        assert not history.can_undo
        assert not history.can_redo
        assert history.undo("current") is None
        assert history.redo("current") is None

    def test_recorded_state_is_copied(self):
        """Mutating the state after recording does not change history."""
        history = HistoryManager()
        state = [{"content": "before"}]
        history.record_before_edit(state)

        state[0]["content"] = "after"

        assert history.undo(state) == [{"content": "before"}]

    def test_clear(self):
        history = HistoryManager()
        history.record_before_edit("v0")
        history.record_before_edit("v1")
        history.undo("v2")

        history.clear()

        assert history.undo_depth == 0
        assert history.redo_depth == 0


class TestHistoryLimit:
    """Tests for the undo depth cap."""

    def test_default_limit(self):
        assert HistoryManager().max_depth == DEFAULT_HISTORY_LIMIT == 100

    def test_oldest_entries_are_evicted(self):
        history = HistoryManager(max_depth=3)
        for i in range(5):
            history.record_before_edit(i)

        assert history.undo_stack == [2, 3, 4]

    def test_redo_at_limit_keeps_depth(self):
        history = HistoryManager(max_depth=2)
        history.record_before_edit("a")
        history.record_before_edit("b")
        previous = history.undo("c")

        history.redo(previous)

        assert history.undo_stack == ["a", "b"]

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            HistoryManager(max_depth=0)
