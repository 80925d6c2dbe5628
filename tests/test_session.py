"""Tests for tasklist.session module."""

from __future__ import annotations

import pytest

from tasklist.config import UiConfig
from tasklist.errors import EmptyTitleError, NotEditingError, TaskNotFoundError
from tasklist.session import TaskSession, normalize_title
from tasklist.store import TaskStore


class ScriptedConfirm:
    """Confirm callback that answers from a script and records questions."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answers.pop(0)


@pytest.fixture
def session(store: TaskStore) -> TaskSession:
    """Session without a confirm callback."""
    return TaskSession(store)


class TestNormalizeTitle:
    """Tests for normalize_title."""

    def test_trims_whitespace(self) -> None:
        """Test surrounding whitespace is removed."""
        assert normalize_title("  Buy milk \n") == "Buy milk"

    def test_keeps_inner_whitespace(self) -> None:
        """Test inner spacing is untouched."""
        assert normalize_title("Buy  milk") == "Buy  milk"

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_rejects_empty(self, raw: str) -> None:
        """Test blank titles are rejected."""
        with pytest.raises(EmptyTitleError, match="cannot be empty"):
            normalize_title(raw)


class TestAdd:
    """Tests for TaskSession.add."""

    def test_add_trims(self, session: TaskSession) -> None:
        """Test the stored title is trimmed."""
        session.add("  Buy milk  ")
        assert session.store.tasks[0].title == "Buy milk"

    def test_add_empty_leaves_store_unchanged(self, session: TaskSession) -> None:
        """Test an empty title never reaches the store."""
        with pytest.raises(EmptyTitleError):
            session.add("   ")
        assert session.store.tasks == ()


class TestPositions:
    """Tests for position lookup."""

    def test_task_at(self, session: TaskSession) -> None:
        """Test positions are 1-based."""
        session.add("one")
        session.add("two")
        assert session.task_at(1).title == "two"
        assert session.task_at(2).title == "one"

    @pytest.mark.parametrize("position", [0, 3, -1])
    def test_out_of_range(self, session: TaskSession, position: int) -> None:
        """Test bad positions raise with the valid range."""
        session.add("one")
        session.add("two")
        with pytest.raises(TaskNotFoundError, match="Choose 1-2"):
            session.task_at(position)

    def test_empty_list(self, session: TaskSession) -> None:
        """Test the message for an empty list."""
        with pytest.raises(TaskNotFoundError, match="list is empty"):
            session.task_at(1)


class TestToggle:
    """Tests for TaskSession.toggle."""

    def test_toggle_returns_new_state(self, session: TaskSession) -> None:
        """Test the returned task reflects the flip."""
        session.add("one")
        session.add("two")

        task = session.toggle(1)

        assert task.title == "two"
        assert task.completed is True
        assert [t.title for t in session.store.tasks] == ["one", "two"]


class TestDelete:
    """Tests for TaskSession.delete."""

    def test_delete_without_confirm_callback(self, session: TaskSession) -> None:
        """Test deletion goes ahead when nobody can be asked."""
        session.add("one")
        assert session.delete(1) is True
        assert session.store.tasks == ()

    def test_delete_confirmed(self, store: TaskStore) -> None:
        """Test the user is asked and agrees."""
        confirm = ScriptedConfirm(True)
        session = TaskSession(store, confirm=confirm)
        session.add("Buy milk")

        assert session.delete(1) is True
        assert confirm.questions == ['Delete "Buy milk"?']
        assert store.tasks == ()

    def test_delete_declined(self, store: TaskStore) -> None:
        """Test declining keeps the task."""
        session = TaskSession(store, confirm=ScriptedConfirm(False))
        session.add("Buy milk")

        assert session.delete(1) is False
        assert len(store) == 1

    def test_delete_confirmation_disabled(self, store: TaskStore) -> None:
        """Test confirm_delete off skips the question."""
        confirm = ScriptedConfirm()
        session = TaskSession(store, UiConfig(confirm_delete=False), confirm=confirm)
        session.add("Buy milk")

        assert session.delete(1) is True
        assert confirm.questions == []

    def test_delete_cancels_edit_of_that_task(self, session: TaskSession) -> None:
        """Test deleting the task being edited leaves edit mode."""
        session.add("one")
        session.start_edit(1)
        session.delete(1)
        assert session.editing_id is None


class TestClear:
    """Tests for TaskSession.clear."""

    def test_clear_returns_count(self, session: TaskSession) -> None:
        """Test clear reports the number removed."""
        session.add("one")
        session.add("two")
        assert session.clear() == 2
        assert session.store.tasks == ()

    def test_clear_empty_does_not_ask(self, store: TaskStore) -> None:
        """Test clearing an empty list returns 0 without a question."""
        confirm = ScriptedConfirm()
        session = TaskSession(store, confirm=confirm)
        assert session.clear() == 0
        assert confirm.questions == []

    def test_clear_declined(self, store: TaskStore) -> None:
        """Test declining keeps every task."""
        confirm = ScriptedConfirm(False)
        session = TaskSession(store, confirm=confirm)
        session.add("one")
        session.add("two")

        assert session.clear() == 0
        assert confirm.questions == ["Delete all 2 tasks?"]
        assert len(store) == 2

    def test_clear_confirmation_disabled(self, store: TaskStore) -> None:
        """Test confirm_clear off skips the question."""
        confirm = ScriptedConfirm()
        session = TaskSession(store, UiConfig(confirm_clear=False), confirm=confirm)
        session.add("one")
        assert session.clear() == 1
        assert confirm.questions == []


class TestEditing:
    """Tests for the inline edit flow."""

    def test_start_edit_seeds_text(self, session: TaskSession) -> None:
        """Test edit text starts as the current title."""
        session.add("Buy milk")
        task = session.start_edit(1)
        assert session.editing_id == task.id
        assert session.edit_text == "Buy milk"

    def test_save_edit(self, session: TaskSession) -> None:
        """Test saving trims and stores the title, then leaves edit mode."""
        session.add("Buy milk")
        session.start_edit(1)
        session.edit_text = "  Buy oat milk "
        session.save_edit()

        assert session.store.tasks[0].title == "Buy oat milk"
        assert session.editing_id is None
        assert session.edit_text == ""

    def test_save_edit_keeps_position(self, session: TaskSession) -> None:
        """Test renaming does not move the task."""
        session.add("one")
        session.add("two")
        session.toggle(1)
        session.start_edit(2)
        session.save_edit("deux")
        assert [t.title for t in session.store.tasks] == ["one", "deux"]
        assert session.store.tasks[1].completed is True

    def test_save_empty_keeps_editing(self, session: TaskSession) -> None:
        """Test an empty title raises and the edit stays open."""
        session.add("Buy milk")
        task = session.start_edit(1)

        with pytest.raises(EmptyTitleError):
            session.save_edit("   ")

        assert session.editing_id == task.id
        assert session.store.tasks[0].title == "Buy milk"

    def test_save_without_edit(self, session: TaskSession) -> None:
        """Test saving with no edit in progress."""
        with pytest.raises(NotEditingError):
            session.save_edit("anything")

    def test_cancel_edit(self, session: TaskSession) -> None:
        """Test cancelling discards the edit."""
        session.add("Buy milk")
        session.start_edit(1)
        session.edit_text = "changed"
        session.cancel_edit()

        assert session.editing_id is None
        assert session.store.tasks[0].title == "Buy milk"

    def test_rename(self, session: TaskSession) -> None:
        """Test rename in one step."""
        session.add("Buy milk")
        session.rename(1, "Buy bread")
        assert session.store.tasks[0].title == "Buy bread"
        assert session.editing_id is None

    def test_rename_empty(self, session: TaskSession) -> None:
        """Test a failed rename does not leave an edit open."""
        session.add("Buy milk")
        with pytest.raises(EmptyTitleError):
            session.rename(1, "")
        assert session.editing_id is None
        assert session.store.tasks[0].title == "Buy milk"
