"""Interactive session over a task store.

The session is the presentation-side collaborator of `TaskStore`: it turns
list positions into task ids, validates titles, tracks the inline edit in
progress, and asks for confirmation before destructive actions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from tasklist.config import UiConfig
from tasklist.errors import EmptyTitleError, NotEditingError, TaskNotFoundError
from tasklist.models import Task
from tasklist.store import TaskStore

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def normalize_title(raw: str) -> str:
    """Trim surrounding whitespace and reject an empty title.

    Raises:
        EmptyTitleError: If nothing is left after trimming.
    """
    title = raw.strip()
    if not title:
        raise EmptyTitleError()
    return title


class TaskSession:
    """Drives a `TaskStore` on behalf of a user.

    Positions are 1-based indices into the store's current sequence, the way
    the list is shown on screen.
    """

    def __init__(
        self,
        store: TaskStore,
        ui: UiConfig | None = None,
        confirm: Confirm | None = None,
    ) -> None:
        """Initialise the session.

        Args:
            store: The store this session mutates.
            ui: Display preferences; defaults apply when omitted.
            confirm: Asked a yes/no question before delete and clear when the
                matching `confirm_*` setting is on. Without one, those
                actions go ahead unasked.
        """
        self.store = store
        self.ui = ui or UiConfig()
        self._confirm = confirm
        self.editing_id: str | None = None
        self.edit_text: str = ""

    def task_at(self, position: int) -> Task:
        """Return the task shown at a 1-based position.

        Raises:
            TaskNotFoundError: If the position is outside the list.
        """
        tasks = self.store.tasks
        if position < 1 or position > len(tasks):
            raise TaskNotFoundError(position, len(tasks))
        return tasks[position - 1]

    def add(self, raw_title: str) -> None:
        self.store.add_task(normalize_title(raw_title))

    def toggle(self, position: int) -> Task:
        """Toggle the task at a position and return its new state."""
        task = self.task_at(position)
        self.store.toggle_task(task.id)
        return self.store.get(task.id) or task

    def delete(self, position: int) -> bool:
        """Delete the task at a position.

        Returns:
            True if the task was deleted, False if the user declined.
        """
        task = self.task_at(position)
        if self.ui.confirm_delete and not self._ask(f'Delete "{task.title}"?'):
            logger.debug("delete of id=%s declined", task.id)
            return False

        self.store.delete_task(task.id)
        if self.editing_id == task.id:
            self.cancel_edit()
        return True

    def clear(self) -> int:
        """Remove every task.

        Returns:
            Number of tasks removed (0 if the list was empty or the user
            declined).
        """
        if not len(self.store):
            return 0
        if self.ui.confirm_clear and not self._ask(f"Delete all {len(self.store)} tasks?"):
            return 0

        self.cancel_edit()
        return self.store.clear_all_tasks()

    # ---- inline editing ----

    def start_edit(self, position: int) -> Task:
        """Begin editing the task at a position, seeded with its title."""
        task = self.task_at(position)
        self.editing_id = task.id
        self.edit_text = task.title
        return task

    def save_edit(self, raw_title: str | None = None) -> None:
        """Store the edited title and leave edit mode.

        An empty title raises and keeps the edit open so it can be retried.

        Raises:
            NotEditingError: If no edit is in progress.
            EmptyTitleError: If the title is empty after trimming.
        """
        if self.editing_id is None:
            raise NotEditingError()
        if raw_title is not None:
            self.edit_text = raw_title

        title = normalize_title(self.edit_text)
        self.store.update_task(self.editing_id, title)
        self.cancel_edit()

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_text = ""

    def rename(self, position: int, raw_title: str) -> None:
        """Start and save an edit in one step."""
        self.start_edit(position)
        try:
            self.save_edit(raw_title)
        except EmptyTitleError:
            self.cancel_edit()
            raise

    def _ask(self, question: str) -> bool:
        if self._confirm is None:
            return True
        return self._confirm(question)
