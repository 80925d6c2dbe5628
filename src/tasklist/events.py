"""Change notifications delivered by the task store."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from tasklist.models import Task
    from tasklist.store import TaskStore

ChangeAction = Literal["add", "toggle", "update", "delete", "clear"]


@dataclass(frozen=True)
class TaskListChange:
    """The outcome of one applied mutation.

    `tasks` is the complete sequence installed by the mutation, not a diff.
    """

    action: ChangeAction
    tasks: tuple[Task, ...]
    task_id: str | None = None
    """Id of the task the mutation addressed (None for clear)."""


Listener = Callable[[TaskListChange], None]


class Subscription:
    """Handle returned by `TaskStore.subscribe`."""

    def __init__(self, store: TaskStore, listener: Listener) -> None:
        self._store = store
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop delivering changes to the listener. Safe to call twice."""
        if not self._active:
            return
        self._active = False
        self._store.unsubscribe(self._listener)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()
