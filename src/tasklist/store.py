"""Task store - the ordered in-memory task list.

Ordering rule kept after every mutation:

- incomplete tasks come before completed ones
- new tasks are prepended
- a completed task moves to the very end (most recently completed last)
- a reactivated task is reinserted among the incomplete tasks before the
  first one created earlier than itself

The store never raises for an unknown id; toggle, update and delete leave
the list untouched instead.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Iterator, Sequence
from datetime import datetime

from tasklist.events import ChangeAction, Listener, Subscription, TaskListChange
from tasklist.models import Task, TaskStats

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def new_task_id() -> str:
    """Generate a globally unique opaque task id."""
    return str(uuid.uuid4())


def reinsert_incomplete(tasks: Sequence[Task], task: Task) -> tuple[Task, ...]:
    """Place a reactivated task back among the incomplete tasks.

    The incomplete and completed groups of `tasks` keep their relative order.
    `task` goes right before the first incomplete task with an older
    `created_at`, or after the last incomplete task when there is none. The
    scan stops at the first match, so the result is only sorted by creation
    time as far as the incomplete group already was.

    Args:
        tasks: The list without `task` in it.
        task: The task being reactivated.

    Returns:
        The full new sequence: incomplete group, then completed group.
    """
    incomplete = [t for t in tasks if not t.completed]
    completed = [t for t in tasks if t.completed]

    insert_at = len(incomplete)
    for index, other in enumerate(incomplete):
        if task.created_at > other.created_at:
            insert_at = index
            break

    incomplete.insert(insert_at, task)
    return (*incomplete, *completed)


class TaskStore:
    """Owns the ordered task list and applies the five mutations.

    Every mutation builds a new tuple and installs it in one assignment, then
    notifies subscribers. Readers never see a half-applied change.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        id_factory: IdFactory | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialise the store.

        Args:
            tasks: Optional starting sequence. Ids must be unique and every
                incomplete task must precede every completed one.
            id_factory: Supplies ids for new tasks (uuid4 strings by default).
            clock: Supplies creation timestamps (`datetime.now` by default).

        Raises:
            ValueError: If the starting sequence breaks either rule.
        """
        seed = tuple(tasks)
        _check_sequence(seed)
        self._tasks: tuple[Task, ...] = seed
        self._id_factory = id_factory or new_task_id
        self._clock = clock or datetime.now
        self._listeners: list[Listener] = []

    # ---- read access ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """The current ordered sequence."""
        return self._tasks

    def get(self, task_id: str) -> Task | None:
        """Get a task by id."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def stats(self) -> TaskStats:
        return TaskStats.from_tasks(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    # ---- mutations ----

    def add_task(self, title: str) -> None:
        """Create a task and put it at the front of the list.

        The title is stored as given; trimming and rejecting empty titles is
        up to the caller.
        """
        task = Task(id=self._id_factory(), title=title, created_at=self._clock())
        self._commit("add", (task, *self._tasks), task.id)

    def toggle_task(self, task_id: str) -> None:
        """Flip a task's completion flag and move it to its new position."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("toggle ignored, no task id=%s", task_id)
            return

        toggled = self._tasks[index].toggled()
        others = self._tasks[:index] + self._tasks[index + 1 :]

        if toggled.completed:
            new_tasks = (*others, toggled)
        else:
            new_tasks = reinsert_incomplete(others, toggled)

        self._commit("toggle", new_tasks, task_id)

    def update_task(self, task_id: str, title: str) -> None:
        """Replace a task's title in place."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("update ignored, no task id=%s", task_id)
            return

        renamed = self._tasks[index].renamed(title)
        self._commit(
            "update",
            self._tasks[:index] + (renamed,) + self._tasks[index + 1 :],
            task_id,
        )

    def delete_task(self, task_id: str) -> None:
        """Remove a task, keeping the others in order."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("delete ignored, no task id=%s", task_id)
            return

        self._commit("delete", self._tasks[:index] + self._tasks[index + 1 :], task_id)

    def clear_all_tasks(self) -> int:
        """Empty the list.

        Returns:
            How many tasks the list held right before clearing.
        """
        count = len(self._tasks)
        self._commit("clear", (), None)
        return count

    # ---- subscriptions ----

    def subscribe(self, listener: Listener) -> Subscription:
        """Register a callable that receives every applied change.

        Listeners run synchronously, in registration order, after the new
        sequence is installed. No-op calls are not reported.
        """
        self._listeners.append(listener)
        return Subscription(self, listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Stop notifying a listener. Unknown listeners are ignored."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    # ---- internals ----

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _commit(self, action: ChangeAction, tasks: tuple[Task, ...], task_id: str | None) -> None:
        self._tasks = tasks
        logger.debug("%s id=%s -> %d tasks", action, task_id, len(tasks))

        change = TaskListChange(action=action, tasks=tasks, task_id=task_id)
        for listener in list(self._listeners):
            listener(change)


def _check_sequence(tasks: Sequence[Task]) -> None:
    seen: set[str] = set()
    in_completed = False
    for task in tasks:
        if task.id in seen:
            raise ValueError(f"duplicate task id: {task.id}")
        seen.add(task.id)
        if task.completed:
            in_completed = True
        elif in_completed:
            raise ValueError(f"incomplete task {task.id} follows a completed task")
