"""Exceptions raised by the presentation side of tasklist.

The store itself never raises for bad input; these cover what the session
layer validates before it calls the store.
"""

from __future__ import annotations


class TasklistError(Exception):
    """Base class for tasklist errors."""


class EmptyTitleError(TasklistError):
    """A task title was empty after trimming whitespace."""

    def __init__(self) -> None:
        super().__init__("Task title cannot be empty")


class TaskNotFoundError(TasklistError):
    """A list position did not address any task."""

    def __init__(self, position: int, size: int) -> None:
        self.position = position
        self.size = size
        if size:
            message = f"No task #{position}. Choose 1-{size}."
        else:
            message = f"No task #{position}. The list is empty."
        super().__init__(message)


class NotEditingError(TasklistError):
    """An edit was saved without one being in progress."""

    def __init__(self) -> None:
        super().__init__("No task is being edited")
