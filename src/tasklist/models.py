"""Data models for tasklist."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class Task:
    """A single to-do item.

    Instances are immutable. The store swaps in a modified copy whenever a
    task is toggled or renamed, so snapshots handed out earlier never change.
    """

    id: str
    title: str
    created_at: datetime
    completed: bool = False

    def toggled(self) -> Task:
        """Return a copy with the completion flag flipped."""
        return replace(self, completed=not self.completed)

    def renamed(self, title: str) -> Task:
        """Return a copy carrying a new title."""
        return replace(self, title=title)

    def __str__(self) -> str:
        """Return a string representation."""
        status = "✓" if self.completed else "○"
        return f"[{status}] {self.title}"


@dataclass(frozen=True)
class TaskStats:
    """Progress counters for a task list."""

    total: int = 0
    completed: int = 0

    @property
    def active(self) -> int:
        """Tasks still pending."""
        return self.total - self.completed

    @property
    def percent(self) -> int:
        """Completed share of the list as a whole percentage (0 when empty)."""
        if not self.total:
            return 0
        return round(self.completed * 100 / self.total)

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> TaskStats:
        total = 0
        completed = 0
        for task in tasks:
            total += 1
            if task.completed:
                completed += 1
        return cls(total=total, completed=completed)
