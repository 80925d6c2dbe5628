"""Shared fixtures for tasklist tests."""

from __future__ import annotations

import itertools
import os
from collections.abc import Callable, Generator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from tasklist.models import Task
from tasklist.store import TaskStore

BASE_TIME = datetime(2025, 1, 10, 10, 0, 0)


class StepClock:
    """Clock that advances by a fixed step on every call."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def temp_config_dir(temp_project: Path) -> Path:
    """Create a temporary .tasklist directory."""
    config_dir = temp_project / ".tasklist"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def clock() -> StepClock:
    """Deterministic clock starting at BASE_TIME."""
    return StepClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Sequential ids: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def store(clock: StepClock, id_factory: Callable[[], str]) -> TaskStore:
    """Empty store with deterministic ids and timestamps."""
    return TaskStore(id_factory=id_factory, clock=clock)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Build a task created `at` minutes after BASE_TIME."""

    def _make(task_id: str, at: float, completed: bool = False, title: str | None = None) -> Task:
        return Task(
            id=task_id,
            title=title or task_id,
            created_at=BASE_TIME + timedelta(minutes=at),
            completed=completed,
        )

    return _make
