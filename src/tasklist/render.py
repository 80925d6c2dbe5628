"""Rendering of the task list, progress header and stats panel."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from tasklist.models import Task, TaskStats


@dataclass(frozen=True)
class Theme:
    """Semantic colours for one display mode."""

    name: str
    text: str
    muted: str
    border: str
    primary: str
    success: str
    warning: str
    danger: str


THEMES: dict[str, Theme] = {
    "light": Theme(
        name="light",
        text="#1e293b",
        muted="#64748b",
        border="#e2e8f0",
        primary="#3b82f6",
        success="#10b981",
        warning="#f59e0b",
        danger="#ef4444",
    ),
    "dark": Theme(
        name="dark",
        text="#f1f5f9",
        muted="#94a3b8",
        border="#334155",
        primary="#60a5fa",
        success="#34d399",
        warning="#fbbf24",
        danger="#f87171",
    ),
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name, falling back to dark."""
    return THEMES.get(name, THEMES["dark"])


def build_task_table(tasks: Sequence[Task], theme: Theme) -> Table:
    """Build the task table: position, checkbox and title per row."""
    table = Table(show_header=True, border_style=theme.border, expand=False)
    table.add_column("#", style=theme.muted, justify="right")
    table.add_column("", width=1)
    table.add_column("Task", style=theme.text)

    for position, task in enumerate(tasks, 1):
        if task.completed:
            box = Text("✓", style=f"bold {theme.success}")
            title = Text(task.title, style=f"strike {theme.muted}")
        else:
            box = Text("○", style=theme.muted)
            title = Text(task.title)
        table.add_row(str(position), box, title)

    return table


def build_empty_state(theme: Theme) -> Text:
    text = Text()
    text.append("No tasks yet!", style=f"bold {theme.text}")
    text.append("  Add one with ", style=theme.muted)
    text.append("add <title>", style=theme.primary)
    return text


def build_progress_header(stats: TaskStats, theme: Theme) -> Group:
    """Header line with "N of M completed" over a progress bar."""
    line = Text()
    line.append(str(stats.completed), style=f"bold {theme.success}")
    line.append(f" of {stats.total} completed", style=theme.muted)
    line.append(f"  {stats.percent}%", style=theme.primary)

    bar = ProgressBar(
        total=max(stats.total, 1),
        completed=stats.completed,
        width=40,
        complete_style=theme.success,
        finished_style=theme.success,
    )
    return Group(line, bar)


def build_stats_panel(stats: TaskStats, theme: Theme) -> Panel:
    """Total, completed and active counters side by side."""
    grid = Table.grid(padding=(0, 3))
    for _ in range(3):
        grid.add_column(justify="center")

    grid.add_row(
        Text(str(stats.total), style=f"bold {theme.primary}"),
        Text(str(stats.completed), style=f"bold {theme.success}"),
        Text(str(stats.active), style=f"bold {theme.warning}"),
    )
    grid.add_row(
        Text("Total Tasks", style=theme.muted),
        Text("Completed", style=theme.muted),
        Text("Active", style=theme.muted),
    )

    return Panel(grid, title="Progress Stats", border_style=theme.border, expand=False)


def render_task_list(
    console: Console,
    tasks: Sequence[Task],
    theme: Theme,
    *,
    show_stats: bool = True,
) -> None:
    """Print the whole list view to a console."""
    if not tasks:
        console.print(build_empty_state(theme))
        return

    parts: list[RenderableType] = []
    if show_stats:
        parts.append(build_progress_header(TaskStats.from_tasks(tasks), theme))
    parts.append(build_task_table(tasks, theme))
    console.print(Group(*parts))
