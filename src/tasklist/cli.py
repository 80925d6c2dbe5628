"""CLI interface for tasklist."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tasklist import __version__
from tasklist.config import CONFIG_FILE, SETTABLE_KEYS, TasklistConfig
from tasklist.errors import TasklistError
from tasklist.events import TaskListChange
from tasklist.logging_setup import setup_logging
from tasklist.render import THEMES, build_stats_panel, get_theme, render_task_list
from tasklist.session import TaskSession
from tasklist.store import TaskStore

console = Console()
logger = logging.getLogger(__name__)

SHELL_HELP = """\
[bold]Commands:[/bold]
  [cyan]add[/cyan] <title>        Add a task to the top of the list
  [cyan]toggle[/cyan] <n>         Mark task n done, or active again
  [cyan]edit[/cyan] <n> <title>   Rename task n
  [cyan]delete[/cyan] <n>         Delete task n
  [cyan]clear[/cyan]              Delete every task
  [cyan]list[/cyan]               Show the list
  [cyan]stats[/cyan]              Show progress stats
  [cyan]theme[/cyan] \\[light|dark] Show or switch the colour theme
  [cyan]help[/cyan]               Show this help
  [cyan]quit[/cyan]               Leave (tasks are not kept)"""


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasklist")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .tasklist/config.json)",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None) -> None:
    """tasklist - a to-do list for the terminal.

    \b
    Usage:
      tasklist shell              # Start an interactive session
      tasklist config show        # Show settings
      tasklist config set ui.theme light
    """
    ctx.ensure_object(dict)

    try:
        config = TasklistConfig.load(config_path)
    except ValueError as e:  # bad JSON or pydantic.ValidationError
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        ctx.exit(1)

    setup_logging(config.logging.level, log_file=config.logging.file)

    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path or CONFIG_FILE

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---- interactive shell ----


class ShellView:
    """Keeps the screen in step with the store for one shell session."""

    def __init__(self, session: TaskSession) -> None:
        self.session = session

    @property
    def theme_name(self) -> str:
        return self.session.ui.theme

    def show(self) -> None:
        render_task_list(
            console,
            self.session.store.tasks,
            get_theme(self.theme_name),
            show_stats=self.session.ui.show_stats,
        )

    def on_change(self, change: TaskListChange) -> None:
        logger.debug("redraw after %s", change.action)
        self.show()


def _parse_position(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise click.BadParameter(f"expected a task number, got {raw!r}") from None


def _cmd_add(view: ShellView, arg: str) -> None:
    view.session.add(arg)


def _cmd_toggle(view: ShellView, arg: str) -> None:
    view.session.toggle(_parse_position(arg))


def _cmd_edit(view: ShellView, arg: str) -> None:
    position, _, title = arg.partition(" ")
    view.session.rename(_parse_position(position), title)


def _cmd_delete(view: ShellView, arg: str) -> None:
    if not view.session.delete(_parse_position(arg)):
        console.print("[dim]Cancelled.[/dim]")


def _cmd_clear(view: ShellView, arg: str) -> None:
    if not len(view.session.store):
        console.print("[dim]Nothing to clear.[/dim]")
        return
    count = view.session.clear()
    if count:
        noun = "task" if count == 1 else "tasks"
        console.print(f"[green]Cleared {count} {noun}.[/green]")
    else:
        console.print("[dim]Cancelled.[/dim]")


def _cmd_list(view: ShellView, arg: str) -> None:
    view.show()


def _cmd_stats(view: ShellView, arg: str) -> None:
    console.print(build_stats_panel(view.session.store.stats(), get_theme(view.theme_name)))


def _cmd_theme(view: ShellView, arg: str) -> None:
    name = arg.strip().lower()
    if not name:
        console.print(f"Theme: [cyan]{view.theme_name}[/cyan]")
        return
    if name not in THEMES:
        raise click.BadParameter(f"unknown theme {name!r} (choose from {', '.join(THEMES)})")
    view.session.ui = view.session.ui.model_copy(update={"theme": name})
    console.print(f"Theme: [cyan]{name}[/cyan]")
    view.show()


def _cmd_help(view: ShellView, arg: str) -> None:
    console.print(SHELL_HELP)


SHELL_COMMANDS: dict[str, Callable[[ShellView, str], None]] = {
    "add": _cmd_add,
    "toggle": _cmd_toggle,
    "edit": _cmd_edit,
    "delete": _cmd_delete,
    "clear": _cmd_clear,
    "list": _cmd_list,
    "stats": _cmd_stats,
    "theme": _cmd_theme,
    "help": _cmd_help,
}

QUIT_COMMANDS = frozenset({"quit", "exit"})


def run_shell_line(view: ShellView, line: str) -> bool:
    """Run one line typed at the shell prompt.

    Returns:
        False when the user asked to leave, True otherwise.
    """
    name, _, arg = line.strip().partition(" ")
    name = name.lower()

    if not name:
        return True
    if name in QUIT_COMMANDS:
        return False

    handler = SHELL_COMMANDS.get(name)
    if handler is None:
        console.print(f"[red]Unknown command:[/red] {escape(name)}. Type [cyan]help[/cyan].")
        return True

    try:
        handler(view, arg.strip())
    except (TasklistError, click.BadParameter) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")

    return True


def _confirm(question: str) -> bool:
    return click.confirm(question, default=False)


@main.command()
@click.pass_context
def shell(ctx: click.Context) -> None:
    """Start an interactive task list session.

    Tasks live in memory only and are gone when the session ends.
    """
    config: TasklistConfig = ctx.obj["config"]

    store = TaskStore()
    session = TaskSession(store, config.ui.model_copy(), confirm=_confirm)
    view = ShellView(session)

    console.print(Panel.fit("[bold]Task list[/bold]  [dim]type help for commands[/dim]", title="tasklist"))
    view.show()

    with store.subscribe(view.on_change):
        while True:
            try:
                line = click.prompt("tasklist", prompt_suffix="> ", default="", show_default=False)
                if not run_shell_line(view, line):
                    break
            except click.Abort:
                console.print()
                break

    console.print("[dim]Bye.[/dim]")


# ---- configuration ----


@main.group("config")
def config_group() -> None:
    """Show or change settings."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config: TasklistConfig = ctx.obj["config"]
    data = config.model_dump()

    table = Table(title="Settings", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key in SETTABLE_KEYS:
        section, name = key.split(".", 1)
        value = data[section][name]
        if isinstance(value, bool):
            shown = "[green]✓[/green]" if value else "[dim]✗[/dim]"
        elif value is None:
            shown = "[dim](none)[/dim]"
        else:
            shown = str(value)
        table.add_row(key, shown)

    console.print(table)


@config_group.command("set")
@click.argument("key", type=click.Choice(SETTABLE_KEYS))
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Change a setting and save it.

    \b
    Examples:
      tasklist config set ui.theme light
      tasklist config set ui.confirm_delete false
      tasklist config set logging.level debug
    """
    config: TasklistConfig = ctx.obj["config"]
    path: Path = ctx.obj["config_path"]

    try:
        updated = config.with_value(key, value)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}:[/red] {escape(value)}")
        logger.debug("rejected %s=%r: %s", key, value, e)
        ctx.exit(1)

    updated.save(path)
    ctx.obj["config"] = updated

    console.print(f"[green]Set[/green] {key} = {escape(value)}")
