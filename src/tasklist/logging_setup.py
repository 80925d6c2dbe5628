"""Logging setup for tasklist."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Handlers installed by setup_logging, removed again on the next call
_installed: list[logging.Handler] = []


def setup_logging(
    level: int | str = logging.WARNING,
    *,
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> None:
    """Configure logging for the CLI.

    - Console handler: rich-formatted records on stderr at `level`
    - File handler (optional): every record from DEBUG up

    Calling it again replaces the handlers from the previous call.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    root.addHandler(console_handler)
    _installed.append(console_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(file_handler)
        _installed.append(file_handler)

    logging.captureWarnings(True)
