"""Configuration models for tasklist."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class UiConfig(BaseModel):
    """Configuration for the interactive display."""

    theme: Literal["light", "dark"] = "dark"
    confirm_delete: bool = True
    confirm_clear: bool = True
    show_stats: bool = True


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


# Keys accepted by `tasklist config set`
SETTABLE_KEYS: tuple[str, ...] = (
    "ui.theme",
    "ui.confirm_delete",
    "ui.confirm_clear",
    "ui.show_stats",
    "logging.level",
    "logging.file",
)


class TasklistConfig(BaseModel):
    """Main configuration for tasklist."""

    ui: UiConfig = Field(default_factory=UiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TasklistConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(exclude_none=True), f, indent=2)

    def with_value(self, key: str, value: str) -> TasklistConfig:
        """Return a copy with one dotted setting replaced.

        The value goes through model validation, so "false" becomes False
        and an unknown theme is rejected.

        Args:
            key: One of SETTABLE_KEYS, e.g. "ui.theme".
            value: Raw string as typed on the command line.

        Raises:
            KeyError: If the key is not settable.
            pydantic.ValidationError: If the value does not fit the field.
        """
        if key not in SETTABLE_KEYS:
            raise KeyError(key)

        section, name = key.split(".", 1)
        data = self.model_dump()
        data[section][name] = value if value != "" else None
        return type(self).model_validate(data)


# Default config directory
TASKLIST_DIR = Path(".tasklist")
CONFIG_FILE = TASKLIST_DIR / "config.json"
