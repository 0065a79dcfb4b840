"""Application configuration defaults and persisted plugin settings."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from randomtodo.index.pattern import DEFAULT_TODO_PATTERN
from randomtodo.utils.files import DEFAULT_EXTENSIONS, normalize_extensions

LOGGER = logging.getLogger(__name__)

LOCAL_SETTINGS = Path(".randomtodo/settings.json")


def _get_default_settings_path() -> Path:
    """Get the default settings path based on platform and execution context."""
    if sys.platform == "win32":
        user_settings = Path.home() / "AppData" / "Roaming" / "randomtodo" / "settings.json"
    else:
        user_settings = Path.home() / ".config" / "randomtodo" / "settings.json"

    if getattr(sys, "frozen", False):
        return user_settings

    # When running from a vault checkout, prefer a local settings file if it exists
    if LOCAL_SETTINGS.exists():
        return LOCAL_SETTINGS

    return user_settings


class TodoSettings(BaseModel):
    """User settings, stored with the same keys the editor plugin used."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    todo_pattern: str = Field(default=DEFAULT_TODO_PATTERN, alias="todoPattern")
    show_status_bar: bool = Field(default=False, alias="showStatusBar")


def load_settings(path: Path) -> TodoSettings:
    """Load settings, falling back to defaults for anything missing or unreadable."""
    if not path.exists():
        return TodoSettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return TodoSettings()
    if not isinstance(data, dict):
        LOGGER.warning("Ignoring settings file %s: expected a JSON object", path)
        return TodoSettings()

    try:
        return TodoSettings.model_validate(data)
    except ValidationError as exc:
        LOGGER.warning("Invalid values in settings file %s, using defaults: %s", path, exc)
        return TodoSettings()


def save_settings(settings: TodoSettings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(settings.model_dump(by_alias=True), indent=2) + "\n",
        encoding="utf-8",
    )


@dataclass(slots=True)
class AppConfig:
    vault_path: Path | None = None
    settings_path: Path | None = None
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    def __post_init__(self) -> None:
        if self.vault_path is None:
            self.vault_path = Path.cwd()
        if self.settings_path is None:
            self.settings_path = _get_default_settings_path()
        self.extensions = normalize_extensions(self.extensions)

    def resolve_settings_path(self, base_dir: Path | None = None) -> Path:
        if self.settings_path is None:
            self.settings_path = _get_default_settings_path()
        if Path(self.settings_path).is_absolute() or base_dir is None:
            return Path(self.settings_path)
        return base_dir / self.settings_path
