"""Navigation sinks that receive the documents and positions picked by the index."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List, Protocol

from rich.console import Console

from randomtodo.models import MatchPosition

LOGGER = logging.getLogger(__name__)


class Navigator(Protocol):
    def navigate(self, path: Path, position: MatchPosition | None = None) -> None: ...


def format_location(path: Path, position: MatchPosition | None = None) -> str:
    """Render ``path`` or ``path:line:column`` with 1-based numbers."""
    if position is None:
        return str(path)
    return f"{path}:{position.line + 1}:{position.column + 1}"


class ConsoleNavigator:
    """Prints the location so terminals and editors can follow it."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()

    def navigate(self, path: Path, position: MatchPosition | None = None) -> None:
        self.console.print(format_location(path, position), highlight=False, soft_wrap=True)


def build_open_command(path: Path, position: MatchPosition | None = None) -> List[str] | None:
    """Command line that opens the path, or None when ``os.startfile`` must be used."""
    editor = os.environ.get("EDITOR")
    if position is not None and editor:
        return [*shlex.split(editor), f"+{position.line + 1}", str(path)]
    if os.name == "posix":
        opener = "open" if sys.platform == "darwin" else "xdg-open"
        return [opener, str(path)]
    return None


class SystemNavigator:
    """Opens the file with $EDITOR (when a line is known) or the desktop opener."""

    def navigate(self, path: Path, position: MatchPosition | None = None) -> None:
        command = build_open_command(path, position)
        LOGGER.debug("Opening %s", format_location(path, position))
        if command is None:
            os.startfile(path)  # type: ignore[attr-defined]
        else:
            subprocess.Popen(command)
