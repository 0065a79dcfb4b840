"""Host adapter wiring settings, the document store, the index and navigation.

This plays the role of the editor plugin: it owns the settings, exposes the two
random-jump commands and computes the status-bar text for an opened document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from randomtodo.config import AppConfig, TodoSettings, load_settings, save_settings
from randomtodo.index.indexer import TodoIndex
from randomtodo.index.pattern import (
    DEFAULT_TODO_PATTERN,
    InvalidPatternError,
    compile_pattern,
    count_matches,
)
from randomtodo.index.selector import RandomSelector
from randomtodo.ingestion.vault import DocumentReadError, DocumentStore
from randomtodo.navigation import Navigator
from randomtodo.models import TodoMatch

LOGGER = logging.getLogger(__name__)

COMMANDS: Dict[str, str] = {
    "open-random-todo-file": "Random Todo: File",
    "open-random-todo-item": "Random Todo: Item",
}


def status_text(count: int) -> str:
    return f"{count} to-do items" if count > 0 else ""


class RandomTodoPlugin:
    def __init__(
        self,
        config: AppConfig,
        store: DocumentStore,
        navigator: Navigator,
        *,
        selector: RandomSelector | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.navigator = navigator
        self.settings = TodoSettings()
        self._rejected_pattern: str | None = None
        self.index = TodoIndex(store, compile_pattern(DEFAULT_TODO_PATTERN), selector=selector)

    @property
    def settings_path(self) -> Path:
        return self.config.resolve_settings_path()

    def load(self) -> TodoSettings:
        """Read persisted settings and activate their pattern.

        An invalid saved pattern is replaced by the default, both in the index
        and in the returned settings.
        """
        settings = load_settings(self.settings_path)
        try:
            pattern = compile_pattern(settings.todo_pattern)
        except InvalidPatternError as exc:
            if settings.todo_pattern != self._rejected_pattern:
                LOGGER.warning("%s; falling back to the default pattern", exc)
                self._rejected_pattern = settings.todo_pattern
            pattern = compile_pattern(DEFAULT_TODO_PATTERN)
            settings = settings.model_copy(update={"todo_pattern": DEFAULT_TODO_PATTERN})
        self.index.set_pattern(pattern)
        self.settings = settings
        return settings

    def update_settings(
        self,
        *,
        todo_pattern: str | None = None,
        show_status_bar: bool | None = None,
    ) -> TodoSettings:
        """Validate and persist new settings.

        An invalid pattern raises InvalidPatternError and leaves both the active
        pattern and the stored settings untouched.
        """
        updated = self.settings.model_copy()
        pattern = None
        if todo_pattern is not None:
            pattern = compile_pattern(todo_pattern)
            updated.todo_pattern = todo_pattern
        if show_status_bar is not None:
            updated.show_status_bar = show_status_bar

        save_settings(updated, self.settings_path)
        if pattern is not None:
            self.index.set_pattern(pattern)
        self.settings = updated
        return updated

    def open_random_file(self) -> str | None:
        document_id = self.index.pick_random_document()
        if document_id is None:
            return None
        self.navigator.navigate(self.store.resolve(document_id))
        return document_id

    def open_random_item(self) -> TodoMatch | None:
        match = self.index.pick_random_match()
        if match is None:
            return None
        self.navigator.navigate(self.store.resolve(match.document_id), match.position)
        return match

    def on_document_opened(self, document_id: str) -> str | None:
        """Status-bar text for a freshly opened document, or None when disabled."""
        if not self.settings.show_status_bar:
            return None
        try:
            content = self.store.read_content(document_id)
        except DocumentReadError as exc:
            LOGGER.warning("Cannot count to-do items in %s: %s", document_id, exc.reason)
            return None
        return status_text(count_matches(self.index.pattern, content))
