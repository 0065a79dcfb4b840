"""FastAPI application exposing the random to-do commands over HTTP."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from randomtodo.config import AppConfig, TodoSettings
from randomtodo.index.pattern import InvalidPatternError
from randomtodo.ingestion.vault import DocumentReadError, FileSystemDocumentStore
from randomtodo.models import MatchPosition
from randomtodo.navigation import SystemNavigator
from randomtodo.plugin import RandomTodoPlugin

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="randomtodo Web", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# One plugin (and so one scan cache) per vault for the lifetime of the process
_PLUGINS: Dict[Tuple[Path, Path], RandomTodoPlugin] = {}


class PositionModel(BaseModel):
    line: int
    column: int


class SettingsPayload(BaseModel):
    todo_pattern: str | None = None
    show_status_bar: bool | None = None
    vault: Path | None = None
    settings: Path | None = None


class OpenRequest(BaseModel):
    document: str
    position: PositionModel | None = None
    vault: Path | None = None
    settings: Path | None = None


def _resolve_vault(vault: Path | None) -> Path:
    config = AppConfig(vault_path=vault)
    resolved = Path(config.vault_path).expanduser().resolve()
    if not resolved.is_dir():
        raise HTTPException(status_code=404, detail=f"Vault not found: {resolved}")
    return resolved


def _get_plugin(vault: Path | None, settings: Path | None = None) -> RandomTodoPlugin:
    resolved_vault = _resolve_vault(vault)
    config = AppConfig(vault_path=resolved_vault, settings_path=settings)
    key = (resolved_vault, config.resolve_settings_path(Path.cwd()))

    plugin = _PLUGINS.get(key)
    if plugin is None:
        store = FileSystemDocumentStore(resolved_vault, extensions=config.extensions)
        plugin = RandomTodoPlugin(config, store, SystemNavigator())
        _PLUGINS[key] = plugin
    # Settings may have been edited by another process since the last request
    plugin.load()
    return plugin


def _settings_response(settings: TodoSettings) -> dict[str, Any]:
    return {"todo_pattern": settings.todo_pattern, "show_status_bar": settings.show_status_bar}


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/random/file")
async def random_file(vault: Path | None = None, settings: Path | None = None) -> dict[str, Any]:
    plugin = _get_plugin(vault, settings)
    document_id = await asyncio.to_thread(plugin.index.pick_random_document)
    return {"document": document_id}


@app.get("/random/item")
async def random_item(vault: Path | None = None, settings: Path | None = None) -> dict[str, Any]:
    plugin = _get_plugin(vault, settings)
    match = await asyncio.to_thread(plugin.index.pick_random_match)
    if match is None:
        return {"document": None, "position": None}
    return {
        "document": match.document_id,
        "position": PositionModel(line=match.position.line, column=match.position.column),
    }


@app.get("/todos")
async def list_todos(vault: Path | None = None, settings: Path | None = None) -> dict[str, Any]:
    plugin = _get_plugin(vault, settings)
    collected = await asyncio.to_thread(plugin.index.collect_todos)
    documents: List[dict[str, Any]] = [
        {
            "document": document_id,
            "positions": [PositionModel(line=p.line, column=p.column) for p in positions],
        }
        for document_id, positions in collected.items()
    ]
    stats = plugin.index.last_stats
    return {
        "documents": documents,
        "stats": {
            "document_count": len(documents),
            "item_count": sum(len(positions) for positions in collected.values()),
            "failed": stats.failed_documents,
        },
    }


@app.get("/status")
async def document_status(
    document: str, vault: Path | None = None, settings: Path | None = None
) -> dict[str, Any]:
    """Status-bar text for one document; null when the status bar is disabled."""
    plugin = _get_plugin(vault, settings)
    if not plugin.settings.show_status_bar:
        return {"document": document, "text": None}
    text = plugin.on_document_opened(document)
    if text is None:
        raise HTTPException(status_code=404, detail=f"Cannot read document: {document}")
    return {"document": document, "text": text}


@app.get("/settings")
async def get_settings(vault: Path | None = None, settings: Path | None = None) -> dict[str, Any]:
    plugin = _get_plugin(vault, settings)
    return _settings_response(plugin.settings)


@app.put("/settings")
async def update_settings(payload: SettingsPayload) -> dict[str, Any]:
    plugin = _get_plugin(payload.vault, payload.settings)
    try:
        updated = plugin.update_settings(
            todo_pattern=payload.todo_pattern,
            show_status_bar=payload.show_status_bar,
        )
    except InvalidPatternError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _settings_response(updated)


@app.post("/open")
async def open_document(payload: OpenRequest) -> dict[str, str]:
    plugin = _get_plugin(payload.vault, payload.settings)
    try:
        path = plugin.store.resolve(payload.document)
    except DocumentReadError as exc:
        raise HTTPException(status_code=400, detail=exc.reason) from exc
    if not path.exists():
        raise HTTPException(status_code=404, detail=f"File not found: {payload.document}")

    position = None
    if payload.position is not None:
        position = MatchPosition(line=payload.position.line, column=payload.position.column)
    try:
        plugin.navigator.navigate(path, position)
    except OSError as exc:  # pragma: no cover - defensive
        LOGGER.error("Unable to open %s: %s", path, exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return {"status": "ok"}
