"""Shared fixtures for the randomtodo test suite."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from randomtodo.index.pattern import DEFAULT_TODO_PATTERN, compile_pattern
from randomtodo.index.selector import RandomSelector
from randomtodo.ingestion.vault import DocumentReadError
from randomtodo.models import Document


class InMemoryDocumentStore:
    """Document store backed by a dict, counting every content read."""

    def __init__(self, documents: Dict[str, Tuple[str, float]] | None = None) -> None:
        self.documents: Dict[str, Tuple[str, float]] = dict(documents or {})
        self.reads: List[str] = []
        self.broken: set[str] = set()

    def put(self, document_id: str, text: str, mtime: float) -> None:
        self.documents[document_id] = (text, mtime)

    def list_documents(self) -> List[Document]:
        return [
            Document(id=doc_id, path=Path(doc_id), mtime=mtime)
            for doc_id, (_, mtime) in self.documents.items()
        ]

    def read_content(self, document_id: str) -> str:
        self.reads.append(document_id)
        if document_id in self.broken or document_id not in self.documents:
            raise DocumentReadError(document_id, "unreadable")
        return self.documents[document_id][0]

    def resolve(self, document_id: str) -> Path:
        return Path(document_id)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def default_pattern():
    return compile_pattern(DEFAULT_TODO_PATTERN)


@pytest.fixture
def seeded_selector() -> RandomSelector:
    return RandomSelector(random.Random(1234))


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """A small vault on disk with a mix of matching and non-matching notes."""
    root = tmp_path / "vault"
    (root / "projects").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "inbox.md").write_text("buy milk ...\ndone\nfinish report ... today\n", encoding="utf-8")
    (root / "projects" / "garden.md").write_text("# Garden\n\nplant tomatoes ...\n", encoding="utf-8")
    (root / "journal.md").write_text("nothing to do here\n", encoding="utf-8")
    (root / "notes.txt").write_text("not a markdown file ...\n", encoding="utf-8")
    (root / ".obsidian" / "workspace.md").write_text("hidden ...\n", encoding="utf-8")
    return root
