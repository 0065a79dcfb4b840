"""Document store over a directory of text files.

The index only needs two things from a store: the current list of documents
with their modification stamps, and the text of one document on demand.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Sequence

from randomtodo.models import Document
from randomtodo.utils.files import DEFAULT_EXTENSIONS, iter_document_paths, to_document_id

LOGGER = logging.getLogger(__name__)


class DocumentReadError(OSError):
    """Raised when a store cannot provide the content of a document."""

    def __init__(self, document_id: str, reason: str) -> None:
        super().__init__(f"Cannot read {document_id}: {reason}")
        self.document_id = document_id
        self.reason = reason


class DocumentStore(Protocol):
    def list_documents(self) -> List[Document]: ...

    def read_content(self, document_id: str) -> str: ...

    def resolve(self, document_id: str) -> Path: ...


class FileSystemDocumentStore:
    """Reads UTF-8 documents from a vault directory."""

    def __init__(self, root: Path, *, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> None:
        self.root = Path(root)
        self.extensions = tuple(extensions)

    def list_documents(self) -> List[Document]:
        documents: List[Document] = []
        for path in iter_document_paths(self.root, self.extensions):
            try:
                mtime = path.stat().st_mtime
            except OSError as exc:
                # Deleted between listing and stat
                LOGGER.warning("Skipping %s: %s", path, exc)
                continue
            documents.append(
                Document(id=to_document_id(path, self.root), path=path, mtime=mtime)
            )
        return documents

    def resolve(self, document_id: str) -> Path:
        path = (self.root / document_id).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise DocumentReadError(document_id, "path is outside the vault")
        return path

    def read_content(self, document_id: str) -> str:
        path = self.resolve(document_id)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(document_id, str(exc)) from exc
