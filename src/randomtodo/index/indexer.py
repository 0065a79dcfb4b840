"""To-do index over a document store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from randomtodo.index.cache import ScanCache
from randomtodo.index.pattern import TodoPattern
from randomtodo.index.selector import RandomSelector
from randomtodo.ingestion.vault import DocumentReadError, DocumentStore
from randomtodo.models import Document, MatchPosition, TodoMatch

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class QueryStats:
    visited: int = 0
    cached: int = 0
    scanned: int = 0
    failed: int = 0
    failed_documents: list[str] = field(default_factory=list)

    def increment(self, status: str, document_id: str) -> None:
        self.visited += 1
        if status == "cached":
            self.cached += 1
        elif status == "scanned":
            self.scanned += 1
        else:
            self.failed += 1
            self.failed_documents.append(document_id)


class TodoIndex:
    """Answers random to-do queries, consulting the scan cache per document."""

    def __init__(
        self,
        store: DocumentStore,
        pattern: TodoPattern,
        *,
        cache: ScanCache | None = None,
        selector: RandomSelector | None = None,
    ) -> None:
        self.store = store
        self.cache = cache if cache is not None else ScanCache()
        self.selector = selector if selector is not None else RandomSelector()
        self._pattern = pattern
        self.last_stats = QueryStats()

    @property
    def pattern(self) -> TodoPattern:
        return self._pattern

    def set_pattern(self, pattern: TodoPattern) -> None:
        """Swap the active pattern; cached positions are dropped if it changed."""
        if pattern.source != self._pattern.source:
            LOGGER.info(
                "To-do pattern changed to %r, clearing %d cached entries",
                pattern.source,
                len(self.cache),
            )
            self.cache.clear()
        self._pattern = pattern

    def positions_for(self, document: Document) -> Tuple[MatchPosition, ...] | None:
        """Cached positions for one document, or None if it cannot be read."""
        hits_before = self.cache.hits
        try:
            positions = self.cache.get_positions(
                document.id,
                document.mtime,
                self._pattern,
                lambda: self.store.read_content(document.id),
            )
        except DocumentReadError as exc:
            LOGGER.warning("Skipping %s: %s", document.id, exc.reason)
            self.last_stats.increment("failed", document.id)
            return None
        status = "cached" if self.cache.hits > hits_before else "scanned"
        self.last_stats.increment(status, document.id)
        return positions

    def _iter_matching(
        self, documents: List[Document]
    ) -> Iterator[Tuple[Document, Tuple[MatchPosition, ...]]]:
        self.last_stats = QueryStats()
        for document in documents:
            positions = self.positions_for(document)
            if positions:
                yield document, positions

    def pick_random_document(self) -> str | None:
        """Return some document with at least one match, or None.

        Documents are visited in shuffled order and the first hit wins, so the
        choice is not uniform over matching documents.
        """
        documents = self.selector.shuffled(self.store.list_documents())
        for document, _ in self._iter_matching(documents):
            LOGGER.debug(
                "Picked %s after visiting %d document(s)", document.id, self.last_stats.visited
            )
            return document.id
        LOGGER.info("No to-do items found in %d document(s)", len(documents))
        return None

    def pick_random_match(self) -> TodoMatch | None:
        """Return one match drawn uniformly from every match in the collection."""
        candidates = [
            TodoMatch(document_id=document.id, position=position)
            for document, positions in self._iter_matching(self.store.list_documents())
            for position in positions
        ]
        if not candidates:
            LOGGER.info("No to-do items found in %d document(s)", self.last_stats.visited)
            return None
        return candidates[self.selector.pick_index(len(candidates))]

    def collect_todos(self) -> Dict[str, List[MatchPosition]]:
        """Map every document with at least one match to its positions."""
        return {
            document.id: list(positions)
            for document, positions in self._iter_matching(self.store.list_documents())
        }

    def prune(self) -> int:
        """Forget cached entries for documents no longer in the store."""
        removed = self.cache.prune(document.id for document in self.store.list_documents())
        if removed:
            LOGGER.debug("Pruned %d cache entries", removed)
        return removed
