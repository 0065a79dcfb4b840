"""Per-document scan cache keyed by modification stamp."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Tuple

from randomtodo.index.pattern import TodoPattern
from randomtodo.index.scanner import scan
from randomtodo.models import CacheEntry, MatchPosition

LOGGER = logging.getLogger(__name__)


class ScanCache:
    """Maps document ids to the positions found at their last known mtime.

    Entries are only ever replaced whole. Each entry records the pattern it was
    scanned with, so an entry written by a scan that was still running when the
    pattern changed is never served under the new one.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._entries

    def get_entry(self, document_id: str) -> CacheEntry | None:
        return self._entries.get(document_id)

    def get_positions(
        self,
        document_id: str,
        mtime: float,
        pattern: TodoPattern,
        load_content: Callable[[], str],
    ) -> Tuple[MatchPosition, ...]:
        """Return positions for a document, rescanning when its mtime or the pattern moved.

        ``load_content`` is called on a miss only. If it raises, nothing is
        stored and the exception propagates to the caller.
        """
        entry = self._entries.get(document_id)
        if entry is not None and entry.is_valid_for(mtime, pattern.source):
            self.hits += 1
            return entry.positions

        self.misses += 1
        text = load_content()
        positions = tuple(scan(text, pattern))
        LOGGER.debug("Scanned %s: %d match(es)", document_id, len(positions))
        self._entries[document_id] = CacheEntry(
            document_id=document_id,
            mtime=mtime,
            pattern_source=pattern.source,
            positions=positions,
        )
        return positions

    def invalidate(self, document_id: str) -> None:
        self._entries.pop(document_id, None)

    def prune(self, live_ids: Iterable[str]) -> int:
        """Drop entries for documents that are no longer in the collection."""
        live = set(live_ids)
        stale = [doc_id for doc_id in self._entries if doc_id not in live]
        for doc_id in stale:
            del self._entries[doc_id]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
