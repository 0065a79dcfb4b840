"""Core randomtodo data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Document:
    """A document in the vault, as listed by the document store."""

    id: str
    path: Path
    mtime: float


@dataclass(frozen=True, slots=True, order=True)
class MatchPosition:
    """First match of the to-do pattern on one line (both 0-based)."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Scan result for one document at one modification stamp, under one pattern."""

    document_id: str
    mtime: float
    pattern_source: str
    positions: Tuple[MatchPosition, ...]

    def is_valid_for(self, mtime: float, pattern_source: str) -> bool:
        return self.mtime == mtime and self.pattern_source == pattern_source


@dataclass(frozen=True, slots=True)
class TodoMatch:
    """A single selectable to-do item."""

    document_id: str
    position: MatchPosition
