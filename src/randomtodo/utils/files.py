"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Sequence

DEFAULT_EXTENSIONS = (".md",)


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def iter_document_paths(
    root: Path, extensions: Sequence[str] = DEFAULT_EXTENSIONS
) -> Iterator[Path]:
    """Yield document paths under root, skipping hidden files and directories."""
    suffixes = {ext.lower() for ext in extensions}
    if not root.is_dir():
        return
    for child in sorted(root.rglob("*")):
        if child.is_file() and child.suffix.lower() in suffixes and not _is_hidden(child, root):
            yield child


def to_document_id(path: Path, root: Path) -> str:
    """Vault-relative POSIX path used as the document identifier."""
    return path.relative_to(root).as_posix()


def normalize_extensions(values: Iterable[str]) -> tuple[str, ...]:
    """Turn ``md``, ``.MD`` and friends into ``.md``."""
    result = []
    for value in values:
        value = value.strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = "." + value
        if value not in result:
            result.append(value)
    return tuple(result)
