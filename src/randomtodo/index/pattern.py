"""To-do marker pattern compilation and matching."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_TODO_PATTERN = r"(^|\s)\.\.\.(\s|$)"


class InvalidPatternError(ValueError):
    """Raised when a user-supplied to-do pattern does not compile."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Invalid to-do pattern {source!r}: {reason}")
        self.source = source
        self.reason = reason


@dataclass(frozen=True, slots=True)
class TodoPattern:
    source: str
    compiled: re.Pattern[str]


def compile_pattern(source: str) -> TodoPattern:
    """Compile a to-do pattern, raising InvalidPatternError on bad input.

    An empty pattern matches every line, so it is rejected as well.
    """
    if not source:
        raise InvalidPatternError(source, "pattern is empty")
    try:
        compiled = re.compile(source)
    except re.error as exc:
        raise InvalidPatternError(source, str(exc)) from exc
    return TodoPattern(source=source, compiled=compiled)


def find_first_match(pattern: TodoPattern, line: str) -> int | None:
    """Return the column of the first match on a single line, or None."""
    match = pattern.compiled.search(line)
    if match is None:
        return None
    return match.start()


def count_matches(pattern: TodoPattern, text: str) -> int:
    """Count non-overlapping matches across the whole text."""
    return sum(1 for _ in pattern.compiled.finditer(text))
