"""Line-oriented scanning of document text."""

from __future__ import annotations

from typing import List

from randomtodo.index.pattern import TodoPattern, find_first_match
from randomtodo.models import MatchPosition

LINE_SEPARATOR = "\n"


def scan(text: str, pattern: TodoPattern) -> List[MatchPosition]:
    """Return the first match position of every matching line, in line order."""
    positions: List[MatchPosition] = []
    for line_number, line in enumerate(text.split(LINE_SEPARATOR)):
        column = find_first_match(pattern, line)
        if column is not None:
            positions.append(MatchPosition(line=line_number, column=column))
    return positions
