"""Uniform random choices used by the to-do index."""

from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


class RandomSelector:
    """Draws uniform indices and shuffles; backed by the OS entropy source by default."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.SystemRandom()

    def pick_index(self, count: int) -> int:
        if count <= 0:
            raise ValueError(f"Cannot pick an index from {count} candidates")
        return self.rng.randrange(count)

    def shuffled(self, items: Sequence[T]) -> List[T]:
        result = list(items)
        self.rng.shuffle(result)
        return result
