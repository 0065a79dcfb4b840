"""Tests for RandomSelector."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from randomtodo.index.selector import RandomSelector


class TestRandomSelector:
    """Test index drawing and shuffling."""

    def test_default_uses_system_random(self) -> None:
        selector = RandomSelector()

        assert isinstance(selector.rng, random.SystemRandom)

    def test_pick_index_in_range(self, seeded_selector) -> None:
        for count in (1, 2, 7, 100):
            for _ in range(50):
                assert 0 <= seeded_selector.pick_index(count) < count

    def test_pick_index_single_candidate(self) -> None:
        assert RandomSelector().pick_index(1) == 0

    @pytest.mark.parametrize("count", [0, -1])
    def test_pick_index_rejects_empty(self, count) -> None:
        with pytest.raises(ValueError):
            RandomSelector().pick_index(count)

    def test_pick_index_covers_all_values(self, seeded_selector) -> None:
        counts = Counter(seeded_selector.pick_index(4) for _ in range(2000))

        assert set(counts) == {0, 1, 2, 3}
        assert all(n > 350 for n in counts.values())

    def test_shuffled_returns_permutation_copy(self, seeded_selector) -> None:
        items = list(range(20))

        result = seeded_selector.shuffled(items)

        assert sorted(result) == items
        assert items == list(range(20))
        assert result is not items

    def test_shuffled_empty(self, seeded_selector) -> None:
        assert seeded_selector.shuffled([]) == []
