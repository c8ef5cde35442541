"""Combinatorial broadening of query terms."""

from __future__ import annotations

from itertools import combinations
from typing import Collection, Sequence

Combination = tuple[str, ...]


class CombinationGenerator:
    """Enumerate every non-empty subset of a term sequence, most specific first.

    Subsets are grouped by size from ``n`` down to ``1``. Inside a size group the
    contiguous index runs come first (they usually read as a phrase in the formal
    nomenclature), followed by the non-contiguous subsets, each in ascending index
    order. For ``[A, B, C]`` this yields ``ABC, AB, BC, AC, A, B, C``.
    """

    def generate(self, terms: Sequence[str]) -> list[Combination]:
        items = tuple(terms)
        if len(items) <= 1:
            return [items]
        ordered: list[Combination] = []
        for size in range(len(items), 0, -1):
            contiguous, scattered = _index_subsets(len(items), size)
            for indices in contiguous + scattered:
                ordered.append(tuple(items[index] for index in indices))
        return ordered

    def generate_by_phrase(self, terms: Sequence[str]) -> list[Combination]:
        """Full length first, then 2-3 term combinations, longer ones, and singles last."""
        combos = self.generate(terms)
        width = len(terms)
        full = [combo for combo in combos if len(combo) == width]
        short = [combo for combo in combos if 2 <= len(combo) <= 3 and len(combo) < width]
        medium = [combo for combo in combos if 3 < len(combo) < width]
        singles = [combo for combo in combos if len(combo) == 1 and width > 1]
        return full + short + medium + singles


def _index_subsets(n: int, size: int) -> tuple[list[tuple[int, ...]], list[tuple[int, ...]]]:
    contiguous: list[tuple[int, ...]] = []
    scattered: list[tuple[int, ...]] = []
    for indices in combinations(range(n), size):
        if indices[-1] - indices[0] == size - 1:
            contiguous.append(indices)
        else:
            scattered.append(indices)
    return contiguous, scattered


def remove_filler_words(terms: Sequence[str], filler_words: Collection[str]) -> tuple[str, ...]:
    """Drop filler and single-character terms unless fewer than two terms would remain."""
    meaningful = tuple(term for term in terms if term.lower() not in filler_words and len(term) > 1)
    if len(meaningful) >= 2:
        return meaningful
    return tuple(terms)
