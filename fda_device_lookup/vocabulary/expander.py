"""Synonym expansion of informal query terms."""

from __future__ import annotations

from typing import Sequence

from .tables import SynonymTable


class SynonymExpander:
    """Replace informal terms with FDA wording, deduplicating case-insensitively."""

    def __init__(self, synonyms: SynonymTable | None = None) -> None:
        self._synonyms = synonyms if synonyms is not None else SynonymTable()

    @property
    def synonyms(self) -> SynonymTable:
        return self._synonyms

    def expand(self, terms: Sequence[str]) -> tuple[str, ...]:
        expanded: list[str] = []
        seen: set[str] = set()

        def add(word: str) -> None:
            key = word.lower()
            if key not in seen:
                seen.add(key)
                expanded.append(word)

        for term in terms:
            phrases = self._synonyms.phrases(term)
            if not phrases:
                add(term)
                continue
            for phrase in phrases:
                for word in phrase.split():
                    add(word)
        return tuple(expanded)
