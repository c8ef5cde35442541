"""Coverage scoring of classification candidates."""

from __future__ import annotations

from typing import Sequence

from fda_device_lookup.core.models import CandidateRecord
from fda_device_lookup.vocabulary.tables import SynonymTable


class RelevanceScorer:
    """Measure how much of the original query shows up in a result set.

    A query term counts as covered by a record when the term itself, or one of
    the words of its synonym expansion, occurs in the record's name or
    definition. The score is the mean per-record coverage, in ``[0, 1]``.
    """

    def __init__(self, synonyms: SynonymTable | None = None) -> None:
        self._synonyms = synonyms if synonyms is not None else SynonymTable()

    def match_strings(self, term: str) -> tuple[str, ...]:
        lowered = term.lower()
        expansions = tuple(word.lower() for word in self._synonyms.expansion_words(lowered))
        return (lowered, *expansions)

    def score(self, records: Sequence[CandidateRecord], original_terms: Sequence[str]) -> float:
        if not records or not original_terms:
            return 0.0
        coverage_map = [self.match_strings(term) for term in original_terms]
        total = 0.0
        for record in records:
            text = record.searchable_text
            covered = sum(1 for matches in coverage_map if any(match in text for match in matches))
            total += covered / len(coverage_map)
        return total / len(records)
