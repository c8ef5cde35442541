"""Fallback guidance for queries that resolved to nothing."""

from __future__ import annotations

from typing import Sequence

from fda_device_lookup.core.models import Suggestion
from fda_device_lookup.vocabulary.tables import DEFAULT_VOCABULARY, Vocabulary


def is_ai_software_query(terms: Sequence[str], vocabulary: Vocabulary | None = None) -> bool:
    ai_terms = (vocabulary or DEFAULT_VOCABULARY).ai_software_terms
    return any(term.lower() in ai_terms for term in terms)


def select_suggestion(terms: Sequence[str], vocabulary: Vocabulary | None = None) -> Suggestion:
    vocabulary = vocabulary or DEFAULT_VOCABULARY
    if is_ai_software_query(terms, vocabulary):
        return Suggestion(
            kind="ai_software",
            message="Many AI/ML-enabled devices are classified under generic product codes.",
            hints=(
                "Look up one of the listed product codes directly.",
                "Search premarket notifications by applicant or device name to find specific cleared products.",
            ),
            codes=dict(vocabulary.ai_software_codes),
        )
    return Suggestion(
        kind="general",
        message="No classification matched the query.",
        hints=(
            'Try shorter or broader medical terms; FDA uses formal names like "Oximeter, Pulse" not "pulse oximeter".',
            "Search premarket notifications by device name to find specific cleared devices.",
            "If you know the manufacturer, search premarket notifications by applicant name.",
        ),
    )
