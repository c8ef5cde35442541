"""Recover classification codes through premarket notification device names.

Many devices are classified under a generic product code (e.g. ``MYN``,
"Analyzer, Medical Image") while their premarket submissions carry specific,
informal names. When the taxonomy search comes back empty, the resolver
searches those names instead, collects the product codes they reference and
looks each code up in the taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from fda_device_lookup.core.config import Settings, get_settings
from fda_device_lookup.core.exceptions import SearchError
from fda_device_lookup.core.logging import get_logger
from fda_device_lookup.core.models import (
    BridgedEntry,
    BridgedMatch,
    BridgeRecord,
    CandidateRecord,
    SearchFilters,
)
from fda_device_lookup.vocabulary.tables import DEFAULT_VOCABULARY, Vocabulary

from .accounting import CallBudget, SearchTrace
from .combinations import Combination, CombinationGenerator
from .ports import (
    CLASSIFICATION_COLLECTION,
    PREMARKET_COLLECTION,
    BridgeSearchPort,
    TaxonomySearchPort,
    normalize_product_code,
)

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class _CodeEvidence:
    code: str
    names: list[str] = field(default_factory=list)
    count: int = 0


class BridgeResolver:
    """Second-stage lookup through a corpus whose records carry product codes."""

    def __init__(
        self,
        primary: TaxonomySearchPort,
        secondary: BridgeSearchPort,
        settings: Settings | None = None,
        *,
        vocabulary: Vocabulary | None = None,
        generator: CombinationGenerator | None = None,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._settings = settings or get_settings()
        self._vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._generator = generator or CombinationGenerator()

    def candidate_queries(self, query: Sequence[str], expanded: Sequence[str]) -> list[Combination]:
        """Return the bridge searches to try, in order, without duplicates."""
        generic = self._vocabulary.generic_bridge_terms
        limit = self._settings.bridge_combination_limit
        min_length = self._settings.bridge_min_term_length

        seen: set[tuple[str, ...]] = set()
        candidates: list[Combination] = []
        for terms in (tuple(expanded), tuple(query)):
            if not terms:
                continue
            specific = [term for term in terms if term.lower() not in generic]
            multi = [combo for combo in self._generator.generate(terms) if len(combo) >= 2][:limit]
            singles = [(term,) for term in specific if len(term) >= min_length]
            for combo in [*multi, *singles]:
                key = tuple(term.lower() for term in combo)
                if key in seen:
                    continue
                seen.add(key)
                candidates.append(combo)
        return candidates

    def bridge(
        self,
        query: Sequence[str],
        expanded: Sequence[str],
        filters: SearchFilters | None = None,
        *,
        budget: CallBudget | None = None,
        trace: SearchTrace | None = None,
    ) -> BridgedMatch | None:
        filters = filters or SearchFilters()
        budget = budget if budget is not None else CallBudget(self._settings.bridge_call_budget)
        trace = trace if trace is not None else SearchTrace()
        field_name = self._settings.bridge_search_field

        for combo in self.candidate_queries(query, expanded):
            if budget.exhausted:
                LOGGER.info("bridge.budget_exhausted", query=tuple(query), calls=budget.used)
                return None
            budget.consume()
            try:
                page = self._secondary.search(field_name, combo, limit=self._settings.bridge_result_limit)
            except SearchError as exc:
                trace.record(
                    collection=PREMARKET_COLLECTION,
                    field=field_name,
                    terms=combo,
                    filters=SearchFilters(),
                    status="failed",
                    error=str(exc),
                )
                LOGGER.warning("bridge.search_failed", terms=combo, error=str(exc))
                continue
            trace.record(
                collection=PREMARKET_COLLECTION,
                field=field_name,
                terms=combo,
                filters=SearchFilters(),
                status="ok" if page.records else "empty",
                result_count=len(page.records),
            )
            if not page.records:
                continue

            evidence = group_by_code(page.records)
            if not evidence:
                continue
            LOGGER.info("bridge.codes_found", terms=combo, codes=list(evidence))

            entries: list[BridgedEntry] = []
            for code, info in evidence.items():
                record = self._lookup(code, filters, budget, trace)
                if record is None:
                    continue
                entries.append(
                    BridgedEntry(record=record, example_names=tuple(info.names), occurrences=info.count)
                )
            if not entries:
                continue

            sample_size = self._settings.bridge_sample_size
            return BridgedMatch(
                entries=tuple(entries),
                combination=combo,
                samples=page.records[:sample_size],
                total=page.total,
            )
        return None

    def _lookup(
        self,
        code: str,
        filters: SearchFilters,
        budget: CallBudget,
        trace: SearchTrace,
    ) -> CandidateRecord | None:
        if budget.exhausted:
            return None
        budget.consume()
        try:
            record = self._primary.lookup_by_code(code, filters)
        except SearchError as exc:
            trace.record(
                collection=CLASSIFICATION_COLLECTION,
                field="product_code",
                terms=(code,),
                filters=filters,
                status="failed",
                error=str(exc),
            )
            LOGGER.warning("bridge.lookup_failed", code=code, error=str(exc))
            return None
        trace.record(
            collection=CLASSIFICATION_COLLECTION,
            field="product_code",
            terms=(code,),
            filters=filters,
            status="ok" if record else "empty",
            result_count=1 if record else 0,
        )
        return record


def group_by_code(records: Sequence[BridgeRecord]) -> dict[str, _CodeEvidence]:
    """Collect distinct product codes with their example device names, in first-seen order."""
    grouped: dict[str, _CodeEvidence] = {}
    for record in records:
        code = normalize_product_code(record.code)
        if not code:
            continue
        info = grouped.setdefault(code, _CodeEvidence(code=code))
        info.count += 1
        if record.name and record.name not in info.names:
            info.names.append(record.name)
    return grouped
