"""Budgeted multi-pass search of the device classification taxonomy."""

from __future__ import annotations

from typing import Iterator, Sequence

from fda_device_lookup.core.config import Settings, get_settings
from fda_device_lookup.core.exceptions import ConfigurationError, SearchError
from fda_device_lookup.core.logging import get_logger
from fda_device_lookup.core.models import (
    Attempt,
    DirectMatch,
    ResolutionOutcome,
    SearchFilters,
    StrongMatch,
    Unresolved,
    WeakMatch,
)
from fda_device_lookup.vocabulary.expander import SynonymExpander
from fda_device_lookup.vocabulary.tables import DEFAULT_VOCABULARY, Vocabulary

from .accounting import CallBudget, SearchTrace
from .combinations import CombinationGenerator, remove_filler_words
from .ports import CLASSIFICATION_COLLECTION, TaxonomySearchPort, normalize_product_code
from .scoring import RelevanceScorer

LOGGER = get_logger(__name__)

TermSet = tuple[str, tuple[str, ...]]


class AttemptPlan:
    """Finite, restartable sequence of (combination, field) attempts.

    Iterating twice yields the same attempts; nothing here touches the network
    or the call budget.
    """

    def __init__(
        self,
        term_sets: Sequence[TermSet],
        fields: Sequence[str],
        *,
        filler_words: frozenset[str],
        generator: CombinationGenerator | None = None,
        priority: str = "size",
    ) -> None:
        self._term_sets = tuple(term_sets)
        self._fields = tuple(fields)
        self._filler_words = filler_words
        self._generator = generator or CombinationGenerator()
        self._priority = priority

    @property
    def term_sets(self) -> tuple[TermSet, ...]:
        return self._term_sets

    def __iter__(self) -> Iterator[Attempt]:
        for label, terms in self._term_sets:
            usable = remove_filler_words(terms, self._filler_words)
            if self._priority == "phrase":
                combos = self._generator.generate_by_phrase(usable)
            else:
                combos = self._generator.generate(usable)
            for combo in combos:
                if not combo:
                    continue
                for field in self._fields:
                    yield Attempt(label=label, terms=usable, combination=combo, field=field)


class SearchOrchestrator:
    """Resolve a tokenized query to classification entries within a call budget."""

    def __init__(
        self,
        port: TaxonomySearchPort,
        settings: Settings | None = None,
        *,
        vocabulary: Vocabulary | None = None,
        expander: SynonymExpander | None = None,
        generator: CombinationGenerator | None = None,
        scorer: RelevanceScorer | None = None,
    ) -> None:
        self._port = port
        self._settings = settings or get_settings()
        self._vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._expander = expander or SynonymExpander(self._vocabulary.synonyms)
        self._generator = generator or CombinationGenerator()
        self._scorer = scorer or RelevanceScorer(self._vocabulary.synonyms)
        if not self._settings.search_fields:
            raise ConfigurationError("At least one classification search field is required.")

    @property
    def expander(self) -> SynonymExpander:
        return self._expander

    def term_sets(self, query: Sequence[str]) -> list[TermSet]:
        original = tuple(query)
        expanded = self._expander.expand(original)
        term_sets: list[TermSet] = []
        if expanded != original:
            term_sets.append(("expanded", expanded))
        term_sets.append(("original", original))
        return term_sets

    def generate_attempts(self, query: Sequence[str]) -> AttemptPlan:
        return AttemptPlan(
            self.term_sets(query),
            self._settings.search_fields,
            filler_words=self._vocabulary.filler_words,
            generator=self._generator,
            priority=self._settings.combination_priority,
        )

    def resolve(
        self,
        query: Sequence[str],
        filters: SearchFilters | None = None,
        *,
        budget: CallBudget | None = None,
        trace: SearchTrace | None = None,
    ) -> ResolutionOutcome:
        terms = tuple(query)
        filters = filters or SearchFilters()
        budget = budget if budget is not None else CallBudget(self._settings.call_budget)
        trace = trace if trace is not None else SearchTrace()

        code = normalize_product_code(terms[0]) if len(terms) == 1 else None
        if code:
            return self._resolve_code(code, terms, filters, budget, trace)

        plan = self.generate_attempts(terms)
        expanded = plan.term_sets[0][1]
        threshold = self._settings.relevance_threshold
        best: WeakMatch | None = None

        for attempt in plan:
            if budget.exhausted:
                LOGGER.info("classification.budget_exhausted", query=terms, calls=budget.used)
                break
            budget.consume()
            try:
                page = self._port.search(
                    attempt.field,
                    attempt.combination,
                    filters,
                    limit=self._settings.result_limit,
                )
            except SearchError as exc:
                trace.record(
                    collection=CLASSIFICATION_COLLECTION,
                    field=attempt.field,
                    terms=attempt.combination,
                    filters=filters,
                    status="failed",
                    error=str(exc),
                )
                LOGGER.warning(
                    "classification.attempt_failed",
                    terms=attempt.combination,
                    field=attempt.field,
                    error=str(exc),
                )
                continue
            if not page.records:
                trace.record(
                    collection=CLASSIFICATION_COLLECTION,
                    field=attempt.field,
                    terms=attempt.combination,
                    filters=filters,
                    status="empty",
                )
                continue

            trace.record(
                collection=CLASSIFICATION_COLLECTION,
                field=attempt.field,
                terms=attempt.combination,
                filters=filters,
                status="ok",
                result_count=len(page.records),
            )
            score = self._scorer.score(page.records, terms)
            if attempt.full_length or score >= threshold:
                LOGGER.info(
                    "classification.strong_match",
                    terms=attempt.combination,
                    field=attempt.field,
                    term_set=attempt.label,
                    score=score,
                )
                return StrongMatch(
                    records=page.records,
                    combination=attempt.combination,
                    field=attempt.field,
                    score=score,
                    total=page.total,
                )
            if best is None or score > best.score:
                best = WeakMatch(
                    records=page.records,
                    combination=attempt.combination,
                    field=attempt.field,
                    score=score,
                    total=page.total,
                )

        if best is not None:
            LOGGER.info("classification.weak_match", terms=best.combination, field=best.field, score=best.score)
            return best
        LOGGER.info("classification.exhausted", query=terms, calls=budget.used)
        return Unresolved(query=terms, expanded=expanded, reason="exhausted")

    def _resolve_code(
        self,
        code: str,
        terms: tuple[str, ...],
        filters: SearchFilters,
        budget: CallBudget,
        trace: SearchTrace,
    ) -> ResolutionOutcome:
        if budget.exhausted:
            return Unresolved(query=terms, expanded=terms, reason="lookup_failed")
        budget.consume()
        try:
            record = self._port.lookup_by_code(code, filters)
        except SearchError as exc:
            trace.record(
                collection=CLASSIFICATION_COLLECTION,
                field="product_code",
                terms=(code,),
                filters=filters,
                status="failed",
                error=str(exc),
            )
            LOGGER.warning("classification.direct_lookup_failed", code=code, error=str(exc))
            return Unresolved(query=terms, expanded=terms, reason="lookup_failed")
        trace.record(
            collection=CLASSIFICATION_COLLECTION,
            field="product_code",
            terms=(code,),
            filters=filters,
            status="ok" if record else "empty",
            result_count=1 if record else 0,
        )
        if record is None:
            return Unresolved(query=terms, expanded=terms, reason="code_not_found")
        return DirectMatch(code=code, records=(record,))
