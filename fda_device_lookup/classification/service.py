"""Public service layer for device classification lookups."""

from __future__ import annotations

from fda_device_lookup.core.config import Settings, get_settings
from fda_device_lookup.core.logging import get_logger
from fda_device_lookup.core.models import Resolution, SearchFilters, Unresolved
from fda_device_lookup.vocabulary.tables import DEFAULT_VOCABULARY, Vocabulary

from .accounting import CallBudget, SearchTrace
from .bridge import BridgeResolver
from .orchestrator import SearchOrchestrator
from .ports import BridgeSearchPort, TaxonomySearchPort
from .suggestions import select_suggestion

LOGGER = get_logger(__name__)


class ClassificationService:
    """High-level facade resolving free-text device descriptions to product codes."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        primary: TaxonomySearchPort | None = None,
        secondary: BridgeSearchPort | None = None,
        vocabulary: Vocabulary | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._client = None
        if primary is None or secondary is None:
            from fda_device_lookup.openfda.client import ClassificationSearch, OpenFDAClient, PremarketSearch

            self._client = OpenFDAClient(self._settings)
            primary = primary or ClassificationSearch(self._client)
            secondary = secondary or PremarketSearch(self._client)
        self._orchestrator = SearchOrchestrator(primary, self._settings, vocabulary=self._vocabulary)
        self._bridge = BridgeResolver(primary, secondary, self._settings, vocabulary=self._vocabulary)

    def resolve(self, query: str, filters: SearchFilters | None = None) -> Resolution:
        terms = tuple(str(query or "").split())
        if not terms:
            raise ValueError("query must contain at least one term")
        filters = filters or SearchFilters()
        trace = SearchTrace()
        LOGGER.info("classification.resolve", query=query, device_class=filters.device_class)

        outcome = self._orchestrator.resolve(
            terms,
            filters,
            budget=CallBudget(self._settings.call_budget),
            trace=trace,
        )
        if isinstance(outcome, Unresolved) and outcome.reason == "exhausted":
            bridged = self._bridge.bridge(
                outcome.query,
                outcome.expanded or outcome.query,
                filters,
                budget=CallBudget(self._settings.bridge_call_budget),
                trace=trace,
            )
            if bridged is not None:
                LOGGER.info("classification.bridged", query=query, codes=list(bridged.codes))
                return Resolution(outcome=bridged, invocations=trace.invocations)

        if isinstance(outcome, Unresolved):
            outcome = Unresolved(
                query=outcome.query,
                expanded=outcome.expanded,
                reason=outcome.reason,
                suggestion=select_suggestion(outcome.query, self._vocabulary),
            )
            LOGGER.info("classification.unresolved", query=query, reason=outcome.reason, calls=len(trace))
        return Resolution(outcome=outcome, invocations=trace.invocations)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def __enter__(self) -> "ClassificationService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def resolve_device(
    query: str,
    filters: SearchFilters | None = None,
    settings: Settings | None = None,
) -> Resolution:
    """Resolve a single query with a short-lived service."""
    service = ClassificationService(settings)
    try:
        return service.resolve(query, filters)
    finally:
        service.close()
