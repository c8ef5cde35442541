"""Taxonomy resolution engine public API."""

from .accounting import CallBudget, SearchTrace
from .bridge import BridgeResolver
from .combinations import CombinationGenerator, remove_filler_words
from .orchestrator import AttemptPlan, SearchOrchestrator
from .ports import BridgeSearchPort, TaxonomySearchPort, is_product_code, normalize_product_code
from .scoring import RelevanceScorer
from .service import ClassificationService, resolve_device
from .suggestions import select_suggestion

__all__ = [
    "AttemptPlan",
    "BridgeResolver",
    "BridgeSearchPort",
    "CallBudget",
    "ClassificationService",
    "CombinationGenerator",
    "RelevanceScorer",
    "SearchOrchestrator",
    "SearchTrace",
    "TaxonomySearchPort",
    "is_product_code",
    "normalize_product_code",
    "remove_filler_words",
    "resolve_device",
    "select_suggestion",
]
