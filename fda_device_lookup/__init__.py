"""
FDA device classification resolver.

The package exposes modular building blocks for:
- synonym expansion of informal device wording,
- budgeted combinatorial search of the openFDA classification taxonomy,
- coverage scoring of candidate classifications,
- a premarket-notification bridge when the taxonomy search finds nothing.
"""

from .classification.service import ClassificationService, resolve_device
from .core.config import Settings, get_settings
from .core.models import Resolution, SearchFilters

__all__ = [
    "ClassificationService",
    "Resolution",
    "SearchFilters",
    "Settings",
    "get_settings",
    "resolve_device",
]
