"""openFDA transport adapter public API."""

from .client import ClassificationSearch, OpenFDAClient, PremarketSearch, build_field_terms

__all__ = ["OpenFDAClient", "ClassificationSearch", "PremarketSearch", "build_field_terms"]
