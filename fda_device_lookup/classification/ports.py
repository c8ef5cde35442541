"""Search ports consumed by the resolver, plus product-code literal helpers."""

from __future__ import annotations

import re
from typing import Protocol, Sequence

from fda_device_lookup.core.models import BridgeRecord, CandidateRecord, SearchFilters, SearchPage

PRODUCT_CODE_PATTERN = re.compile(r"^[A-Z]{3}$", flags=re.IGNORECASE)

CLASSIFICATION_COLLECTION = "classification"
PREMARKET_COLLECTION = "510k"


def is_product_code(value: str | None) -> bool:
    return bool(value) and PRODUCT_CODE_PATTERN.match(value.strip()) is not None


def normalize_product_code(value: str | None) -> str | None:
    if not is_product_code(value):
        return None
    return value.strip().upper()


class TaxonomySearchPort(Protocol):
    """Keyword search over the device classification taxonomy."""

    def search(
        self,
        field: str,
        terms: Sequence[str],
        filters: SearchFilters,
        *,
        limit: int,
    ) -> SearchPage[CandidateRecord]: ...

    def lookup_by_code(self, code: str, filters: SearchFilters) -> CandidateRecord | None: ...


class BridgeSearchPort(Protocol):
    """Keyword search over premarket notifications, which carry product codes."""

    def search(self, field: str, terms: Sequence[str], *, limit: int) -> SearchPage[BridgeRecord]: ...
