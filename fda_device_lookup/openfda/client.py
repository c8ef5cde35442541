"""HTTP adapter for the openFDA device endpoints."""

from __future__ import annotations

from typing import Any, Mapping, Sequence
from urllib.parse import quote

import httpx

from fda_device_lookup.core.config import Settings, get_settings
from fda_device_lookup.core.exceptions import BadQueryError, NetworkError, RateLimitedError
from fda_device_lookup.core.logging import get_logger
from fda_device_lookup.core.models import BridgeRecord, CandidateRecord, SearchFilters, SearchPage

LOGGER = get_logger(__name__)

AND_JOINER = "+AND+"


def build_field_terms(field: str, terms: Sequence[str]) -> str:
    """Render ``field:t1+AND+field:t2`` with each term percent-quoted."""
    return AND_JOINER.join(f"{field}:{quote(str(term), safe='')}" for term in terms if str(term).strip())


class OpenFDAClient:
    """Thin wrapper around the openFDA REST API."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = http_client or httpx.Client(
            base_url=self._settings.base_url,
            timeout=self._settings.request_timeout,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def build_url(
        self,
        endpoint: str,
        search_parts: Sequence[str],
        *,
        limit: int,
        sort: str | None = None,
    ) -> str:
        # Built by hand: form-encoding turns "+" into %2B, which breaks the AND syntax.
        params: list[str] = []
        parts = [part for part in search_parts if part]
        if parts:
            params.append(f"search={AND_JOINER.join(parts)}")
        params.append(f"limit={int(limit)}")
        if sort:
            params.append(f"sort={sort}")
        if self._settings.openfda_api_key:
            params.append(f"api_key={quote(self._settings.openfda_api_key, safe='')}")
        return f"{endpoint}.json?{'&'.join(params)}"

    def query(
        self,
        endpoint: str,
        search_parts: Sequence[str],
        *,
        limit: int,
        sort: str | None = None,
    ) -> dict[str, Any]:
        url = self.build_url(endpoint, search_parts, limit=limit, sort=sort)
        LOGGER.info("openfda.request", endpoint=endpoint, search=list(search_parts), limit=limit)
        try:
            response = self._client.get(url)
        except httpx.RequestError as exc:
            raise NetworkError(f"openFDA request failed: {exc}", endpoint=endpoint) from exc

        if response.status_code == 429:
            raise RateLimitedError("openFDA rate limit reached (240 req/min). Try again shortly.", endpoint=endpoint)

        if response.is_error:
            payload = _safe_json(response)
            error = payload.get("error") if isinstance(payload, dict) else None
            if response.status_code == 404 and isinstance(error, dict) and error.get("code") == "NOT_FOUND":
                LOGGER.info("openfda.response", endpoint=endpoint, result_count=0)
                return {"meta": payload.get("meta") or {}, "results": []}
            if isinstance(error, dict) and error.get("message"):
                message = str(error["message"])
            else:
                message = response.text[:500] or f"HTTP {response.status_code}"
            raise BadQueryError(message, endpoint=endpoint, status_code=response.status_code)

        payload = _safe_json(response)
        if not isinstance(payload, dict):
            raise BadQueryError("openFDA returned a malformed payload", endpoint=endpoint, status_code=response.status_code)
        LOGGER.info("openfda.response", endpoint=endpoint, result_count=len(payload.get("results") or []))
        return payload

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "OpenFDAClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ClassificationSearch:
    """Taxonomy search port backed by the ``device/classification`` endpoint."""

    def __init__(self, client: OpenFDAClient) -> None:
        self._client = client
        self._endpoint = client.settings.classification_endpoint

    def search(
        self,
        field: str,
        terms: Sequence[str],
        filters: SearchFilters,
        *,
        limit: int,
    ) -> SearchPage[CandidateRecord]:
        parts = [build_field_terms(field, terms), *filters.search_parts()]
        payload = self._client.query(self._endpoint, parts, limit=limit)
        records = tuple(_candidate_from_payload(item) for item in _results(payload))
        return SearchPage(records=records, total=_total(payload, len(records)))

    def lookup_by_code(self, code: str, filters: SearchFilters) -> CandidateRecord | None:
        parts = [f"product_code:{quote(code.strip().upper(), safe='')}", *filters.search_parts()]
        payload = self._client.query(self._endpoint, parts, limit=1)
        for item in _results(payload):
            return _candidate_from_payload(item)
        return None


class PremarketSearch:
    """Bridge search port backed by the ``device/510k`` endpoint."""

    def __init__(self, client: OpenFDAClient) -> None:
        self._client = client
        self._endpoint = client.settings.bridge_endpoint
        self._sort = client.settings.bridge_sort

    def search(self, field: str, terms: Sequence[str], *, limit: int) -> SearchPage[BridgeRecord]:
        payload = self._client.query(self._endpoint, [build_field_terms(field, terms)], limit=limit, sort=self._sort)
        records = tuple(_bridge_record_from_payload(item) for item in _results(payload))
        return SearchPage(records=records, total=_total(payload, len(records)))


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _results(payload: Mapping[str, Any]) -> list[dict[str, Any]]:
    results = payload.get("results")
    if not isinstance(results, list):
        return []
    return [item for item in results if isinstance(item, dict)]


def _total(payload: Mapping[str, Any], fallback: int) -> int:
    meta = payload.get("meta")
    if isinstance(meta, dict):
        results = meta.get("results")
        if isinstance(results, dict) and isinstance(results.get("total"), int):
            return results["total"]
    return fallback


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _candidate_from_payload(item: Mapping[str, Any]) -> CandidateRecord:
    specialty = _text(item.get("medical_specialty_description")) or _text(item.get("medical_specialty"))
    return CandidateRecord(
        code=(_text(item.get("product_code")) or "").upper(),
        name=_text(item.get("device_name")) or "",
        definition=_text(item.get("definition")),
        device_class=_text(item.get("device_class")),
        regulation_number=_text(item.get("regulation_number")),
        medical_specialty=specialty,
        fields=dict(item),
    )


def _bridge_record_from_payload(item: Mapping[str, Any]) -> BridgeRecord:
    return BridgeRecord(
        code=_text(item.get("product_code")),
        name=_text(item.get("device_name")) or "",
        identifier=_text(item.get("k_number")),
        applicant=_text(item.get("applicant")),
        decision_date=_normalize_date(_text(item.get("decision_date"))),
        fields=dict(item),
    )


def _normalize_date(value: str | None) -> str | None:
    if value and len(value) == 8 and value.isdigit():
        return f"{value[:4]}-{value[4:6]}-{value[6:]}"
    return value
