"""Shared fixtures: small vocabularies, explicit settings and scripted search ports."""

from __future__ import annotations

from typing import Sequence

import pytest

from fda_device_lookup.core.config import Settings
from fda_device_lookup.core.models import BridgeRecord, CandidateRecord, SearchFilters, SearchPage
from fda_device_lookup.vocabulary.tables import SynonymTable, Vocabulary


def make_record(code: str, name: str, definition: str | None = None) -> CandidateRecord:
    return CandidateRecord(code=code, name=name, definition=definition, device_class="2")


def make_bridge_record(code: str | None, name: str, identifier: str = "K000001") -> BridgeRecord:
    return BridgeRecord(code=code, name=name, identifier=identifier, applicant="Acme Medical")


def _key(terms: Sequence[str]) -> tuple[str, ...]:
    return tuple(term.lower() for term in terms)


class FakeTaxonomyPort:
    """Replays scripted classification responses and records every call."""

    def __init__(
        self,
        responses: dict[tuple[str, tuple[str, ...]], object] | None = None,
        codes: dict[str, CandidateRecord] | None = None,
        *,
        error: Exception | None = None,
        lookup_errors: dict[str, Exception] | None = None,
    ) -> None:
        self.responses = {(field, _key(terms)): value for (field, terms), value in (responses or {}).items()}
        self.codes = dict(codes or {})
        self.error = error
        self.lookup_errors = dict(lookup_errors or {})
        self.calls: list[tuple] = []

    @property
    def search_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0] == "search"]

    def search(self, field: str, terms: Sequence[str], filters: SearchFilters, *, limit: int) -> SearchPage[CandidateRecord]:
        self.calls.append(("search", field, tuple(terms), filters))
        if self.error is not None:
            raise self.error
        value = self.responses.get((field, _key(terms)))
        if isinstance(value, Exception):
            raise value
        records = tuple(value or ())
        return SearchPage(records=records[:limit], total=len(records))

    def lookup_by_code(self, code: str, filters: SearchFilters) -> CandidateRecord | None:
        self.calls.append(("lookup", code, filters))
        if code in self.lookup_errors:
            raise self.lookup_errors[code]
        return self.codes.get(code)


class FakeBridgePort:
    """Replays scripted premarket-notification responses."""

    def __init__(self, responses: dict[tuple[str, ...], object] | None = None, *, error: Exception | None = None) -> None:
        self.responses = {_key(terms): value for terms, value in (responses or {}).items()}
        self.error = error
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def search(self, field: str, terms: Sequence[str], *, limit: int) -> SearchPage[BridgeRecord]:
        self.calls.append((field, tuple(terms)))
        if self.error is not None:
            raise self.error
        value = self.responses.get(_key(terms))
        if isinstance(value, Exception):
            raise value
        records = tuple(value or ())
        return SearchPage(records=records[:limit], total=len(records))


@pytest.fixture
def vocabulary() -> Vocabulary:
    return Vocabulary(
        synonyms=SynonymTable(
            {
                "ecg": ("electrocardiograph",),
                "patch": ("ambulatory",),
                "bp": ("blood pressure",),
                "pacemaker": ("pulse generator",),
                "ai": ("artificial intelligence",),
            }
        ),
        filler_words=frozenset({"the", "a", "for", "device", "medical"}),
        generic_bridge_terms=frozenset({"software", "detection", "system", "artificial", "intelligence"}),
        ai_software_terms=frozenset({"ai", "software", "algorithm"}),
        ai_software_codes={"QIH": "Automated Radiological Image Processing Software"},
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        call_budget=30,
        relevance_threshold=0.4,
        result_limit=10,
        bridge_result_limit=20,
        bridge_combination_limit=8,
        bridge_min_term_length=5,
        bridge_call_budget=30,
        bridge_sample_size=5,
        combination_priority="size",
    )
