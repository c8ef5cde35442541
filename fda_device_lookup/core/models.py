"""Shared data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, Mapping, TypeVar, Union

RecordT = TypeVar("RecordT")

AttemptStatus = Literal["ok", "empty", "failed"]
UnresolvedReason = Literal["exhausted", "code_not_found", "lookup_failed"]


@dataclass(slots=True, frozen=True)
class SearchFilters:
    device_class: str | None = None

    def search_parts(self) -> list[str]:
        parts: list[str] = []
        if self.device_class:
            parts.append(f"device_class:{self.device_class}")
        return parts


@dataclass(slots=True, frozen=True)
class CandidateRecord:
    """One classification entry returned by the primary search port."""

    code: str
    name: str
    definition: str | None = None
    device_class: str | None = None
    regulation_number: str | None = None
    medical_specialty: str | None = None
    fields: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def searchable_text(self) -> str:
        return f"{self.name or ''} {self.definition or ''}".lower()

    def as_dict(self) -> dict[str, Any]:
        return {
            "product_code": self.code,
            "device_name": self.name,
            "definition": self.definition,
            "device_class": self.device_class,
            "regulation_number": self.regulation_number,
            "medical_specialty": self.medical_specialty,
        }


@dataclass(slots=True, frozen=True)
class BridgeRecord:
    """A premarket notification that names a device and carries its product code."""

    code: str | None
    name: str
    identifier: str | None = None
    applicant: str | None = None
    decision_date: str | None = None
    fields: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def as_dict(self) -> dict[str, Any]:
        return {
            "k_number": self.identifier,
            "device_name": self.name,
            "applicant": self.applicant,
            "decision_date": self.decision_date,
            "product_code": self.code,
        }


@dataclass(slots=True, frozen=True)
class SearchPage(Generic[RecordT]):
    records: tuple[RecordT, ...] = ()
    total: int = 0

    def __bool__(self) -> bool:
        return bool(self.records)


@dataclass(slots=True, frozen=True)
class QueryInvocation:
    """Audit entry for a single external search call."""

    collection: str
    field: str
    terms: tuple[str, ...]
    filters: SearchFilters
    status: AttemptStatus
    result_count: int = 0
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "collection": self.collection,
            "field": self.field,
            "terms": list(self.terms),
            "device_class": self.filters.device_class,
            "status": self.status,
            "result_count": self.result_count,
            "error": self.error,
        }


@dataclass(slots=True, frozen=True)
class Attempt:
    """One planned search: a term combination restricted to a single field."""

    label: str
    terms: tuple[str, ...]
    combination: tuple[str, ...]
    field: str

    @property
    def full_length(self) -> bool:
        return len(self.combination) >= len(self.terms)


@dataclass(slots=True, frozen=True)
class BridgedEntry:
    record: CandidateRecord
    example_names: tuple[str, ...] = ()
    occurrences: int = 0

    def as_dict(self) -> dict[str, Any]:
        payload = self.record.as_dict()
        payload["found_via"] = list(self.example_names)
        payload["occurrences"] = self.occurrences
        return payload


@dataclass(slots=True, frozen=True)
class Suggestion:
    kind: Literal["ai_software", "general"]
    message: str
    hints: tuple[str, ...] = ()
    codes: Mapping[str, str] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "hints": list(self.hints),
            "codes": dict(self.codes),
        }


@dataclass(slots=True, frozen=True)
class DirectMatch:
    code: str
    records: tuple[CandidateRecord, ...]
    status: Literal["direct"] = "direct"

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "code": self.code,
            "results": [record.as_dict() for record in self.records],
        }


@dataclass(slots=True, frozen=True)
class StrongMatch:
    records: tuple[CandidateRecord, ...]
    combination: tuple[str, ...]
    field: str
    score: float
    total: int = 0
    status: Literal["strong"] = "strong"

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "combination": list(self.combination),
            "field": self.field,
            "score": round(self.score, 4),
            "total": self.total,
            "results": [record.as_dict() for record in self.records],
        }


@dataclass(slots=True, frozen=True)
class WeakMatch:
    records: tuple[CandidateRecord, ...]
    combination: tuple[str, ...]
    field: str
    score: float
    total: int = 0
    status: Literal["weak"] = "weak"

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "combination": list(self.combination),
            "field": self.field,
            "score": round(self.score, 4),
            "total": self.total,
            "results": [record.as_dict() for record in self.records],
        }


@dataclass(slots=True, frozen=True)
class BridgedMatch:
    entries: tuple[BridgedEntry, ...]
    combination: tuple[str, ...]
    samples: tuple[BridgeRecord, ...] = ()
    total: int = 0
    status: Literal["bridged"] = "bridged"

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(entry.record.code for entry in self.entries)

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "combination": list(self.combination),
            "results": [entry.as_dict() for entry in self.entries],
            "bridge_matches": [record.as_dict() for record in self.samples],
            "bridge_total": self.total,
        }


@dataclass(slots=True, frozen=True)
class Unresolved:
    query: tuple[str, ...]
    expanded: tuple[str, ...] = ()
    reason: UnresolvedReason = "exhausted"
    suggestion: Suggestion | None = None
    status: Literal["unresolved"] = "unresolved"

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "query": " ".join(self.query),
            "reason": self.reason,
            "suggestion": self.suggestion.as_dict() if self.suggestion else None,
        }


ResolutionOutcome = Union[DirectMatch, StrongMatch, WeakMatch, BridgedMatch, Unresolved]


@dataclass(slots=True, frozen=True)
class Resolution:
    """Outcome of a top-level resolve call plus the searches it performed."""

    outcome: ResolutionOutcome
    invocations: tuple[QueryInvocation, ...] = ()

    @property
    def resolved(self) -> bool:
        return not isinstance(self.outcome, Unresolved)

    def as_dict(self, *, include_trace: bool = False) -> dict[str, Any]:
        payload = self.outcome.as_dict()
        payload["search_calls"] = len(self.invocations)
        if include_trace:
            payload["trace"] = [invocation.as_dict() for invocation in self.invocations]
        return payload
