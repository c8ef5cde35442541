"""Per-resolution call budget and search audit trail."""

from __future__ import annotations

from typing import Sequence

from fda_device_lookup.core.models import AttemptStatus, QueryInvocation, SearchFilters


class CallBudget:
    """Counter of external search calls still allowed for one resolution."""

    __slots__ = ("_limit", "_remaining")

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError("Call budget cannot be negative.")
        self._limit = limit
        self._remaining = limit

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def used(self) -> int:
        return self._limit - self._remaining

    @property
    def exhausted(self) -> bool:
        return self._remaining <= 0

    def consume(self) -> None:
        if self._remaining <= 0:
            raise RuntimeError("Call budget exhausted")
        self._remaining -= 1

    def __repr__(self) -> str:
        return f"CallBudget(limit={self._limit}, remaining={self._remaining})"


class SearchTrace:
    """Ordered record of every search invocation issued during a resolution."""

    def __init__(self) -> None:
        self._invocations: list[QueryInvocation] = []

    def record(
        self,
        *,
        collection: str,
        field: str,
        terms: Sequence[str],
        filters: SearchFilters,
        status: AttemptStatus,
        result_count: int = 0,
        error: str | None = None,
    ) -> QueryInvocation:
        invocation = QueryInvocation(
            collection=collection,
            field=field,
            terms=tuple(terms),
            filters=filters,
            status=status,
            result_count=result_count,
            error=error,
        )
        self._invocations.append(invocation)
        return invocation

    @property
    def invocations(self) -> tuple[QueryInvocation, ...]:
        return tuple(self._invocations)

    def __len__(self) -> int:
        return len(self._invocations)
