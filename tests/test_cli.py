from __future__ import annotations

import json

import pytest
from conftest import make_record

from fda_device_lookup import cli
from fda_device_lookup.core.models import (
    QueryInvocation,
    Resolution,
    SearchFilters,
    StrongMatch,
    Unresolved,
)


class _StubService:
    def __init__(self, resolution: Resolution) -> None:
        self.resolution = resolution
        self.requests: list[tuple[str, SearchFilters]] = []

    def resolve(self, query: str, filters: SearchFilters | None = None) -> Resolution:
        self.requests.append((query, filters))
        return self.resolution

    def close(self) -> None:
        raise AssertionError("the CLI must not close a service it did not create")


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


def test_resolved_query_prints_json_and_exits_zero(settings, capsys):
    invocation = QueryInvocation(
        collection="classification",
        field="device_name",
        terms=("pulse", "oximeter"),
        filters=SearchFilters(device_class="2"),
        status="ok",
        result_count=1,
    )
    outcome = StrongMatch(
        records=(make_record("DQA", "Oximeter, Pulse"),),
        combination=("pulse", "oximeter"),
        field="device_name",
        score=1.0,
        total=1,
    )
    service = _StubService(Resolution(outcome=outcome, invocations=(invocation,)))

    code = cli.main(["pulse", "oximeter", "--device-class", "2", "--show-trace"], settings=settings, service=service)

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert service.requests == [("pulse oximeter", SearchFilters(device_class="2"))]
    assert payload["status"] == "strong"
    assert payload["results"][0]["product_code"] == "DQA"
    assert payload["trace"][0]["device_class"] == "2"


def test_unresolved_query_exits_one(settings, capsys):
    service = _StubService(Resolution(outcome=Unresolved(query=("wrist", "gizmo"))))

    code = cli.main(["wrist gizmo"], settings=settings, service=service)

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["status"] == "unresolved"
    assert "trace" not in payload


def test_blank_query_is_a_usage_error(settings, capsys):
    code = cli.main(["   "], settings=settings, service=_StubService(Resolution(outcome=Unresolved(query=()))))

    assert code == 2
    assert "at least one term" in capsys.readouterr().err


def test_limit_is_validated(settings):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["pump", "--limit", "99"], settings=settings)

    assert excinfo.value.code == 2
