import asyncio
import json
from typing import Sequence

import httpx
import pytest
import structlog.testing

from adapters.fetcher import ConcurrentFetcher
from adapters.vocab_services import FintoNormalizer, NormalizerRegistry, OpenAlexNormalizer
from core.dispatch import DispatchTable
from core.domain.models import FetchOutcome, QueryPlan, Suggestion
from core.services import lookup_pipeline
from core.services.lookup_pipeline import build_engine


class CountingFetcher:
    """Answers every plan from canned bodies keyed by service name."""

    def __init__(self, bodies: dict[str, str | None]):
        self.bodies = bodies
        self.calls = 0
        self.plans: list[QueryPlan] = []

    async def fetch_all(self, plans: Sequence[QueryPlan]) -> list[FetchOutcome]:
        self.calls += 1
        self.plans.extend(plans)
        outcomes = []
        for plan in plans:
            body = self.bodies.get(plan.service_name)
            if body is None:
                outcomes.append(
                    FetchOutcome(service_name=plan.service_name, succeeded=False, failure_reason="timeout")
                )
            else:
                outcomes.append(
                    FetchOutcome(service_name=plan.service_name, succeeded=True, status_code=200, raw_body=body)
                )
        return outcomes


def _table(*services: str, timeout_ms: int = 2000) -> DispatchTable:
    urls = {
        "finto": "https://api.finto.fi/rest/v1/search",
        "openalex": "https://api.openalex.org/autocomplete/concepts",
    }
    return DispatchTable.model_validate(
        {
            "routes": [
                {
                    "kind": "discipline",
                    "locales": ["fi", "en"],
                    "endpoints": [
                        {"service": s, "url": urls[s], "params": {"q": "{query}"}, "timeout_ms": timeout_ms}
                        for s in services
                    ],
                }
            ]
        }
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("term", [None, "", "cl", "  c  ", "<b>cl</b>"])
async def test_short_terms_never_reach_the_network(settings, finto_body, term):
    fetcher = CountingFetcher({"finto": finto_body})
    engine = build_engine(settings, fetcher=fetcher)

    assert await engine.lookup("keyword", term, "en") == []
    assert fetcher.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("kind,locale", [("subject", "en"), ("keyword", "de"), ("agency", "")])
async def test_unsupported_kind_or_locale_never_reach_the_network(settings, finto_body, kind, locale):
    fetcher = CountingFetcher({"finto": finto_body})
    engine = build_engine(settings, fetcher=fetcher)

    assert await engine.lookup(kind, "climate", locale) == []
    assert fetcher.calls == 0


@pytest.mark.asyncio
async def test_keyword_lookup_deduplicates_one_response(settings):
    body = json.dumps(
        {
            "results": [
                {"prefLabel": "Climate change", "uri": "http://x/123"},
                {"prefLabel": "Climate change", "uri": "http://x/123"},
            ]
        }
    )
    engine = build_engine(settings, fetcher=CountingFetcher({"finto": body}))

    assert await engine.lookup("keyword", "climate", "en") == [
        Suggestion(
            term="Climate change",
            label="Climate change [ http://x/123 ]",
            identifier="http://x/123",
            service="finto",
        )
    ]


@pytest.mark.asyncio
async def test_sanitized_term_is_what_gets_queried(settings, finto_body):
    fetcher = CountingFetcher({"finto": finto_body})
    engine = build_engine(settings, fetcher=fetcher)

    await engine.lookup("keyword", "  <i>clim</i>\nate ", "en_GB")

    [plan] = fetcher.plans
    assert plan.query_parameters["query"] == "clim ate*"
    assert plan.query_parameters["lang"] == "en"


@pytest.mark.asyncio
async def test_one_failed_service_does_not_change_the_others(settings, finto_body):
    both = build_engine(
        settings,
        table=_table("finto", "openalex"),
        fetcher=CountingFetcher({"finto": finto_body, "openalex": None}),
    )
    alone = build_engine(settings, table=_table("finto"), fetcher=CountingFetcher({"finto": finto_body}))

    result = await both.lookup("discipline", "ilmasto", "fi")

    assert result == await alone.lookup("discipline", "ilmasto", "fi")
    assert {s.service for s in result} == {"finto"}


@pytest.mark.asyncio
async def test_all_services_failing_is_an_empty_result(settings):
    engine = build_engine(
        settings,
        table=_table("finto", "openalex"),
        fetcher=CountingFetcher({"finto": None, "openalex": None}),
    )

    assert await engine.lookup("discipline", "ilmasto", "fi") == []


@pytest.mark.asyncio
async def test_results_merge_in_table_order_across_services(settings, finto_body, openalex_body):
    engine = build_engine(
        settings,
        table=_table("openalex", "finto"),
        fetcher=CountingFetcher({"finto": finto_body, "openalex": openalex_body}),
    )

    result = await engine.lookup("discipline", "climate", "en")

    assert [s.service for s in result] == ["openalex", "openalex", "finto", "finto"]


@pytest.mark.asyncio
async def test_same_query_twice_is_order_stable(settings, finto_body, openalex_body):
    engine = build_engine(
        settings,
        table=_table("finto", "openalex"),
        fetcher=CountingFetcher({"finto": finto_body, "openalex": openalex_body}),
    )

    first = await engine.lookup("discipline", "climate", "en")
    second = await engine.lookup("discipline", "climate", "en")

    assert first == second
    assert len(first) == 4


@pytest.mark.asyncio
async def test_failing_normalizer_only_drops_its_service(settings, finto_body):
    class ExplodingNormalizer:
        service_name = "openalex"

        def normalize(self, raw_body):
            raise RuntimeError("boom")

    engine = build_engine(
        settings,
        table=_table("finto", "openalex"),
        registry=NormalizerRegistry([FintoNormalizer(), ExplodingNormalizer()]),
        fetcher=CountingFetcher({"finto": finto_body, "openalex": "{}"}),
    )

    result = await engine.lookup("discipline", "climate", "en")

    assert [s.service for s in result] == ["finto", "finto"]


@pytest.mark.asyncio
async def test_discipline_with_one_service_timing_out_over_http(settings, finto_body):
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.openalex.org":
            await asyncio.sleep(5)
        return httpx.Response(200, text=finto_body)

    engine = build_engine(
        settings,
        table=_table("finto", "openalex", timeout_ms=100),
        registry=NormalizerRegistry([FintoNormalizer(), OpenAlexNormalizer()]),
        fetcher=ConcurrentFetcher(settings, transport=httpx.MockTransport(handler)),
    )

    result = await engine.lookup("discipline", "ilmasto", "fi")

    assert [s.identifier for s in result] == ["http://x/123", "http://x/456"]
    assert all(s.service == "finto" for s in result)


def test_lookup_sync(settings, finto_body):
    engine = build_engine(settings, fetcher=CountingFetcher({"finto": finto_body}))

    result = engine.lookup_sync("keyword", "climate", "en")

    assert [s.term for s in result] == ["Climate change", "Climate policy"]


@pytest.mark.asyncio
async def test_completed_lookup_is_logged_at_debug(monkeypatch, settings, finto_body):
    engine = build_engine(settings, fetcher=CountingFetcher({"finto": finto_body}))

    with structlog.testing.capture_logs() as logs:
        # fresh proxy: a logger cached by an earlier configure_logging would bypass capture
        monkeypatch.setattr(lookup_pipeline, "logger", structlog.get_logger("lookup_pipeline"))
        await engine.lookup("keyword", "climate", "en")

    [completed] = [entry for entry in logs if entry["event"] == "vocab_lookup_completed"]
    assert completed["log_level"] == "debug"
    assert completed["suggestions"] == 2
