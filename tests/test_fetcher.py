import asyncio

import httpx
import pytest

from adapters.fetcher import ConcurrentFetcher
from core.domain.models import QueryPlan


def _plan(service, url=None, timeout_ms=2000, **params):
    return QueryPlan(
        service_name=service,
        url=url or f"https://{service}.test/search",
        headers={"Accept": "application/json"},
        query_parameters=params,
        timeout_ms=timeout_ms,
    )


@pytest.mark.asyncio
async def test_empty_plan_list(settings):
    assert await ConcurrentFetcher(settings).fetch_all([]) == []


@pytest.mark.asyncio
async def test_outcomes_follow_plan_order_not_completion_order(settings):
    delays = {"slow.test": 0.05, "fast.test": 0.0}

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delays[request.url.host])
        return httpx.Response(200, json={"results": [], "host": request.url.host})

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    outcomes = await fetcher.fetch_all([_plan("slow"), _plan("fast")])

    assert [o.service_name for o in outcomes] == ["slow", "fast"]
    assert all(o.succeeded for o in outcomes)
    assert '"slow.test"' in outcomes[0].raw_body
    assert outcomes[0].status_code == 200
    assert outcomes[0].failure_reason is None


@pytest.mark.asyncio
async def test_request_carries_plan_parameters_and_headers(settings):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="{}")

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    await fetcher.fetch_all([_plan("finto", vocab="koko", query="climate*", lang="en")])

    [request] = seen
    assert request.method == "GET"
    assert request.url.params["query"] == "climate*"
    assert request.url.params["vocab"] == "koko"
    assert request.headers["accept"] == "application/json"
    assert request.headers["user-agent"] == settings.user_agent


@pytest.mark.asyncio
async def test_non_2xx_is_a_failed_outcome(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "down.test":
            return httpx.Response(503, text="maintenance")
        return httpx.Response(200, text='{"results": []}')

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    down, up = await fetcher.fetch_all([_plan("down"), _plan("up")])

    assert not down.succeeded
    assert down.status_code == 503
    assert down.failure_reason == "http_503"
    assert down.raw_body is None
    assert up.succeeded


@pytest.mark.asyncio
async def test_timeout_only_affects_its_own_plan(settings):
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "slow.test":
            await asyncio.sleep(5)
        return httpx.Response(200, text='{"results": []}')

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    slow, fast = await fetcher.fetch_all([_plan("slow", timeout_ms=50), _plan("fast")])

    assert not slow.succeeded
    assert slow.failure_reason == "timeout"
    assert fast.succeeded


@pytest.mark.asyncio
async def test_network_error_is_a_failed_outcome(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "broken.test":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, text='{"results": []}')

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    broken, ok = await fetcher.fetch_all([_plan("broken"), _plan("ok")])

    assert not broken.succeeded
    assert broken.failure_reason.startswith("transport_error: ConnectError")
    assert ok.succeeded


@pytest.mark.asyncio
async def test_every_plan_fails_independently(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    outcomes = await fetcher.fetch_all([_plan("a"), _plan("b"), _plan("c")])

    assert [o.failure_reason for o in outcomes] == ["http_500"] * 3


@pytest.mark.asyncio
async def test_caller_cancellation_lets_started_plans_finish(settings):
    started = asyncio.Event()
    finished: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(0.05)
        finished.append(request.url.host)
        return httpx.Response(200, text='{"results": []}')

    fetcher = ConcurrentFetcher(settings, transport=httpx.MockTransport(handler))
    caller = asyncio.create_task(fetcher.fetch_all([_plan("a")]))
    await started.wait()
    caller.cancel()

    with pytest.raises(asyncio.CancelledError):
        await caller
    assert finished == []

    await asyncio.sleep(0.3)
    assert finished == ["a.test"]
