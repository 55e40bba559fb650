"""Fetch concurrente de planes con semántica "settle".

Cada plan es una tarea asyncio independiente con su propio timeout. Un fallo
(red, status no 2xx, timeout, respuesta corrupta) se convierte en un
`FetchOutcome` fallido y nunca cancela a los demás. No hay reintentos.
"""

from __future__ import annotations

import asyncio
import time
from typing import Sequence

import httpx
import structlog

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import FetchOutcome, QueryPlan

logger = structlog.get_logger(__name__)


class ConcurrentFetcher:
    """Runs every plan of a request in parallel and waits for all of them."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch_all(self, plans: Sequence[QueryPlan]) -> list[FetchOutcome]:
        """One outcome per plan, in plan order (not completion order).

        The group is shielded: if the caller is cancelled, plans already started
        still run to completion or to their own timeout.
        """

        if not plans:
            return []
        return await asyncio.shield(self._fetch_group(list(plans)))

    async def _fetch_group(self, plans: list[QueryPlan]) -> list[FetchOutcome]:
        slots: list[FetchOutcome | None] = [None] * len(plans)

        async with build_async_client(self._settings, transport=self._transport) as client:

            async def run_one(index: int, plan: QueryPlan) -> None:
                slots[index] = await self._settle(client, plan)

            await asyncio.gather(*(run_one(i, plan) for i, plan in enumerate(plans)))

        return [outcome for outcome in slots if outcome is not None]

    async def _settle(self, client: httpx.AsyncClient, plan: QueryPlan) -> FetchOutcome:
        timeout_s = plan.timeout_ms / 1000
        started = time.perf_counter()

        def failed(reason: str, status_code: int | None = None) -> FetchOutcome:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.warning(
                "vocab_fetch_failed",
                service=plan.service_name,
                url=plan.url,
                status_code=status_code,
                reason=reason,
                elapsed_ms=round(elapsed_ms, 1),
            )
            return FetchOutcome(
                service_name=plan.service_name,
                succeeded=False,
                status_code=status_code,
                failure_reason=reason,
                elapsed_ms=elapsed_ms,
            )

        try:
            response = await asyncio.wait_for(
                client.request(
                    plan.method,
                    plan.url,
                    params=plan.query_parameters,
                    headers=plan.headers,
                    timeout=httpx.Timeout(timeout_s),
                ),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return failed("timeout")
        except httpx.HTTPError as exc:
            return failed(f"transport_error: {exc.__class__.__name__}: {exc}")
        except Exception as exc:
            return failed(f"unexpected_error: {exc.__class__.__name__}: {exc}")

        if not 200 <= response.status_code < 300:
            return failed(f"http_{response.status_code}", response.status_code)

        try:
            body = response.text
        except (UnicodeDecodeError, LookupError) as exc:
            return failed(f"malformed_response: {exc}", response.status_code)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "vocab_fetch_succeeded",
            service=plan.service_name,
            status_code=response.status_code,
            elapsed_ms=round(elapsed_ms, 1),
        )
        return FetchOutcome(
            service_name=plan.service_name,
            succeeded=True,
            status_code=response.status_code,
            raw_body=body,
            elapsed_ms=elapsed_ms,
        )
