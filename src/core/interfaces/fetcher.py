"""Contrato del fetcher concurrente."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import FetchOutcome, QueryPlan


@runtime_checkable
class PlanFetcher(Protocol):
    """Ejecuta todos los planes de una petición y espera a que todos terminen.

    Devuelve exactamente un `FetchOutcome` por plan, en el orden de entrada.
    """

    async def fetch_all(self, plans: Sequence[QueryPlan]) -> list[FetchOutcome]:
        ...
