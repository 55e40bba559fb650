"""Term lookup orchestration.

This module is the boundary the host talks to: given a vocabulary kind, the
partial term and the locale, it returns normalized suggestions from every
remote service configured for that kind. Nothing here raises for an
unsupported kind, a short term or a failing service; those all end up as an
empty (or shorter) list. The only fatal error is a misconfigured dispatch
table, detected by `build_engine` at startup.

Hosts embedding the engine should call `core.logging.configure_logging`
once at startup. Without it structlog prints every event, at any level, on
stdout. Once configured, per-lookup events are debug and failed fetches are
warnings.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from adapters.fetcher import ConcurrentFetcher
from adapters.vocab_services import NormalizerRegistry, default_registry
from core.config import AppSettings
from core.dispatch import DispatchTable, load_dispatch_table, normalize_locale
from core.domain.errors import DispatchConfigError
from core.domain.models import FetchOutcome, Suggestion, TermQuery
from core.interfaces.fetcher import PlanFetcher
from core.services.aggregator import aggregate
from core.services.router import VocabularyDispatchRouter
from core.services.sanitizer import sanitize

logger = structlog.get_logger(__name__)


def validate_dispatch_table(table: DispatchTable, registry: NormalizerRegistry) -> None:
    """Fail fast when a route names a service that has no normalizer."""

    missing = [name for name in table.service_names() if name not in registry]
    if missing:
        raise DispatchConfigError(
            f"no normalizer registered for service(s): {', '.join(missing)} "
            f"(known: {', '.join(registry.names()) or 'none'})"
        )


@dataclass
class LookupEngine:
    router: VocabularyDispatchRouter
    fetcher: PlanFetcher
    normalizers: NormalizerRegistry

    def build_query(self, vocabulary_kind: str, term: str | None, locale: str) -> TermQuery:
        return TermQuery(
            raw_term=term,
            sanitized_term=sanitize(term),
            locale=normalize_locale(locale),
            vocabulary_kind=vocabulary_kind,
        )

    async def lookup(self, vocabulary_kind: str, term: str | None, locale: str) -> list[Suggestion]:
        query = self.build_query(vocabulary_kind, term, locale)
        plans = self.router.route(query.vocabulary_kind, query.locale, query.sanitized_term)
        if not plans:
            logger.debug(
                "vocab_lookup_skipped",
                kind=query.vocabulary_kind,
                locale=query.locale,
                term_length=len(query.sanitized_term),
            )
            return []

        outcomes = await self.fetcher.fetch_all(plans)

        per_service: list[tuple[str, list[Suggestion]]] = []
        for outcome in outcomes:
            if not outcome.succeeded:
                continue
            per_service.append((outcome.service_name, self._normalize(outcome)))

        suggestions = aggregate(per_service)
        logger.debug(
            "vocab_lookup_completed",
            kind=query.vocabulary_kind,
            locale=query.locale,
            plans=len(plans),
            failed=sum(1 for o in outcomes if not o.succeeded),
            suggestions=len(suggestions),
        )
        return suggestions

    def lookup_sync(self, vocabulary_kind: str, term: str | None, locale: str) -> list[Suggestion]:
        """Blocking variant for hosts without an event loop."""

        return asyncio.run(self.lookup(vocabulary_kind, term, locale))

    def _normalize(self, outcome: FetchOutcome) -> list[Suggestion]:
        try:
            return self.normalizers.normalize(outcome.service_name, outcome.raw_body)
        except Exception:
            logger.exception("vocab_normalize_failed", service=outcome.service_name)
            return []


def build_engine(
    settings: AppSettings | None = None,
    *,
    table: DispatchTable | None = None,
    registry: NormalizerRegistry | None = None,
    fetcher: PlanFetcher | None = None,
) -> LookupEngine:
    """Load the dispatch table and normalizers once and wire the engine."""

    settings = settings or AppSettings()
    if table is None:
        table = load_dispatch_table(settings.dispatch_table_path)
    if registry is None:
        registry = default_registry()
    validate_dispatch_table(table, registry)

    return LookupEngine(
        router=VocabularyDispatchRouter(table, settings),
        fetcher=fetcher or ConcurrentFetcher(settings),
        normalizers=registry,
    )
