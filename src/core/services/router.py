"""Decide qué servicios remotos se consultan para un (tipo, idioma, término).

Es una función pura sobre la tabla de despacho: no hace I/O ni guarda
estado entre peticiones.
"""

from __future__ import annotations

from core.config import AppSettings
from core.dispatch.models import DispatchTable, ServiceEndpoint, normalize_locale
from core.domain.models import QueryPlan

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class VocabularyDispatchRouter:
    """Maps a vocabulary kind and locale to the `QueryPlan`s of one request."""

    def __init__(self, table: DispatchTable, settings: AppSettings | None = None) -> None:
        self._table = table
        self._settings = settings or AppSettings()

    @property
    def table(self) -> DispatchTable:
        return self._table

    def route(self, vocabulary_kind: str, locale: str, sanitized_term: str) -> list[QueryPlan]:
        """Return the plans for this lookup, or `[]` when it does not apply.

        Empty when the kind is unknown, the locale is not allowed for that kind,
        or the term is shorter than `min_term_length`.
        """

        if len(sanitized_term) < self._settings.min_term_length:
            return []

        route = self._table.route_for(vocabulary_kind)
        if route is None:
            return []

        language = normalize_locale(locale)
        if not route.allows(language):
            return []

        values = {
            "term": sanitized_term,
            "query": f"{sanitized_term}*",
            "locale": language,
            "max_results": str(self._settings.max_results),
        }
        return [self._build_plan(endpoint, values) for endpoint in route.endpoints]

    def _build_plan(self, endpoint: ServiceEndpoint, values: dict[str, str]) -> QueryPlan:
        headers = {**DEFAULT_HEADERS, **endpoint.headers}
        params = {key: template.format_map(values) for key, template in endpoint.params.items()}
        return QueryPlan(
            service_name=endpoint.service,
            method=endpoint.method,
            url=endpoint.url.format_map(values),
            headers=headers,
            query_parameters=params,
            timeout_ms=endpoint.timeout_ms or self._settings.default_timeout_ms,
        )
