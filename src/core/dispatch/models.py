"""Modelos de la tabla de despacho (data-driven).

Idea:
- En vez de repartir constantes por el código, una única estructura dice qué
  servicios se consultan para cada tipo de vocabulario y en qué idiomas.
- La tabla se valida entera al cargarla: un placeholder desconocido o un tipo
  duplicado es un error de configuración, no un fallo por petición.
"""

from __future__ import annotations

import string

from pydantic import BaseModel, Field, field_validator, model_validator

TEMPLATE_FIELDS: frozenset[str] = frozenset({"term", "query", "locale", "max_results"})


def _template_fields(template: str) -> set[str]:
    return {name for _, name, _, _ in string.Formatter().parse(template) if name is not None}


def normalize_locale(locale: str | None) -> str:
    """Reduce a host locale (`fi_FI`, `en-US`, ` EN `) to its language code."""

    if not locale:
        return ""
    value = locale.strip().lower().replace("-", "_")
    return value.split("_", 1)[0]


class ServiceEndpoint(BaseModel):
    """Plantilla de una llamada a un servicio (se convierte en `QueryPlan`)."""

    service: str = Field(..., min_length=1)
    method: str = Field(default="GET", min_length=1)
    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, str] = Field(default_factory=dict)
    timeout_ms: int | None = Field(default=None, gt=0, le=120_000)

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _check_placeholders(self) -> "ServiceEndpoint":
        templates = [self.url, *self.params.values()]
        for template in templates:
            try:
                unknown = _template_fields(template) - TEMPLATE_FIELDS
            except ValueError as exc:
                raise ValueError(f"invalid template {template!r}: {exc}") from exc
            if unknown:
                raise ValueError(
                    f"unknown placeholder(s) {sorted(unknown)} in {template!r}; "
                    f"allowed: {sorted(TEMPLATE_FIELDS)}"
                )
        return self


class VocabularyRoute(BaseModel):
    kind: str = Field(..., min_length=1)
    locales: list[str] = Field(..., min_length=1)
    endpoints: list[ServiceEndpoint] = Field(..., min_length=1)

    @field_validator("locales")
    @classmethod
    def _normalize_locales(cls, value: list[str]) -> list[str]:
        out: list[str] = []
        for locale in value:
            code = normalize_locale(locale)
            if not code:
                raise ValueError("empty locale in route")
            if code not in out:
                out.append(code)
        return out

    def allows(self, locale: str) -> bool:
        return normalize_locale(locale) in self.locales


class DispatchTable(BaseModel):
    routes: list[VocabularyRoute] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_kinds(self) -> "DispatchTable":
        seen: set[str] = set()
        for route in self.routes:
            if route.kind in seen:
                raise ValueError(f"vocabulary kind {route.kind!r} registered twice")
            seen.add(route.kind)
        return self

    def route_for(self, kind: str) -> VocabularyRoute | None:
        for route in self.routes:
            if route.kind == kind:
                return route
        return None

    def service_names(self) -> list[str]:
        names: list[str] = []
        for route in self.routes:
            for endpoint in route.endpoints:
                if endpoint.service not in names:
                    names.append(endpoint.service)
        return names
