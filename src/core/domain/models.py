"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.
- Los modelos son inmutables (`frozen`): una consulta, sus planes y sus
  resultados viven solo durante una petición y nadie los modifica.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TermQuery(BaseModel):
    """Una búsqueda entrante, ya saneada.

    Se crea una vez por lookup y se descarta al devolver el resultado.
    """

    model_config = ConfigDict(frozen=True)

    raw_term: str | None = Field(
        default=None,
        description="Término tal y como lo envió el host (puede faltar).",
    )
    sanitized_term: str = Field(
        default="",
        description="Término limpio: sin marcado, sin caracteres de control, una línea.",
    )
    locale: str = Field(
        ...,
        description="Código de idioma normalizado (p.ej. 'fi', 'en').",
    )
    vocabulary_kind: str = Field(
        ...,
        description="Tipo de campo controlado (p.ej. 'keyword', 'discipline').",
    )


class QueryPlan(BaseModel):
    """Descripción inmutable de una llamada a un servicio remoto."""

    model_config = ConfigDict(frozen=True)

    service_name: str = Field(
        ...,
        min_length=1,
        description="Identidad del servicio; también la clave de su normalizador.",
    )
    method: str = Field(default="GET", min_length=1)
    url: str = Field(
        ...,
        min_length=1,
        description="URL ya renderizada a partir de la plantilla de la tabla.",
    )
    headers: dict[str, str] = Field(default_factory=dict)
    query_parameters: dict[str, str] = Field(default_factory=dict)
    timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Timeout propio del plan (milisegundos).",
    )


class FetchOutcome(BaseModel):
    """Resultado terminal (éxito o fallo) de un `QueryPlan`."""

    model_config = ConfigDict(frozen=True)

    service_name: str
    succeeded: bool = False
    status_code: int | None = None
    raw_body: str | None = None
    failure_reason: str | None = None
    elapsed_ms: float | None = Field(
        default=None,
        description="Duración observada de la llamada (diagnóstico/logging).",
    )


class Suggestion(BaseModel):
    """Término candidato normalizado que se devuelve al host."""

    model_config = ConfigDict(frozen=True)

    term: str = Field(
        ...,
        min_length=1,
        description="Etiqueta preferida del término.",
    )
    label: str = Field(
        ...,
        min_length=1,
        description="Texto mostrado: '<term> [ <identifier> ]' o solo el término.",
    )
    identifier: str | None = Field(
        default=None,
        description="Identificador canónico (URI); clave de deduplicación.",
    )
    service: str = Field(
        ...,
        min_length=1,
        description="Servicio de procedencia.",
    )
    extra: dict[str, str] = Field(
        default_factory=dict,
        description="Datos adicionales específicos del servicio.",
    )
