"""Pasos comunes de normalización.

Cada servicio solo describe su forma de JSON (dónde está la lista, qué campo
es el término, cuál el identificador y qué prefijo debe tener). El orden de
pasos es siempre el mismo:

1. parsear y extraer la lista de resultados (forma inesperada -> `[]`)
2. deduplicar por la clave nativa del servicio dentro de la respuesta
3. descartar entradas sin término
4. construir la etiqueta y sellar el servicio
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

from core.domain.models import Suggestion


class JsonResultsNormalizer(ABC):
    """Base para normalizadores de servicios que devuelven una lista JSON."""

    service_name: str = ""
    results_key: str = "results"
    identifier_prefixes: tuple[str, ...] = ("http://", "https://")

    def __init__(self, service_name: str | None = None) -> None:
        if service_name:
            self.service_name = service_name

    def normalize(self, raw_body: str | None) -> list[Suggestion]:
        entries = self.extract_entries(raw_body)

        seen: set[tuple[str, str]] = set()
        suggestions: list[Suggestion] = []
        for entry in entries:
            term = _clean(self.entry_term(entry))
            identifier = _clean(self.entry_identifier(entry)) or None

            # la clave nativa se consume aunque la entrada no tenga término
            if identifier:
                key = ("id", identifier)
            elif term:
                key = ("term", term)
            else:
                continue
            if key in seen:
                continue
            seen.add(key)

            if not term:
                continue

            suggestions.append(
                Suggestion(
                    term=term,
                    label=self.build_label(term, identifier),
                    identifier=identifier,
                    service=self.service_name,
                    extra=self.entry_extra(entry),
                )
            )
        return suggestions

    def extract_entries(self, raw_body: str | None) -> list[dict[str, Any]]:
        if not raw_body:
            return []
        try:
            payload = json.loads(raw_body)
        except ValueError:
            return []
        if not isinstance(payload, dict):
            return []
        results = payload.get(self.results_key)
        if not isinstance(results, list):
            return []
        return [entry for entry in results if isinstance(entry, dict)]

    def identifier_is_valid(self, identifier: str) -> bool:
        return identifier.startswith(self.identifier_prefixes)

    def build_label(self, term: str, identifier: str | None) -> str:
        if identifier and self.identifier_is_valid(identifier):
            return f"{term} [ {identifier} ]"
        return term

    @abstractmethod
    def entry_term(self, entry: dict[str, Any]) -> Any:
        """Raw preferred label of one entry."""

    @abstractmethod
    def entry_identifier(self, entry: dict[str, Any]) -> Any:
        """Raw native unique key (URI) of one entry."""

    def entry_extra(self, entry: dict[str, Any]) -> dict[str, str]:
        return {}


def _clean(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def pick_strings(entry: dict[str, Any], keys: tuple[str, ...]) -> dict[str, str]:
    """Copy the non-empty scalar values of `keys` as strings."""

    out: dict[str, str] = {}
    for key in keys:
        value = entry.get(key)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (str, int, float)):
            text = str(value).strip()
            if text:
                out[key] = text
    return out
