"""Normalizador: Finto (API REST de Skosmos).

Forma de respuesta (`/rest/v1/search`):
    {"results": [{"uri": "...", "prefLabel": "...", "altLabel": "...",
                  "lang": "fi", "vocab": "koko", "notation": "..."}]}

La clave nativa es `uri`.
"""

from __future__ import annotations

from typing import Any

from adapters.vocab_services.base import JsonResultsNormalizer, pick_strings


class FintoNormalizer(JsonResultsNormalizer):
    service_name = "finto"
    results_key = "results"

    def entry_term(self, entry: dict[str, Any]) -> Any:
        return entry.get("prefLabel")

    def entry_identifier(self, entry: dict[str, Any]) -> Any:
        return entry.get("uri")

    def entry_extra(self, entry: dict[str, Any]) -> dict[str, str]:
        return pick_strings(entry, ("vocab", "lang", "altLabel", "notation"))
