"""Normalizador: OpenAlex (autocomplete de conceptos).

    {"meta": {...}, "results": [{"id": "https://openalex.org/C41008148",
     "display_name": "Computer science", "hint": "...",
     "external_id": "https://www.wikidata.org/wiki/Q21198", "works_count": 1}]}
"""

from __future__ import annotations

from typing import Any

from adapters.vocab_services.base import JsonResultsNormalizer, pick_strings


class OpenAlexNormalizer(JsonResultsNormalizer):
    service_name = "openalex"
    results_key = "results"
    identifier_prefixes = ("https://openalex.org/",)

    def entry_term(self, entry: dict[str, Any]) -> Any:
        return entry.get("display_name")

    def entry_identifier(self, entry: dict[str, Any]) -> Any:
        return entry.get("id")

    def entry_extra(self, entry: dict[str, Any]) -> dict[str, str]:
        return pick_strings(entry, ("hint", "external_id", "works_count"))
