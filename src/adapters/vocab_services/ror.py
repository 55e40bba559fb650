"""Normalizador: ROR (Research Organization Registry, API v2).

    {"number_of_results": 1, "items": [{"id": "https://ror.org/05xxx",
     "names": [{"value": "Academy of Finland", "types": ["ror_display", "label"],
                "lang": "en"}],
     "types": ["funder"], "locations": [{"geonames_details": {"country_name": "Finland"}}]}]}
"""

from __future__ import annotations

from typing import Any

from adapters.vocab_services.base import JsonResultsNormalizer


def _display_name(names: Any) -> str | None:
    if not isinstance(names, list):
        return None
    candidates = [n for n in names if isinstance(n, dict) and isinstance(n.get("value"), str)]
    for wanted in ("ror_display", "label"):
        for name in candidates:
            types = name.get("types")
            if isinstance(types, list) and wanted in types:
                return name["value"]
    if candidates:
        return candidates[0]["value"]
    return None


class RorNormalizer(JsonResultsNormalizer):
    service_name = "ror"
    results_key = "items"
    identifier_prefixes = ("https://ror.org/",)

    def entry_term(self, entry: dict[str, Any]) -> Any:
        return _display_name(entry.get("names"))

    def entry_identifier(self, entry: dict[str, Any]) -> Any:
        return entry.get("id")

    def entry_extra(self, entry: dict[str, Any]) -> dict[str, str]:
        extra: dict[str, str] = {}
        types = entry.get("types")
        if isinstance(types, list):
            joined = ",".join(t for t in types if isinstance(t, str))
            if joined:
                extra["types"] = joined

        locations = entry.get("locations")
        if isinstance(locations, list) and locations and isinstance(locations[0], dict):
            details = locations[0].get("geonames_details")
            if isinstance(details, dict) and isinstance(details.get("country_name"), str):
                extra["country"] = details["country_name"]
        return extra
