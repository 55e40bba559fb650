"""Tabla de despacho incluida por defecto.

- keyword: KOKO (ontología general finlandesa) vía la API REST de Finto.
- discipline: clasificación de disciplinas OKM en Finto + conceptos de OpenAlex.
- agency: organizaciones/financiadores del registro ROR.

Se puede sustituir entera con `EXTVOCAB_DISPATCH_TABLE_PATH`.
"""

from __future__ import annotations

from typing import Any

FINTO_SEARCH_URL = "https://api.finto.fi/rest/v1/search"
OPENALEX_CONCEPTS_URL = "https://api.openalex.org/autocomplete/concepts"
ROR_ORGANIZATIONS_URL = "https://api.ror.org/v2/organizations"

ALLOWED_LANGS = ["fi", "sv", "en"]


def _finto(vocab: str) -> dict[str, Any]:
    return {
        "service": "finto",
        "method": "GET",
        "url": FINTO_SEARCH_URL,
        "params": {
            "vocab": vocab,
            "query": "{query}",
            "lang": "{locale}",
            "maxhits": "{max_results}",
        },
    }


DEFAULT_DISPATCH_TABLE: dict[str, Any] = {
    "routes": [
        {
            "kind": "keyword",
            "locales": ALLOWED_LANGS,
            "endpoints": [_finto("koko")],
        },
        {
            "kind": "discipline",
            "locales": ALLOWED_LANGS,
            "endpoints": [
                _finto("okm-tieteenala"),
                {
                    "service": "openalex",
                    "method": "GET",
                    "url": OPENALEX_CONCEPTS_URL,
                    "params": {"q": "{term}"},
                },
            ],
        },
        {
            "kind": "agency",
            "locales": ALLOWED_LANGS,
            "endpoints": [
                {
                    "service": "ror",
                    "method": "GET",
                    "url": ROR_ORGANIZATIONS_URL,
                    "params": {"query": "{term}"},
                    "timeout_ms": 8000,
                },
            ],
        },
    ]
}
