"""Exportación JSON de sugerencias.

Por qué JSON:
- Es el mismo formato que consume el host (lista de sugerencias).
- Permite guardar una respuesta para depurar un normalizador sin red.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import Suggestion


def suggestions_payload(suggestions: Sequence[Suggestion]) -> list[dict[str, object]]:
    return [s.model_dump(mode="json") for s in suggestions]


def dumps_suggestions(suggestions: Sequence[Suggestion]) -> str:
    return json.dumps(suggestions_payload(suggestions), ensure_ascii=False, indent=2, sort_keys=True)


def export_suggestions_json(*, suggestions: Sequence[Suggestion], output_path: Path) -> Path:
    """Exporta las sugerencias a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_suggestions(suggestions) + "\n", encoding="utf-8")
    return output_path
