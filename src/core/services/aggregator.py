"""Fusión de las sugerencias de todos los servicios."""

from __future__ import annotations

from typing import Iterable, Sequence

from core.domain.models import Suggestion


def aggregate(results: Iterable[tuple[str, Sequence[Suggestion]]]) -> list[Suggestion]:
    """Concatenate per-service lists in plan order, dropping repeated identifiers.

    The first suggestion carrying a given identifier wins. Suggestions without
    an identifier are never deduplicated here; each normalizer already removed
    repeated terms within its own response.
    """

    seen: set[str] = set()
    merged: list[Suggestion] = []
    for _service_name, suggestions in results:
        for suggestion in suggestions:
            if suggestion.identifier:
                if suggestion.identifier in seen:
                    continue
                seen.add(suggestion.identifier)
            merged.append(suggestion)
    return merged
