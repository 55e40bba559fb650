"""Registro servicio -> normalizador.

Se construye una vez al arrancar; el pipeline lo consulta por nombre.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.models import Suggestion
from core.interfaces.normalizer import ResponseNormalizer


class NormalizerRegistry:
    def __init__(self, normalizers: Iterable[ResponseNormalizer] = ()) -> None:
        self._normalizers: dict[str, ResponseNormalizer] = {}
        for normalizer in normalizers:
            self.register(normalizer)

    def register(self, normalizer: ResponseNormalizer) -> None:
        name = normalizer.service_name
        if not name:
            raise ValueError(f"{normalizer.__class__.__name__} has no service_name")
        if name in self._normalizers:
            raise ValueError(f"normalizer for {name!r} already registered")
        self._normalizers[name] = normalizer

    def get(self, service_name: str) -> ResponseNormalizer | None:
        return self._normalizers.get(service_name)

    def __contains__(self, service_name: object) -> bool:
        return service_name in self._normalizers

    def names(self) -> list[str]:
        return list(self._normalizers)

    def normalize(self, service_name: str, raw_body: str | None) -> list[Suggestion]:
        normalizer = self._normalizers.get(service_name)
        if normalizer is None:
            return []
        return normalizer.normalize(raw_body)
