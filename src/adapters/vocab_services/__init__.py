"""Servicios de vocabulario (normalizadores concretos).

Por qué un paquete:
- Agrupa un módulo por servicio (Finto, OpenAlex, ROR).
- Cada módulo implementa `core.interfaces.normalizer.ResponseNormalizer`.
"""

from adapters.vocab_services.finto import FintoNormalizer
from adapters.vocab_services.openalex import OpenAlexNormalizer
from adapters.vocab_services.registry import NormalizerRegistry
from adapters.vocab_services.ror import RorNormalizer

_NORMALIZERS = (
    FintoNormalizer,
    OpenAlexNormalizer,
    RorNormalizer,
)


def default_registry() -> NormalizerRegistry:
    return NormalizerRegistry(normalizer() for normalizer in _NORMALIZERS)


__all__ = [
    "FintoNormalizer",
    "NormalizerRegistry",
    "OpenAlexNormalizer",
    "RorNormalizer",
    "default_registry",
]
