"""Contrato de normalizadores de respuesta.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Cada servicio (Finto, OpenAlex, ROR...) aporta su propio normalizador y
  se registra por nombre al arrancar; no hay despacho por reflexión.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Suggestion


@runtime_checkable
class ResponseNormalizer(Protocol):
    """Convierte el cuerpo de éxito de un servicio en sugerencias comunes.

    Reglas de diseño:
    - Es síncrono: no hace I/O, solo transforma texto ya descargado.
    - Nunca lanza por un cuerpo vacío o con forma inesperada: devuelve `[]`.
    """

    service_name: str

    def normalize(self, raw_body: str | None) -> list[Suggestion]:
        ...
