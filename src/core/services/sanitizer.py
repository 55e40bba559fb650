"""Limpieza del término que escribe el usuario.

No aplica la longitud mínima: eso lo decide el router, de modo que el mismo
saneado sirve para validar y para mostrar.
"""

from __future__ import annotations

import unicodedata
import warnings

from bs4 import BeautifulSoup

# Cc = control, Cf = format (zero-width, bidi marks...)
_STRIP_CATEGORIES = ("Cc", "Cf")


def _strip_markup(value: str) -> str:
    if "<" not in value and "&" not in value:
        return value
    with warnings.catch_warnings():
        # bs4 avisa cuando el input "parece" una URL o un fichero
        warnings.simplefilter("ignore")
        soup = BeautifulSoup(value, "html.parser")
    # sin separador: `<b>cl</b>imate` es una sola palabra
    return soup.get_text()


def sanitize(raw_term: str | None) -> str:
    """Return `raw_term` without tags or control characters, on a single trimmed line."""

    if not raw_term:
        return ""

    text = _strip_markup(str(raw_term))

    chars: list[str] = []
    for ch in text:
        if ch.isspace():
            chars.append(" ")
        elif unicodedata.category(ch) in _STRIP_CATEGORIES:
            continue
        else:
            chars.append(ch)

    return " ".join("".join(chars).split())
