"""Carga de la tabla de despacho (JSON o la incluida por defecto).

Se llama una vez al arrancar. Cualquier problema (fichero ilegible, JSON
inválido, esquema incorrecto) se convierte en `DispatchConfigError`.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.dispatch.defaults import DEFAULT_DISPATCH_TABLE
from core.dispatch.models import DispatchTable
from core.domain.errors import DispatchConfigError


def default_dispatch_table() -> DispatchTable:
    return DispatchTable.model_validate(DEFAULT_DISPATCH_TABLE)


def load_dispatch_table(path: Path | None = None) -> DispatchTable:
    if path is None:
        return default_dispatch_table()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DispatchConfigError(f"cannot read dispatch table {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DispatchConfigError(f"dispatch table {path} is not valid JSON: {exc}") from exc

    try:
        return DispatchTable.model_validate(data)
    except ValidationError as exc:
        raise DispatchConfigError(f"dispatch table {path} is invalid: {exc}") from exc
