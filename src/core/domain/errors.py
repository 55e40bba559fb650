"""Errores del dominio.

Solo existe un error fatal: una tabla de despacho mal configurada. Todo lo
demás (término corto, servicio caído, JSON raro) degrada a menos sugerencias.
"""

from __future__ import annotations


class DispatchConfigError(ValueError):
    """The dispatch table cannot be loaded or references unknown services."""
