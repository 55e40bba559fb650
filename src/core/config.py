"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP, normalizadores) y el router lean los mismos
  límites (longitud mínima, número de resultados, timeouts).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "extvocab"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "extvocab"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "extvocab"
    return Path.home() / ".config" / "extvocab"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# extvocab user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI, router y fetcher.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTVOCAB_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por defecto del cliente HTTP (segundos).",
    )
    user_agent: str = Field(
        default="extvocab/0.1 (+https://local)",
        min_length=1,
        description="User-Agent enviado a los servicios de vocabulario.",
    )

    min_term_length: int = Field(
        default=3,
        ge=1,
        le=64,
        description="Longitud mínima del término saneado para lanzar consultas.",
    )
    max_results: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Tope de resultados pedido a cada servicio ({max_results}).",
    )
    default_timeout_ms: int = Field(
        default=5000,
        gt=0,
        le=120_000,
        description="Timeout por plan cuando la tabla de despacho no fija uno.",
    )
    dispatch_table_path: Path | None = Field(
        default=None,
        description="Ruta a un JSON con la tabla tipo de vocabulario -> idiomas -> servicios.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
    log_json: bool = Field(
        default=False,
        description="Emitir logs como JSON en lugar de salida de consola.",
    )

    @classmethod
    def load(cls) -> "AppSettings":
        """Settings from env vars, the project `.env` and the per-user `.env`.

        The user file is located at call time, so `XDG_CONFIG_HOME`/`APPDATA`
        changes made after import are honoured.
        """

        return cls(_env_file=(".env", str(get_user_env_file())))
