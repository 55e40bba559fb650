"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `lookup`, `routes` y `doctor`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.dispatch import DispatchTable
from core.domain.models import Suggestion


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (no se usa en modo `--json`)."""

    title = Text("extvocab", style="bold cyan")
    subtitle = Text("External vocabulary lookup • Finto • OpenAlex • ROR", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_suggestions_table(suggestions: Sequence[Suggestion], *, title: str = "Suggestions") -> Table:
    table = Table(title=escape(title))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Term", style="white")
    table.add_column("Identifier", style="magenta")
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Extra", style="dim")
    for index, suggestion in enumerate(suggestions, start=1):
        extra = ", ".join(f"{k}={v}" for k, v in sorted(suggestion.extra.items()))
        # texto remoto: nunca se interpreta como markup de Rich
        table.add_row(
            str(index),
            escape(suggestion.term),
            escape(suggestion.identifier or ""),
            escape(suggestion.service),
            escape(extra),
        )
    return table


def build_routes_table(dispatch_table: DispatchTable) -> Table:
    table = Table(title="Dispatch table")
    table.add_column("Kind", style="bright_green", no_wrap=True)
    table.add_column("Locales", style="white")
    table.add_column("Service", style="cyan")
    table.add_column("Endpoint", style="magenta")
    table.add_column("Timeout", style="dim", justify="right")
    for route in dispatch_table.routes:
        for position, endpoint in enumerate(route.endpoints):
            table.add_row(
                escape(route.kind) if position == 0 else "",
                escape(", ".join(route.locales)) if position == 0 else "",
                escape(endpoint.service),
                escape(f"{endpoint.method} {endpoint.url}"),
                f"{endpoint.timeout_ms} ms" if endpoint.timeout_ms else "default",
            )
    return table
