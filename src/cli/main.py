"""CLI principal (Typer).

Comandos:
- `lookup KIND TERM`: consulta los servicios configurados y muestra sugerencias.
- `routes`: muestra la tabla de despacho cargada.
- `doctor ...`: diagnósticos de configuración y conectividad.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import dumps_suggestions, export_suggestions_json
from cli import doctor
from cli.ui_components import build_routes_table, build_suggestions_table, print_banner
from core.config import AppSettings
from core.dispatch import load_dispatch_table
from core.domain.errors import DispatchConfigError
from core.logging import configure_logging
from core.services.lookup_pipeline import build_engine

app = typer.Typer(
    no_args_is_help=True,
    help="Autocomplete controlled-vocabulary terms from external authority services.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def lookup(
    kind: str = typer.Argument(..., help="Vocabulary kind (keyword, discipline, agency...)."),
    term: str = typer.Argument(..., help="Partial term typed by the user."),
    locale: str = typer.Option("en", "--locale", "-l", help="Locale of the field (fi, sv, en...)."),
    as_json: bool = typer.Option(False, "--json", help="Print suggestions as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write suggestions to a JSON file."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Look up TERM for vocabulary KIND across every configured service."""

    settings = AppSettings.load()
    configure_logging(settings)

    try:
        engine = build_engine(settings)
    except DispatchConfigError as exc:
        _console.print(f"[red]Invalid dispatch table:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    suggestions = engine.lookup_sync(kind, term, locale)

    if output is not None:
        export_suggestions_json(suggestions=suggestions, output_path=output)

    if as_json:
        typer.echo(dumps_suggestions(suggestions))
        return

    if not no_banner:
        print_banner(_console)
    if not suggestions:
        _console.print("[yellow]No suggestions.[/yellow]")
        return
    _console.print(build_suggestions_table(suggestions, title=f"{kind} / {locale}: {term}"))
    if output is not None:
        _console.print(f"[green]Saved:[/green] {escape(str(output))}")


@app.command()
def routes() -> None:
    """Show which services are queried for each vocabulary kind."""

    settings = AppSettings.load()
    try:
        table = load_dispatch_table(settings.dispatch_table_path)
    except DispatchConfigError as exc:
        _console.print(f"[red]Invalid dispatch table:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    _console.print(build_routes_table(table))


def run() -> None:
    app()
