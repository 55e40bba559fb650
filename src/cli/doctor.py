"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path
from urllib.parse import urlsplit

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.vocab_services import default_registry
from core.config import AppSettings, write_user_env_vars
from core.dispatch import DispatchTable, load_dispatch_table
from core.domain.errors import DispatchConfigError
from core.services.lookup_pipeline import validate_dispatch_table

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


def _service_hosts(table: DispatchTable) -> dict[str, str]:
    """First endpoint origin per service (`https://api.finto.fi/`)."""

    hosts: dict[str, str] = {}
    for route in table.routes:
        for endpoint in route.endpoints:
            if endpoint.service in hosts:
                continue
            parts = urlsplit(endpoint.url)
            if parts.scheme and parts.netloc:
                hosts[endpoint.service] = f"{parts.scheme}://{parts.netloc}/"
    return hosts


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip connectivity checks."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings.load()

    table = Table(title="extvocab Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Min term length", "OK", str(settings.min_term_length))
    table.add_row("Max results", "OK", str(settings.max_results))
    source = str(settings.dispatch_table_path) if settings.dispatch_table_path else "built-in"

    dispatch: DispatchTable | None = None
    try:
        dispatch = load_dispatch_table(settings.dispatch_table_path)
        validate_dispatch_table(dispatch, default_registry())
        kinds = ", ".join(route.kind for route in dispatch.routes) or "(empty)"
        table.add_row("Dispatch table", "OK", escape(f"{source}: {kinds}"))
    except DispatchConfigError as exc:
        table.add_row("Dispatch table", "FAIL", escape(str(exc)))

    # Connectivity (best-effort)
    if dispatch is not None and not offline:
        for service, url in _service_hosts(dispatch).items():
            ok_http, detail_http = asyncio.run(_check_http(url, settings))
            table.add_row(f"HTTP {service}", "OK" if ok_http else "FAIL", escape(f"{url} -> {detail_http}"))

    _console.print(table)

    if dispatch is None:
        _console.print(
            "\n[yellow]Note:[/yellow] fix or unset EXTVOCAB_DISPATCH_TABLE_PATH to use the built-in table."
        )
        raise typer.Exit(code=1)


@app.command(name="configure")
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings.load()

    table_path = typer.prompt(
        "Dispatch table JSON (empty = built-in)",
        default=str(settings.dispatch_table_path or ""),
        show_default=False,
    ).strip()
    max_results = typer.prompt("Max results per service", default=settings.max_results, type=int)
    min_length = typer.prompt("Minimum term length", default=settings.min_term_length, type=int)

    if table_path:
        try:
            load_dispatch_table(Path(table_path))
        except DispatchConfigError as exc:
            raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(
        {
            "EXTVOCAB_DISPATCH_TABLE_PATH": table_path or None,
            "EXTVOCAB_MAX_RESULTS": str(max_results),
            "EXTVOCAB_MIN_TERM_LENGTH": str(min_length),
        }
    )

    _console.print(f"[green]Saved config to:[/green] {escape(str(env_path))}")
