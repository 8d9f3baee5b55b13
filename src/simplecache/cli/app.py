"""
Root Typer application for the simplecache CLI.
"""

from __future__ import annotations

import json
from urllib.parse import urlparse

import typer
from rich.console import Console
from rich.table import Table

from simplecache.core.errors import CacheError
from simplecache.core.keys import create_key, create_key_array
from simplecache.core.logging import configure_logging
from simplecache.core.settings import get_settings

console = Console()
err_console = Console(stderr=True)

PROBE_KEY = "simplecache~probe"

app = typer.Typer(
    name="simplecache",
    help="simplecache — key derivation and cache backend diagnostics.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from simplecache import __version__

        typer.echo(f"simplecache {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """simplecache CLI — derive keys, show settings, probe the facility."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


@app.command("key")
def key(
    parts: list[str] = typer.Argument(..., help="Values to join into a key."),
    flat: bool = typer.Option(False, "--flat", help="Join without flattening."),
) -> None:
    """Print the cache key built from PARTS."""
    typer.echo(create_key_array(parts) if flat else create_key(*parts))


@app.command("config")
def config(json_out: bool = typer.Option(False, "--json")) -> None:
    """Show the effective settings."""
    data = get_settings().model_dump()

    if json_out:
        console.print_json(json.dumps(data, default=str))
        return

    table = Table(title="Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in data.items():
        table.add_row(name, str(value))
    console.print(table)


@app.command("probe")
def probe(
    url: str | None = typer.Option(None, "--url", help="Facility URL (defaults to settings)."),
) -> None:
    """Round-trip a value through the native facility."""
    from simplecache.core.external import ExternalCache
    from simplecache.core.facilities import resolve_facility

    facility_url = url or get_settings().facility_url
    try:
        cache = ExternalCache(resolve_facility(facility_url), ttl=60)
        stored = cache.set(PROBE_KEY, "ok")
        value = cache.get(PROBE_KEY)
        cache.delete(PROBE_KEY)
    except CacheError as exc:
        err_console.print(f"[bold red]Error[/bold red] ({exc.category.value}): {exc.message}")
        raise typer.Exit(code=1) from exc
    except Exception as exc:  # third-party facilities, malformed URLs
        err_console.print(f"[bold red]Error[/bold red]: {exc}")
        raise typer.Exit(code=1) from exc

    if not stored or value != "ok":
        err_console.print(f"[bold red]Probe failed[/bold red]: stored={stored} value={value!r}")
        raise typer.Exit(code=1)

    parsed = urlparse(facility_url)
    console.print(f"[green]✓[/green] {parsed.scheme} facility at {parsed.hostname or parsed.path} is working")
