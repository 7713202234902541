"""CLI commands for palytt_client.

`palytt-rpc` is a thin shell over the library: list the procedure catalog,
call any procedure by wire name, and check backend health.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

import httpx
import typer
from pydantic_core import to_jsonable_python
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from palytt_client import __logo__, __version__
from palytt_client.auth import AnonymousAuth, AuthProvider, StaticTokenAuth
from palytt_client.cli.shared.logging_utils import configure_cli_logging
from palytt_client.config.access import get_config
from palytt_client.config.schema import ClientConfig
from palytt_client.errors import APIError
from palytt_client.procedures import REGISTRY, ProcedureKind
from palytt_client.retry import RetryingTRPCClient
from palytt_client.transport import APIClient

app = typer.Typer(
    name="palytt-rpc",
    help=f"{__logo__} palytt-rpc - Palytt tRPC client",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} palytt-rpc v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """palytt-rpc - Palytt tRPC client."""
    pass


# ============================================================================
# Helpers
# ============================================================================


def _load_config(
    config_path: Path | None = None,
    base_url: str | None = None,
    token: str | None = None,
) -> ClientConfig:
    """Load the cached config with command-line overrides applied."""
    try:
        return get_config(config_path=config_path, base_url=base_url, auth_token=token)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def _make_http_client(config: ClientConfig) -> httpx.AsyncClient:
    """HTTP client shared by one CLI command; the command closes it."""
    return httpx.AsyncClient(
        timeout=config.timeout_seconds,
        headers={"User-Agent": f"palytt-rpc/{__version__}"},
    )


def _make_auth(config: ClientConfig) -> AuthProvider:
    if config.auth_token:
        return StaticTokenAuth(config.auth_token, config.user_id or None)
    return AnonymousAuth()


def _parse_input(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"not valid JSON: {e}", param_hint="--input")


def _print_api_error(error: APIError) -> None:
    console.print(f"[red]Error:[/red] {escape(error.description)}")
    console.print(f"[dim]code: {error.analytics_code}[/dim]")
    if error.recovery_suggestion:
        console.print(f"[yellow]{escape(error.recovery_suggestion)}[/yellow]")


# ============================================================================
# Commands
# ============================================================================


@app.command()
def procedures(
    kind: ProcedureKind = typer.Option(None, "--kind", "-k", help="Only show queries or mutations"),
    router: str = typer.Option(None, "--router", "-r", help="Only show one router, e.g. posts"),
):
    """List the known procedures."""
    rows = [
        p
        for p in REGISTRY
        if (kind is None or p.kind is kind) and (router is None or p.router == router)
    ]

    table = Table(title="Procedures")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Auth")
    table.add_column("Input", style="dim")
    for p in rows:
        table.add_row(
            p.name,
            p.kind.value,
            "[yellow]required[/yellow]" if p.protected else "-",
            p.input_type.__name__,
        )
    console.print(table)
    console.print(f"{len(rows)} procedure(s)")


@app.command()
def call(
    name: str = typer.Argument(..., help="Procedure name, e.g. posts.getRecentPosts"),
    input: str = typer.Option(None, "--input", "-i", help="JSON input (camelCase keys)"),
    mutation: bool = typer.Option(False, "--mutation", "-m", help="POST instead of GET (unregistered names only)"),
    base_url: str = typer.Option(None, "--base-url", help="Override the backend URL"),
    token: str = typer.Option(None, "--token", help="Bearer token"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
    logs: bool = typer.Option(False, "--logs/--no-logs", help="Show palytt_client runtime logs"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Debug mode: log every request and response"),
):
    """Call a procedure and print its JSON result."""
    configure_cli_logging("call", logs=logs, debug=debug)
    payload = _parse_input(input)
    config = _load_config(config_path, base_url, token)

    procedure = REGISTRY.get(name)
    if procedure is not None:
        is_query = procedure.is_query
        output_type = procedure.output_type
        if mutation and is_query:
            console.print(f"[yellow]{name} is a query; sending GET[/yellow]")
    else:
        is_query = not mutation
        output_type = Any

    async def run_call():
        async with _make_http_client(config) as http_client:
            client = RetryingTRPCClient.from_config(config, _make_auth(config), http_client=http_client)
            return await client.call(name, payload, is_query=is_query, output_type=output_type)

    try:
        result = asyncio.run(run_call())
    except APIError as e:
        _print_api_error(e)
        raise typer.Exit(1)

    console.print_json(data=to_jsonable_python(result, by_alias=True))


@app.command()
def health(
    base_url: str = typer.Option(None, "--base-url", help="Override the backend URL"),
    config_path: Path = typer.Option(None, "--config", help="Config file path"),
):
    """Check whether the backend is reachable."""
    configure_cli_logging("health", logs=False, debug=False)
    config = _load_config(config_path, base_url)

    async def run_health():
        async with _make_http_client(config) as http_client:
            client = APIClient(
                config.resolved_base_url,
                http_client=http_client,
                timeout_seconds=config.timeout_seconds,
            )
            return await client.check_health()

    status = asyncio.run(run_health())
    if status.healthy:
        console.print(f"[green]✓[/green] {config.resolved_base_url} is healthy")
        return
    console.print(f"[red]✗[/red] {config.resolved_base_url} is unhealthy: {escape(status.error or 'unknown')}")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
