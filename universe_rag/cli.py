# universe_rag/cli.py
"""
universe-rag CLI - operate on a universe from the shell.

Commands:
    universe-rag credentials        Show which token the server needs
    universe-rag add FILE           Add (or overwrite) a document
    universe-rag delete ID          Delete one document
    universe-rag clear              Delete every document in the universe

Connection settings come from --config (YAML) and/or --server-url/--universe.
The token is read from the environment variable named after the credential
(see `universe-rag credentials`), falling back to UNIVERSE_TOKEN.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from universe_rag.client import UniverseRAG
from universe_rag.config import UniverseConfig, config_field, parse_config, read_config_section
from universe_rag.credentials import resolve_from_env
from universe_rag.exceptions import ConfigError, UniverseRAGError
from universe_rag.logging.logger import configure_logging, get_logger
from universe_rag.logging.tags import CLI

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True, soft_wrap=True)

app = typer.Typer(
    name="universe-rag",
    help="Manage documents in a Universe server.",
    no_args_is_help=True,
    add_completion=False,
)


# =============================================================================
# Helpers
# =============================================================================


def build_client(config: UniverseConfig) -> UniverseRAG:
    return UniverseRAG(config)


def _fail(msg: str) -> None:
    err_console.print(f"[red]✗[/red] {escape(msg)}")
    raise typer.Exit(code=1)


def _load_settings(ctx: typer.Context) -> UniverseConfig:
    opts = ctx.obj or {}

    path = opts.get("config")
    file_data: dict[str, Any] = read_config_section(path) if path else {}

    overrides = {
        field: opts[field] for field in ("server_url", "universe") if opts.get(field)
    }

    data = {k: v for k, v in file_data.items() if config_field(k) not in overrides}
    data.update(overrides)
    from_file = {config_field(k) for k in data if k not in overrides}

    try:
        return parse_config(data)
    except ConfigError as e:
        # Only point at the file when one of its values is at fault.
        if path and from_file.intersection(e.fields):
            raise ConfigError(str(e), path=path, fields=e.fields) from e
        raise


def _run(ctx: typer.Context, operation: Callable[[UniverseRAG], Awaitable[None]]) -> UniverseConfig:
    """Resolve config and token, init a client, and run one operation."""
    try:
        config = _load_settings(ctx)
        rag = build_client(config)

        async def _go() -> None:
            await rag.init(resolve_from_env(config.server_url))
            await operation(rag)
            await rag.finalize()

        asyncio.run(_go())
    except UniverseRAGError as e:
        _fail(str(e))

    return config


# =============================================================================
# Commands
# =============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
    server_url: Optional[str] = typer.Option(
        None, "--server-url", "-s", envvar="UNIVERSE_SERVER_URL", help="Universe server URL."
    ),
    universe: Optional[str] = typer.Option(
        None, "--universe", "-u", envvar="UNIVERSE_NAME", help="Universe name."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs."),
) -> None:
    """Manage documents in a Universe server."""
    configure_logging(verbose)
    ctx.obj = {"config": config, "server_url": server_url, "universe": universe}


@app.command("credentials")
def credentials(ctx: typer.Context) -> None:
    """Show the credential name the server token must be stored under."""
    try:
        config = _load_settings(ctx)
        required = build_client(config).required_credentials()
    except UniverseRAGError as e:
        _fail(str(e))

    for name, description in required.items():
        console.print(f"[bold]{escape(name)}[/bold]")
        console.print(f"[dim]{escape(description)}[/dim]")


@app.command("add")
def add(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file to upload."),
    file_id: Optional[str] = typer.Option(None, "--id", help="Document id (default: file name)."),
) -> None:
    """Add a document, overwriting any existing one with the same id."""
    doc_id = file_id or file.name
    try:
        text = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {file}: {e}")

    logger.debug(f"{CLI} Adding {file} as '{doc_id}'")
    config = _run(ctx, lambda rag: rag.add_file(doc_id, text))
    console.print(f"[green]✓[/green] Added '{escape(doc_id)}' to universe '{config.universe}'")


@app.command("delete")
def delete(
    ctx: typer.Context,
    file_id: str = typer.Argument(..., help="Document id to delete."),
) -> None:
    """Delete one document."""
    config = _run(ctx, lambda rag: rag.delete_file(file_id))
    console.print(
        f"[green]✓[/green] Deleted '{escape(file_id)}' from universe '{config.universe}'"
    )


@app.command("clear")
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Delete every document in the universe."""
    if not yes:
        typer.confirm("Delete every document in the universe?", abort=True)

    config = _run(ctx, lambda rag: rag.delete_all_files())
    console.print(f"[green]✓[/green] Cleared universe '{config.universe}'")


if __name__ == "__main__":
    app()
