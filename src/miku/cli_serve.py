"""MCP server command for miku."""

from typing import Annotated

import typer
from rich.console import Console

from miku.config import get_settings

console = Console()


def serve(
    config_file: Annotated[
        str | None,
        typer.Option(
            "--config",
            "-f",
            help="Path to a YAML config file (overrides default config locations).",
        ),
    ] = None,
) -> None:
    """Start the miku MCP server for the editor front end.

    Runs an MCP (Model Context Protocol) server over stdin/stdout that exposes
    the workspace, settings, recent files and document tools.

    Examples:
        miku serve
        miku serve --config path/to/config.yaml
    """
    try:
        settings = get_settings(config_file=config_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    from miku.server import run_server

    run_server(settings=settings)
