"""Command-line interface for miku."""

import asyncio
import json
import logging
from collections.abc import Coroutine
from typing import Annotated, Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.tree import Tree

from miku import __version__
from miku.cli_serve import serve
from miku.config import get_settings
from miku.editor import RecentFilesStore
from miku.errors import MikuError
from miku.workspace import WorkspaceFile, WorkspaceService

T = TypeVar("T")

app = typer.Typer(
    name="miku",
    help="Local storage backend for the Miku markdown editor",
    no_args_is_help=True,
)
workspace_app = typer.Typer(help="Select and inspect workspaces", no_args_is_help=True)
app.add_typer(workspace_app, name="workspace")
app.command()(serve)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"miku version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug messages."),
    ] = False,
) -> None:
    """miku - Local storage backend for the Miku markdown editor."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_settings().log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning miku errors into a message and exit code 1."""
    try:
        return asyncio.run(coro)
    except MikuError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _service() -> WorkspaceService:
    return WorkspaceService.from_settings(get_settings())


def _add_nodes(tree: Tree, nodes: list[WorkspaceFile]) -> None:
    for node in nodes:
        if node.is_directory:
            branch = tree.add(f"[bold blue]{node.name}/[/bold blue]")
            _add_nodes(branch, node.children or [])
        else:
            tree.add(node.name)


@app.command("ls")
def list_files(
    path: Annotated[str, typer.Argument(help="Workspace directory")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the tree as JSON"),
    ] = False,
) -> None:
    """List the markdown files of a workspace."""
    files = _run(_service().list_workspace_files(path))

    if as_json:
        console.print_json(json.dumps([f.to_dict() for f in files]))
        return

    tree = Tree(f"[bold]{path}[/bold]")
    _add_nodes(tree, files)
    console.print(tree)


@app.command("new-file")
def new_file(
    base_path: Annotated[str, typer.Argument(help="Directory to create the file in")],
    name: Annotated[str, typer.Argument(help="File name")],
) -> None:
    """Create an empty file."""
    console.print(_run(_service().create_file(base_path, name)))


@app.command("new-folder")
def new_folder(
    base_path: Annotated[str, typer.Argument(help="Directory to create the folder in")],
    name: Annotated[str, typer.Argument(help="Folder name")],
) -> None:
    """Create a folder."""
    console.print(_run(_service().create_folder(base_path, name)))


@app.command("rm")
def remove(
    path: Annotated[str, typer.Argument(help="File or folder to delete")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Do not ask for confirmation"),
    ] = False,
) -> None:
    """Delete a file, or a folder and everything in it."""
    if not yes:
        typer.confirm(f"Delete {path}?", abort=True)
    _run(_service().delete_file(path))
    console.print(f"[green]✓[/green] Deleted {path}")


@app.command("mv")
def move(
    old_path: Annotated[str, typer.Argument(help="File or folder to rename")],
    new_name: Annotated[str, typer.Argument(help="New name (not a path)")],
) -> None:
    """Rename a file or folder within its directory."""
    console.print(_run(_service().rename_file(old_path, new_name)))


@workspace_app.command("set")
def workspace_set(
    path: Annotated[str, typer.Argument(help="Workspace directory")],
) -> None:
    """Select a workspace."""
    _run(_service().set_workspace(path))
    console.print(f"[green]✓[/green] Workspace set to {path}")


@workspace_app.command("current")
def workspace_current() -> None:
    """Show the selected workspace."""
    workspace = _run(_service().get_current_workspace())
    if workspace is None:
        console.print("[dim]No workspace selected[/dim]")
        raise typer.Exit(1)
    console.print(f"[bold]{workspace.name}[/bold] {workspace.path}")


@workspace_app.command("recent")
def workspace_recent() -> None:
    """List recently opened workspaces."""
    for workspace in _run(_service().get_recent_workspaces()):
        console.print(f"[bold]{workspace.name}[/bold] {workspace.path}")


@workspace_app.command("info")
def workspace_info(
    path: Annotated[str, typer.Argument(help="Workspace directory")],
) -> None:
    """Show the display name of a workspace path."""
    console.print_json(_service().get_workspace_info(path).model_dump_json())


@app.command("recent-files")
def recent_files(
    add: Annotated[
        str | None,
        typer.Option("--add", help="Record a file as recently opened"),
    ] = None,
) -> None:
    """List recently opened files."""
    settings = get_settings()
    store = RecentFilesStore(settings.data_dir, limit=settings.recent_files_limit)
    files = _run(store.add(add)) if add else _run(store.get())
    for path in files:
        console.print(path)


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    console.print(Panel("[bold]Current Configuration[/bold]", title="miku"))
    console.print(f"[bold]Data Directory:[/bold] {settings.data_dir}")
    console.print(f"[bold]Log Level:[/bold] {settings.log_level}")
    console.print(f"[bold]Recent Workspaces Limit:[/bold] {settings.recent_workspaces_limit}")
    console.print(f"[bold]Recent Files Limit:[/bold] {settings.recent_files_limit}")


if __name__ == "__main__":
    app()
