"""MCP server exposing miku's storage operations to the editor front end."""

import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP

from miku import __version__
from miku.config import Settings, get_settings
from miku.editor import EditorSettings, RecentFilesStore, SettingsStore
from miku.editor import documents
from miku.workspace import WorkspaceService

logger = logging.getLogger(__name__)

mcp = FastMCP("miku")
_workspaces: WorkspaceService | None = None
_settings_store: SettingsStore | None = None
_recent_files: RecentFilesStore | None = None


def configure(settings: Settings) -> None:
    """Bind the tools to the stores in settings.data_dir."""
    global _workspaces, _settings_store, _recent_files
    _workspaces = WorkspaceService.from_settings(settings)
    _settings_store = SettingsStore(settings.data_dir)
    _recent_files = RecentFilesStore(settings.data_dir, limit=settings.recent_files_limit)


def _ensure_configured() -> None:
    if _workspaces is None or _settings_store is None or _recent_files is None:
        configure(get_settings())


def _get_workspaces() -> WorkspaceService:
    """Get the WorkspaceService, creating it from settings on first use."""
    _ensure_configured()
    if _workspaces is None:
        raise RuntimeError("WorkspaceService not initialized")
    return _workspaces


def _get_settings_store() -> SettingsStore:
    _ensure_configured()
    if _settings_store is None:
        raise RuntimeError("SettingsStore not initialized")
    return _settings_store


def _get_recent_files() -> RecentFilesStore:
    _ensure_configured()
    if _recent_files is None:
        raise RuntimeError("RecentFilesStore not initialized")
    return _recent_files


# ---------------------------------------------------------------------------
# Workspace tools
# ---------------------------------------------------------------------------


@mcp.tool()
async def list_workspace_files(workspace_path: str) -> list[dict[str, Any]]:
    """List the markdown files of a workspace as a tree.

    Args:
        workspace_path: Workspace root directory

    Returns:
        Sorted list of nodes with name, path, isDirectory and, for
        directories, children
    """
    logger.info(f"[WS] list_workspace_files: {workspace_path}")
    files = await _get_workspaces().list_workspace_files(workspace_path)
    return [f.to_dict() for f in files]


@mcp.tool()
async def create_file(base_path: str, name: str) -> str:
    """Create an empty file.

    Args:
        base_path: Directory to create the file in
        name: File name

    Returns:
        Path of the new file
    """
    logger.info(f"[WS] create_file: {base_path} / {name}")
    return await _get_workspaces().create_file(base_path, name)


@mcp.tool()
async def create_folder(base_path: str, name: str) -> str:
    """Create a folder.

    Args:
        base_path: Directory to create the folder in
        name: Folder name

    Returns:
        Path of the new folder
    """
    logger.info(f"[WS] create_folder: {base_path} / {name}")
    return await _get_workspaces().create_folder(base_path, name)


@mcp.tool()
async def delete_file(path: str) -> None:
    """Delete a file, or a folder with everything in it.

    Args:
        path: File or folder to delete
    """
    logger.info(f"[WS] delete_file: {path}")
    await _get_workspaces().delete_file(path)


@mcp.tool()
async def rename_file(old_path: str, new_name: str) -> str:
    """Rename a file or folder within its directory.

    Args:
        old_path: Existing file or folder
        new_name: New name (not a path)

    Returns:
        Path after the rename
    """
    logger.info(f"[WS] rename_file: {old_path} -> {new_name}")
    return await _get_workspaces().rename_file(old_path, new_name)


@mcp.tool()
def get_workspace_info(path: str) -> dict[str, Any]:
    """Get the path and display name of a workspace directory."""
    return _get_workspaces().get_workspace_info(path).model_dump()


@mcp.tool()
async def get_current_workspace() -> dict[str, Any] | None:
    """Get the selected workspace, or None if none is selected or it was removed."""
    workspace = await _get_workspaces().get_current_workspace()
    return workspace.model_dump() if workspace else None


@mcp.tool()
async def set_workspace(path: str) -> None:
    """Select a workspace and add it to the recent workspaces."""
    logger.info(f"[WS] set_workspace: {path}")
    await _get_workspaces().set_workspace(path)


@mcp.tool()
async def get_recent_workspaces() -> list[dict[str, Any]]:
    """Get recently opened workspaces that still exist, most recent first."""
    return [w.model_dump() for w in await _get_workspaces().get_recent_workspaces()]


# ---------------------------------------------------------------------------
# Editor tools
# ---------------------------------------------------------------------------


@mcp.tool()
async def load_settings() -> dict[str, Any]:
    """Load the editor settings (defaults if never saved)."""
    return (await _get_settings_store().load()).model_dump()


@mcp.tool()
async def save_settings(settings: EditorSettings) -> None:
    """Save the editor settings."""
    await _get_settings_store().save(settings)


@mcp.tool()
async def open_file(path: str) -> dict[str, Any]:
    """Open a document.

    Returns:
        Dict with path, content and is_modified
    """
    logger.info(f"[DOC] open_file: {path}")
    return (await documents.open_file(path)).model_dump()


@mcp.tool()
async def save_file(path: str, content: str) -> None:
    """Save document content to path."""
    logger.info(f"[DOC] save_file: {path}")
    await documents.save_file(path, content)


@mcp.tool()
def new_document() -> dict[str, Any]:
    """Create an empty, unsaved document."""
    return documents.new_document().model_dump()


@mcp.tool()
async def get_recent_files() -> list[str]:
    """Get recently opened files, most recent first."""
    return await _get_recent_files().get()


@mcp.tool()
async def add_recent_file(path: str) -> None:
    """Move a file to the front of the recent files."""
    await _get_recent_files().add(path)


@mcp.tool()
def get_app_version() -> str:
    """Get the miku version."""
    return __version__


def run_server(settings: Settings | None = None) -> None:
    """Start the MCP server (called from CLI or __main__)."""
    # Quiet the per-request MCP server logs
    logging.getLogger("mcp.server").setLevel(logging.WARNING)
    logging.getLogger("mcp.server.lowlevel").setLevel(logging.WARNING)

    settings = settings or get_settings()

    # Send application logs to stderr (stdout is the MCP transport)
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    configure(settings)
    logger.info(f"miku MCP server starting (data dir: {settings.data_dir})")
    mcp.run()


if __name__ == "__main__":
    run_server()
