"""Workspace operations exposed to the editor."""

import asyncio
import logging
import os

from miku.config import Settings
from miku.errors import PathError, PathErrorKind
from miku.workspace import mutations
from miku.workspace.models import Workspace, WorkspaceFile
from miku.workspace.store import WorkspaceStore
from miku.workspace.tree import build_tree

logger = logging.getLogger(__name__)


class WorkspaceService:
    """Lists, mutates and remembers workspaces.

    Every call works against the live filesystem; nothing is cached between
    calls, so a listing always reflects the latest mutations.
    """

    def __init__(self, store: WorkspaceStore) -> None:
        self.store = store

    @classmethod
    def from_settings(cls, settings: Settings) -> "WorkspaceService":
        """Create a service storing its config in the configured data dir."""
        return cls(WorkspaceStore(settings.data_dir, limit=settings.recent_workspaces_limit))

    def get_workspace_info(self, path: str) -> Workspace:
        """Describe a workspace path. Never fails."""
        return Workspace.from_path(path)

    async def get_current_workspace(self) -> Workspace | None:
        """Get the selected workspace.

        A selection whose directory has since disappeared is reported as no
        selection rather than as an error.
        """
        config = await self.store.load()
        path = config.current_workspace
        if path is None:
            return None
        if not await asyncio.to_thread(os.path.exists, path):
            logger.debug(f"Current workspace no longer exists: {path}")
            return None
        return self.get_workspace_info(path)

    async def set_workspace(self, path: str) -> None:
        """Select a workspace and move it to the front of the recent list."""
        await self.store.set_current(self.get_workspace_info(path))
        logger.info(f"Opened workspace {path}")

    async def get_recent_workspaces(self) -> list[Workspace]:
        """Get recent workspaces whose directories still exist.

        Missing entries are only hidden, not removed from storage.
        """
        config = await self.store.load()
        exists = await asyncio.gather(
            *(asyncio.to_thread(os.path.exists, w.path) for w in config.recent_workspaces)
        )
        return [w for w, ok in zip(config.recent_workspaces, exists) if ok]

    async def list_workspace_files(self, path: str) -> list[WorkspaceFile]:
        """List the markdown tree of a workspace.

        Raises:
            PathError: If the workspace path does not exist
            IoError: If the workspace directory cannot be read
        """
        if not await asyncio.to_thread(os.path.exists, path):
            raise PathError(PathErrorKind.NOT_FOUND, "Workspace path does not exist")
        return await build_tree(path, is_root=True)

    async def create_file(self, base_path: str, name: str) -> str:
        """Create an empty file in base_path."""
        return await mutations.create_file(base_path, name)

    async def create_folder(self, base_path: str, name: str) -> str:
        """Create a folder in base_path."""
        return await mutations.create_folder(base_path, name)

    async def delete_file(self, path: str) -> None:
        """Delete a file or a folder recursively."""
        await mutations.delete(path)

    async def rename_file(self, old_path: str, new_name: str) -> str:
        """Rename a file or folder in place."""
        return await mutations.rename(old_path, new_name)
