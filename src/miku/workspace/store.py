"""Durable record of the current workspace and recently opened workspaces."""

import logging
from pathlib import Path

from miku.config_io import WORKSPACE_CONFIG_FILE
from miku.storage import load_model, save_model
from miku.workspace.models import Workspace, WorkspaceConfig

logger = logging.getLogger(__name__)


class WorkspaceStore:
    """Reads and writes workspace_config.json as a whole document.

    Updates are read-modify-write without locking: when two writers race,
    the last write wins.
    """

    def __init__(self, data_dir: Path, limit: int = 10) -> None:
        """Initialize the store.

        Args:
            data_dir: App data directory holding the config file
            limit: Capacity of the recent workspaces list
        """
        self.path = Path(data_dir) / WORKSPACE_CONFIG_FILE
        self.limit = limit

    async def load(self) -> WorkspaceConfig:
        """Load the config, or defaults if it was never written."""
        return await load_model(self.path, WorkspaceConfig)

    async def save(self, config: WorkspaceConfig) -> None:
        """Persist the full config document."""
        await save_model(self.path, config)

    async def set_current(self, workspace: Workspace) -> WorkspaceConfig:
        """Select a workspace and record it as the most recent one.

        Returns:
            The config as written
        """
        config = await self.load()
        config.remember(workspace, self.limit)
        await self.save(config)
        logger.debug(f"Current workspace set to {workspace.path}")
        return config
