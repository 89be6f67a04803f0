"""Persistence for editor settings and the recent files list."""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from miku.config_io import RECENT_FILES_FILE, SETTINGS_FILE
from miku.editor.models import EditorSettings
from miku.errors import SerializationError
from miku.storage import load_model, read_json, save_model, write_json

logger = logging.getLogger(__name__)

_recent_files_adapter = TypeAdapter(list[str])


class SettingsStore:
    """Reads and writes settings.json."""

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / SETTINGS_FILE

    async def load(self) -> EditorSettings:
        """Load settings, or defaults if none were saved yet."""
        return await load_model(self.path, EditorSettings)

    async def save(self, settings: EditorSettings) -> None:
        """Persist settings."""
        await save_model(self.path, settings)
        logger.debug(f"Saved editor settings to {self.path}")


class RecentFilesStore:
    """Most-recent-first list of opened files, kept in recent_files.json."""

    def __init__(self, data_dir: Path, limit: int = 10) -> None:
        """Initialize the store.

        Args:
            data_dir: App data directory
            limit: Maximum number of files remembered
        """
        self.path = Path(data_dir) / RECENT_FILES_FILE
        self.limit = limit

    async def get(self) -> list[str]:
        """Get the recent files.

        Raises:
            SerializationError: If the stored list is corrupt
        """
        data = await read_json(self.path)
        if data is None:
            return []
        try:
            return _recent_files_adapter.validate_python(data)
        except ValidationError as e:
            raise SerializationError(f"{self.path.name}: {e}") from e

    async def add(self, path: str) -> list[str]:
        """Move path to the front of the recent files, dropping the oldest.

        A corrupt stored list is replaced rather than reported.

        Returns:
            The list as written
        """
        try:
            files = await self.get()
        except SerializationError as e:
            logger.warning(f"Discarding corrupt recent files list: {e}")
            files = []

        files = [f for f in files if f != path]
        files.insert(0, path)
        del files[self.limit:]

        await write_json(self.path, files)
        return files
