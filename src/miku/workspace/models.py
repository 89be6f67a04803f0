"""Data models for workspaces and their file trees."""

from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from miku.config_io import DEFAULT_WORKSPACE_NAME


class WorkspaceFile(BaseModel):
    """Node in a workspace file tree."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Final path segment")
    path: str = Field(description="Absolute path of the entry")
    is_directory: bool = Field(alias="isDirectory", description="Whether the entry is a directory")
    children: list["WorkspaceFile"] | None = Field(
        default=None,
        description="Ordered child nodes (directories only)",
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the presentation layer.

        Uses the ``isDirectory`` key and omits ``children`` on leaf files.
        """
        return self.model_dump(by_alias=True, exclude_none=True)

    def sort_key(self) -> tuple[bool, str, str]:
        """Directories first, then case-insensitive name, then raw name."""
        return (not self.is_directory, self.name.lower(), self.name)


class Workspace(BaseModel):
    """A workspace root directory and its display name."""

    path: str = Field(description="Workspace root directory")
    name: str = Field(description="Display name derived from the path")

    @classmethod
    def from_path(cls, path: str) -> "Workspace":
        """Create a Workspace, naming it after the final path segment.

        Args:
            path: Workspace root directory

        Returns:
            Workspace instance (falls back to a fixed name for e.g. "/")
        """
        name = PurePath(path).name
        if not name or name in (".", ".."):
            name = DEFAULT_WORKSPACE_NAME
        return cls(path=path, name=name)


class WorkspaceConfig(BaseModel):
    """Persisted workspace selection and history."""

    current_workspace: str | None = Field(default=None, description="Selected workspace path")
    recent_workspaces: list[Workspace] = Field(
        default_factory=list,
        description="Recently opened workspaces, most recent first",
    )

    def remember(self, workspace: Workspace, limit: int) -> None:
        """Make workspace current and move it to the front of the recent list.

        Args:
            workspace: Workspace being opened
            limit: Maximum number of recent entries kept
        """
        self.current_workspace = workspace.path
        self.recent_workspaces = [w for w in self.recent_workspaces if w.path != workspace.path]
        self.recent_workspaces.insert(0, workspace)
        del self.recent_workspaces[limit:]
