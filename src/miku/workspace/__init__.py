"""Workspace module for listing and editing workspace file trees."""

from miku.workspace.classifier import is_content_file, is_excluded_entry
from miku.workspace.models import Workspace, WorkspaceConfig, WorkspaceFile
from miku.workspace.service import WorkspaceService
from miku.workspace.store import WorkspaceStore
from miku.workspace.tree import build_tree

__all__ = [
    "Workspace",
    "WorkspaceConfig",
    "WorkspaceFile",
    "WorkspaceService",
    "WorkspaceStore",
    "build_tree",
    "is_content_file",
    "is_excluded_entry",
]
