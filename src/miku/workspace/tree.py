"""Recursive workspace tree builder."""

import asyncio
import logging
import os
from pathlib import Path
from typing import NamedTuple

from miku.errors import IoError
from miku.workspace.classifier import is_content_file, is_excluded_entry
from miku.workspace.models import WorkspaceFile

logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    name: str
    path: str
    is_directory: bool


def _display(value: str) -> str:
    """Replace undecodable bytes of a filesystem name so it serializes."""
    return os.fsencode(value).decode("utf-8", "replace")


def _scan_directory(path: str) -> list[_Entry]:
    """List the non-excluded direct children of a directory.

    Symlinks are not followed, so a link to a directory is classified as a
    plain entry and never walked.
    """
    with os.scandir(path) as it:
        return [
            _Entry(entry.name, entry.path, entry.is_dir(follow_symlinks=False))
            for entry in it
            if not is_excluded_entry(entry.name)
        ]


async def build_tree(root_path: str | Path, is_root: bool = True) -> list[WorkspaceFile]:
    """Build the sorted, pruned listing of a directory.

    Directories are included only when they (transitively) contain a
    markdown file; files only when they are markdown. Subdirectories are
    walked concurrently and every sibling list is sorted directories first,
    then case-insensitively by name.

    Args:
        root_path: Directory to list
        is_root: Whether this is the top-level call. Only the root call
            raises; a subdirectory that cannot be read lists as empty.

    Returns:
        Sorted child nodes of root_path (root_path itself is not included)

    Raises:
        IoError: If the root directory is missing or cannot be read
    """
    path = os.path.abspath(root_path)
    try:
        entries = await asyncio.to_thread(_scan_directory, path)
    except OSError as e:
        if is_root:
            raise IoError.from_os_error(e) from e
        logger.warning(f"Skipping unreadable directory {path}: {e}")
        return []

    directories = [entry for entry in entries if entry.is_directory]
    subtrees = await asyncio.gather(
        *(build_tree(entry.path, is_root=False) for entry in directories)
    )

    files: list[WorkspaceFile] = []
    for entry, children in zip(directories, subtrees):
        if children:
            files.append(
                WorkspaceFile(
                    name=_display(entry.name),
                    path=_display(entry.path),
                    is_directory=True,
                    children=children,
                )
            )

    for entry in entries:
        if not entry.is_directory and is_content_file(entry.name):
            files.append(
                WorkspaceFile(
                    name=_display(entry.name),
                    path=_display(entry.path),
                    is_directory=False,
                )
            )

    files.sort(key=WorkspaceFile.sort_key)
    return files
