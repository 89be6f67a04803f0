"""File and folder mutations inside a workspace.

Each operation checks its precondition against the live filesystem and then
performs a single filesystem action. Nothing here rebuilds or patches a
workspace tree; callers list the workspace again afterwards.
"""

import asyncio
import logging
import os
import shutil
from pathlib import Path

from miku.errors import IoError, PathError, PathErrorKind

logger = logging.getLogger(__name__)


def _create_empty_file(path: Path) -> None:
    # "x" mode fails if another writer created the file after our check
    try:
        with open(path, "x", encoding="utf-8"):
            pass
    except FileExistsError as e:
        raise PathError(PathErrorKind.ALREADY_EXISTS, "File already exists") from e


def _is_bare_name(name: str) -> bool:
    if name in ("", ".", ".."):
        return False
    return os.sep not in name and not (os.altsep and os.altsep in name)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        os.remove(path)


async def create_file(base_dir: str, name: str) -> str:
    """Create an empty file.

    Args:
        base_dir: Existing directory to create the file in
        name: File name

    Returns:
        Path of the new file

    Raises:
        PathError: If the target already exists
        IoError: If the file cannot be created
    """
    file_path = Path(base_dir) / name
    if await asyncio.to_thread(os.path.lexists, file_path):
        raise PathError(PathErrorKind.ALREADY_EXISTS, "File already exists")

    try:
        await asyncio.to_thread(_create_empty_file, file_path)
    except OSError as e:
        raise IoError.from_os_error(e) from e

    logger.info(f"Created file {file_path}")
    return str(file_path)


async def create_folder(base_dir: str, name: str) -> str:
    """Create a directory. The parent must already exist.

    Raises:
        PathError: If the target already exists
        IoError: If the directory cannot be created
    """
    folder_path = Path(base_dir) / name
    if await asyncio.to_thread(os.path.lexists, folder_path):
        raise PathError(PathErrorKind.ALREADY_EXISTS, "Folder already exists")

    try:
        await asyncio.to_thread(os.mkdir, folder_path)
    except FileExistsError as e:
        raise PathError(PathErrorKind.ALREADY_EXISTS, "Folder already exists") from e
    except OSError as e:
        raise IoError.from_os_error(e) from e

    logger.info(f"Created folder {folder_path}")
    return str(folder_path)


async def delete(path: str) -> None:
    """Delete a file, or a directory with all of its contents.

    There is no trash or confirmation: the removal is immediate.

    Raises:
        PathError: If the path does not exist
        IoError: If removal fails
    """
    target = Path(path)
    if not await asyncio.to_thread(os.path.lexists, target):
        raise PathError(PathErrorKind.NOT_FOUND, "Path does not exist")

    try:
        await asyncio.to_thread(_remove, target)
    except OSError as e:
        raise IoError.from_os_error(e) from e

    logger.info(f"Deleted {target}")


async def rename(old_path: str, new_name: str) -> str:
    """Rename an entry within its own directory.

    Args:
        old_path: Existing file or directory
        new_name: New bare name (not a path)

    Returns:
        Path of the renamed entry

    Raises:
        PathError: If old_path is missing or a filesystem root, or the new
            name is not a bare name or is taken
        IoError: If the rename fails
    """
    source = Path(old_path)
    if not await asyncio.to_thread(os.path.lexists, source):
        raise PathError(PathErrorKind.NOT_FOUND, "Path does not exist")

    if source.parent == source:
        raise PathError(PathErrorKind.NO_PARENT, "Cannot determine parent directory")

    if not _is_bare_name(new_name):
        raise PathError(PathErrorKind.INVALID_NAME, "Invalid file name")

    new_path = source.parent / new_name
    if await asyncio.to_thread(os.path.lexists, new_path):
        raise PathError(PathErrorKind.ALREADY_EXISTS, "A file with that name already exists")

    try:
        await asyncio.to_thread(os.rename, source, new_path)
    except OSError as e:
        raise IoError.from_os_error(e) from e

    logger.info(f"Renamed {source} -> {new_path}")
    return str(new_path)
