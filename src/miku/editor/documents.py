"""Open, save and create editor documents."""

import asyncio
import logging
from pathlib import Path

from miku.editor.models import Document
from miku.errors import IoError

logger = logging.getLogger(__name__)


async def open_file(path: str) -> Document:
    """Read a document from disk.

    Raises:
        IoError: If the file cannot be read as UTF-8 text
    """
    try:
        content = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except OSError as e:
        raise IoError.from_os_error(e) from e
    except UnicodeDecodeError as e:
        raise IoError(f"Cannot read file as text: {path}") from e

    return Document(path=path, content=content, is_modified=False)


async def save_file(path: str, content: str) -> None:
    """Write document content to disk, replacing the file."""
    try:
        await asyncio.to_thread(Path(path).write_text, content, encoding="utf-8")
    except OSError as e:
        raise IoError.from_os_error(e) from e
    logger.debug(f"Saved {path} ({len(content)} chars)")


def new_document() -> Document:
    """Create an empty, unsaved document."""
    return Document()
