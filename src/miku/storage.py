"""Whole-document JSON persistence under the app data directory.

Every persisted document is read in full and written in full. Writes go to
a temp file in the target's directory and are moved into place with
``os.replace``, so readers only ever see the old or the new document.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from miku.errors import IoError, SerializationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _read_text(path: Path) -> str | None:
    """Read a document, or None if it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise IoError.from_os_error(e) from e


def _write_text_atomic(path: Path, content: str) -> None:
    """Write content to path through a temp file and an atomic rename."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        raise IoError.from_os_error(e) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except Exception as e:
        try:
            os.remove(tmp_path)
        except FileNotFoundError:
            pass
        if isinstance(e, OSError):
            raise IoError.from_os_error(e) from e
        raise


async def read_json(path: Path) -> Any | None:
    """Read and decode a JSON document.

    Args:
        path: Document path

    Returns:
        The decoded JSON value, or None if the file does not exist

    Raises:
        IoError: If the file exists but cannot be read
        SerializationError: If the content is not valid JSON
    """
    content = await asyncio.to_thread(_read_text, path)
    if content is None:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise SerializationError(f"{path.name}: {e}") from e


async def write_json(path: Path, data: Any) -> None:
    """Encode data as pretty-printed JSON and write it atomically.

    Args:
        path: Document path (parent directories are created)
        data: JSON-serializable value

    Raises:
        IoError: If the document cannot be written
        SerializationError: If a string in data cannot be encoded as UTF-8
    """
    content = json.dumps(data, indent=2, ensure_ascii=False)
    try:
        await asyncio.to_thread(_write_text_atomic, path, content)
    except UnicodeError as e:
        raise SerializationError(f"{path.name}: {e}") from e
    logger.debug(f"Wrote {path}")


async def load_model(path: Path, model_cls: type[ModelT]) -> ModelT:
    """Load a JSON document into a pydantic model.

    A missing document yields the model's defaults.

    Raises:
        IoError: If the file exists but cannot be read
        SerializationError: If the content is not valid JSON or fails validation
    """
    data = await read_json(path)
    if data is None:
        return model_cls()
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise SerializationError(f"{path.name}: {e}") from e


async def save_model(path: Path, model: BaseModel) -> None:
    """Persist a pydantic model as a JSON document."""
    await write_json(path, model.model_dump(mode="json"))
