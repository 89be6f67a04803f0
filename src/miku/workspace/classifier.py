"""Predicates deciding which directory entries belong in a workspace tree."""

from pathlib import PurePath

from miku.config_io import CONTENT_EXTENSIONS, EXCLUDED_DIRECTORY_NAMES, HIDDEN_PREFIX


def is_excluded_entry(name: str) -> bool:
    """Check if an entry (and everything below it) is skipped.

    Args:
        name: Entry name, not a path

    Returns:
        True for hidden entries and known dependency/build directories
    """
    return name.startswith(HIDDEN_PREFIX) or name in EXCLUDED_DIRECTORY_NAMES


def is_content_file(path: str | PurePath) -> bool:
    """Check if a file is a markdown document, by extension."""
    suffix = PurePath(path).suffix
    return suffix[1:].lower() in CONTENT_EXTENSIONS if suffix else False
