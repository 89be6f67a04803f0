"""Editor module: settings, recent files and documents."""

from miku.editor.documents import new_document, open_file, save_file
from miku.editor.models import Document, EditorSettings
from miku.editor.store import RecentFilesStore, SettingsStore

__all__ = [
    "Document",
    "EditorSettings",
    "RecentFilesStore",
    "SettingsStore",
    "new_document",
    "open_file",
    "save_file",
]
