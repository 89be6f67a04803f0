"""Data models for editor settings and open documents."""

from pydantic import BaseModel, Field


class EditorSettings(BaseModel):
    """User preferences for the editor."""

    theme: str = "system"
    font_size: int = Field(default=16, ge=1)
    line_height: float = 1.6
    editor_width: int = 720
    font_family: str = "mono"
    review_mode: str = "manual"
    aggressiveness: str = "balanced"
    writing_context: str = ""
    sound_enabled: bool = True


class Document(BaseModel):
    """A document loaded in the editor."""

    path: str | None = Field(default=None, description="File path (None for unsaved documents)")
    content: str = Field(default="", description="Document text")
    is_modified: bool = Field(default=False, description="Whether there are unsaved changes")
