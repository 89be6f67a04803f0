"""miku - local storage backend for the Miku markdown editor."""

__version__ = "0.1.0"
