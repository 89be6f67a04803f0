"""Error types shared by every miku operation.

All errors derive from ``MikuError``; ``str(error)`` is the message shown to
the user, so it is prefixed with the error category the same way for every
operation.
"""

from enum import Enum


class MikuError(Exception):
    """Base class for all miku errors."""

    prefix = "Error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")

    @property
    def message(self) -> str:
        """User-displayable message."""
        return str(self)


class IoError(MikuError):
    """An underlying filesystem call failed."""

    prefix = "IO error"

    @classmethod
    def from_os_error(cls, error: OSError) -> "IoError":
        """Build an IoError from an OSError, keeping its errno and filename."""
        detail = error.strerror or str(error)
        if error.filename is not None:
            detail = f"{detail}: {error.filename}"
        return cls(detail)


class SerializationError(MikuError):
    """A persisted JSON document is corrupt or has the wrong shape."""

    prefix = "JSON error"


class PathErrorKind(str, Enum):
    """Domain-level precondition that was violated."""

    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    NO_PARENT = "no_parent"
    INVALID_NAME = "invalid_name"


class PathError(MikuError):
    """A path precondition failed (target exists, missing, has no parent, bad name)."""

    prefix = "Path error"

    def __init__(self, kind: PathErrorKind, detail: str) -> None:
        self.kind = kind
        super().__init__(detail)
