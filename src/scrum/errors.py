"""Exception hierarchy for the scrum CLI."""

from __future__ import annotations


class ScrumError(Exception):
    """Base exception for all scrum-specific errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ScrumError):
    """Raised when configuration or flag values are invalid."""


class ConflictingFlagsError(ConfigurationError):
    """Raised when mutually exclusive flags are combined."""


class StorageError(ScrumError):
    """Raised when the object store rejects or fails a request."""


class DirectoryNotFoundError(StorageError):
    """Raised when the directory containing a path does not exist."""


class ResourceNotFoundError(StorageError):
    """Raised when the directory exists but the object does not."""


class LocalFileError(ScrumError):
    """Raised when a local input file cannot be read."""


class PagerError(ScrumError):
    """Raised when the pager cannot be started."""


def wrap(context: str, exc: BaseException) -> str:
    """Prefix an underlying error with what we were trying to do."""
    return f"{context}: {exc}"
