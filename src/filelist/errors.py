"""Exception types raised (or recovered from) by `filelist`."""

from __future__ import annotations

from enum import Enum


class FileListError(Exception):
    """Base exception for all `filelist` errors."""


class ReadErrorKind(Enum):
    """Why a directory could not be enumerated."""

    MISSING = "missing"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    OTHER = "other"

    @classmethod
    def from_os_error(cls, error: OSError) -> ReadErrorKind:
        if isinstance(error, FileNotFoundError):
            return cls.MISSING
        if isinstance(error, PermissionError):
            return cls.PERMISSION_DENIED
        if isinstance(error, NotADirectoryError):
            return cls.NOT_A_DIRECTORY
        return cls.OTHER


class DirectoryReadError(FileListError, OSError):
    """
    A directory could not be read during enumeration. The matcher turns this
    into "zero matches" rather than letting it escape a resolution.
    """

    def __init__(self, path: str, kind: ReadErrorKind, detail: str | None = None) -> None:
        message = f"Could not read path {path} ({kind.value})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.path = path
        self.kind = kind
        self.detail = detail


class ExclusionPatternError(FileListError, ValueError):
    """An exclusion rule cannot be applied to `str` paths."""


class InvalidOptionError(FileListError, ValueError):
    """An unknown or non-boolean match option was passed to `include()`."""


class ConfigError(FileListError, ValueError):
    """A config file value has the wrong type."""
