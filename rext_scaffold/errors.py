"""Rext scaffold exception classes."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "AppAlreadyExistsError",
    "CurrentDirError",
    "DirectoryCreationError",
    "DirectoryReadError",
    "DirectoryRemovalError",
    "FileRemovalError",
    "FileWriteError",
    "RextScaffoldError",
    "SafetyCheckError",
    "TemplateNotFoundError",
]


class RextScaffoldError(Exception):
    """Base exception for every scaffold and teardown failure."""


class AppAlreadyExistsError(RextScaffoldError):
    """Raised when the target directory already holds a Rext app."""

    def __init__(self, marker: Path) -> None:
        self.marker = marker
        super().__init__(f"Rext app already exists ({marker} is present)")


class CurrentDirError(RextScaffoldError):
    """Raised when the working directory cannot be resolved."""

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(
            f"Failed to get current directory, either does not exist or permission denied: {error}"
        )


class TemplateNotFoundError(RextScaffoldError):
    """Raised when a catalog entry points at a template that is not bundled."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Template {template!r} is not bundled with rext-scaffold.")


class _PathOSError(RextScaffoldError):
    """Shared shape for failures of a filesystem call on a single path."""

    action = "access"

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Failed to {self.action} {path}: {error}")


class DirectoryCreationError(_PathOSError):
    """Raised when a directory cannot be created during generation."""

    action = "create directory"


class FileWriteError(_PathOSError):
    """Raised when a rendered file cannot be written."""

    action = "write file"


class DirectoryReadError(_PathOSError):
    """Raised when a guarded directory cannot be listed during destroy."""

    action = "read directory"


class FileRemovalError(_PathOSError):
    """Raised when a file cannot be removed after the safety checks passed."""

    action = "remove file"


class DirectoryRemovalError(_PathOSError):
    """Raised when a directory cannot be removed after the safety checks passed."""

    action = "remove directory"


class SafetyCheckError(RextScaffoldError):
    """Raised when destroy finds contents it did not create.

    Nothing has been deleted when this is raised.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Safety check failed for {path}: {reason}")
