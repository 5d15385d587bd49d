"""Error types raised while configuring and cleaning a project tree."""

from __future__ import annotations

from pathlib import Path


class OutdirError(Exception):
    """Base class for all outdir errors."""


class ConfigurationError(OutdirError):
    """The project tree or settings are invalid.

    Raised before any directory is assigned or deleted.
    """


class FilesystemError(OutdirError):
    """A project's build directory could not be deleted."""

    def __init__(self, project: str, path: Path, cause: OSError):
        self.project = project
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"{project}: could not delete {path} ({reason})")
