"""
outdir.core - Foundation layer for the outdir CLI.

Exports logging, constants, and size helpers.
"""

from outdir.core.utils import (
    # Logging
    log,
    Logger,
    # Constants
    CONFIG_FILENAME,
    SETTINGS_FILENAMES,
    DEFAULT_BUILD_DIRNAME,
    DEFAULT_ALTERNATE_ROOT,
    DEFAULT_PRIMARY,
    # Size utilities
    get_dir_size,
    format_size,
)

__all__ = [
    # Logging
    "log",
    "Logger",
    # Constants
    "CONFIG_FILENAME",
    "SETTINGS_FILENAMES",
    "DEFAULT_BUILD_DIRNAME",
    "DEFAULT_ALTERNATE_ROOT",
    "DEFAULT_PRIMARY",
    # Size utilities
    "get_dir_size",
    "format_size",
]
