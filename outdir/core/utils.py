"""
Shared utilities for the outdir CLI.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

# =============================================================================
# Constants
# =============================================================================

# Settings file looked up in the root project directory
CONFIG_FILENAME = "outdir.yaml"

# Gradle settings scripts, in lookup order
SETTINGS_FILENAMES = ["settings.gradle.kts", "settings.gradle"]

# Name of a project's default build directory
DEFAULT_BUILD_DIRNAME = "build"

# Relocated base, relative to the root project's default build directory
DEFAULT_ALTERNATE_ROOT = "../../build"

# Project whose configuration every other subproject is evaluated after
DEFAULT_PRIMARY = "app"


# =============================================================================
# Logging
# =============================================================================

_ANSI = {
    "red": "91",
    "green": "92",
    "yellow": "93",
    "cyan": "96",
    "bold": "1",
    "dim": "2",
}


class Logger:
    """Console output for outdir commands.

    Status lines carry a fixed tag (``[OK]``, ``[WARN]``, ``[ERROR]``) so
    they stay greppable with color turned off.
    """

    TAGS = {
        "success": ("[OK]", "green"),
        "warning": ("[WARN]", "yellow"),
        "error": ("[ERROR]", "red"),
    }

    def __init__(self, use_color: Optional[bool] = None):
        self._use_color = sys.stdout.isatty() if use_color is None else use_color

    def set_color(self, use_color: bool) -> None:
        self._use_color = use_color

    def paint(self, text: str, style: str) -> str:
        if not self._use_color or style not in _ANSI:
            return text
        return f"\033[{_ANSI[style]}m{text}\033[0m"

    def _emit(self, kind: str, message: str) -> None:
        tag, style = self.TAGS[kind]
        print(f"  {self.paint(tag, style)} {message}")

    def header(self, message: str) -> None:
        print(f"\n{self.paint('==', 'cyan')} {self.paint(message, 'bold')}")

    def info(self, message: str, style: str = "") -> None:
        print(f"  {self.paint(message, style)}")

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)


# Global logger instance
log = Logger()


# =============================================================================
# Size Utilities
# =============================================================================


def get_dir_size(path: Path) -> int:
    """Get total size of a directory in bytes.

    Symlinks are not followed, so the size never includes anything
    outside ``path``.
    """
    if path.is_symlink() or not path.exists():
        return 0
    if path.is_file():
        return path.stat().st_size
    total = 0
    try:
        for entry in path.rglob("*"):
            if entry.is_file() and not entry.is_symlink():
                try:
                    total += entry.stat().st_size
                except OSError:
                    pass
    except OSError:
        pass
    return total


def format_size(size_bytes: float) -> str:
    """Format bytes as human-readable string."""
    if size_bytes == 0:
        return "0 B"
    for unit in ("B", "KB", "MB", "GB"):
        if size_bytes < 1024:
            if unit == "B":
                return f"{int(size_bytes)} {unit}"
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"
