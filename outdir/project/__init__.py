"""
outdir.project - Project tree model, discovery, and error types.
"""

from outdir.project.errors import OutdirError, ConfigurationError, FilesystemError
from outdir.project.model import Project, ProjectTree
from outdir.project.discovery import discover_tree, find_settings_file, parse_settings

__all__ = [
    # Errors
    "OutdirError",
    "ConfigurationError",
    "FilesystemError",
    # Model
    "Project",
    "ProjectTree",
    # Discovery
    "discover_tree",
    "find_settings_file",
    "parse_settings",
]
