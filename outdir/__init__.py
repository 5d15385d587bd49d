"""
outdir - Build-output relocation for multi-project trees.

Points a root project's build directory at an alternate root, nests each
subproject's outputs under it by name, orders subproject configuration
after a primary project, and cleans the result.

Usage:
    python -m outdir <command> [options]

Commands:
    clean        Delete relocated build directories
    layout       Show resolved build directories
    order        Show the configuration evaluation order
"""

from .cli import __version__, main
from .project import ConfigurationError, FilesystemError, OutdirError, Project, ProjectTree
from .relocate import (
    CleanReport,
    clean,
    evaluation_order,
    link_evaluation_order,
    relocate,
    resolve_alternate_root,
)

__all__ = [
    "__version__",
    "main",
    # Model
    "Project",
    "ProjectTree",
    # Errors
    "OutdirError",
    "ConfigurationError",
    "FilesystemError",
    # Relocation
    "CleanReport",
    "clean",
    "evaluation_order",
    "link_evaluation_order",
    "relocate",
    "resolve_alternate_root",
]
