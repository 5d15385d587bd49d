"""
outdir.build - Workspace settings and classpath declarations.
"""

from outdir.build.config import (
    DEFAULT_REPOSITORIES,
    DEFAULT_CLASSPATH,
    LayoutSettings,
    Workspace,
    load_settings,
    load_workspace,
)
from outdir.build.coordinates import (
    KNOWN_REPOSITORIES,
    Coordinate,
    check_repository,
    parse_coordinate,
)

__all__ = [
    # Constants
    "DEFAULT_REPOSITORIES",
    "DEFAULT_CLASSPATH",
    "KNOWN_REPOSITORIES",
    # Settings
    "LayoutSettings",
    "Workspace",
    "load_settings",
    "load_workspace",
    # Coordinates
    "Coordinate",
    "check_repository",
    "parse_coordinate",
]
