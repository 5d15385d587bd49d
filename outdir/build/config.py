"""
Workspace configuration for outdir.

Settings model, outdir.yaml loading, and workspace assembly
(discovery + relocation + evaluation-order linking).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from outdir.build.coordinates import Coordinate, check_repository, parse_coordinate
from outdir.core.utils import CONFIG_FILENAME, DEFAULT_ALTERNATE_ROOT, DEFAULT_PRIMARY
from outdir.project.discovery import discover_tree
from outdir.project.errors import ConfigurationError
from outdir.project.model import ProjectTree
from outdir.relocate import link_evaluation_order, relocate, resolve_alternate_root

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_REPOSITORIES",
    "DEFAULT_CLASSPATH",
    "LayoutSettings",
    "Workspace",
    "load_settings",
    "load_workspace",
]

DEFAULT_REPOSITORIES = ["google", "mavenCentral"]

DEFAULT_CLASSPATH = [
    "com.android.tools.build:gradle:8.2.2",
    "org.jetbrains.kotlin:kotlin-gradle-plugin:1.8.21",
    "com.google.gms:google-services:4.3.15",
]


# =============================================================================
# Settings Model
# =============================================================================


class LayoutSettings(BaseModel):
    """Contents of outdir.yaml."""

    model_config = ConfigDict(extra="forbid")

    root_name: Optional[str] = Field(None, description="Root project name (default: discovered)")
    alternate_root: str = Field(
        DEFAULT_ALTERNATE_ROOT, description="Relocated base, relative to <root>/build or absolute"
    )
    primary: Optional[str] = Field(
        DEFAULT_PRIMARY, description="Project evaluated before all others; null disables linking"
    )
    projects: Optional[List[str]] = Field(
        None, description="Explicit subproject names (default: read settings.gradle)"
    )
    repositories: List[str] = Field(default_factory=lambda: list(DEFAULT_REPOSITORIES))
    classpath: List[str] = Field(default_factory=lambda: list(DEFAULT_CLASSPATH))

    @field_validator("repositories")
    @classmethod
    def _check_repositories(cls, value: List[str]) -> List[str]:
        for name in value:
            try:
                check_repository(name)
            except ConfigurationError as e:
                raise ValueError(str(e)) from e
        return value

    @field_validator("classpath")
    @classmethod
    def _check_classpath(cls, value: List[str]) -> List[str]:
        for text in value:
            try:
                parse_coordinate(text)
            except ConfigurationError as e:
                raise ValueError(str(e)) from e
        return value

    def coordinates(self) -> list[Coordinate]:
        return [parse_coordinate(text) for text in self.classpath]


def load_settings(path: Path, required: bool = False) -> LayoutSettings:
    """Load and validate a settings file.

    A missing file yields the defaults unless ``required`` is set. An
    unreadable file, malformed YAML, or invalid values raise
    ConfigurationError.
    """
    if not path.exists():
        if required:
            raise ConfigurationError(f"settings file not found: {path}")
        logger.debug("No settings file at %s, using defaults", path)
        return LayoutSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{path}: invalid YAML: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"{path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a mapping at top level")

    try:
        return LayoutSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"{path}: {e}") from e


# =============================================================================
# Workspace
# =============================================================================


@dataclass
class Workspace:
    """A configured project tree plus the settings it came from."""

    root_dir: Path
    settings: LayoutSettings
    tree: ProjectTree
    alternate_root: Path
    config_path: Optional[Path] = None


def load_workspace(root_dir: Path, config_path: Optional[Path] = None) -> Workspace:
    """Discover, relocate, and link the project tree rooted at ``root_dir``.

    An explicit ``config_path`` must exist; the default <root>/outdir.yaml
    is optional. Raises ConfigurationError on invalid or missing settings,
    duplicate names, or an unknown primary project.
    """
    root_dir = Path(root_dir).resolve()
    explicit = config_path is not None
    if config_path is None:
        config_path = root_dir / CONFIG_FILENAME
    settings = load_settings(config_path, required=explicit)

    if settings.projects is not None:
        tree = ProjectTree.create(
            settings.root_name or root_dir.name, settings.projects, root_dir=root_dir
        )
    else:
        tree = discover_tree(root_dir, settings.root_name)
        if settings.root_name:
            tree.root.name = settings.root_name

    alternate_root = resolve_alternate_root(root_dir, settings.alternate_root)
    relocate(tree, alternate_root)

    # The default primary is optional; an explicit one must exist
    primary = settings.primary
    if primary and ("primary" in settings.model_fields_set or tree.find(primary) is not None):
        link_evaluation_order(tree, primary)
    elif primary:
        logger.debug("Default primary %r not in tree, skipping evaluation order", primary)

    return Workspace(
        root_dir=root_dir,
        settings=settings,
        tree=tree,
        alternate_root=alternate_root,
        config_path=config_path if config_path.exists() else None,
    )
