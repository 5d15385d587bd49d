"""
Project tree discovery from Gradle settings scripts.

Reads ``rootProject.name`` and the ``include`` declarations of
settings.gradle.kts / settings.gradle. Only string literals are understood;
anything computed at configuration time is ignored.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from outdir.core.utils import SETTINGS_FILENAMES
from outdir.project.model import ProjectTree

logger = logging.getLogger(__name__)

_ROOT_NAME_RE = re.compile(r'^\s*rootProject\.name\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)

# include(":a", ":b") possibly spanning lines, or Groovy's include ':a', ':b'
_INCLUDE_RE = re.compile(r'^\s*include\b\s*(?:\(([^)]*)\)|([^\n]*))', re.MULTILINE)

_STRING_RE = re.compile(r'["\']([^"\']+)["\']')

_LINE_COMMENT_RE = re.compile(r'^\s*//.*$', re.MULTILINE)


def find_settings_file(root_dir: Path) -> Optional[Path]:
    """Return the settings script in ``root_dir``, preferring the Kotlin DSL."""
    for filename in SETTINGS_FILENAMES:
        candidate = root_dir / filename
        if candidate.is_file():
            return candidate
    return None


def parse_settings(content: str) -> tuple[Optional[str], list[str]]:
    """Extract (root project name, included project paths) from a settings script."""
    content = _LINE_COMMENT_RE.sub("", content)

    match = _ROOT_NAME_RE.search(content)
    root_name = match.group(1) if match else None

    includes: list[str] = []
    for match in _INCLUDE_RE.finditer(content):
        args = match.group(1) if match.group(1) is not None else match.group(2)
        includes.extend(_STRING_RE.findall(args))

    return root_name, includes


def project_dir_for(root_dir: Path, include_path: str) -> Path:
    """Map a Gradle project path (``:a:b``) to its default directory."""
    segments = [s for s in include_path.split(":") if s]
    return root_dir.joinpath(*segments)


def discover_tree(root_dir: Path, root_name: Optional[str] = None) -> ProjectTree:
    """Build a ProjectTree from the settings script in ``root_dir``.

    The root name comes from ``rootProject.name``, then ``root_name``, then
    the directory name. Each include becomes a subproject named after its
    last path segment. Without a settings script the tree has no
    subprojects.
    """
    settings_file = find_settings_file(root_dir)
    if settings_file is None:
        logger.debug("No settings script in %s", root_dir)
        return ProjectTree.create(root_name or root_dir.name, root_dir=root_dir)

    declared_name, includes = parse_settings(settings_file.read_text(encoding="utf-8"))
    tree = ProjectTree.create(declared_name or root_name or root_dir.name, root_dir=root_dir)

    for include_path in includes:
        segments = [s for s in include_path.split(":") if s]
        if not segments:
            logger.debug("Skipping empty include %r in %s", include_path, settings_file)
            continue
        tree.add(segments[-1], project_dir_for(root_dir, include_path))

    logger.debug(
        "Discovered %d subproject(s) from %s", len(tree.subprojects), settings_file
    )
    return tree
