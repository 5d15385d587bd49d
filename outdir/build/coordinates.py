"""
Repository and classpath declarations.

These are carried verbatim for the external build engine. They are
checked for shape here and never resolved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from outdir.project.errors import ConfigurationError

# Repository shorthands understood by Gradle's RepositoryHandler
KNOWN_REPOSITORIES = ["google", "mavenCentral", "mavenLocal", "gradlePluginPortal"]

_URL_RE = re.compile(r"^https?://\S+$")


@dataclass(frozen=True)
class Coordinate:
    """A ``group:artifact:version`` dependency coordinate."""

    group: str
    artifact: str
    version: str

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


def parse_coordinate(text: str) -> Coordinate:
    """Parse ``group:artifact:version``.

    Raises ConfigurationError unless there are exactly three non-empty parts.
    """
    parts = [p.strip() for p in text.strip().split(":")]
    if len(parts) != 3 or not all(parts):
        raise ConfigurationError(f"invalid dependency coordinate: {text!r} (expected group:artifact:version)")
    return Coordinate(*parts)


def check_repository(name: str) -> str:
    """Return ``name`` if it is a known repository shorthand or an http(s) URL."""
    if name in KNOWN_REPOSITORIES or _URL_RE.match(name):
        return name
    raise ConfigurationError(
        f"unknown repository: {name!r}. Use one of {', '.join(KNOWN_REPOSITORIES)} or an http(s) URL"
    )
