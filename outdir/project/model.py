"""
Project tree data structures.

A ProjectTree is a root Project plus its subprojects, in insertion order.
Projects carry their resolved build directory and the names of the
projects their configuration must be evaluated after.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class Project:
    """A unit of buildable code with its own output directory."""

    name: str
    project_dir: Optional[Path] = None
    build_directory: Optional[Path] = None
    parent: Optional["Project"] = field(default=None, repr=False, compare=False)
    evaluation_depends_on: list[str] = field(default_factory=list)

    @property
    def path(self) -> str:
        """Gradle-style project path (``:`` for the root, ``:name`` otherwise)."""
        if self.parent is None:
            return ":"
        return f":{self.name}"

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "project_dir": str(self.project_dir) if self.project_dir else None,
            "build_directory": str(self.build_directory) if self.build_directory else None,
            "evaluation_depends_on": list(self.evaluation_depends_on),
        }


@dataclass
class ProjectTree:
    """The root project plus its subprojects."""

    root: Project
    subprojects: list[Project] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        root_name: str,
        subproject_names: list[str] | None = None,
        root_dir: Optional[Path] = None,
    ) -> "ProjectTree":
        """Build a tree from plain names.

        Subproject directories default to ``root_dir / name`` when
        ``root_dir`` is given.
        """
        tree = cls(root=Project(name=root_name, project_dir=root_dir))
        for name in subproject_names or []:
            tree.add(name, root_dir / name if root_dir else None)
        return tree

    def add(self, name: str, project_dir: Optional[Path] = None) -> Project:
        """Append a subproject parented to the root and return it."""
        project = Project(name=name, project_dir=project_dir, parent=self.root)
        self.subprojects.append(project)
        return project

    @property
    def all_projects(self) -> list[Project]:
        """Root first, then subprojects in insertion order."""
        return [self.root, *self.subprojects]

    def __iter__(self) -> Iterator[Project]:
        return iter(self.all_projects)

    def __len__(self) -> int:
        return 1 + len(self.subprojects)

    def find(self, ref: Union[str, Project]) -> Optional[Project]:
        """Look up a member project by instance, name, or Gradle path.

        A path such as ``:feature:login`` resolves by its last segment,
        the same way discovery names included projects. Returns None when
        ``ref`` does not belong to this tree.
        """
        if isinstance(ref, Project):
            for project in self:
                if project is ref:
                    return project
            return None

        segments = [s for s in ref.split(":") if s]
        if not segments:
            return self.root if ref.startswith(":") else None
        name = segments[-1]
        for project in self:
            if project.name == name:
                return project
        return None

    def to_dict(self) -> dict:
        return {
            "root": self.root.to_dict(),
            "subprojects": [p.to_dict() for p in self.subprojects],
        }
