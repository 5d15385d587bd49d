"""
Build-output relocation for a multi-project tree.

relocate() points the root project's build directory at an alternate root
and nests every subproject under it by name. link_evaluation_order()
records that subproject configuration runs after a primary project.
clean() deletes the assigned directories.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from outdir.core.utils import DEFAULT_ALTERNATE_ROOT, DEFAULT_BUILD_DIRNAME, get_dir_size
from outdir.project.errors import ConfigurationError, FilesystemError
from outdir.project.model import Project, ProjectTree

logger = logging.getLogger(__name__)


# =============================================================================
# Validation
# =============================================================================


def _check_name(name: str) -> None:
    """Reject names that are not a single path segment."""
    if not name or name in (".", "..") or "/" in name or "\\" in name or os.sep in name:
        raise ConfigurationError(f"invalid project name: {name!r}")


def validate_tree(tree: ProjectTree) -> None:
    """Raise ConfigurationError on duplicate or unusable project names.

    The root counts as a member: a subproject may not reuse its name.
    """
    seen: set[str] = set()
    for project in tree:
        if not project.is_root:
            _check_name(project.name)
        if project.name in seen:
            raise ConfigurationError(f"duplicate project name: {project.name}")
        seen.add(project.name)


# =============================================================================
# Relocation
# =============================================================================


def resolve_alternate_root(root_dir: Path, expression: str = DEFAULT_ALTERNATE_ROOT) -> Path:
    """Resolve an alternate-root expression against ``root_dir / "build"``.

    ``..`` segments are collapsed lexically; the filesystem is not
    consulted. Absolute expressions are returned normalized.
    """
    expr = Path(expression).expanduser()
    if expr.is_absolute():
        return Path(os.path.normpath(expr))
    default_build = root_dir / DEFAULT_BUILD_DIRNAME
    return Path(os.path.normpath(default_build / expr))


def relocate(tree: ProjectTree, alternate_root: Path) -> ProjectTree:
    """Assign every project's build directory under ``alternate_root``.

    The root gets ``alternate_root`` itself; each subproject gets
    ``alternate_root / name``. The tree is validated first and left
    untouched on error. Returns ``tree``.
    """
    validate_tree(tree)
    alternate_root = Path(alternate_root)

    tree.root.build_directory = alternate_root
    for project in tree.subprojects:
        project.build_directory = alternate_root / project.name

    logger.debug("Relocated %d project(s) under %s", len(tree), alternate_root)
    return tree


# =============================================================================
# Evaluation Order
# =============================================================================


def link_evaluation_order(tree: ProjectTree, primary: Union[Project, str]) -> ProjectTree:
    """Order every subproject's configuration after ``primary``.

    ``primary`` is a member Project, a name, or a ``:name`` path. The
    primary itself gets no self-edge and repeated calls add nothing new.
    Returns ``tree``.
    """
    target = tree.find(primary)
    if target is None:
        ref = primary.name if isinstance(primary, Project) else primary
        raise ConfigurationError(f"unknown project reference: {ref}")

    for project in tree.subprojects:
        if project is target:
            continue
        if target.name not in project.evaluation_depends_on:
            project.evaluation_depends_on.append(target.name)

    logger.debug("Subprojects of %s evaluate after %s", tree.root.name, target.path)
    return tree


def evaluation_order(tree: ProjectTree) -> list[Project]:
    """Return projects in an order that satisfies every evaluation dependency.

    The root comes first; among ready projects insertion order is kept.
    """
    order: list[Project] = []
    placed: set[str] = set()
    pending = list(tree)

    while pending:
        ready = [p for p in pending if all(dep in placed for dep in p.evaluation_depends_on)]
        if not ready:
            unknown = sorted(
                {dep for p in pending for dep in p.evaluation_depends_on}
                - {p.name for p in tree}
            )
            if unknown:
                raise ConfigurationError(f"unknown project reference: {', '.join(unknown)}")
            names = ", ".join(p.name for p in pending)
            raise ConfigurationError(f"evaluation order cycle between: {names}")
        head = ready[0]
        order.append(head)
        placed.add(head.name)
        pending.remove(head)

    return order


# =============================================================================
# Cleaning
# =============================================================================


@dataclass
class CleanResult:
    """Outcome of cleaning a single project."""

    project: str
    path: Path
    size: int = 0
    status: str = "clean"  # "removed", "clean" (already absent), or "failed"
    error: Optional[FilesystemError] = None


@dataclass
class CleanReport:
    """Outcome of clean() across the whole tree."""

    results: list[CleanResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.status != "failed" for r in self.results)

    @property
    def failures(self) -> list[FilesystemError]:
        return [r.error for r in self.results if r.error is not None]

    @property
    def removed(self) -> list[Path]:
        return [r.path for r in self.results if r.status == "removed"]

    @property
    def total_size(self) -> int:
        return sum(r.size for r in self.results if r.status == "removed")


def _remove_path(path: Path) -> None:
    """Delete ``path`` without following a top-level symlink."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    else:
        shutil.rmtree(path)


def _clear_directory(path: Path, keep: set[Path]) -> list[OSError]:
    """Delete every entry of ``path`` except ``keep``, then ``path`` once empty.

    Each entry is attempted even after an earlier one failed.
    """
    errors: list[OSError] = []
    for entry in sorted(path.iterdir()):
        if entry in keep:
            continue
        try:
            _remove_path(entry)
        except FileNotFoundError:
            pass
        except OSError as e:
            errors.append(e)

    if not errors and not any(path.iterdir()):
        path.rmdir()
    return errors


def clean_project(project: Project, keep: Iterable[Path] = ()) -> CleanResult:
    """Delete one project's build directory.

    Entries listed in ``keep`` belong to other projects and are left alone;
    the directory itself then stays if any of them is still present.
    OSErrors are captured on the result, never raised.
    """
    path = project.build_directory
    if path is None:
        raise ConfigurationError(f"build directory not assigned: {project.name}")

    result = CleanResult(project=project.name, path=path)
    if not path.exists() and not path.is_symlink():
        return result

    keep = set(keep)
    try:
        if keep and path.is_dir() and not path.is_symlink():
            result.size = sum(get_dir_size(e) for e in path.iterdir() if e not in keep)
            errors = _clear_directory(path, keep)
            if errors:
                raise errors[0]
        else:
            result.size = get_dir_size(path)
            _remove_path(path)
    except FileNotFoundError:
        # Already gone, e.g. deleted together with a sibling
        result.size = 0
        return result
    except OSError as e:
        result.status = "failed"
        result.error = FilesystemError(project.name, path, e)
        logger.debug("Failed to delete %s: %s", path, e)
        return result

    result.status = "removed"
    logger.debug("Removed %s", path)
    return result


def clean(tree: ProjectTree) -> CleanReport:
    """Delete every project's build directory, subprojects before the root.

    Every project is attempted even after a failure; ``report.ok`` is true
    only if nothing failed. The root skips subproject directories, so a
    subproject that could not be deleted neither blocks nor is blamed on
    the root. Raises ConfigurationError if any project has no assigned
    directory, before deleting anything.
    """
    for project in tree:
        if project.build_directory is None:
            raise ConfigurationError(f"build directory not assigned: {project.name}")

    report = CleanReport()
    for project in tree.subprojects:
        report.results.append(clean_project(project))

    owned = [p.build_directory for p in tree.subprojects]
    report.results.append(clean_project(tree.root, keep=owned))
    return report
