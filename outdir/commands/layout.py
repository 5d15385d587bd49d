"""outdir layout / order -- Show resolved build directories and evaluation order."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from outdir.build.config import Workspace, load_workspace
from outdir.core.utils import log
from outdir.relocate import evaluation_order


def _load(args: argparse.Namespace) -> Workspace:
    config = Path(args.config) if getattr(args, "config", None) else None
    return load_workspace(Path(args.root_dir), config)


def format_layout_json(workspace: Workspace) -> str:
    """Serialize the workspace layout for scripts."""
    data = {
        "root_dir": str(workspace.root_dir),
        "config": str(workspace.config_path) if workspace.config_path else None,
        "alternate_root": str(workspace.alternate_root),
        "projects": [p.to_dict() for p in workspace.tree],
        "repositories": workspace.settings.repositories,
        "classpath": [str(c) for c in workspace.settings.coordinates()],
    }
    return json.dumps(data, indent=2)


def cmd_layout(args: argparse.Namespace) -> int:
    """Handle 'outdir layout' command."""
    workspace = _load(args)

    if getattr(args, "json", False):
        print(format_layout_json(workspace))
        return 0

    log.header(f"Layout: {workspace.tree.root.name}")
    if workspace.config_path:
        log.info(f"Settings: {workspace.config_path}", style="dim")
    width = max(len(p.path) for p in workspace.tree) + 2
    for project in workspace.tree:
        log.info(f"{project.path:<{width}} {project.build_directory}")

    log.header("Repositories")
    for name in workspace.settings.repositories:
        log.info(name)

    log.header("Classpath")
    for coordinate in workspace.settings.coordinates():
        log.info(str(coordinate))

    return 0


def cmd_order(args: argparse.Namespace) -> int:
    """Handle 'outdir order' command."""
    workspace = _load(args)

    log.header("Evaluation order")
    for i, project in enumerate(evaluation_order(workspace.tree), 1):
        deps = ", ".join(project.evaluation_depends_on)
        suffix = f"  (after {deps})" if deps else ""
        log.info(f"{i}. {project.path}{suffix}")
    return 0
