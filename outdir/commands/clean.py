"""outdir clean -- Remove relocated build directories."""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from outdir.build.config import load_workspace
from outdir.core.utils import format_size, log
from outdir.relocate import clean


def cmd_clean(args: argparse.Namespace) -> int:
    """Handle 'outdir clean' command."""
    config = Path(args.config) if getattr(args, "config", None) else None
    workspace = load_workspace(Path(args.root_dir), config)

    log.header(f"CLEAN: {workspace.tree.root.name}")
    log.info(f"Alternate root: {workspace.alternate_root}", style="dim")

    start = time.monotonic()
    report = clean(workspace.tree)
    elapsed = time.monotonic() - start

    for failure in report.failures:
        log.error(str(failure))

    # Print summary table
    print()
    log.header("Summary")

    name_w = max(len(r.project) for r in report.results)
    for result in report.results:
        size = format_size(result.size) if result.status == "removed" else "-"
        log.info(f"{result.project:<{name_w}}  {size:>9}  {result.status}")

    print()
    log.info(f"Total: {format_size(report.total_size)} in {elapsed:.2f}s")

    if not report.ok:
        log.error(f"{len(report.failures)} build directory(ies) could not be deleted")
        return 1

    log.success("Clean")
    return 0
