"""
Main CLI for the outdir tool.

Relocates the build outputs of a multi-project tree and cleans them.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from outdir.core.utils import log
from outdir.project.errors import OutdirError


# =============================================================================
# Version
# =============================================================================

__version__ = "0.1.0"


# =============================================================================
# Argument Parsing
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""

    # Main parser
    parser = argparse.ArgumentParser(
        prog="outdir",
        description="Relocate and clean build outputs of a multi-project tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  clean        Delete every project's relocated build directory
  layout       Show each project's resolved build directory
  order        Show the configuration evaluation order

Examples:
  outdir clean                            # Clean the tree in the current directory
  outdir --root-dir android clean         # Clean another tree
  outdir layout --json                    # Resolved layout as JSON
  outdir --config ci/outdir.yaml order    # Use an explicit settings file
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--root-dir",
        default=os.getcwd(),
        help="Root project directory (default: current directory)",
    )

    parser.add_argument(
        "--config",
        help="Settings file (default: <root-dir>/outdir.yaml)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    # Subparsers
    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- clean ---
    subparsers.add_parser(
        "clean",
        help="Delete relocated build directories",
        description="Delete the build directory of every project, including the relocated root.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Subproject directories are removed first, then the root. A directory that
cannot be deleted is reported and the remaining ones are still attempted.
Exits 1 if anything could not be deleted.
        """,
    )

    # --- layout ---
    layout_parser = subparsers.add_parser(
        "layout",
        help="Show resolved build directories",
        description="Show each project's build directory, repositories, and classpath.",
    )
    layout_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # --- order ---
    subparsers.add_parser(
        "order",
        help="Show the configuration evaluation order",
        description="List projects in the order their configuration is evaluated.",
    )

    return parser


# =============================================================================
# Command Dispatch
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle --no-color
    if args.no_color:
        log.set_color(False)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # No command specified
    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handler
    try:
        if args.command == "clean":
            from outdir.commands.clean import cmd_clean
            return cmd_clean(args)

        elif args.command == "layout":
            from outdir.commands.layout import cmd_layout
            return cmd_layout(args)

        elif args.command == "order":
            from outdir.commands.layout import cmd_order
            return cmd_order(args)

        else:
            log.error(f"Unknown command: {args.command}")
            return 1

    except KeyboardInterrupt:
        log.warning("\nInterrupted")
        return 130
    except OutdirError as e:
        log.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
