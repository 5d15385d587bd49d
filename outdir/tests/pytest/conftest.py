"""
Shared pytest fixtures for outdir tests.

Provides fixtures for creating isolated project trees on disk and for
running the CLI in-process.

Test Tier Markers:
  @pytest.mark.evergreen - Tests that always run, never skip (production tests)
  @pytest.mark.dev       - Development/WIP tests, toggle-able
  @pytest.mark.temporary - Tests with explicit discard flag
"""

from __future__ import annotations

import io
from contextlib import redirect_stdout
from pathlib import Path

import pytest

from outdir.core.utils import log


# =============================================================================
# Test Data Constants
# =============================================================================

SETTINGS_KTS = """\
pluginManagement {
    includeBuild("../tools/gradle")
}

rootProject.name = "android"
include(":app")
include(":lib-a", ":lib-b")
"""


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test tiers."""
    config.addinivalue_line(
        "markers",
        "evergreen: tests that always run, never skip (production tests)"
    )
    config.addinivalue_line(
        "markers",
        "dev: development/WIP tests, toggle-able for active development"
    )
    config.addinivalue_line(
        "markers",
        "temporary: tests with explicit discard flag"
    )


@pytest.fixture(autouse=True)
def _plain_output() -> None:
    """Keep ANSI codes out of captured output."""
    log.set_color(False)


# =============================================================================
# Project Tree Fixtures
# =============================================================================


def populate_build_dir(path: Path, files: int = 2) -> Path:
    """Create ``path`` with a few output files and a nested directory."""
    (path / "intermediates").mkdir(parents=True, exist_ok=True)
    for i in range(files):
        (path / f"output-{i}.bin").write_bytes(b"\x00" * 64)
    (path / "intermediates" / "classes.jar").write_bytes(b"\x00" * 128)
    return path


@pytest.fixture
def android_root(tmp_path: Path) -> Path:
    """A root project at <tmp>/project/android with app, lib-a, and lib-b.

    With the default alternate root (``../../build``) outputs land in
    <tmp>/project/build.
    """
    root = tmp_path / "project" / "android"
    root.mkdir(parents=True)
    (root / "settings.gradle.kts").write_text(SETTINGS_KTS, encoding="utf-8")
    for name in ("app", "lib-a", "lib-b"):
        (root / name).mkdir()
    return root


@pytest.fixture
def built_android_root(android_root: Path, tmp_path: Path) -> Path:
    """android_root with every relocated build directory populated."""
    out = tmp_path / "project" / "build"
    populate_build_dir(out)
    for name in ("app", "lib-a", "lib-b"):
        populate_build_dir(out / name)
    return android_root


# =============================================================================
# CLI Runner
# =============================================================================


class CLIResult:
    """Result of running a CLI command."""

    def __init__(self, returncode: int, stdout: str):
        self.returncode = returncode
        self.stdout = stdout

    def __repr__(self) -> str:
        return f"CLIResult(returncode={self.returncode}, stdout={self.stdout[:100]!r}...)"


class CLIRunner:
    """Helper class to run CLI commands in-process with captured output."""

    def run(self, args: list[str]) -> CLIResult:
        """Run CLI with given args (without the 'outdir' prefix)."""
        from outdir.cli import main

        stdout_capture = io.StringIO()

        with redirect_stdout(stdout_capture):
            try:
                returncode = main(args)
            except SystemExit as e:
                returncode = e.code if isinstance(e.code, int) else 1

        return CLIResult(
            returncode=returncode or 0,
            stdout=stdout_capture.getvalue(),
        )


@pytest.fixture
def cli_runner() -> CLIRunner:
    return CLIRunner()
