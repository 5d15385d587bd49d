"""
Tests for outdir.yaml loading, coordinate parsing, and workspace assembly.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from outdir.build.config import DEFAULT_CLASSPATH, LayoutSettings, load_settings, load_workspace
from outdir.build.coordinates import Coordinate, check_repository, parse_coordinate
from outdir.project.errors import ConfigurationError


# =============================================================================
# Coordinate Tests
# =============================================================================


@pytest.mark.evergreen
class TestCoordinates:
    """Classpath coordinates and repositories are checked for shape only."""

    def test_parse_coordinate(self) -> None:
        coordinate = parse_coordinate("com.android.tools.build:gradle:8.2.2")

        assert coordinate == Coordinate("com.android.tools.build", "gradle", "8.2.2")
        assert str(coordinate) == "com.android.tools.build:gradle:8.2.2"

    @pytest.mark.parametrize("text", ["gradle", "a:b", "a:b:c:d", "a::1", " : : "])
    def test_malformed_coordinate(self, text: str) -> None:
        with pytest.raises(ConfigurationError, match="invalid dependency coordinate"):
            parse_coordinate(text)

    @pytest.mark.parametrize("name", ["google", "mavenCentral", "https://repo.example.com/maven"])
    def test_accepted_repositories(self, name: str) -> None:
        assert check_repository(name) == name

    def test_unknown_repository(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown repository"):
            check_repository("jcenterish")

    def test_default_classpath_parses(self) -> None:
        assert [str(c) for c in LayoutSettings().coordinates()] == DEFAULT_CLASSPATH


# =============================================================================
# Settings Loading Tests
# =============================================================================


@pytest.mark.evergreen
class TestLoadSettings:
    """load_settings() reads YAML and validates it."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "outdir.yaml")

        assert settings.alternate_root == "../../build"
        assert settings.primary == "app"
        assert settings.projects is None
        assert settings.repositories == ["google", "mavenCentral"]

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_text("")

        assert load_settings(path) == LayoutSettings()

    def test_values_read(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_text(
            "alternate_root: /var/out\n"
            "primary: core\n"
            "projects: [core, ui]\n"
            "classpath:\n"
            "  - org.example:plugin:1.0\n"
        )

        settings = load_settings(path)

        assert settings.alternate_root == "/var/out"
        assert settings.primary == "core"
        assert settings.projects == ["core", "ui"]
        assert settings.coordinates() == [Coordinate("org.example", "plugin", "1.0")]

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_text("build_dir: out\n")

        with pytest.raises(ConfigurationError, match="build_dir"):
            load_settings(path)

    def test_bad_coordinate_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_text("classpath: ['not-a-coordinate']\n")

        with pytest.raises(ConfigurationError, match="invalid dependency coordinate"):
            load_settings(path)

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_text("projects: [app\n")

        with pytest.raises(ConfigurationError, match="invalid YAML"):
            load_settings(path)

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_text("- app\n- lib\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(path)

    def test_required_missing_file_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="settings file not found"):
            load_settings(tmp_path / "typo.yaml", required=True)

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings(tmp_path)

        assert str(tmp_path) in str(excinfo.value)

    def test_undecodable_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "outdir.yaml"
        path.write_bytes(b"primary: \xff\xfe\n")

        with pytest.raises(ConfigurationError):
            load_settings(path)


# =============================================================================
# Workspace Tests
# =============================================================================


@pytest.mark.evergreen
class TestLoadWorkspace:
    """load_workspace() discovers, relocates, and links the tree."""

    def test_default_workspace(self, android_root: Path, tmp_path: Path) -> None:
        workspace = load_workspace(android_root)
        out = (tmp_path / "project" / "build").resolve()

        assert workspace.alternate_root == out
        assert workspace.tree.root.build_directory == out
        assert workspace.tree.find("lib-b").build_directory == out / "lib-b"
        assert workspace.tree.find("lib-a").evaluation_depends_on == ["app"]
        assert workspace.config_path is None

    def test_explicit_projects_override_discovery(self, android_root: Path) -> None:
        (android_root / "outdir.yaml").write_text(
            "root_name: mono\nprojects: [app, extra]\nalternate_root: /tmp/mono-out\n"
        )

        workspace = load_workspace(android_root)

        assert workspace.tree.root.name == "mono"
        assert [p.name for p in workspace.tree.subprojects] == ["app", "extra"]
        assert workspace.tree.find("extra").build_directory == Path("/tmp/mono-out/extra")
        assert workspace.config_path == android_root.resolve() / "outdir.yaml"

    def test_explicit_unknown_primary_rejected(self, android_root: Path) -> None:
        (android_root / "outdir.yaml").write_text("primary: wear\n")

        with pytest.raises(ConfigurationError, match="unknown project reference: wear"):
            load_workspace(android_root)

    def test_default_primary_optional(self, tmp_path: Path) -> None:
        """Without an app project the default primary is skipped."""
        (tmp_path / "settings.gradle.kts").write_text('include(":core")\n')

        workspace = load_workspace(tmp_path)

        assert workspace.tree.find("core").evaluation_depends_on == []

    def test_null_primary_disables_linking(self, android_root: Path) -> None:
        (android_root / "outdir.yaml").write_text("primary: null\n")

        workspace = load_workspace(android_root)

        assert all(p.evaluation_depends_on == [] for p in workspace.tree)

    def test_duplicate_from_settings_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "settings.gradle.kts").write_text('include(":a:core", ":b:core")\n')

        with pytest.raises(ConfigurationError, match="duplicate project name: core"):
            load_workspace(tmp_path)

    def test_explicit_config_path(self, android_root: Path, tmp_path: Path) -> None:
        config = tmp_path / "ci.yaml"
        config.write_text("alternate_root: ci-out\n")

        workspace = load_workspace(android_root, config)

        assert workspace.alternate_root == android_root.resolve() / "build" / "ci-out"
        assert workspace.config_path == config

    def test_missing_explicit_config_rejected(self, android_root: Path, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="settings file not found"):
            load_workspace(android_root, tmp_path / "typo.yaml")
