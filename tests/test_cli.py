"""CLI integration tests for bwc."""

import json
import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from bwc.cli import app


@pytest.mark.cli
class TestVersionAndHelp:
    """Tests for --version and --help."""

    def test_version_shows_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "bwc 0.1.0" in result.stdout

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "build", "list", "artifacts"):
            assert command in result.stdout

    def test_build_help_lists_options(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["build", "--help"])
        assert result.exit_code == 0
        assert "--offline" in result.stdout
        assert "--refspec" in result.stdout


@pytest.mark.cli
class TestInitCommand:
    """Tests for bwc init."""

    def test_init_not_git_repo(self, runner: CliRunner, tmp_path: Path) -> None:
        original = os.getcwd()
        os.chdir(tmp_path)
        try:
            result = runner.invoke(app, ["--no-color", "init"])
        finally:
            os.chdir(original)
        assert result.exit_code == 3
        assert "Not a git repository" in result.output

    def test_init_writes_config(self, runner: CliRunner, temp_git_repo: Path) -> None:
        result = runner.invoke(app, ["--no-color", "init"])
        assert result.exit_code == 0
        assert (temp_git_repo / ".bwc" / "config.toml").exists()
        assert "initialized successfully" in result.output

    def test_init_keeps_existing_config(self, runner: CliRunner, temp_git_repo: Path) -> None:
        config = temp_git_repo / ".bwc" / "config.toml"
        config.parent.mkdir()
        config.write_text("[versions]\n")
        result = runner.invoke(app, ["--no-color", "init"])
        assert result.exit_code == 0
        assert config.read_text() == "[versions]\n"
        assert "already exists" in result.output

    def test_init_without_git_binary(self, runner: CliRunner, temp_git_repo: Path) -> None:
        real_run = subprocess.run

        def mock_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
            # Only the toolchain check fails; repo detection still works
            if cmd == ["git", "--version"]:
                raise FileNotFoundError(cmd[0])
            return real_run(cmd, **kwargs)  # type: ignore[call-overload]

        with patch("bwc.commands.init.subprocess.run", side_effect=mock_run):
            result = runner.invoke(app, ["--no-color", "init"])
        assert result.exit_code == 2

    def test_init_dry_run(self, runner: CliRunner, temp_git_repo: Path) -> None:
        result = runner.invoke(app, ["--no-color", "--dry-run", "init"])
        assert result.exit_code == 0
        assert not (temp_git_repo / ".bwc").exists()


@pytest.mark.cli
class TestListCommand:
    """Tests for bwc list."""

    def test_list_json(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(app, ["--json", "list"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert rows[0]["subproject"] == "next-bugfix-snapshot"
        assert rows[0]["branch"] == "6.1"
        assert rows[0]["refspec"] == "elastic/6.1"
        assert rows[0]["checked_out"] is False

    def test_list_unmapped_subproject(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(app, ["--json", "list", "staged-minor-snapshot"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"subproject": "staged-minor-snapshot", "version": None}
        ]

    def test_invalid_config_exits_2(self, runner: CliRunner, temp_git_repo: Path) -> None:
        bwc_home = temp_git_repo / ".bwc"
        bwc_home.mkdir()
        (bwc_home / "config.toml").write_text('[versions]\nx = "bogus"\n')
        result = runner.invoke(app, ["--no-color", "list"])
        assert result.exit_code == 2


@pytest.mark.cli
class TestBuildCommand:
    """Tests for bwc build."""

    def test_no_versions_configured(self, runner: CliRunner, temp_git_repo: Path) -> None:
        result = runner.invoke(app, ["--no-color", "build"])
        assert result.exit_code == 1
        assert "No bwc versions configured" in result.output

    def test_unmapped_subproject_is_noop(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(app, ["--json", "build", "staged-minor-snapshot"])
        assert result.exit_code == 0
        assert not (release_repo / "distribution").exists()

    def test_dry_run_prints_plan(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(app, ["--no-color", "--dry-run", "build", "--offline"])
        assert result.exit_code == 0
        assert "git checkout elastic/6.1" in result.output
        assert "Skip git fetch" in result.output
        assert "planned 6.1.4 from elastic/6.1" in result.output
        assert not (release_repo / "distribution").exists()

    @pytest.mark.slow
    def test_build_offline(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(
            app, ["--json", "build", "--offline", "--refspec", "origin/6.1", "--stacktrace"]
        )
        assert result.exit_code == 0, result.output
        checkout = (
            release_repo / "distribution/bwc/next-bugfix-snapshot/build/bwc/checkout-6.1"
        )
        for kind in ("deb", "rpm", "zip"):
            dist = checkout / "distribution" / kind / "build" / "distributions"
            assert (dist / f"elasticsearch-6.1.4.{kind}").exists()
        args = (checkout / "gradle-args.txt").read_text().split()
        assert args[-1] == "--stacktrace"

    @pytest.mark.slow
    def test_refspec_from_environment(
        self, runner: CliRunner, release_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BWC_REFSPEC", "origin/6.1")
        result = runner.invoke(app, ["--json", "build", "--offline"])
        assert result.exit_code == 0, result.output

    @pytest.mark.slow
    def test_verbose_passes_info_to_gradle(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(
            app, ["--no-color", "-v", "build", "--offline", "--refspec", "origin/6.1"]
        )
        assert result.exit_code == 0, result.output
        checkout = (
            release_repo / "distribution/bwc/next-bugfix-snapshot/build/bwc/checkout-6.1"
        )
        assert (checkout / "gradle-args.txt").read_text().split()[-1] == "--info"

    @pytest.mark.slow
    def test_failed_pipeline_exits_1(
        self, runner: CliRunner, release_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAKE_GRADLE_SKIP", "zip")
        result = runner.invoke(
            app,
            ["--no-color", "build", "--offline", "--refspec", "origin/6.1"],
            env={"COLUMNS": "500"},
        )
        assert result.exit_code == 1
        assert "elasticsearch-6.1.4.zip" in result.output


@pytest.mark.cli
class TestArtifactsCommand:
    """Tests for bwc artifacts."""

    def test_lists_registered_artifacts(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(app, ["--json", "artifacts"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert [r["type"] for r in rows] == ["deb", "rpm", "zip"]
        assert all(r["exists"] is False for r in rows)

    @pytest.mark.slow
    def test_resolve_builds_missing(
        self, runner: CliRunner, release_repo: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BWC_REFSPEC", "origin/6.1")
        result = runner.invoke(app, ["--json", "artifacts", "--resolve", "--offline"])
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout[result.stdout.index("[") :])
        assert all(r["exists"] is True for r in rows)

    @pytest.mark.slow
    def test_resolve_continues_after_failed_subproject(
        self, runner: CliRunner, release_repo: Path
    ) -> None:
        # previous-minor-snapshot has no 6.0 branch to check out; the second
        # subproject is pinned to the local 6.1 branch and still builds
        (release_repo / ".bwc" / "config.toml").write_text(
            "[build]\n"
            'metadata_file = "pins"\n\n'
            "[versions]\n"
            'previous-minor-snapshot = "6.0.1"\n'
            'next-bugfix-snapshot = "6.1.4"\n'
        )
        (release_repo / "pins").write_text(
            "bwc_refspec_distribution:bwc:next-bugfix-snapshot=origin/6.1\n"
        )

        result = runner.invoke(
            app, ["--no-color", "artifacts", "--resolve", "--offline"], env={"COLUMNS": "500"}
        )

        assert result.exit_code == 1
        assert "previous-minor-snapshot: git checkout elastic/6.0 failed" in result.output
        dist = (
            release_repo
            / "distribution/bwc/next-bugfix-snapshot/build/bwc/checkout-6.1"
            / "distribution/zip/build/distributions"
        )
        assert (dist / "elasticsearch-6.1.4.zip").exists()
