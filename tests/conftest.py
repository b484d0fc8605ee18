"""Shared test fixtures for bwc tests."""

import os
import stat
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from bwc.config import BwcConfig
from bwc.output import OutputContext, set_output_context

# Fake gradle wrapper committed on the release branch. It records its
# arguments and JAVA_HOME, then creates the distributions unless told to
# skip one (FAKE_GRADLE_SKIP) or to fail (FAKE_GRADLE_EXIT).
FAKE_GRADLEW = """#!/bin/sh
echo "$@" > gradle-args.txt
echo "${JAVA_HOME:-}" > gradle-java-home.txt
for kind in deb rpm zip; do
  if [ "$kind" = "${FAKE_GRADLE_SKIP:-}" ]; then
    continue
  fi
  mkdir -p distribution/$kind/build/distributions
  touch distribution/$kind/build/distributions/elasticsearch-6.1.4.$kind
done
exit "${FAKE_GRADLE_EXIT:-0}"
"""

BWC_CONFIG = """[project]
bwc_dir = "distribution/bwc"
path_prefix = ":distribution:bwc"

[versions]
next-bugfix-snapshot = "6.1.4"
"""


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture(autouse=True)
def reset_output_context() -> Generator[None, None, None]:
    """Keep the global output context from leaking between tests."""
    yield
    set_output_context(None)


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository.

    Initializes a git repo with user config and an initial commit.
    Changes cwd to the repo directory for the duration of the test.
    """
    _git("init", cwd=tmp_path)
    _git("config", "user.email", "test@test.com", cwd=tmp_path)
    _git("config", "user.name", "Test User", cwd=tmp_path)

    (tmp_path / "README.md").write_text("# Test\n")
    _git("add", ".", cwd=tmp_path)
    _git("commit", "-m", "Initial commit", cwd=tmp_path)

    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def release_repo(temp_git_repo: Path) -> Path:
    """Git repo with a 6.1 branch carrying a fake gradlew, plus .bwc config.

    The working tree stays on the default branch.
    """
    _git("checkout", "-b", "6.1", cwd=temp_git_repo)
    gradlew = temp_git_repo / "gradlew"
    gradlew.write_text(FAKE_GRADLEW)
    gradlew.chmod(gradlew.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    _git("add", "gradlew", cwd=temp_git_repo)
    _git("commit", "-m", "Add gradle wrapper", cwd=temp_git_repo)
    _git("checkout", "-", cwd=temp_git_repo)

    bwc_home = temp_git_repo / ".bwc"
    bwc_home.mkdir()
    (bwc_home / "config.toml").write_text(BWC_CONFIG)
    return temp_git_repo


@pytest.fixture
def bwc_config() -> BwcConfig:
    """Config mapping next-bugfix-snapshot to 6.1.4."""
    return BwcConfig.model_validate({"versions": {"next-bugfix-snapshot": "6.1.4"}})


@pytest.fixture
def quiet_output() -> OutputContext:
    """Install an output context that swallows console output."""
    ctx = OutputContext(console=Console(quiet=True))
    set_output_context(ctx)
    return ctx
