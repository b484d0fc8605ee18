"""Nested gradle invocation for bwc checkouts."""

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..config import GradleLogLevel, ShowStacktrace
from ..constants import LEGACY_RUNTIME_JAVA_VERSION, PACKAGE_TYPES
from ..errors import BuildError

logger = logging.getLogger(__name__)

# Levels gradle accepts as a flag; LIFECYCLE is its default and has none
_LOG_LEVEL_FLAGS = {
    GradleLogLevel.QUIET: "--quiet",
    GradleLogLevel.WARN: "--warn",
    GradleLogLevel.INFO: "--info",
    GradleLogLevel.DEBUG: "--debug",
}

_STACKTRACE_FLAGS = {
    ShowStacktrace.INTERNAL_EXCEPTIONS: None,
    ShowStacktrace.ALWAYS: "--stacktrace",
    ShowStacktrace.ALWAYS_FULL: "--full-stacktrace",
}


def gradle_args(
    log_level: GradleLogLevel = GradleLogLevel.LIFECYCLE,
    stacktrace: ShowStacktrace = ShowStacktrace.INTERNAL_EXCEPTIONS,
) -> list[str]:
    """Return the task and flag arguments for a bwc distribution build."""
    args = [f":distribution:{kind}:assemble" for kind in PACKAGE_TYPES]
    args.append("-Dbuild.snapshot=true")

    level_flag = _LOG_LEVEL_FLAGS.get(log_level)
    if level_flag:
        args.append(level_flag)

    stacktrace_flag = _STACKTRACE_FLAGS[stacktrace]
    if stacktrace_flag:
        args.append(stacktrace_flag)
    return args


def build_command(
    checkout_dir: Path,
    log_level: GradleLogLevel = GradleLogLevel.LIFECYCLE,
    stacktrace: ShowStacktrace = ShowStacktrace.INTERNAL_EXCEPTIONS,
    windows: bool | None = None,
) -> list[str]:
    """Build the full command line for the checkout's gradle wrapper.

    Args:
        checkout_dir: Checkout containing the gradlew script
        log_level: Log level of the outer run
        stacktrace: Stacktrace detail of the outer run
        windows: Force platform dispatch; detected from os.name when None

    Returns:
        Command list suitable for subprocess
    """
    if windows is None:
        windows = os.name == "nt"
    gradlew = str(checkout_dir / "gradlew")
    prefix = ["cmd", "/C", "call", gradlew] if windows else [gradlew]
    return [*prefix, *gradle_args(log_level, stacktrace)]


def needs_legacy_runtime(
    branch: str,
    runtime_java_version: str | None,
    legacy_branches: Sequence[str],
) -> bool:
    """Return True if branch must be built with the legacy runtime JDK."""
    return runtime_java_version == LEGACY_RUNTIME_JAVA_VERSION and branch in legacy_branches


def build_env(
    branch: str,
    runtime_java_version: str | None,
    legacy_branches: Sequence[str],
    runtime_java_home: str | None,
    base_env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the environment for the nested build.

    Branches officially built with JDK 8 get JAVA_HOME pointed at the
    runtime JDK when the host runtime is JDK 8.
    """
    env = dict(os.environ if base_env is None else base_env)
    if needs_legacy_runtime(branch, runtime_java_version, legacy_branches):
        if runtime_java_home:
            logger.info(f"Building {branch} with JAVA_HOME={runtime_java_home}")
            env["JAVA_HOME"] = runtime_java_home
        else:
            logger.warning(f"Branch {branch} needs the runtime JDK but it is not set")
    return env


def run_gradle(cmd: list[str], cwd: Path, env: Mapping[str, str]) -> int:
    """Run the nested build, streaming its output to the terminal.

    Returns:
        Exit code of the gradle process

    Raises:
        BuildError: If the wrapper cannot be executed at all
    """
    logger.info(f"Running {' '.join(cmd)} in {cwd}")
    try:
        result = subprocess.run(cmd, cwd=cwd, env=dict(env))
    except FileNotFoundError:
        raise BuildError(f"Command not found: {cmd[0]}") from None
    except PermissionError as e:
        raise BuildError(f"Cannot execute {cmd[0]}: {e}") from e
    return result.returncode
