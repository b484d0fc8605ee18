"""Helpers shared by bwc commands."""

from pathlib import Path

import typer

from ..config import BwcConfig, load_config
from ..core import get_bwc_home
from ..errors import ConfigError, GitError
from ..output import get_output_context
from ..services import get_repo_root


def load_project() -> tuple[Path, BwcConfig]:
    """Locate the repository and load its bwc config.

    Exits with code 3 outside a git repository and 2 on invalid config.
    """
    ctx = get_output_context()
    try:
        repo_root = get_repo_root()
    except GitError:
        ctx.error("Not a git repository")
        raise typer.Exit(3) from None

    try:
        config = load_config(get_bwc_home(repo_root))
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(2) from None
    return repo_root, config


def select_subprojects(config: BwcConfig, names: list[str] | None) -> list[str]:
    """Return the named subprojects, or every configured one when none are named."""
    if names:
        return list(dict.fromkeys(names))
    return list(config.versions)
