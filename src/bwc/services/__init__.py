"""External tool integrations for bwc.

This package wraps the processes a bwc pipeline shells out to:
- git: clone, remote, fetch, checkout and rev-parse
- gradle: the checkout's own gradle wrapper
"""

from .git import (
    checkout,
    ensure_clone,
    ensure_remote,
    fetch_all,
    get_head_sha,
    get_repo_root,
    has_remote,
    list_remotes,
    run_git,
)
from .gradle import build_command, build_env, gradle_args, needs_legacy_runtime, run_gradle

__all__ = [
    "build_command",
    "build_env",
    "checkout",
    "ensure_clone",
    "ensure_remote",
    "fetch_all",
    "get_head_sha",
    "get_repo_root",
    "gradle_args",
    "has_remote",
    "list_remotes",
    "needs_legacy_runtime",
    "run_git",
    "run_gradle",
]
