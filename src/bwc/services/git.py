"""Git operations for bwc checkouts.

Every command captures its output. On failure the output is logged at
ERROR before GitError is raised, so the operator always sees git's own
diagnostics.
"""

import logging
import subprocess
from pathlib import Path

from ..errors import GitError

logger = logging.getLogger(__name__)


def run_git(*args: str, cwd: Path | None = None, check: bool = True) -> str:
    """Run a git command and return its stripped stdout.

    Args:
        *args: Arguments after "git"
        cwd: Working directory
        check: Raise GitError on non-zero exit

    Raises:
        GitError: If git is missing or the command fails with check=True
    """
    cmd = ["git", *args]
    logger.debug(f"Running {' '.join(cmd)} in {cwd or 'current dir'}")
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except FileNotFoundError:
        raise GitError("Command not found: git") from None

    if check and result.returncode != 0:
        for line in (result.stdout + result.stderr).splitlines():
            logger.error(line)
        raise GitError(
            f"git {' '.join(args)} failed (exit {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout.strip()


def get_repo_root(cwd: Path | None = None) -> Path:
    """Return the root of the repository containing cwd.

    Raises:
        GitError: If cwd is not inside a git repository
    """
    try:
        return Path(run_git("rev-parse", "--show-toplevel", cwd=cwd))
    except GitError:
        raise GitError("Not a git repository") from None


def ensure_clone(source: Path, path: Path) -> bool:
    """Clone source into path unless path already exists.

    Returns:
        True if a clone was made, False if an existing checkout was reused
    """
    if path.exists():
        logger.debug(f"Reusing existing checkout {path}")
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    run_git("clone", str(source), str(path))
    return True


def list_remotes(path: Path) -> str:
    """Return raw `git remote -v` output for the checkout."""
    return run_git("remote", "-v", cwd=path)


def has_remote(listing: str, name: str, url: str) -> bool:
    """Decide whether a remote listing already contains the named remote.

    Matches the substring "{name}\\t{url}" on any line. Any difference in
    protocol, URL suffix or whitespace counts as absent, so a remote that is
    configured differently gets added a second time by name and fails.
    """
    needle = f"{name}\t{url}"
    return any(needle in line for line in listing.splitlines())


def ensure_remote(path: Path, name: str, url: str, present: bool | None = None) -> bool:
    """Add the remote unless it is already registered.

    Args:
        path: Checkout directory
        name: Remote name
        url: Remote URL
        present: Result of an earlier has_remote check; listed again when None

    Returns:
        True if the remote was added
    """
    if present is None:
        present = has_remote(list_remotes(path), name, url)
    if present:
        return False
    run_git("remote", "add", name, url, cwd=path)
    return True


def fetch_all(path: Path, offline: bool = False) -> bool:
    """Fetch from every remote; not attempted in offline mode.

    Returns:
        True if a fetch was run
    """
    if offline:
        logger.info("Offline mode, skipping git fetch --all")
        return False
    run_git("fetch", "--all", cwd=path)
    return True


def checkout(path: Path, refspec: str) -> None:
    """Switch the checkout to refspec."""
    run_git("checkout", refspec, cwd=path)


def get_head_sha(path: Path) -> str:
    """Return the full SHA of HEAD."""
    return run_git("rev-parse", "HEAD", cwd=path)
