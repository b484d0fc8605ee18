"""Init command implementation."""

import subprocess

import typer

from ..config import write_config_template
from ..constants import INIT_TOOL_CHECK_TIMEOUT
from ..core import get_bwc_home
from ..errors import GitError
from ..output import get_output_context
from ..services import get_repo_root


def init() -> None:
    """Initialize bwc in the current repository."""
    ctx = get_output_context()

    try:
        repo_root = get_repo_root()
    except GitError:
        ctx.error("Not a git repository")
        raise typer.Exit(3) from None

    bwc_home = get_bwc_home(repo_root)
    config_path = bwc_home / "config.toml"

    if ctx.dry_run:
        ctx.print("[cyan][DRY RUN][/cyan] Would initialize bwc in this repository:")
        if not config_path.exists():
            ctx.print(f"  Create config: {config_path}")
        else:
            ctx.print(f"  Config already exists: {config_path}")
        return

    if not config_path.exists():
        write_config_template(bwc_home)
        ctx.print(f"[green]Created config template:[/green] {config_path}")
    else:
        ctx.print(f"[yellow]Config already exists:[/yellow] {config_path}")

    try:
        result = subprocess.run(
            ["git", "--version"], capture_output=True, text=True, timeout=INIT_TOOL_CHECK_TIMEOUT
        )
        git_ok = result.returncode == 0
    except (FileNotFoundError, subprocess.TimeoutExpired):
        git_ok = False

    if not git_ok:
        ctx.print("[red]✗[/red] git: not usable")
        raise typer.Exit(2)

    ctx.print("[green]✓[/green] git")
    ctx.print("\n[bold green]bwc initialized successfully![/bold green]")
