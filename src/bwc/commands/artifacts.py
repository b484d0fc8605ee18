"""Artifacts command: show, and optionally produce, registered bwc artifacts."""

import os

import typer

from ..config import RunSettings
from ..constants import ARTIFACT_CONFIGURATION, REFSPEC_ENV, REMOTE_ENV
from ..core import ArtifactRegistry, BwcPipeline
from ..errors import ArtifactsUnavailableError
from ..output import get_output_context
from .common import load_project, select_subprojects


def artifacts(
    subprojects: list[str] | None = typer.Argument(
        None, help="Subprojects to show (default: every configured one)"
    ),
    resolve: bool = typer.Option(
        False, "--resolve", help="Build subprojects whose artifacts are missing"
    ),
    offline: bool = typer.Option(False, "--offline", help="Skip git fetch when resolving"),
    refspec: str | None = typer.Option(
        None, "--refspec", envvar=REFSPEC_ENV, help="Exact refspec to check out when resolving"
    ),
    remote: str | None = typer.Option(
        None, "--remote", envvar=REMOTE_ENV, help="Remote to fetch release branches from"
    ),
) -> None:
    """List the deb/rpm/zip artifacts registered by each bwc subproject."""
    ctx = get_output_context()
    repo_root, config = load_project()

    settings = RunSettings(
        offline=offline,
        remote=remote,
        refspec=refspec,
        runtime_java_home=os.environ.get(config.build.runtime_java_home_var),
        dry_run=ctx.dry_run,
    )
    registry = ArtifactRegistry()
    for name in select_subprojects(config, subprojects):
        BwcPipeline(name, repo_root, config, settings, registry)

    registered = registry.artifacts(ARTIFACT_CONFIGURATION)
    failed = False
    if resolve:
        # Subprojects with every artifact on disk don't need their producer
        by_subproject: dict[str, list[bool]] = {}
        for artifact in registered:
            by_subproject.setdefault(artifact.built_by, []).append(artifact.exists())
        for built_by, present in by_subproject.items():
            if all(present):
                registry.mark_produced(built_by)
        try:
            registry.files(ARTIFACT_CONFIGURATION)
        except ArtifactsUnavailableError as e:
            for built_by, error in e.failures.items():
                ctx.error(f"{built_by}: {error}", {"subproject": built_by})
            failed = True

    rows = [
        {
            "subproject": a.built_by,
            "name": a.name,
            "type": a.type,
            "file": str(a.file),
            "exists": a.exists(),
        }
        for a in registered
    ]
    if ctx.json_mode:
        ctx.print_json(rows)
    elif not rows:
        ctx.print("[yellow]No bwc artifacts registered[/yellow]")
    else:
        for row in rows:
            mark = "[green]✓[/green]" if row["exists"] else "[dim]✗[/dim]"
            ctx.print(f"{mark} {row['subproject']} {row['type']}: {row['file']}")

    if failed:
        raise typer.Exit(1)
