"""List command: overview of bwc subprojects."""

import typer
from rich.table import Table

from ..core import BuildMetadata, BwcPipeline
from ..output import get_output_context
from .common import load_project, select_subprojects


def list_subprojects(
    subprojects: list[str] | None = typer.Argument(
        None, help="Subprojects to show (default: every configured one)"
    ),
) -> None:
    """Show configured bwc subprojects, their branches and last built commits."""
    ctx = get_output_context()
    repo_root, config = load_project()

    rows = []
    for name in select_subprojects(config, subprojects):
        pipeline = BwcPipeline(name, repo_root, config)
        if pipeline.version is None:
            rows.append({"subproject": name, "version": None})
            continue
        recorded = BuildMetadata.load([pipeline.metadata_file]).get(pipeline.metadata_key)
        rows.append(
            {
                "subproject": name,
                "version": str(pipeline.version),
                "branch": pipeline.branch,
                "refspec": pipeline.resolve_refspec(),
                "checkout": str(pipeline.checkout_dir),
                "checked_out": pipeline.checkout_dir.exists(),
                "commit": recorded,
            }
        )

    if ctx.json_mode:
        ctx.print_json(rows)
        return

    if not rows:
        ctx.print("[yellow]No bwc versions configured[/yellow]")
        return

    table = Table(title="bwc subprojects")
    for column in ("Subproject", "Version", "Branch", "Refspec", "Checkout", "Last commit"):
        table.add_column(column)
    for row in rows:
        if row["version"] is None:
            table.add_row(row["subproject"], "[dim]none[/dim]", "", "", "", "")
            continue
        table.add_row(
            row["subproject"],
            row["version"],
            row["branch"],
            row["refspec"],
            "[green]yes[/green]" if row["checked_out"] else "[dim]no[/dim]",
            (row["commit"] or "")[:12],
        )
    ctx.console.print(table)
