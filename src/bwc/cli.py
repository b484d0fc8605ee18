"""bwc CLI: build backward-compatibility snapshots from prior release branches."""

import typer

from bwc import __version__

from .commands import artifacts, build, init, list_subprojects
from .logging import configure_logging, gradle_log_level
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"bwc {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="bwc",
    help="Check out prior release branches and build bwc snapshot distributions",
    no_args_is_help=True,
)


@app.callback()
def main(
    typer_ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show planned git and gradle commands without running them",
    ),
) -> None:
    """bwc - backward-compatibility snapshot builder."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
        debug=debug,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output, dry_run=dry_run))
    typer_ctx.obj = {"gradle_log_level": gradle_log_level(verbose, quiet, debug)}


app.command()(init)
app.command()(build)
app.command("list")(list_subprojects)
app.command()(artifacts)


if __name__ == "__main__":
    app()
