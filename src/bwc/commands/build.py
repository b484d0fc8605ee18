"""Build command: run bwc pipelines for subprojects."""

import os
from concurrent.futures import ThreadPoolExecutor

import typer

from ..config import GradleLogLevel, RunSettings, ShowStacktrace
from ..constants import REFSPEC_ENV, REMOTE_ENV
from ..core import BwcPipeline
from ..models import PipelineResult
from ..output import get_output_context
from .common import load_project, select_subprojects


def build(
    typer_ctx: typer.Context,
    subprojects: list[str] | None = typer.Argument(
        None, help="Subprojects to build (default: every configured one)"
    ),
    offline: bool = typer.Option(False, "--offline", help="Skip git fetch"),
    refspec: str | None = typer.Option(
        None, "--refspec", envvar=REFSPEC_ENV, help="Exact refspec to check out"
    ),
    remote: str | None = typer.Option(
        None, "--remote", envvar=REMOTE_ENV, help="Remote to fetch release branches from"
    ),
    stacktrace: bool = typer.Option(
        False, "--stacktrace", help="Pass --stacktrace to the nested build"
    ),
    full_stacktrace: bool = typer.Option(
        False, "--full-stacktrace", help="Pass --full-stacktrace to the nested build"
    ),
    gradle_log_level: GradleLogLevel | None = typer.Option(
        None,
        "--gradle-log-level",
        case_sensitive=False,
        help="Log level of the nested build (default: follows -q/-v)",
    ),
    jobs: int = typer.Option(1, "--jobs", "-j", min=1, help="Subprojects to build in parallel"),
) -> None:
    """Check out and build bwc snapshot distributions."""
    ctx = get_output_context()
    repo_root, config = load_project()

    if full_stacktrace:
        show_stacktrace = ShowStacktrace.ALWAYS_FULL
    elif stacktrace:
        show_stacktrace = ShowStacktrace.ALWAYS
    else:
        show_stacktrace = ShowStacktrace.INTERNAL_EXCEPTIONS

    obj = typer_ctx.obj or {}
    settings = RunSettings(
        offline=offline,
        log_level=gradle_log_level or obj.get("gradle_log_level", GradleLogLevel.LIFECYCLE),
        stacktrace=show_stacktrace,
        remote=remote,
        refspec=refspec,
        runtime_java_home=os.environ.get(config.build.runtime_java_home_var),
        dry_run=ctx.dry_run,
    )

    names = select_subprojects(config, subprojects)
    if not names:
        ctx.error("No bwc versions configured in .bwc/config.toml")
        raise typer.Exit(1)

    pipelines = [BwcPipeline(name, repo_root, config, settings) for name in names]

    results: list[PipelineResult]
    if jobs > 1 and len(pipelines) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            results = list(pool.map(lambda p: p.run(), pipelines))
    else:
        results = [p.run() for p in pipelines]

    ctx.report(results)
    if not all(r.ok for r in results):
        raise typer.Exit(1)
