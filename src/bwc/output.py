"""Output formatting for bwc CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape

from .models import PipelineResult


@dataclass
class OutputContext:
    """Context for output formatting."""

    console: Console
    json_mode: bool = False
    dry_run: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: Any) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {escape(message)}[/red]")

    def step(self, subproject: str, message: str) -> None:
        """Announce a pipeline step for a subproject."""
        prefix = "[cyan][DRY RUN][/cyan] " if self.dry_run else ""
        self.print(f"{prefix}[bold]{escape(subproject)}[/bold]: {escape(message)}")

    def report(self, results: list[PipelineResult]) -> None:
        """Print a summary of pipeline results."""
        if self.json_mode:
            self.print_json([r.model_dump(mode="json") for r in results])
            return
        for r in results:
            name = escape(r.subproject)
            if r.noop:
                self.console.print(f"[dim]{name}: no bwc version, nothing to do[/dim]")
            elif r.planned and r.ok:
                self.console.print(
                    f"[cyan]•[/cyan] {name}: planned {r.version} from {escape(r.refspec or '')}"
                )
            elif r.ok:
                commit = (r.commit or "")[:12]
                self.console.print(
                    f"[green]✓[/green] {name}: {r.version} from {escape(r.refspec or '')} "
                    f"({commit})"
                )
            else:
                self.console.print(
                    f"[red]✗[/red] {name}: failed after {r.state.value}: "
                    f"{escape(r.error or '')}"
                )


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext | None) -> None:
    """Set the global output context. Called by CLI main callback; None resets it."""
    global _ctx
    _ctx = ctx
