"""Logging setup for the bwc CLI and the nested build's log level."""

import logging
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

from .config import GradleLogLevel


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
    debug: bool = False,
) -> Console:
    """Route bwc logs through a Rich handler and return its console.

    -q keeps warnings and errors only and wins over --debug and -v. Any of
    --debug or -v turns on debug logs, and -vv or --debug also adds
    timestamps and source locations. Logs go to stream, or to stderr
    when it is None.
    """
    if quiet:
        level = logging.WARNING
    elif debug or verbosity >= 1:
        level = logging.DEBUG
    else:
        level = logging.INFO
    detailed = debug or verbosity >= 2

    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=not no_color,
        no_color=no_color,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=detailed, show_path=detailed)],
        force=True,
    )
    return console


def gradle_log_level(
    verbosity: int = 0,
    quiet: bool = False,
    debug: bool = False,
) -> GradleLogLevel:
    """Map CLI verbosity onto the log level passed to the nested build.

    Same precedence as configure_logging: quiet > debug > verbosity.
    """
    if quiet:
        return GradleLogLevel.QUIET
    if debug or verbosity >= 2:
        return GradleLogLevel.DEBUG
    if verbosity == 1:
        return GradleLogLevel.INFO
    return GradleLogLevel.LIFECYCLE
