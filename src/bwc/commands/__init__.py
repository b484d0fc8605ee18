"""CLI command implementations for bwc.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .artifacts import artifacts
from .build import build
from .init import init
from .subprojects import list_subprojects

__all__ = [
    "artifacts",
    "build",
    "init",
    "list_subprojects",
]
