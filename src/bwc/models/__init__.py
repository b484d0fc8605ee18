"""Pydantic data models for bwc builds.

This package defines the data structures used throughout bwc for:
- Release lines that need snapshot builds (VersionSpec)
- Produced distribution files (Artifact)
- Pipeline progress and outcome (PipelineState, PipelineResult)

Example:
    >>> from bwc.models import VersionSpec
    >>> str(VersionSpec.parse("6.1.3"))
    '6.1.3'
"""

from .artifact import Artifact
from .pipeline import PipelineResult, PipelineState
from .version import VersionSpec

__all__ = [
    "Artifact",
    "PipelineResult",
    "PipelineState",
    "VersionSpec",
]
