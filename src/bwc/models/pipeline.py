"""Pipeline state and result models.

Each subproject runs through a linear sequence of states. A run either
reaches VERIFIED or stops at the last state it completed, with the error
recorded on the result.
"""

from enum import Enum

from pydantic import BaseModel, Field

from .artifact import Artifact


class PipelineState(str, Enum):
    """Completed steps of a subproject pipeline, in order."""

    PENDING = "pending"
    CLONED = "cloned"
    REMOTE_ENSURED = "remote_ensured"
    FETCHED = "fetched"
    CHECKED_OUT = "checked_out"
    METADATA_WRITTEN = "metadata_written"
    BUILT = "built"
    VERIFIED = "verified"


class PipelineResult(BaseModel):
    """Outcome of one subproject pipeline run."""

    subproject: str = Field(description="Subproject name")
    state: PipelineState = Field(default=PipelineState.PENDING, description="Last state reached")
    version: str | None = Field(default=None, description="Resolved bwc version")
    branch: str | None = Field(default=None, description="Resolved branch")
    refspec: str | None = Field(default=None, description="Refspec checked out")
    commit: str | None = Field(default=None, description="Commit recorded in build metadata")
    artifacts: list[Artifact] = Field(default_factory=list, description="Registered artifacts")
    skipped: list[str] = Field(default_factory=list, description="Steps skipped by policy")
    error: str | None = Field(default=None, description="Error that stopped the pipeline")
    planned: bool = Field(default=False, description="Dry run: steps described, nothing executed")

    @property
    def noop(self) -> bool:
        """True when no bwc version maps to the subproject."""
        return self.version is None and self.error is None

    @property
    def ok(self) -> bool:
        """True unless the pipeline failed or stopped short of VERIFIED outside a dry run."""
        if self.error is not None:
            return False
        return self.noop or self.planned or self.state == PipelineState.VERIFIED
