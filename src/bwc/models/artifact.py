"""Artifact model for files produced by a bwc build."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Artifact(BaseModel):
    """A build product registered under a named configuration.

    Attributes:
        configuration: Bucket of build products consumers resolve against.
        file: Path of the produced file.
        name: Logical module name.
        type: Packaging format (deb, rpm, zip).
        built_by: Name of the pipeline that produces the file.
    """

    model_config = ConfigDict(frozen=True)

    configuration: str = Field(description="Output configuration name")
    file: Path = Field(description="Path to the produced file")
    name: str = Field(description="Logical module name")
    type: str = Field(description="Packaging format")
    built_by: str = Field(description="Producing subproject pipeline")

    def exists(self) -> bool:
        """Return True if the file is present on disk."""
        return self.file.exists()
