"""Version model for backward-compatibility release lines."""

import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?(-SNAPSHOT)?$")


class VersionSpec(BaseModel):
    """A prior release line that bwc tests must stay compatible with.

    Attributes:
        major: Major version component.
        minor: Minor version component.
        revision: Patch component; only used in artifact file names.
        snapshot: Whether artifact names carry a -SNAPSHOT qualifier.
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0, description="Major version")
    minor: int = Field(ge=0, description="Minor version")
    revision: int = Field(default=0, ge=0, description="Revision (patch) version")
    snapshot: bool = Field(default=False, description="True for -SNAPSHOT builds")

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse strings such as "6.1", "6.1.3" or "6.2.0-SNAPSHOT".

        Raises:
            ValueError: If the string is not a recognised version.
        """
        match = _VERSION_RE.match(value.strip())
        if match is None:
            raise ValueError(f"Invalid version: {value!r}")
        major, minor, revision, snapshot = match.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            revision=int(revision or 0),
            snapshot=snapshot is not None,
        )

    def __str__(self) -> str:
        suffix = "-SNAPSHOT" if self.snapshot else ""
        return f"{self.major}.{self.minor}.{self.revision}{suffix}"
