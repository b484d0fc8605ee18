"""Errors raised by bwc pipelines."""

from pathlib import Path


class BwcError(Exception):
    """Base exception for bwc errors."""


class ConfigError(BwcError):
    """Raised when .bwc/config.toml cannot be loaded."""


class GitError(BwcError):
    """Git command failed."""


class MetadataError(BwcError):
    """Resolving or recording the checked-out commit failed."""


class BuildError(BwcError):
    """Nested gradle build could not be run or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class ArtifactsMissingError(BwcError):
    """Nested build finished without producing every expected file."""

    def __init__(self, missing: list[Path]):
        self.missing = missing
        names = ", ".join(str(p) for p in missing)
        super().__init__(f"Building bwc version didn't generate expected files [{names}]")


class ArtifactsUnavailableError(BwcError):
    """One or more producers failed while resolving a configuration."""

    def __init__(self, failures: dict[str, BwcError]):
        self.failures = failures
        super().__init__(f"Could not produce artifacts for {', '.join(failures)}")
