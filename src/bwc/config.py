"""Configuration management for bwc."""

import tomllib
from enum import Enum
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_REMOTE,
    LEGACY_BRANCHES,
    REMOTE_URL_TEMPLATE,
    RUNTIME_JAVA_HOME_VAR,
)
from .errors import ConfigError
from .models import VersionSpec


class GradleLogLevel(str, Enum):
    """Log levels of the outer build, forwarded to the nested gradle run."""

    QUIET = "quiet"
    WARN = "warn"
    LIFECYCLE = "lifecycle"
    INFO = "info"
    DEBUG = "debug"


class ShowStacktrace(str, Enum):
    """Stacktrace detail of the outer build, forwarded to the nested gradle run."""

    INTERNAL_EXCEPTIONS = "internal_exceptions"
    ALWAYS = "always"
    ALWAYS_FULL = "always_full"


class ProjectConfig(BaseModel):
    """Where the repository and bwc subprojects live."""

    source: Path | None = None  # Repository to clone; defaults to the repo root
    bwc_dir: Path = Path("distribution/bwc")  # Relative to the repo root
    path_prefix: str = ":distribution:bwc"  # Gradle-style path of the bwc parent project


class RemoteConfig(BaseModel):
    """Remote to fetch prior release branches from."""

    name: str = DEFAULT_REMOTE
    url_template: str = REMOTE_URL_TEMPLATE

    def url_for(self, name: str) -> str:
        """Expand the URL template for a remote name."""
        return self.url_template.format(remote=name)


class BuildConfig(BaseModel):
    """Nested build settings."""

    runtime_java_version: str | None = None  # e.g. "1.8" when the host runtime is JDK 8
    legacy_branches: list[str] = Field(default_factory=lambda: list(LEGACY_BRANCHES))
    runtime_java_home_var: str = RUNTIME_JAVA_HOME_VAR
    metadata_file: Path | None = None  # Shared key=value store read before each run


class BwcConfig(BaseModel):
    """Root configuration for bwc."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    versions: dict[str, VersionSpec] = Field(
        default_factory=dict, description="Subproject name to bwc version"
    )

    @field_validator("versions", mode="before")
    @classmethod
    def _parse_versions(cls, value: object) -> object:
        if isinstance(value, dict):
            return {
                name: VersionSpec.parse(v) if isinstance(v, str) else v
                for name, v in value.items()
            }
        return value

    def get_snapshot_for_project(self, subproject: str) -> VersionSpec | None:
        """Return the bwc version mapped to a subproject, or None."""
        return self.versions.get(subproject)


class RunSettings(BaseModel):
    """Per-invocation settings threaded into every pipeline.

    Carries what a build tool would otherwise read from process-wide state:
    offline mode, log level, stacktrace detail and operator overrides.
    """

    offline: bool = False
    log_level: GradleLogLevel = GradleLogLevel.LIFECYCLE
    stacktrace: ShowStacktrace = ShowStacktrace.INTERNAL_EXCEPTIONS
    remote: str | None = None  # Overrides config.remote.name
    refspec: str | None = None  # Overrides persisted metadata and the default
    runtime_java_home: str | None = None
    dry_run: bool = False


def load_config(bwc_home: Path) -> BwcConfig:
    """Load config from .bwc/config.toml.

    Args:
        bwc_home: Path to .bwc directory

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    config_path = bwc_home / "config.toml"
    if not config_path.exists():
        return BwcConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return BwcConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def write_config_template(bwc_home: Path) -> Path:
    """Write default config.toml template.

    Args:
        bwc_home: Path to .bwc directory

    Returns:
        Path to the written config file
    """
    bwc_home.mkdir(parents=True, exist_ok=True)
    config_path = bwc_home / "config.toml"
    template = {
        "project": {"bwc_dir": "distribution/bwc", "path_prefix": ":distribution:bwc"},
        "remote": {"name": DEFAULT_REMOTE, "url_template": REMOTE_URL_TEMPLATE},
        "build": {
            "legacy_branches": list(LEGACY_BRANCHES),
            "runtime_java_home_var": RUNTIME_JAVA_HOME_VAR,
        },
        # Subproject name to the version it snapshots. Subprojects missing
        # here are skipped.
        "versions": {
            "next-minor-snapshot": "6.3.0-SNAPSHOT",
            "next-bugfix-snapshot": "6.2.5-SNAPSHOT",
        },
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
