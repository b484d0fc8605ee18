"""Filesystem layout of bwc subprojects."""

from pathlib import Path

from ..config import BwcConfig
from ..constants import METADATA_FILENAME, METADATA_KEY_PREFIX


def get_bwc_home(repo_root: Path) -> Path:
    """Get .bwc directory path holding config.toml."""
    return repo_root / ".bwc"


def get_subproject_dir(repo_root: Path, config: BwcConfig, subproject: str) -> Path:
    """Get the directory of a bwc subproject."""
    return repo_root / config.project.bwc_dir / subproject


def get_checkout_dir(subproject_dir: Path, branch: str) -> Path:
    """Get the scratch checkout for a branch, under the subproject's build dir."""
    return subproject_dir / "build" / "bwc" / f"checkout-{branch}"


def get_metadata_file(subproject_dir: Path, subproject: str) -> Path:
    """Get the build_metadata file of a subproject."""
    return subproject_dir / "build" / subproject / METADATA_FILENAME


def project_path(config: BwcConfig, subproject: str) -> str:
    """Return the gradle-style path of a subproject, e.g. ":distribution:bwc:x"."""
    prefix = config.project.path_prefix.rstrip(":")
    return f"{prefix}:{subproject}"


def metadata_key(path: str) -> str:
    """Return the build metadata key for a project path (leading ':' dropped)."""
    return f"{METADATA_KEY_PREFIX}{path[1:] if path.startswith(':') else path}"
