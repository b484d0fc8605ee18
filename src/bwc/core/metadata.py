"""Build metadata persistence.

Each subproject records the commit it last built as a single
``key=commit`` line. On the next run the recorded value becomes the
default refspec, so incremental builds keep using the same commit until
an operator overrides it.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..errors import GitError, MetadataError
from ..services import get_head_sha

logger = logging.getLogger(__name__)


class BuildMetadata:
    """Read-only key/value view over one or more build_metadata files.

    Later files win when a key appears more than once.
    """

    def __init__(self, values: dict[str, str] | None = None):
        self._values = dict(values or {})

    @classmethod
    def load(cls, paths: Iterable[Path | None]) -> "BuildMetadata":
        """Load key=value lines from every existing file in paths."""
        values: dict[str, str] = {}
        for path in paths:
            if path is None or not path.exists():
                continue
            values.update(parse_metadata(path.read_text(encoding="utf-8")))
        return cls(values)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for key, or default."""
        return self._values.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._values


def parse_metadata(text: str) -> dict[str, str]:
    """Parse key=value lines, ignoring blanks and lines without '='."""
    values = {}
    for line in text.splitlines():
        key, sep, value = line.strip().partition("=")
        if sep and key:
            values[key] = value.strip()
    return values


def write_build_metadata(path: Path, key: str, commit: str) -> None:
    """Write a single key=commit line, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{key}={commit}\n", encoding="utf-8")


def record_head(checkout_dir: Path, path: Path, key: str) -> str:
    """Resolve HEAD of the checkout and persist it.

    Args:
        checkout_dir: Checkout to resolve HEAD in
        path: build_metadata file to write
        key: Metadata key of the subproject

    Returns:
        The recorded commit SHA

    Raises:
        MetadataError: If git rev-parse fails (git's output is logged first)
    """
    try:
        commit = get_head_sha(checkout_dir)
    except GitError as e:
        raise MetadataError(f"Could not resolve HEAD in {checkout_dir}: {e}") from e
    write_build_metadata(path, key, commit)
    logger.info(f"Checked out elasticsearch commit {commit}")
    return commit
