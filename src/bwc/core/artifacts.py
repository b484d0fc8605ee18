"""Expected bwc artifacts and the registry consumers resolve them from."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ..constants import ARTIFACT_MODULE, PACKAGE_TYPES
from ..errors import ArtifactsMissingError, ArtifactsUnavailableError, BwcError
from ..models import Artifact, VersionSpec

logger = logging.getLogger(__name__)


def expected_artifacts(checkout_dir: Path, version: VersionSpec) -> dict[str, Path]:
    """Return the distribution file the nested build must produce, per package type."""
    return {
        kind: checkout_dir
        / "distribution"
        / kind
        / "build"
        / "distributions"
        / f"{ARTIFACT_MODULE}-{version}.{kind}"
        for kind in PACKAGE_TYPES
    }


def find_missing(paths: Iterable[Path]) -> list[Path]:
    """Return the paths that do not exist, in order."""
    return [p for p in paths if not p.exists()]


def verify_artifacts(paths: Iterable[Path]) -> None:
    """Raise ArtifactsMissingError naming every missing file."""
    missing = find_missing(paths)
    if missing:
        raise ArtifactsMissingError(missing)


class ArtifactRegistry:
    """Named buckets of build products with lazy producers.

    Registering an artifact does not build it. The first call to files()
    for a configuration runs each pending producer. A producer that succeeded is
    not run again.
    """

    def __init__(self) -> None:
        self._artifacts: list[Artifact] = []
        self._producers: dict[str, Callable[[], object]] = {}
        self._produced: set[str] = set()

    def register(
        self,
        configuration: str,
        file: Path,
        name: str,
        type: str,
        built_by: str,
        producer: Callable[[], object] | None = None,
    ) -> Artifact:
        """Register a file produced by built_by under configuration."""
        artifact = Artifact(
            configuration=configuration,
            file=file,
            name=name,
            type=type,
            built_by=built_by,
        )
        self._artifacts.append(artifact)
        if producer is not None:
            self._producers.setdefault(built_by, producer)
        return artifact

    def mark_produced(self, built_by: str) -> None:
        """Record that built_by already ran, so files() won't run it again."""
        self._produced.add(built_by)

    def artifacts(self, configuration: str | None = None) -> list[Artifact]:
        """Return registered artifacts, optionally filtered by configuration."""
        return [
            a for a in self._artifacts if configuration is None or a.configuration == configuration
        ]

    def files(self, configuration: str) -> list[Path]:
        """Return the files of a configuration, producing them first if needed.

        Every pending producer is tried. Failures are collected per producer
        and raised together as ArtifactsUnavailableError once all have run.
        """
        selected = self.artifacts(configuration)
        failures: dict[str, BwcError] = {}
        for built_by in dict.fromkeys(a.built_by for a in selected):
            if built_by in self._produced:
                continue
            producer = self._producers.get(built_by)
            if producer is not None:
                logger.debug(f"Producing artifacts of {built_by}")
                try:
                    producer()
                except BwcError as e:
                    logger.error(f"{built_by}: {e}")
                    failures[built_by] = e
                    continue
            self._produced.add(built_by)
        if failures:
            raise ArtifactsUnavailableError(failures)
        return [a.file for a in selected]
