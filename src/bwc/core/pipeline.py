"""Per-subproject bwc pipeline.

Runs the seven steps that turn a subproject's bwc version into verified
distribution files:

    clone -> inspect/add remote -> fetch -> checkout -> record commit
          -> nested build -> verify artifacts

Each step runs only after the previous one succeeded. The first error
stops the pipeline; nothing is retried or rolled back. A subproject with
no bwc version is a no-op and touches neither the filesystem nor any
process.
"""

import logging
from pathlib import Path

from ..config import BwcConfig, RunSettings
from ..constants import ARTIFACT_CONFIGURATION, ARTIFACT_MODULE
from ..errors import BuildError, BwcError
from ..models import Artifact, PipelineResult, PipelineState, VersionSpec
from ..output import get_output_context
from ..services import (
    build_command,
    build_env,
    checkout,
    ensure_clone,
    ensure_remote,
    fetch_all,
    has_remote,
    list_remotes,
    run_gradle,
)
from .artifacts import ArtifactRegistry, expected_artifacts, verify_artifacts
from .branch import branch_for
from .layout import (
    get_checkout_dir,
    get_metadata_file,
    get_subproject_dir,
    metadata_key,
    project_path,
)
from .metadata import BuildMetadata, record_head
from .refspec import default_refspec, resolve_refspec

logger = logging.getLogger(__name__)


class BwcPipeline:
    """Checkout-and-build pipeline for one bwc subproject."""

    def __init__(
        self,
        subproject: str,
        repo_root: Path,
        config: BwcConfig,
        settings: RunSettings | None = None,
        registry: ArtifactRegistry | None = None,
    ):
        self.subproject = subproject
        self.repo_root = repo_root
        self.config = config
        self.settings = settings or RunSettings()
        self.version: VersionSpec | None = config.get_snapshot_for_project(subproject)
        self.artifact_paths: dict[str, Path] = {}

        if self.version is None:
            return

        self.branch = branch_for(subproject, self.version)
        self.subproject_dir = get_subproject_dir(repo_root, config, subproject)
        self.checkout_dir = get_checkout_dir(self.subproject_dir, self.branch)
        self.metadata_file = get_metadata_file(self.subproject_dir, subproject)
        self.metadata_key = metadata_key(project_path(config, subproject))
        self.remote = self.settings.remote or config.remote.name
        self.remote_url = config.remote.url_for(self.remote)
        self.artifact_paths = expected_artifacts(self.checkout_dir, self.version)

        if registry is not None:
            for kind, path in self.artifact_paths.items():
                registry.register(
                    ARTIFACT_CONFIGURATION,
                    path,
                    name=ARTIFACT_MODULE,
                    type=kind,
                    built_by=subproject,
                    producer=self.execute,
                )

    @property
    def source(self) -> Path:
        """Repository the checkout is cloned from."""
        source = self.config.project.source
        if source is None:
            return self.repo_root
        return source if source.is_absolute() else self.repo_root / source

    def resolve_refspec(self) -> str:
        """Resolve the refspec to check out: override, then recorded commit, then remote branch."""
        shared = self.config.build.metadata_file
        if shared is not None and not shared.is_absolute():
            shared = self.repo_root / shared
        metadata = BuildMetadata.load([self.metadata_file, shared])
        return resolve_refspec(
            self.settings.refspec,
            metadata.get(self.metadata_key),
            default_refspec(self.remote, self.branch),
        )

    def run(self) -> PipelineResult:
        """Run the pipeline, capturing the first error on the result."""
        result = PipelineResult(subproject=self.subproject)
        try:
            self._run(result)
        except BwcError as e:
            logger.error(f"{self.subproject}: {e}")
            result.error = str(e)
        return result

    def execute(self) -> PipelineResult:
        """Run the pipeline and raise the first error instead of recording it."""
        result = PipelineResult(subproject=self.subproject)
        self._run(result)
        return result

    def _advance(self, result: PipelineResult, state: PipelineState) -> None:
        logger.debug(f"{self.subproject}: {result.state.value} -> {state.value}")
        result.state = state

    def _run(self, result: PipelineResult) -> None:
        if self.version is None:
            logger.debug(f"{self.subproject}: no bwc version, nothing to do")
            return

        ctx = get_output_context()
        result.version = str(self.version)
        result.branch = self.branch
        refspec = self.resolve_refspec()
        result.refspec = refspec

        if self.settings.dry_run:
            self._describe(refspec)
            result.planned = True
            return

        # Clone once, reuse afterwards
        if not ensure_clone(self.source, self.checkout_dir):
            result.skipped.append("clone")
        self._advance(result, PipelineState.CLONED)

        # Add the release remote unless the listing already shows it
        present = has_remote(list_remotes(self.checkout_dir), self.remote, self.remote_url)
        if not ensure_remote(self.checkout_dir, self.remote, self.remote_url, present):
            result.skipped.append("add-remote")
        self._advance(result, PipelineState.REMOTE_ENSURED)

        # Offline runs keep whatever refs the checkout already has
        if not fetch_all(self.checkout_dir, offline=self.settings.offline):
            result.skipped.append("fetch")
        self._advance(result, PipelineState.FETCHED)

        # Switch to the resolved refspec
        ctx.step(self.subproject, f"Checking out elasticsearch {refspec} for branch {self.branch}")
        checkout(self.checkout_dir, refspec)
        self._advance(result, PipelineState.CHECKED_OUT)

        # Pin the commit so later runs reuse it
        result.commit = record_head(self.checkout_dir, self.metadata_file, self.metadata_key)
        self._advance(result, PipelineState.METADATA_WRITTEN)

        # Nested build; artifacts are checked even on failure
        self._build()
        self._advance(result, PipelineState.BUILT)
        self._advance(result, PipelineState.VERIFIED)
        result.artifacts = self.artifacts()

    def _build(self) -> None:
        cmd = build_command(self.checkout_dir, self.settings.log_level, self.settings.stacktrace)
        env = build_env(
            self.branch,
            self.config.build.runtime_java_version,
            self.config.build.legacy_branches,
            self.settings.runtime_java_home,
        )
        returncode = None
        try:
            returncode = run_gradle(cmd, self.checkout_dir, env)
        finally:
            # Missing files are reported even when gradle itself failed
            verify_artifacts(self.artifact_paths.values())
        if returncode != 0:
            raise BuildError(
                f"Nested build of {self.branch} exited with {returncode}", returncode=returncode
            )

    def artifacts(self) -> list[Artifact]:
        """Return the artifacts this pipeline produces."""
        return [
            Artifact(
                configuration=ARTIFACT_CONFIGURATION,
                file=path,
                name=ARTIFACT_MODULE,
                type=kind,
                built_by=self.subproject,
            )
            for kind, path in self.artifact_paths.items()
        ]

    def _describe(self, refspec: str) -> None:
        ctx = get_output_context()
        name = self.subproject
        if self.checkout_dir.exists():
            ctx.step(name, f"Reuse checkout {self.checkout_dir}")
        else:
            ctx.step(name, f"git clone {self.source} {self.checkout_dir}")
        ctx.step(name, f"git remote add {self.remote} {self.remote_url} (if missing)")
        if self.settings.offline:
            ctx.step(name, "Skip git fetch --all (offline)")
        else:
            ctx.step(name, "git fetch --all")
        ctx.step(name, f"git checkout {refspec}")
        ctx.step(name, f"Record HEAD as {self.metadata_key} in {self.metadata_file}")
        cmd = build_command(self.checkout_dir, self.settings.log_level, self.settings.stacktrace)
        ctx.step(name, " ".join(cmd))
        for path in self.artifact_paths.values():
            ctx.step(name, f"Expect {path}")
