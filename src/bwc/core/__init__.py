"""Core pipeline logic for bwc.

- branch: branch name for a subproject's bwc version
- refspec: override / recorded / default refspec resolution
- layout: checkout, metadata and project paths
- metadata: build_metadata read and write
- artifacts: expected files, verification and the artifact registry
- pipeline: the per-subproject checkout-and-build state machine
"""

from .artifacts import ArtifactRegistry, expected_artifacts, find_missing, verify_artifacts
from .branch import branch_for
from .layout import (
    get_bwc_home,
    get_checkout_dir,
    get_metadata_file,
    get_subproject_dir,
    metadata_key,
    project_path,
)
from .metadata import BuildMetadata, parse_metadata, record_head, write_build_metadata
from .pipeline import BwcPipeline
from .refspec import default_refspec, resolve_refspec

__all__ = [
    "ArtifactRegistry",
    "BuildMetadata",
    "BwcPipeline",
    "branch_for",
    "default_refspec",
    "expected_artifacts",
    "find_missing",
    "get_bwc_home",
    "get_checkout_dir",
    "get_metadata_file",
    "get_subproject_dir",
    "metadata_key",
    "parse_metadata",
    "project_path",
    "record_head",
    "resolve_refspec",
    "verify_artifacts",
    "write_build_metadata",
]
