"""Branch resolution for bwc subprojects."""

from ..constants import ROLLING_SUBPROJECT
from ..models import VersionSpec


def branch_for(subproject: str, version: VersionSpec) -> str:
    """Return the branch a subproject builds its snapshot from.

    The rolling subproject tracks the tip of the major line ("6.x");
    every other subproject builds a fixed minor branch ("6.1").
    """
    if subproject == ROLLING_SUBPROJECT:
        return f"{version.major}.x"
    return f"{version.major}.{version.minor}"
