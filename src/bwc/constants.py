"""Constants for bwc CLI."""

# Remote defaults
DEFAULT_REMOTE = "elastic"
REMOTE_URL_TEMPLATE = "https://github.com/{remote}/elasticsearch.git"

# Subproject that tracks the tip of a major line instead of a fixed minor
ROLLING_SUBPROJECT = "next-minor-snapshot"

# Build metadata
METADATA_KEY_PREFIX = "bwc_refspec_"
METADATA_FILENAME = "build_metadata"

# Legacy runtime handling for branches built with JDK 8
LEGACY_RUNTIME_JAVA_VERSION = "1.8"
LEGACY_BRANCHES = ("5.6", "6.0", "6.1")
RUNTIME_JAVA_HOME_VAR = "RUNTIME_JAVA_HOME"

# Nested build
ARTIFACT_MODULE = "elasticsearch"
ARTIFACT_CONFIGURATION = "default"
PACKAGE_TYPES = ("deb", "rpm", "zip")

# Environment overrides
REMOTE_ENV = "BWC_REMOTE"
REFSPEC_ENV = "BWC_REFSPEC"

INIT_TOOL_CHECK_TIMEOUT = 10
