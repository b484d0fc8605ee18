"""bwc: build backward-compatibility snapshots from prior release branches."""

__version__ = "0.1.0"
