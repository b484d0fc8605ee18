"""Refspec resolution for bwc checkouts."""


def default_refspec(remote: str, branch: str) -> str:
    """Return the remote-tracking ref of a branch."""
    return f"{remote}/{branch}"


def resolve_refspec(override: str | None, persisted: str | None, default: str) -> str:
    """Return the first present of: runtime override, persisted metadata, default.

    Empty strings count as absent.
    """
    for candidate in (override, persisted):
        if candidate:
            return candidate
    return default
