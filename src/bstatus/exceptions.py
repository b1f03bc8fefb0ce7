"""bstatus exception hierarchy.

All bstatus-specific exceptions inherit from BranchStatusError.
"""

from __future__ import annotations


class BranchStatusError(Exception):
    """Base exception for all bstatus errors."""


class RepositoryNotFoundError(BranchStatusError):
    """Raised when no repository exists at or above a path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Repository not found: {path}")


class BranchResolutionError(BranchStatusError):
    """Raised when a branch tip or commit cannot be resolved."""

    def __init__(self, ref: str, reason: str) -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Could not resolve '{ref}': {reason}")


class InvalidTimestampError(BranchResolutionError):
    """Raised when a commit reports a negative timestamp.

    A well-formed history never yields negative epoch seconds, so this
    is treated as a consistency violation rather than clamped to zero.
    """

    def __init__(self, commit_id: str, timestamp: int) -> None:
        self.commit_id = commit_id
        self.timestamp = timestamp
        super().__init__(commit_id, f"negative commit timestamp {timestamp}")


class DefaultBranchNotFoundError(BranchStatusError):
    """Raised when no default branch can be inferred."""

    def __init__(self) -> None:
        super().__init__("Couldn't find default branch")


class GraphQueryError(BranchStatusError):
    """Raised when the ahead/behind graph query fails."""

    def __init__(self, local: str, other: str, reason: str) -> None:
        self.local = local
        self.other = other
        self.reason = reason
        super().__init__(
            f"Ahead/behind query failed for {local[:8]}...{other[:8]}: {reason}"
        )


class MalformedReferenceError(BranchStatusError):
    """Raised when a remote-tracking ref does not split into remote and branch."""

    def __init__(self, refname: str) -> None:
        self.refname = refname
        super().__init__(
            f"Malformed remote-tracking reference '{refname}' "
            f"(expected refs/remotes/<remote>/<branch>)"
        )
