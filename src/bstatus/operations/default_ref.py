"""Default branch resolution: the baseline for branches without an upstream.

Remote HEAD pointers are considered in lexical order of remote name so the
choice never depends on how the backend happens to enumerate refs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bstatus.exceptions import DefaultBranchNotFoundError, MalformedReferenceError

if TYPE_CHECKING:
    from bstatus.storage.repositories import RemoteHead, RepositoryDataSource

logger = logging.getLogger(__name__)

REMOTE_REF_PREFIX = "refs/remotes/"
PREFERRED_REMOTE = "origin"
FALLBACK_BRANCHES = ("master", "main")


def parse_remote_target(refname: str) -> tuple[str, str]:
    """Split ``refs/remotes/<remote>/<branch>`` into ``(remote, branch)``.

    The branch part keeps any further slashes ("feature/x").

    Raises:
        MalformedReferenceError: If either segment is missing.
    """
    if not refname.startswith(REMOTE_REF_PREFIX):
        raise MalformedReferenceError(refname)
    remote, sep, branch = refname[len(REMOTE_REF_PREFIX):].partition("/")
    if not remote or not sep or not branch:
        raise MalformedReferenceError(refname)
    return remote, branch


def choose_remote_head(heads: list[RemoteHead]) -> RemoteHead | None:
    """Pick the remote HEAD to follow: ``origin`` if present, else the last by name."""
    if not heads:
        return None
    ordered = sorted(heads, key=lambda h: h.remote)
    for head in ordered:
        if head.remote == PREFERRED_REMOTE:
            return head
    return ordered[-1]


def resolve_default_baseline(source: RepositoryDataSource) -> str:
    """Return the commit id of the repository's default branch.

    Follows the chosen remote HEAD to a local branch of the same name,
    then falls back to a local ``master`` and then ``main``.

    Raises:
        MalformedReferenceError: If the remote HEAD target cannot be parsed.
        DefaultBranchNotFoundError: If every heuristic comes up empty.
    """
    head = choose_remote_head(source.remote_heads())
    if head is not None:
        _, branch = parse_remote_target(head.target)
        tip = source.local_branch_tip(branch)
        if tip is not None:
            logger.debug("Default branch %s (via %s HEAD)", branch, head.remote)
            return tip
        logger.debug(
            "Remote %s HEAD points at %s but no such local branch exists",
            head.remote, branch,
        )

    for name in FALLBACK_BRANCHES:
        tip = source.local_branch_tip(name)
        if tip is not None:
            logger.debug("Default branch %s (name fallback)", name)
            return tip

    raise DefaultBranchNotFoundError()


class LazyBaseline:
    """Resolve the default baseline on first use and remember the answer.

    A failed resolution is remembered too, so the resolver runs at most
    once per instance.
    """

    def __init__(self, source: RepositoryDataSource) -> None:
        self._source = source
        self._resolved = False
        self._commit_id: str | None = None
        self._error: Exception | None = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    def get(self) -> str:
        if not self._resolved:
            self._resolved = True
            try:
                self._commit_id = resolve_default_baseline(self._source)
            except Exception as e:
                self._error = e
                raise
        if self._error is not None:
            raise self._error
        return self._commit_id
