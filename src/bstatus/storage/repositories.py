"""Abstract repository data source for bstatus.

Defines the read-only contract the scanner, resolver and presenter rely
on. No GitPython imports here -- pure abstract contracts and value types.

The concrete implementation is in git.py.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LocalBranch:
    """A local branch as reported by the data source.

    ``upstream_name`` and ``upstream_tip_id`` are both None when no
    usable upstream is configured.
    """

    name: str
    is_head: bool
    tip_id: str
    upstream_name: Optional[str] = None
    upstream_tip_id: Optional[str] = None


@dataclass(frozen=True)
class RemoteHead:
    """A remote's symbolic HEAD, resolved to its full target refname."""

    remote: str
    target: str  # e.g. "refs/remotes/origin/main"


@dataclass(frozen=True)
class CommitData:
    commit_id: str
    timestamp: int
    summary: str


@dataclass(frozen=True)
class HeadState:
    """The checked-out reference. ``branch_name`` is None when detached."""

    branch_name: Optional[str]
    commit_id: str

    @property
    def is_detached(self) -> bool:
        return self.branch_name is None


class RepositoryDataSource(ABC):
    """Abstract interface for read-only repository queries."""

    @abstractmethod
    def local_branches(self) -> list[LocalBranch]:
        """Enumerate local branches with their tips and upstreams."""
        ...

    @abstractmethod
    def remote_heads(self) -> list[RemoteHead]:
        """Enumerate symbolic ``refs/remotes/<remote>/HEAD`` pointers.

        Order is whatever the backend yields; callers must not rely on it.
        """
        ...

    @abstractmethod
    def local_branch_tip(self, name: str) -> str | None:
        """Tip commit of the local branch ``name``, or None if absent."""
        ...

    @abstractmethod
    def ahead_behind(self, local: str, other: str) -> tuple[int, int]:
        """Count commits only in ``local`` (ahead) and only in ``other`` (behind).

        Raises:
            GraphQueryError: If the graph query fails.
        """
        ...

    @abstractmethod
    def commit(self, commit_id: str) -> CommitData:
        """Look up a commit.

        Raises:
            BranchResolutionError: If the commit cannot be read.
        """
        ...

    @abstractmethod
    def walk(self, commit_id: str) -> Iterator[CommitData]:
        """Yield ``commit_id`` and its ancestors in topological order."""
        ...

    @abstractmethod
    def head(self) -> HeadState:
        """Resolve HEAD to a branch name or a detached commit."""
        ...

    def close(self) -> None:
        """Release any resources held by the data source."""
