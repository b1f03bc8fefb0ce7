"""Shared test fixtures for bstatus.

Provides an in-memory repository data source, record helpers, and a
factory for throwaway git repositories built with GitPython.
"""

from __future__ import annotations

import hashlib
import time
from collections import deque
from collections.abc import Iterator

import pytest

from bstatus.exceptions import BranchResolutionError, GraphQueryError
from bstatus.models.branch import BranchRecord
from bstatus.storage.repositories import (
    CommitData,
    HeadState,
    LocalBranch,
    RemoteHead,
    RepositoryDataSource,
)

DAY = 24 * 60 * 60


class FakeRepository(RepositoryDataSource):
    """In-memory commit graph implementing the data source contract."""

    def __init__(self) -> None:
        self.commits: dict[str, tuple[int, str, tuple[str, ...]]] = {}
        self.branches: dict[str, str] = {}
        self.upstreams: dict[str, tuple[str, str]] = {}
        self.remote_head_list: list[RemoteHead] = []
        self.head_branch: str | None = None
        self.detached_at: str | None = None
        self.fail_graph_for: set[str] = set()
        self.remote_heads_calls = 0
        self.closed = False

    # -- builders ---------------------------------------------------------

    def add_commit(self, summary: str, timestamp: int, parents: tuple[str, ...] = ()) -> str:
        raw = f"{summary}:{timestamp}:{','.join(parents)}".encode()
        commit_id = hashlib.sha1(raw).hexdigest()
        self.commits[commit_id] = (timestamp, summary, parents)
        return commit_id

    def add_chain(self, n: int, *, parent: str | None = None, start: int = 1_000_000, prefix: str = "c") -> list[str]:
        """Add ``n`` linear commits one minute apart; returns their ids."""
        ids = []
        for i in range(n):
            parents = (parent,) if parent else ()
            parent = self.add_commit(f"{prefix}{i}", start + i * 60, parents)
            ids.append(parent)
        return ids

    def add_branch(self, name: str, tip: str, *, upstream: tuple[str, str] | None = None) -> None:
        self.branches[name] = tip
        if upstream is not None:
            self.upstreams[name] = upstream

    # -- contract ---------------------------------------------------------

    def _ancestors(self, commit_id: str) -> set[str]:
        return {c.commit_id for c in self.walk(commit_id)}

    def local_branches(self) -> list[LocalBranch]:
        branches = []
        for name, tip in self.branches.items():
            upstream_name, upstream_tip = self.upstreams.get(name, (None, None))
            branches.append(
                LocalBranch(
                    name=name,
                    is_head=name == self.head_branch,
                    tip_id=tip,
                    upstream_name=upstream_name,
                    upstream_tip_id=upstream_tip,
                )
            )
        return branches

    def remote_heads(self) -> list[RemoteHead]:
        self.remote_heads_calls += 1
        return list(self.remote_head_list)

    def local_branch_tip(self, name: str) -> str | None:
        return self.branches.get(name)

    def ahead_behind(self, local: str, other: str) -> tuple[int, int]:
        if local in self.fail_graph_for:
            raise GraphQueryError(local, other, "simulated failure")
        mine, theirs = self._ancestors(local), self._ancestors(other)
        return len(mine - theirs), len(theirs - mine)

    def commit(self, commit_id: str) -> CommitData:
        if commit_id not in self.commits:
            raise BranchResolutionError(commit_id, "no such commit")
        timestamp, summary, _ = self.commits[commit_id]
        return CommitData(commit_id=commit_id, timestamp=timestamp, summary=summary)

    def walk(self, commit_id: str) -> Iterator[CommitData]:
        visited: set[str] = set()
        queue: deque[str] = deque([commit_id])
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            yield self.commit(current)
            queue.extend(self.commits[current][2])

    def head(self) -> HeadState:
        if self.head_branch is not None:
            return HeadState(branch_name=self.head_branch, commit_id=self.branches[self.head_branch])
        return HeadState(branch_name=None, commit_id=self.detached_at)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def main_and_feature() -> FakeRepository:
    """``main`` with 2 commits, ``feature`` 3 commits ahead of it, HEAD on feature."""
    repo = FakeRepository()
    main = repo.add_chain(2, start=1_000_000, prefix="main")
    feature = repo.add_chain(3, parent=main[-1], start=2_000_000, prefix="feat")
    repo.add_branch("main", main[-1])
    repo.add_branch("feature", feature[-1])
    repo.head_branch = "feature"
    return repo


def make_record(
    name: str,
    last_commit_time: int,
    *,
    ahead_count: int = 0,
    is_active: bool = False,
    summary: str | None = None,
    upstream_name: str | None = None,
) -> BranchRecord:
    """Build a BranchRecord with a deterministic fake tip id."""
    return BranchRecord(
        name=name,
        is_active=is_active,
        last_commit_time=last_commit_time,
        summary=summary if summary is not None else f"tip of {name}",
        ahead_count=ahead_count,
        tip_id=hashlib.sha1(name.encode()).hexdigest(),
        upstream_name=upstream_name,
    )


# ------------------------------------------------------------------
# Real git repositories
# ------------------------------------------------------------------

class GitRepoBuilder:
    """Small helper that builds git histories with explicit timestamps."""

    def __init__(self, path) -> None:
        import git

        self.path = path
        self.repo = git.Repo.init(path)
        self.repo.git.symbolic_ref("HEAD", "refs/heads/main")
        self.actor = git.Actor("Test User", "test@example.com")
        self._n = 0

    def commit(self, message: str, timestamp: int) -> str:
        """Commit on the checked-out branch; returns the new commit id."""
        self._n += 1
        (self.path / "file.txt").write_text(f"{self._n}\n")
        self.repo.index.add(["file.txt"])
        date = f"{timestamp} +0000"
        c = self.repo.index.commit(
            message,
            author=self.actor,
            committer=self.actor,
            author_date=date,
            commit_date=date,
        )
        return c.hexsha

    def branch(self, name: str, at: str) -> None:
        self.repo.create_head(name, at)

    def checkout(self, name: str) -> None:
        """Point HEAD at ``name`` without touching the working tree."""
        self.repo.git.symbolic_ref("HEAD", f"refs/heads/{name}")

    def detach(self, commit_id: str) -> None:
        self.repo.git.update_ref("--no-deref", "HEAD", commit_id)

    def remote_branch(self, remote: str, branch: str, commit_id: str) -> None:
        self.repo.git.update_ref(f"refs/remotes/{remote}/{branch}", commit_id)

    def remote_head(self, remote: str, branch: str) -> None:
        self.repo.git.symbolic_ref(f"refs/remotes/{remote}/HEAD", f"refs/remotes/{remote}/{branch}")

    def set_upstream(self, local: str, remote: str, branch: str) -> None:
        with self.repo.config_writer() as cw:
            cw.set_value(f'branch "{local}"', "remote", remote)
            cw.set_value(f'branch "{local}"', "merge", f"refs/heads/{branch}")


@pytest.fixture
def git_builder(tmp_path):
    """A fresh, empty git repository with HEAD on ``main``."""
    pytest.importorskip("git")
    builder = GitRepoBuilder(tmp_path / "repo")
    yield builder
    builder.repo.close()


@pytest.fixture
def now() -> int:
    return int(time.time())


@pytest.fixture
def feature_repo(git_builder, now):
    """``main`` (2 commits, 3 days old) and ``feature`` (3 commits ahead, 2 hours old)."""
    git_builder.commit("initial", now - 5 * DAY)
    main_tip = git_builder.commit("Release 1.0", now - 3 * DAY)
    git_builder.branch("feature", main_tip)
    git_builder.checkout("feature")
    for i in range(3):
        git_builder.commit(f"feature work {i}", now - 4 * 3600 + i * 3600)
    return git_builder
