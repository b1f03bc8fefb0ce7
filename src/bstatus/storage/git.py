"""GitPython-backed repository data source.

Translates GitPython errors into bstatus exceptions at this boundary so
nothing above the storage layer needs to know about ``git.exc``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import git
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from bstatus.exceptions import (
    BranchResolutionError,
    GraphQueryError,
    RepositoryNotFoundError,
)
from bstatus.storage.repositories import (
    CommitData,
    HeadState,
    LocalBranch,
    RemoteHead,
    RepositoryDataSource,
)

logger = logging.getLogger(__name__)

_LOOKUP_ERRORS = (ValueError, BadName, BadObject, GitCommandError)


def _summary(commit: git.Commit) -> str:
    summary = commit.summary
    if isinstance(summary, bytes):
        summary = summary.decode("utf-8", "replace")
    return summary


def _to_commit_data(commit: git.Commit) -> CommitData:
    return CommitData(
        commit_id=commit.hexsha,
        timestamp=int(commit.committed_date),
        summary=_summary(commit),
    )


class GitRepositoryDataSource(RepositoryDataSource):
    """Read-only view of a git repository through GitPython."""

    def __init__(self, repo: git.Repo) -> None:
        self._repo = repo

    @classmethod
    def discover(cls, path: str | os.PathLike[str] | None = None) -> GitRepositoryDataSource:
        """Open the repository containing ``path`` (default: the working directory).

        Raises:
            RepositoryNotFoundError: If no repository exists at or above ``path``.
        """
        target = os.fspath(path) if path is not None else os.getcwd()
        try:
            repo = git.Repo(target, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryNotFoundError(target) from e
        logger.debug("Opened repository at %s", repo.git_dir)
        return cls(repo)

    def _active_branch_name(self) -> str | None:
        head = self._repo.head
        if head.is_detached:
            return None
        return head.reference.name

    def _upstream(self, ref: git.Head) -> tuple[str | None, str | None]:
        """Name and tip of the upstream configured for ``ref``, if it exists.

        ``branch.<name>.remote = .`` names another local branch; any other
        remote names a remote-tracking ref.
        """
        reader = ref.config_reader()
        if not (reader.has_option(ref.k_config_remote) and reader.has_option(ref.k_config_remote_ref)):
            return None, None

        if str(reader.get_value(ref.k_config_remote)) == ".":
            merge = str(reader.get_value(ref.k_config_remote_ref))
            try:
                upstream = git.Head(self._repo, git.Head.to_full_path(merge))
            except ValueError:
                logger.debug("Upstream %s of %s is not a local branch; ignoring it", merge, ref.name)
                return None, None
        else:
            upstream = ref.tracking_branch()

        if upstream is None or not upstream.is_valid():
            logger.debug("Upstream of %s does not exist; ignoring it", ref.name)
            return None, None
        try:
            return upstream.name, upstream.commit.hexsha
        except _LOOKUP_ERRORS as e:
            raise BranchResolutionError(upstream.path, str(e)) from e

    def local_branches(self) -> list[LocalBranch]:
        active = self._active_branch_name()
        branches: list[LocalBranch] = []
        for ref in self._repo.heads:
            try:
                tip_id = ref.commit.hexsha
            except _LOOKUP_ERRORS as e:
                raise BranchResolutionError(ref.name, str(e)) from e

            upstream_name, upstream_tip_id = self._upstream(ref)

            branches.append(
                LocalBranch(
                    name=ref.name,
                    is_head=ref.name == active,
                    tip_id=tip_id,
                    upstream_name=upstream_name,
                    upstream_tip_id=upstream_tip_id,
                )
            )
        return branches

    def remote_heads(self) -> list[RemoteHead]:
        heads: list[RemoteHead] = []
        for ref in git.RemoteReference.iter_items(self._repo):
            if ref.remote_head != "HEAD":
                continue
            try:
                target = ref.reference.path
            except TypeError:
                # HEAD stored as a plain object id rather than a symref
                logger.debug("Remote HEAD %s is not symbolic; skipping", ref.path)
                continue
            heads.append(RemoteHead(remote=ref.remote_name, target=target))
        return heads

    def local_branch_tip(self, name: str) -> str | None:
        ref = next((h for h in self._repo.heads if h.name == name), None)
        if ref is None:
            return None
        try:
            return ref.commit.hexsha
        except _LOOKUP_ERRORS as e:
            raise BranchResolutionError(name, str(e)) from e

    def ahead_behind(self, local: str, other: str) -> tuple[int, int]:
        try:
            out = self._repo.git.rev_list("--left-right", "--count", f"{local}...{other}")
            ahead, behind = (int(n) for n in out.split())
        except (GitCommandError, ValueError) as e:
            raise GraphQueryError(local, other, str(e)) from e
        return ahead, behind

    def commit(self, commit_id: str) -> CommitData:
        try:
            return _to_commit_data(self._repo.commit(commit_id))
        except _LOOKUP_ERRORS as e:
            raise BranchResolutionError(commit_id, str(e)) from e

    def walk(self, commit_id: str) -> Iterator[CommitData]:
        try:
            for commit in self._repo.iter_commits(commit_id, topo_order=True):
                yield _to_commit_data(commit)
        except _LOOKUP_ERRORS as e:
            raise BranchResolutionError(commit_id, str(e)) from e

    def head(self) -> HeadState:
        head = self._repo.head
        try:
            commit_id = head.commit.hexsha
        except _LOOKUP_ERRORS as e:
            raise BranchResolutionError("HEAD", str(e)) from e
        return HeadState(branch_name=self._active_branch_name(), commit_id=commit_id)

    def close(self) -> None:
        self._repo.close()
