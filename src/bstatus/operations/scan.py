"""Branch scanning: build BranchRecords and merge counts from a data source."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from bstatus.exceptions import InvalidTimestampError
from bstatus.models.branch import BranchRecord, BranchSet, MergeCounts

if TYPE_CHECKING:
    from bstatus.operations.default_ref import LazyBaseline
    from bstatus.storage.repositories import RepositoryDataSource

logger = logging.getLogger(__name__)


def matches_patterns(name: str, patterns: Sequence[str] | None) -> bool:
    """True if ``name`` contains any pattern (case-sensitive substring).

    No patterns (None or empty) matches every name.
    """
    if not patterns:
        return True
    return any(p in name for p in patterns)


def scan_branches(
    source: RepositoryDataSource,
    patterns: Sequence[str] | None,
    baseline: LazyBaseline,
) -> BranchSet:
    """Scan local branches into a BranchSet.

    Each branch is compared against its upstream tip when it has one, and
    against the default baseline otherwise. ``baseline`` is only asked for
    a commit when some branch lacks an upstream.

    Counts cover every branch that passed the name filter; merge-status
    filtering and truncation happen later and never change them.

    Raises:
        BranchResolutionError: If a tip commit cannot be read or has a
            negative timestamp.
        DefaultBranchNotFoundError: If a branch needs the default baseline
            and none can be found.
        GraphQueryError: If the ahead/behind query fails.
    """
    records: list[BranchRecord] = []
    merged = unmerged = 0

    for branch in source.local_branches():
        if not matches_patterns(branch.name, patterns):
            continue

        commit = source.commit(branch.tip_id)
        if commit.timestamp < 0:
            raise InvalidTimestampError(commit.commit_id, commit.timestamp)

        if branch.upstream_tip_id is not None:
            other = branch.upstream_tip_id
        else:
            other = baseline.get()

        ahead, _ = source.ahead_behind(branch.tip_id, other)
        if ahead == 0:
            merged += 1
        else:
            unmerged += 1
        logger.debug(
            "%s: ahead %d of %s", branch.name, ahead,
            branch.upstream_name or "default branch",
        )

        records.append(
            BranchRecord(
                name=branch.name,
                is_active=branch.is_head,
                last_commit_time=commit.timestamp,
                summary=commit.summary,
                ahead_count=ahead,
                tip_id=commit.commit_id,
                upstream_name=branch.upstream_name,
            )
        )

    return BranchSet(
        records=tuple(records),
        counts=MergeCounts(merged=merged, unmerged=unmerged),
    )
