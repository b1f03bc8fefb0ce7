"""Branch ranking: filter by merge status, sort, truncate, reverse."""

from __future__ import annotations

from collections.abc import Iterable

from bstatus.models.branch import BranchRecord
from bstatus.models.config import RECENT_WINDOW, BranchFilter


def rank_branches(
    records: Iterable[BranchRecord],
    branch_filter: BranchFilter,
    *,
    reverse: bool = False,
    window: int = RECENT_WINDOW,
) -> list[BranchRecord]:
    """Order records for display.

    Steps run in a fixed order:
      1. MERGED keeps only ahead == 0, UNMERGED only ahead > 0.
      2. Stable sort by last commit time, newest first.
      3. RECENT keeps the first ``window`` records.
      4. ``reverse`` flips the result, after truncation, so RECENT always
         shows the newest branches whatever the display order.

    Returns a new list; the records themselves are never modified.
    """
    if branch_filter == BranchFilter.MERGED:
        ranked = [r for r in records if r.ahead_count == 0]
    elif branch_filter == BranchFilter.UNMERGED:
        ranked = [r for r in records if r.ahead_count != 0]
    else:
        ranked = list(records)

    ranked.sort(key=lambda r: r.last_commit_time, reverse=True)

    if branch_filter == BranchFilter.RECENT:
        del ranked[window:]

    if reverse:
        ranked.reverse()

    return ranked
