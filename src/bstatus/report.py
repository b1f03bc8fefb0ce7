"""BranchReport -- the public SDK entry point for bstatus.

Ties together the repository data source, the scanner and the ranker.
Users interact with ``BranchReport.open()``, ``r.scan()``, ``r.rank()``
or the one-shot ``r.generate(options)``.

Not thread-safe.  Each thread should open its own ``BranchReport``.
"""

from __future__ import annotations

import itertools
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bstatus.models.config import BranchFilter, OutputMode, ReportConfig, ReportOptions
from bstatus.operations.default_ref import LazyBaseline
from bstatus.operations.rank import rank_branches
from bstatus.operations.scan import scan_branches

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from bstatus.models.branch import BranchRecord, BranchSet, MergeCounts
    from bstatus.storage.repositories import CommitData, HeadState, RepositoryDataSource


@dataclass(frozen=True)
class Report:
    """Everything a presenter needs, computed before any output is written.

    Attributes:
        options: The options the report was generated with.
        records: Ranked records, in display order.
        counts: Merge counts over all scanned branches (pre-filter).
        head: Checked-out state; only resolved for the human mode.
        added_commits: Per-branch commit lists for the commit listing mode.
    """

    options: ReportOptions
    records: list[BranchRecord]
    counts: MergeCounts
    head: HeadState | None = None
    added_commits: dict[str, list[CommitData]] = field(default_factory=dict)


class BranchReport:
    """Branch status queries over a single repository."""

    def __init__(
        self,
        source: RepositoryDataSource,
        config: ReportConfig | None = None,
    ) -> None:
        self._source = source
        self._config = config or ReportConfig()
        self._closed = False

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str] | None = None,
        *,
        config: ReportConfig | None = None,
    ) -> BranchReport:
        """Open the git repository at or above ``path``.

        Args:
            path: Any path inside the repository.  Defaults to the
                current working directory.
            config: Report tunables.  Defaults created if *None*.

        Raises:
            RepositoryNotFoundError: If no repository is found.
        """
        from bstatus.storage.git import GitRepositoryDataSource

        return cls(GitRepositoryDataSource.discover(path), config)

    @property
    def config(self) -> ReportConfig:
        return self._config

    @property
    def source(self) -> RepositoryDataSource:
        return self._source

    def scan(self, patterns: Sequence[str] | None = None) -> BranchSet:
        """Scan local branches whose names contain any of ``patterns``."""
        return scan_branches(self._source, patterns, LazyBaseline(self._source))

    def rank(
        self,
        branch_set: BranchSet,
        branch_filter: BranchFilter = BranchFilter.RECENT,
        *,
        reverse: bool = False,
    ) -> list[BranchRecord]:
        """Filter, sort and truncate a scan.  ``branch_set.counts`` is untouched."""
        return rank_branches(
            branch_set.records,
            branch_filter,
            reverse=reverse,
            window=self._config.recent_window,
        )

    def head(self) -> HeadState:
        return self._source.head()

    def added_commits(self, records: Iterable[BranchRecord]) -> dict[str, list[CommitData]]:
        """Collect up to ``ahead_count + 1`` commits from each branch tip.

        Commits are walked in topological order from the tip, so the last
        entry is usually the commit the branch forked from.
        """
        return {
            r.name: list(itertools.islice(self._source.walk(r.tip_id), r.ahead_count + 1))
            for r in records
        }

    def generate(self, options: ReportOptions) -> Report:
        """Scan, rank and gather everything ``options.output_mode`` will print."""
        branch_set = self.scan(options.patterns)
        records = self.rank(branch_set, options.branch_filter, reverse=options.reverse)

        head = None
        added: dict[str, list[CommitData]] = {}
        if options.output_mode == OutputMode.HUMAN:
            head = self.head()
        elif options.output_mode == OutputMode.LISTING_COMMITS:
            added = self.added_commits(records)

        return Report(
            options=options,
            records=records,
            counts=branch_set.counts,
            head=head,
            added_commits=added,
        )

    def close(self) -> None:
        """Release the underlying repository handle."""
        if self._closed:
            return
        self._closed = True
        self._source.close()

    def __enter__(self) -> BranchReport:
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<BranchReport source={type(self._source).__name__} {state}>"
