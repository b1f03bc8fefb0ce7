"""bstatus: a summary of local git branches.

Reports how fresh each local branch is, whether it is merged into its
upstream (or the repository's default branch), and how many commits it
is ahead.
"""

from bstatus._version import __version__

# Core entry point
from bstatus.report import BranchReport, Report

# Models and configuration
from bstatus.models.branch import BranchRecord, BranchSet, MergeCounts
from bstatus.models.config import (
    RECENT_WINDOW,
    BranchFilter,
    OutputMode,
    ReportConfig,
    ReportOptions,
)

# Data source contract
from bstatus.storage.repositories import (
    CommitData,
    HeadState,
    LocalBranch,
    RemoteHead,
    RepositoryDataSource,
)

# Operations
from bstatus.operations.default_ref import LazyBaseline, resolve_default_baseline
from bstatus.operations.rank import rank_branches
from bstatus.operations.scan import matches_patterns, scan_branches
from bstatus.operations.timefmt import count_digits, epoch_to_relative_str

# Exceptions
from bstatus.exceptions import (
    BranchResolutionError,
    BranchStatusError,
    DefaultBranchNotFoundError,
    GraphQueryError,
    InvalidTimestampError,
    MalformedReferenceError,
    RepositoryNotFoundError,
)

__all__ = [
    "__version__",
    "BranchReport",
    "Report",
    "BranchRecord",
    "BranchSet",
    "MergeCounts",
    "RECENT_WINDOW",
    "BranchFilter",
    "OutputMode",
    "ReportConfig",
    "ReportOptions",
    "CommitData",
    "HeadState",
    "LocalBranch",
    "RemoteHead",
    "RepositoryDataSource",
    "LazyBaseline",
    "resolve_default_baseline",
    "rank_branches",
    "matches_patterns",
    "scan_branches",
    "count_digits",
    "epoch_to_relative_str",
    "BranchResolutionError",
    "BranchStatusError",
    "DefaultBranchNotFoundError",
    "GraphQueryError",
    "InvalidTimestampError",
    "MalformedReferenceError",
    "RepositoryNotFoundError",
]
