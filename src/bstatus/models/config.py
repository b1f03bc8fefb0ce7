"""Configuration models for bstatus.

BranchFilter selects which branches a report keeps.
OutputMode selects how the ranked branches are rendered.
ReportConfig holds tunables; ReportOptions is one resolved invocation.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, Field

# Size of the "recently active" window. Not exposed as a flag yet.
RECENT_WINDOW = 5


class BranchFilter(str, enum.Enum):
    """Which branches survive ranking."""

    RECENT = "recent"
    ALL = "all"
    MERGED = "merged"
    UNMERGED = "unmerged"

    def __str__(self) -> str:
        return self.value


class OutputMode(str, enum.Enum):
    """How the report is printed."""

    HUMAN = "human"
    LISTING = "listing"
    LISTING_COMMITS = "listing-commits"
    NAME_ONLY = "name-only"

    def __str__(self) -> str:
        return self.value


class ReportConfig(BaseModel):
    """Tunables shared by every report."""

    model_config = {"frozen": True}

    recent_window: int = Field(default=RECENT_WINDOW, ge=1)


class ReportOptions(BaseModel):
    """Fully resolved options for a single invocation."""

    model_config = {"frozen": True}

    repo_path: Optional[str] = None
    patterns: Optional[tuple[str, ...]] = None
    branch_filter: BranchFilter = BranchFilter.RECENT
    output_mode: OutputMode = OutputMode.HUMAN
    reverse: bool = False

    @classmethod
    def from_flags(
        cls,
        *,
        repo_path: str | None = None,
        patterns: tuple[str, ...] | list[str] | None = None,
        verbose: bool = False,
        all_branches: bool = False,
        merged: bool = False,
        unmerged: bool = False,
        reverse: bool = False,
        name_only: bool = False,
    ) -> ReportOptions:
        """Resolve raw command-line flags into options.

        ``--merged`` together with ``--unmerged`` means ``--all``. An empty
        pattern list is treated the same as no patterns at all.
        """
        if all_branches or (merged and unmerged):
            branch_filter = BranchFilter.ALL
        elif merged:
            branch_filter = BranchFilter.MERGED
        elif unmerged:
            branch_filter = BranchFilter.UNMERGED
        else:
            branch_filter = BranchFilter.RECENT

        resolved_patterns = tuple(patterns) if patterns else None

        if verbose:
            output_mode = OutputMode.LISTING_COMMITS
        elif name_only:
            output_mode = OutputMode.NAME_ONLY
        elif branch_filter != BranchFilter.RECENT or resolved_patterns is not None:
            output_mode = OutputMode.LISTING
        else:
            output_mode = OutputMode.HUMAN

        return cls(
            repo_path=repo_path,
            patterns=resolved_patterns,
            branch_filter=branch_filter,
            output_mode=output_mode,
            reverse=reverse,
        )
