"""Branch domain models for bstatus.

BranchRecord is the per-branch result of a scan.
BranchSet pairs the scanned records with the merge counts taken
before any filtering or truncation.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from bstatus.operations.timefmt import epoch_to_relative_str


class BranchRecord(BaseModel):
    """One local branch that survived name filtering.

    Built only by the scanner; ranking and rendering read it.
    """

    model_config = {"frozen": True}

    name: str
    is_active: bool = False
    last_commit_time: int = Field(ge=0)
    summary: str
    ahead_count: int = Field(ge=0)
    tip_id: str
    upstream_name: Optional[str] = None

    @property
    def is_merged(self) -> bool:
        return self.ahead_count == 0

    def relative_time_label(self, now: float | None = None) -> str:
        """Age of the tip commit, e.g. "3 days". Computed on every call."""
        return epoch_to_relative_str(self.last_commit_time, now=now)


class MergeCounts(BaseModel):
    """Merged/unmerged totals over every scanned branch."""

    model_config = {"frozen": True}

    merged: int = 0
    unmerged: int = 0

    @property
    def total(self) -> int:
        return self.merged + self.unmerged

    def __str__(self) -> str:
        return f"{self.total} branches ({self.merged} merged, {self.unmerged} unmerged)"


class BranchSet(BaseModel):
    """Result of a scan: records in discovery order plus aggregate counts."""

    model_config = {"frozen": True}

    records: tuple[BranchRecord, ...] = ()
    counts: MergeCounts = MergeCounts()

    def __len__(self) -> int:
        return len(self.records)
