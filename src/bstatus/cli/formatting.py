"""Rich formatting helpers for the bstatus CLI.

Provides functions that render reports for terminal display.
Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from bstatus.models.config import RECENT_WINDOW, OutputMode
from bstatus.operations.timefmt import count_digits

if TYPE_CHECKING:
    from bstatus.models.branch import BranchRecord, MergeCounts
    from bstatus.report import Report
    from bstatus.storage.repositories import CommitData, HeadState

ABBREV_LEN = 8
HUMAN_STAR_WIDTH = 4

_HUMAN_HEADER = (
    "Recently active branches:",
    '  (use "git bstatus -a" to list all branches)',
    '  (use "git bstatus -v" to list commits)',
)


@dataclass(frozen=True)
class ColumnWidths:
    name: int
    age: int
    ahead: int  # includes the sign


def get_console(stderr: bool = False) -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=stderr)


def _emit(console: Console, text: Text | str = "") -> None:
    console.print(text, soft_wrap=True, highlight=False, markup=False, emoji=False)


def relative_labels(records: Sequence[BranchRecord], now: float | None = None) -> list[str]:
    """Age labels for ``records``, all measured from the same instant."""
    if now is None:
        now = time.time()
    return [r.relative_time_label(now) for r in records]


def compute_column_widths(records: Sequence[BranchRecord], labels: Sequence[str]) -> ColumnWidths:
    """Widths for exactly the rows about to be printed."""
    if not records:
        return ColumnWidths(name=0, age=0, ahead=2)
    return ColumnWidths(
        name=max(len(r.name) for r in records),
        age=max(len(label) for label in labels),
        ahead=count_digits(max(r.ahead_count for r in records)) + 1,
    )


def format_branch_row(
    record: BranchRecord,
    label: str,
    widths: ColumnWidths,
    *,
    star_width: int = 1,
) -> Text:
    """Row header: active marker, name, age, signed ahead count, upstream."""
    star = "*" if record.is_active else " "
    row = Text(f"{star:>{star_width}} ")
    row.append(f"{record.name:<{widths.name}}", style="green" if record.is_active else None)
    row.append(f"  {label:>{widths.age}} ")
    row.append(f"{record.ahead_count:+{widths.ahead}d}", style="green")
    if record.upstream_name is not None:
        row.append(" ")
        row.append(f"({record.upstream_name})", style="green")
    return row


def format_branches(
    records: Sequence[BranchRecord],
    console: Console,
    *,
    added_commits: dict[str, list[CommitData]] | None = None,
    star_width: int = 1,
    now: float | None = None,
) -> None:
    """Print one row per branch, optionally followed by its commits.

    With ``added_commits`` each row is followed by the listed commits
    (abbreviated id and summary) instead of the tip summary.
    """
    if not records:
        return

    labels = relative_labels(records, now)
    widths = compute_column_widths(records, labels)

    for record, label in zip(records, labels):
        row = format_branch_row(record, label, widths, star_width=star_width)
        if added_commits is None:
            row.append(f" {record.summary}")
            _emit(console, row)
            continue

        _emit(console, row)
        for commit in added_commits.get(record.name, []):
            _emit(console, Text(f"    {commit.commit_id[:ABBREV_LEN]} {commit.summary}"))


def format_name_only(records: Sequence[BranchRecord], console: Console) -> None:
    for record in records:
        _emit(console, Text(record.name))


def format_head(head: HeadState, console: Console) -> None:
    if head.is_detached:
        _emit(console, Text(f"HEAD detached at {head.commit_id[:ABBREV_LEN]}"))
    else:
        _emit(console, Text(f"On branch {head.branch_name}"))


def format_human(
    head: HeadState,
    records: Sequence[BranchRecord],
    counts: MergeCounts,
    console: Console,
    *,
    window: int = RECENT_WINDOW,
    now: float | None = None,
) -> None:
    """Narrative status: current branch, recent branches, and a count summary."""
    format_head(head, console)
    for line in _HUMAN_HEADER:
        _emit(console, line)
    _emit(console)

    format_branches(records[:window], console, star_width=HUMAN_STAR_WIDTH, now=now)

    # a lone merged branch (usually the default one) is not worth summarizing
    if counts.unmerged > 0 or counts.merged > 1:
        _emit(console)
        _emit(
            console,
            f"There are {counts.total} local branches "
            f"({counts.merged} merged, {counts.unmerged} unmerged).",
        )
        _emit(console, '  (use "git bstatus -m" or "git bstatus -u" to list them)')


def format_report(
    report: Report,
    console: Console,
    *,
    window: int = RECENT_WINDOW,
    now: float | None = None,
) -> None:
    """Render ``report`` in the output mode it was generated for."""
    mode = report.options.output_mode
    if mode == OutputMode.HUMAN:
        format_human(report.head, report.records, report.counts, console, window=window, now=now)
    elif mode == OutputMode.NAME_ONLY:
        format_name_only(report.records, console)
    elif mode == OutputMode.LISTING_COMMITS:
        format_branches(report.records, console, added_commits=report.added_commits, now=now)
    else:
        format_branches(report.records, console, now=now)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    _emit(console, Text.assemble(("error:", "bold red"), " ", message))
