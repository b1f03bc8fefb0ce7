"""Coarse "time ago" labels and digit counting for column widths."""

from __future__ import annotations

import time

SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30  # close enough for a coarse label
MONTHS_PER_YEAR = 12


def plural(unit: str, n: int) -> str:
    """Format ``n`` with ``unit``, adding "s" unless ``n`` is exactly 1."""
    return f"{n} {unit}{'' if n == 1 else 's'}"


def epoch_to_relative_str(timestamp: int, now: float | None = None) -> str:
    """Format a Unix timestamp as a relative age such as "3 days".

    Each step picks the largest unit whose count is at least one and
    below the next unit's threshold. Timestamps at or after ``now``
    render as "now".

    Args:
        timestamp: Seconds since the epoch.
        now: Reference time; defaults to the current wall clock.
    """
    if now is None:
        now = time.time()
    now = int(now)
    if timestamp >= now:
        return "now"

    secs = now - timestamp
    if secs < SECONDS_PER_MINUTE:
        return plural("sec", secs)

    mins = secs // SECONDS_PER_MINUTE
    if mins < MINUTES_PER_HOUR:
        return plural("min", mins)

    hours = mins // MINUTES_PER_HOUR
    if hours < HOURS_PER_DAY:
        return plural("hour", hours)

    days = hours // HOURS_PER_DAY
    if days < DAYS_PER_WEEK:
        return plural("day", days)

    if days < DAYS_PER_MONTH:
        return plural("week", days // DAYS_PER_WEEK)

    months = days // DAYS_PER_MONTH
    if months < MONTHS_PER_YEAR:
        return plural("month", months)

    return plural("year", months // MONTHS_PER_YEAR)


def count_digits(n: int) -> int:
    """Number of base-10 digits in ``n``; ``count_digits(0) == 1``."""
    if n < 0:
        raise ValueError(f"count_digits expects a non-negative integer, got {n}")
    return len(str(n))
