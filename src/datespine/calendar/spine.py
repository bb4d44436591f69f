"""
Date spine: a bounded run of consecutive days.

The spine starts at a fixed date, is capped at ``row_count`` candidate days,
and is cut off at the upstream watermark. Nothing here touches a database.
"""

from collections.abc import Iterator
from datetime import date, timedelta
from itertools import takewhile


def day_offsets(row_count: int) -> range:
    """
    Offsets ``0..row_count-1``, one per candidate day.

    A ``range`` rather than a generator so it can be iterated more than once.

    Raises:
        ValueError: If row_count is negative
    """
    if row_count < 0:
        raise ValueError(f"row_count must be >= 0, got {row_count}")
    return range(row_count)


def date_spine(start_date: date, row_count: int, watermark: date | None) -> Iterator[date]:
    """
    Consecutive dates from ``start_date``, at most ``row_count`` of them, none after ``watermark``.

    An undefined watermark (empty upstream) yields nothing; so does a
    watermark earlier than ``start_date``.

    Raises:
        ValueError: If row_count is negative
    """
    offsets = day_offsets(row_count)
    if watermark is None:
        return iter(())
    candidates = (start_date + timedelta(days=i) for i in offsets)
    # Candidates ascend, so filtering on the watermark can stop at the first miss
    return takewhile(lambda day: day <= watermark, candidates)


def spine_end(start_date: date, row_count: int, watermark: date | None) -> date | None:
    """Last date :func:`date_spine` produces, or None when it produces nothing."""
    if watermark is None or watermark < start_date or row_count <= 0:
        return None
    return min(start_date + timedelta(days=row_count - 1), watermark)


def is_truncated(start_date: date, row_count: int, watermark: date | None) -> bool:
    """Whether the row budget runs out before the watermark is reached."""
    if watermark is None:
        return False
    return watermark > start_date + timedelta(days=row_count - 1)
