"""
Calendar dimension rows and their tabular forms.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

import ibis
import pandas as pd

from datespine.calendar.attributes import calendar_attributes
from datespine.calendar.spine import date_spine

# Column order of the materialised table
CALENDAR_SCHEMA = ibis.schema(
    {
        "date_key": "date",
        "year": "int32",
        "month": "int32",
        "month_name": "string",
        "quarter": "int32",
        "day_of_week": "int32",
        "day_name": "string",
        "load_timestamp": "timestamp('UTC')",
    }
)

EXTENDED_COLUMNS = ibis.schema(
    {
        "day_of_month": "int32",
        "day_of_year": "int32",
        "week_of_year": "int32",
        "is_weekend": "boolean",
        "is_month_end": "boolean",
    }
)


def calendar_schema(extended: bool = False) -> ibis.Schema:
    """Schema of the calendar table, optionally with the extended attributes."""
    if not extended:
        return CALENDAR_SCHEMA
    return ibis.schema({**dict(CALENDAR_SCHEMA.items()), **dict(EXTENDED_COLUMNS.items())})


@dataclass(frozen=True)
class CalendarDay:
    """One row of the calendar dimension."""

    date_key: date
    year: int
    month: int
    month_name: str
    quarter: int
    day_of_week: int
    day_name: str
    load_timestamp: datetime
    extended: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_date(cls, day: date, loaded_at: datetime, extended: bool = False) -> "CalendarDay":
        attrs = calendar_attributes(day, extended=extended)
        extra = {name: attrs.pop(name) for name in EXTENDED_COLUMNS.names if name in attrs}
        return cls(date_key=day, load_timestamp=loaded_at, extended=extra, **attrs)

    def to_dict(self) -> dict[str, Any]:
        row = {
            "date_key": self.date_key,
            "year": self.year,
            "month": self.month,
            "month_name": self.month_name,
            "quarter": self.quarter,
            "day_of_week": self.day_of_week,
            "day_name": self.day_name,
            "load_timestamp": self.load_timestamp,
        }
        row.update(self.extended)
        return row


def generate_calendar(
    start_date: date,
    row_count: int,
    watermark: date | None,
    loaded_at: datetime | None = None,
    extended: bool = False,
) -> list[CalendarDay]:
    """
    Generate the calendar rows for ``[start_date, min(start_date + row_count - 1, watermark)]``.

    Every row shares one ``load_timestamp``; everything else is a pure
    function of ``date_key``.

    Args:
        start_date: First day of the calendar
        row_count: Maximum number of days to generate
        watermark: Latest date the calendar may include; None means the
            upstream is empty and the calendar is empty too
        loaded_at: Generation time (default: now, UTC)
        extended: Include the extended attributes

    Returns:
        Rows ordered by date_key ascending
    """
    if loaded_at is None:
        loaded_at = datetime.now(timezone.utc)
    rows = [CalendarDay.from_date(day, loaded_at, extended=extended) for day in date_spine(start_date, row_count, watermark)]
    return sorted(rows, key=lambda row: row.date_key)


def calendar_frame(rows: list[CalendarDay], extended: bool = False) -> pd.DataFrame:
    """Rows as a DataFrame with the table's column order (columns present even when empty)."""
    columns = list(calendar_schema(extended).names)
    return pd.DataFrame([row.to_dict() for row in rows], columns=columns)


def calendar_table(rows: list[CalendarDay], extended: bool = False) -> ibis.Table:
    """Rows as an in-memory ibis table with an explicit schema."""
    return ibis.memtable(calendar_frame(rows, extended=extended), schema=calendar_schema(extended))
