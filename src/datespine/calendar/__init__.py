"""
Calendar dimension generation.
"""

from datespine.calendar.attributes import DAY_NAMES, MONTH_NAMES, calendar_attributes, day_of_week, quarter
from datespine.calendar.generator import (
    CALENDAR_SCHEMA,
    CalendarDay,
    calendar_frame,
    calendar_schema,
    calendar_table,
    generate_calendar,
)
from datespine.calendar.spine import date_spine, day_offsets, is_truncated, spine_end

__all__ = [
    "CALENDAR_SCHEMA",
    "CalendarDay",
    "DAY_NAMES",
    "MONTH_NAMES",
    "calendar_attributes",
    "calendar_frame",
    "calendar_schema",
    "calendar_table",
    "date_spine",
    "day_of_week",
    "day_offsets",
    "generate_calendar",
    "is_truncated",
    "quarter",
    "spine_end",
]
