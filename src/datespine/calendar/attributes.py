"""
Calendar attributes derived from a single date.

Names are fixed English labels rather than ``strftime``/``calendar`` output so
the table does not change with the process locale.

``day_of_week`` is 0-based with Sunday first (Sunday=0 ... Saturday=6),
matching the warehouse's default ``DAYOFWEEK``.
"""

from datetime import date, timedelta
from typing import Any

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Indexed by day_of_week
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def day_of_week(day: date) -> int:
    """Sunday=0 ... Saturday=6."""
    return day.isoweekday() % 7


def quarter(day: date) -> int:
    return (day.month - 1) // 3 + 1


def is_month_end(day: date) -> bool:
    return (day + timedelta(days=1)).month != day.month


def calendar_attributes(day: date, extended: bool = False) -> dict[str, Any]:
    """
    Derived columns for one day.

    Args:
        day: The calendar date
        extended: Also include day_of_month, day_of_year, week_of_year,
            is_weekend and is_month_end

    Returns:
        Column name to value, excluding date_key and load_timestamp
    """
    dow = day_of_week(day)
    attrs: dict[str, Any] = {
        "year": day.year,
        "month": day.month,
        "month_name": MONTH_NAMES[day.month - 1],
        "quarter": quarter(day),
        "day_of_week": dow,
        "day_name": DAY_NAMES[dow],
    }
    if extended:
        attrs.update(
            {
                "day_of_month": day.day,
                "day_of_year": day.timetuple().tm_yday,
                "week_of_year": day.isocalendar()[1],
                "is_weekend": dow in (0, 6),
                "is_month_end": is_month_end(day),
            }
        )
    return attrs
