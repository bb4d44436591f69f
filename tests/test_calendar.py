"""
Tests for calendar attributes and row generation.
"""

from datetime import date, datetime, timezone

import ibis
import pandas as pd

from datespine.calendar import (
    CALENDAR_SCHEMA,
    CalendarDay,
    calendar_frame,
    calendar_schema,
    calendar_table,
    generate_calendar,
)
from datespine.calendar.attributes import (
    DAY_NAMES,
    MONTH_NAMES,
    calendar_attributes,
    day_of_week,
    is_month_end,
    quarter,
)

LOADED_AT = datetime(2025, 3, 20, 6, 30, tzinfo=timezone.utc)


class TestAttributes:
    """Tests for per-day attribute derivation."""

    def test_known_saturday(self):
        attrs = calendar_attributes(date(2025, 3, 15))
        assert attrs == {
            "year": 2025,
            "month": 3,
            "month_name": "March",
            "quarter": 1,
            "day_of_week": 6,
            "day_name": "Saturday",
        }

    def test_sunday_is_zero(self):
        assert day_of_week(date(2025, 3, 16)) == 0
        assert DAY_NAMES[day_of_week(date(2025, 3, 16))] == "Sunday"

    def test_monday_is_one(self):
        assert day_of_week(date(2025, 3, 17)) == 1

    def test_day_name_matches_day_of_week(self):
        for offset in range(14):
            day = date(2025, 1, 1 + offset)
            attrs = calendar_attributes(day)
            assert attrs["day_name"] == DAY_NAMES[attrs["day_of_week"]]

    def test_quarters(self):
        assert [quarter(date(2025, m, 1)) for m in range(1, 13)] == [1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4]

    def test_month_names(self):
        assert len(MONTH_NAMES) == 12
        assert calendar_attributes(date(2025, 12, 25))["month_name"] == "December"

    def test_month_end(self):
        assert is_month_end(date(2025, 1, 31)) is True
        assert is_month_end(date(2024, 2, 28)) is False
        assert is_month_end(date(2024, 2, 29)) is True
        assert is_month_end(date(2025, 12, 31)) is True

    def test_extended_attributes(self):
        attrs = calendar_attributes(date(2025, 3, 15), extended=True)
        assert attrs["day_of_month"] == 15
        assert attrs["day_of_year"] == 74
        assert attrs["week_of_year"] == 11
        assert attrs["is_weekend"] is True
        assert attrs["is_month_end"] is False

    def test_extended_attributes_absent_by_default(self):
        assert "is_weekend" not in calendar_attributes(date(2025, 3, 15))


class TestCalendarDay:
    """Tests for CalendarDay."""

    def test_from_date(self):
        row = CalendarDay.from_date(date(2025, 7, 4), LOADED_AT)
        assert row.date_key == date(2025, 7, 4)
        assert row.quarter == 3
        assert row.day_name == "Friday"
        assert row.load_timestamp == LOADED_AT
        assert row.extended == {}

    def test_from_date_extended(self):
        row = CalendarDay.from_date(date(2025, 7, 5), LOADED_AT, extended=True)
        assert row.extended["is_weekend"] is True
        assert row.extended["day_of_month"] == 5

    def test_to_dict_column_order(self):
        row = CalendarDay.from_date(date(2025, 7, 4), LOADED_AT)
        assert list(row.to_dict().keys()) == list(CALENDAR_SCHEMA.names)

    def test_to_dict_extended(self):
        row = CalendarDay.from_date(date(2025, 7, 4), LOADED_AT, extended=True)
        assert list(row.to_dict().keys()) == list(calendar_schema(extended=True).names)


class TestGenerateCalendar:
    """Tests for generate_calendar."""

    def test_one_row_per_day_up_to_watermark(self):
        rows = generate_calendar(date(2025, 1, 1), 3650, date(2025, 1, 31), loaded_at=LOADED_AT)
        assert len(rows) == 31
        assert rows[0].date_key == date(2025, 1, 1)
        assert rows[-1].date_key == date(2025, 1, 31)

    def test_sorted_ascending(self):
        rows = generate_calendar(date(2025, 1, 1), 100, date(2025, 3, 1), loaded_at=LOADED_AT)
        keys = [r.date_key for r in rows]
        assert keys == sorted(keys)

    def test_shared_load_timestamp(self):
        rows = generate_calendar(date(2025, 1, 1), 100, date(2025, 3, 1))
        assert len({r.load_timestamp for r in rows}) == 1
        assert rows[0].load_timestamp.tzinfo is not None

    def test_empty_upstream(self):
        assert generate_calendar(date(2025, 1, 1), 3650, None, loaded_at=LOADED_AT) == []

    def test_idempotent(self):
        """Same inputs give the same rows."""
        first = generate_calendar(date(2025, 1, 1), 60, date(2025, 2, 14), loaded_at=LOADED_AT)
        second = generate_calendar(date(2025, 1, 1), 60, date(2025, 2, 14), loaded_at=LOADED_AT)
        assert first == second

    def test_attributes_are_function_of_date(self):
        """A date yields the same row regardless of the range it was generated in."""
        wide = generate_calendar(date(2025, 1, 1), 365, date(2025, 12, 31), loaded_at=LOADED_AT)
        narrow = generate_calendar(date(2025, 6, 1), 30, date(2025, 12, 31), loaded_at=LOADED_AT)
        by_key = {r.date_key: r for r in wide}
        for row in narrow:
            assert by_key[row.date_key] == row


class TestTabularForms:
    """Tests for calendar_frame and calendar_table."""

    def test_frame_columns(self):
        rows = generate_calendar(date(2025, 1, 1), 10, date(2025, 1, 5), loaded_at=LOADED_AT)
        frame = calendar_frame(rows)
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == list(CALENDAR_SCHEMA.names)
        assert len(frame) == 5

    def test_empty_frame_keeps_columns(self):
        frame = calendar_frame([], extended=True)
        assert frame.empty
        assert list(frame.columns) == list(calendar_schema(extended=True).names)

    def test_table_schema(self):
        rows = generate_calendar(date(2025, 1, 1), 10, date(2025, 1, 5), loaded_at=LOADED_AT)
        table = calendar_table(rows)
        assert isinstance(table, ibis.Table)
        assert table.schema() == CALENDAR_SCHEMA

    def test_table_executes(self):
        rows = generate_calendar(date(2025, 1, 1), 10, date(2025, 1, 5), loaded_at=LOADED_AT)
        df = ibis.duckdb.connect().execute(calendar_table(rows))
        assert len(df) == 5
        assert list(pd.to_datetime(df["date_key"]).dt.date) == [date(2025, 1, d) for d in range(1, 6)]
        assert list(df["day_name"]) == ["Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
