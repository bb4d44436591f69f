"""
Tests for the date spine: offsets, watermark cut-off and truncation.
"""

from datetime import date, timedelta

import pytest

from datespine.calendar.spine import date_spine, day_offsets, is_truncated, spine_end

START = date(2025, 1, 1)


class TestDayOffsets:
    """Tests for day_offsets."""

    def test_offsets_cover_row_count(self):
        assert list(day_offsets(4)) == [0, 1, 2, 3]

    def test_zero_rows(self):
        assert list(day_offsets(0)) == []

    def test_reiterable(self):
        offsets = day_offsets(3)
        assert list(offsets) == list(offsets)

    def test_negative_row_count_rejected(self):
        with pytest.raises(ValueError, match="row_count"):
            day_offsets(-1)


class TestDateSpine:
    """Tests for date_spine."""

    def test_watermark_inside_range(self):
        """Spine stops at the watermark when it comes before the row budget runs out."""
        days = list(date_spine(START, 3650, date(2025, 1, 5)))
        assert days == [date(2025, 1, d) for d in range(1, 6)]

    def test_row_count_caps_spine(self):
        """Spine stops after row_count days when the watermark is later."""
        days = list(date_spine(START, 10, date(2030, 1, 1)))
        assert len(days) == 10
        assert days[-1] == date(2025, 1, 10)

    def test_watermark_equal_to_start(self):
        assert list(date_spine(START, 3650, START)) == [START]

    def test_watermark_before_start_is_empty(self):
        assert list(date_spine(START, 3650, date(2024, 12, 31))) == []

    def test_no_watermark_is_empty(self):
        assert list(date_spine(START, 3650, None)) == []

    def test_zero_row_count_is_empty(self):
        assert list(date_spine(START, 0, date(2025, 6, 1))) == []

    def test_consecutive_and_unique(self):
        """Every day follows the previous one by exactly one day."""
        days = list(date_spine(START, 400, date(2025, 12, 31)))
        assert len(days) == len(set(days)) == 365
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))

    def test_crosses_leap_day(self):
        days = list(date_spine(date(2028, 2, 27), 5, date(2028, 3, 2)))
        assert date(2028, 2, 29) in days
        assert days[-1] == date(2028, 3, 2)

    def test_spine_bounds(self):
        """First day is the start; last is min(start + N - 1, watermark)."""
        for row_count, watermark in [(30, date(2025, 1, 15)), (30, date(2025, 3, 1)), (1, date(2025, 1, 1))]:
            days = list(date_spine(START, row_count, watermark))
            assert days[0] == START
            assert days[-1] == min(START + timedelta(days=row_count - 1), watermark)
            assert len(days) == min(row_count, (watermark - START).days + 1)

    def test_negative_row_count_rejected(self):
        with pytest.raises(ValueError):
            date_spine(START, -5, date(2025, 1, 5))


class TestSpineEnd:
    """Tests for spine_end."""

    def test_watermark_bound(self):
        assert spine_end(START, 3650, date(2025, 2, 1)) == date(2025, 2, 1)

    def test_row_count_bound(self):
        assert spine_end(START, 31, date(2026, 1, 1)) == date(2025, 1, 31)

    def test_empty_cases(self):
        assert spine_end(START, 3650, None) is None
        assert spine_end(START, 3650, date(2024, 1, 1)) is None
        assert spine_end(START, 0, date(2025, 2, 1)) is None


class TestIsTruncated:
    """Tests for is_truncated."""

    def test_watermark_past_last_candidate(self):
        assert is_truncated(START, 10, date(2025, 1, 11)) is True

    def test_watermark_on_last_candidate(self):
        assert is_truncated(START, 10, date(2025, 1, 10)) is False

    def test_watermark_within_range(self):
        assert is_truncated(START, 3650, date(2025, 6, 30)) is False

    def test_no_watermark(self):
        assert is_truncated(START, 10, None) is False

    def test_default_budget_runs_out_after_ten_years(self):
        """3650 days from 2025-01-01 end on 2034-12-29 because of leap days."""
        last = START + timedelta(days=3649)
        assert last == date(2034, 12, 29)
        assert is_truncated(START, 3650, date(2034, 12, 30)) is True
