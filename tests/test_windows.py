"""Tests for date window helpers."""

from datetime import date

from conftest import make_records
from fitspark.stats.windows import (
    TimeWindow,
    current_week,
    filter_window,
    recent_records,
    week_start,
)


class TestWeekStart:
    """The week starts on the most recent Sunday."""

    def test_sunday_is_its_own_week_start(self):
        assert week_start(date(2024, 3, 10)) == date(2024, 3, 10)

    def test_saturday(self):
        assert week_start(date(2024, 3, 16)) == date(2024, 3, 10)

    def test_monday(self):
        assert week_start(date(2024, 3, 11)) == date(2024, 3, 10)


class TestFilterWindow:
    """Tests for filter_window."""

    def test_last_7_days_includes_cutoff_day(self):
        today = date(2024, 3, 10)
        records = make_records([True] * 10, end=today)

        selected = filter_window(records, TimeWindow.LAST_7_DAYS, today)

        assert [r.date for r in selected][0] == date(2024, 3, 3)
        assert len(selected) == 8

    def test_all_time_keeps_everything_sorted(self):
        records = make_records([True, False, True])
        selected = filter_window(list(reversed(records)), TimeWindow.ALL_TIME, date(2024, 3, 10))
        assert [r.date for r in selected] == [r.date for r in records]

    def test_custom_range(self):
        records = make_records([True] * 10, end=date(2024, 3, 10))
        selected = filter_window(
            records,
            TimeWindow.CUSTOM,
            date(2024, 3, 10),
            start=date(2024, 3, 4),
            end=date(2024, 3, 6),
        )
        assert [r.date.day for r in selected] == [4, 5, 6]

    def test_window_days(self):
        assert TimeWindow.LAST_7_DAYS.days == 7
        assert TimeWindow.LAST_30_DAYS.days == 30
        assert TimeWindow.ALL_TIME.days is None


class TestRecentRecords:
    def test_newest_n_in_date_order(self):
        records = make_records([False, True, True, True])
        recent = recent_records(list(reversed(records)), 2)
        assert [r.date for r in recent] == [records[2].date, records[3].date]

    def test_fewer_records_than_requested(self):
        assert len(recent_records(make_records([True, True]), 5)) == 2

    def test_zero(self):
        assert recent_records(make_records([True]), 0) == []


def test_current_week_stops_at_today():
    # Wednesday 2024-03-13; the week began Sunday 2024-03-10
    records = make_records([True] * 8, end=date(2024, 3, 16))
    week = current_week(records, date(2024, 3, 13))
    assert [r.date.day for r in week] == [10, 11, 12, 13]
