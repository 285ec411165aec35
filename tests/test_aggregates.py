"""Tests for aggregate statistics."""

from datetime import date

import pytest

from conftest import make_records
from fitspark.models.progress import ProgressRecord
from fitspark.stats.aggregates import (
    WeeklyGoal,
    compute_stats,
    summarize_weight,
    total_minutes,
    weekly_breakdown,
)

TODAY = date(2024, 3, 13)  # Wednesday


class TestComputeStats:
    """Tests for compute_stats."""

    def test_empty_window(self):
        """No records: zero values and no division by zero."""
        stats = compute_stats([], TODAY)

        assert stats.record_count == 0
        assert stats.completed_count == 0
        assert stats.total_minutes == 0
        assert stats.average_minutes_per_record == 0
        assert stats.completion_rate == 0
        assert stats.weekly_total_minutes == 0
        assert stats.weekly_goal_minutes == 175

    def test_counts_and_average(self):
        records = make_records([True, False, True, True], end=TODAY, minutes=30)
        records[1].minutes_completed = 10

        stats = compute_stats(records, TODAY)

        assert stats.completed_count == 3
        assert stats.total_minutes == 100
        assert stats.average_minutes_per_record == pytest.approx(25.0)
        assert stats.completion_rate == pytest.approx(75.0)
        assert stats.days_active == 4

    def test_weekly_total_uses_current_calendar_week(self):
        # Sat 9th .. Wed 13th; the week starts Sunday 10th
        records = make_records([True] * 5, end=TODAY, minutes=35)

        stats = compute_stats(records, TODAY)

        assert stats.weekly_total_minutes == 4 * 35
        assert stats.weekly_goal_progress == pytest.approx(140 / 175 * 100)

    def test_weekly_total_from_history_outside_window(self):
        # Window covers Mon 4th .. Fri 8th; this week's records are only in history
        history = make_records([True] * 10, end=TODAY, minutes=30)
        window = [r for r in history if r.date <= date(2024, 3, 8)]

        stats = compute_stats(window, TODAY, history=history)

        assert stats.total_minutes == 150
        assert stats.weekly_total_minutes == 4 * 30
        assert stats.weekly_total_minutes == sum(d.minutes_completed for d in weekly_breakdown(history, TODAY))

    def test_weekly_goal_progress_capped(self):
        records = make_records([True] * 4, end=TODAY, minutes=120)
        stats = compute_stats(records, TODAY)
        assert stats.weekly_goal_progress == 100.0

    def test_average_mood_ignores_missing(self):
        records = make_records([True, True, True], end=TODAY)
        records[0].mood = 3
        records[2].mood = 5
        assert compute_stats(records, TODAY).average_mood == pytest.approx(4.0)


class TestWeeklyGoal:
    def test_default_is_five_by_thirty_five(self):
        assert WeeklyGoal().minutes == 175

    def test_override(self):
        assert WeeklyGoal(override_minutes=150).minutes == 150


def test_total_minutes_treats_missing_as_zero():
    record = ProgressRecord(user_id=1, date=TODAY, minutes_completed=None)
    assert total_minutes([record]) == 0


class TestSummarizeWeight:
    def test_change_from_start(self):
        records = make_records([True, True, True], end=TODAY)
        records[0].weight = 180.0
        records[2].weight = 176.5

        summary = summarize_weight(records, start_weight=181.0)

        assert summary.latest_weight == 176.5
        assert summary.weight_change == pytest.approx(4.5)
        assert [w for _, w in summary.entries] == [180.0, 176.5]

    def test_no_entries_uses_current_weight(self):
        summary = summarize_weight([], start_weight=180.0, current_weight=178.0)
        assert summary.latest_weight == 178.0
        assert summary.weight_change == pytest.approx(2.0)


def test_weekly_breakdown_covers_sunday_to_saturday():
    records = make_records([True, False], end=TODAY, minutes=20)

    days = weekly_breakdown(records, TODAY)

    assert [d.label for d in days] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert days[0].date == date(2024, 3, 10)
    assert days[2].completed is True and days[2].minutes_completed == 20
    assert days[3].completed is False and days[3].minutes_completed == 0
