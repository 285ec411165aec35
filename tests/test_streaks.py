"""Tests for streak calculation."""

import random

import pytest

from conftest import make_records
from fitspark.stats.streaks import StreakSummary, calculate_streaks

T, F = True, False


class TestCalculateStreaks:
    """Tests for calculate_streaks."""

    def test_empty_history(self):
        assert calculate_streaks([]) == StreakSummary(current_streak=0, longest_streak=0)

    @pytest.mark.parametrize("length", [1, 2, 7, 30])
    def test_all_completed(self, length):
        """Every day completed: both streaks equal the history length."""
        summary = calculate_streaks(make_records([T] * length))
        assert summary.current_streak == length
        assert summary.longest_streak == length

    def test_none_completed(self):
        summary = calculate_streaks(make_records([F, F, F]))
        assert summary == StreakSummary(0, 0)

    def test_current_run_is_longest(self):
        summary = calculate_streaks(make_records([T, T, F, T, T, T]))
        assert summary.current_streak == 3
        assert summary.longest_streak == 3

    def test_longest_run_in_the_past(self):
        summary = calculate_streaks(make_records([T, T, F, T]))
        assert summary.current_streak == 1
        assert summary.longest_streak == 2

    def test_missed_most_recent_day(self):
        summary = calculate_streaks(make_records([T, T, T, F]))
        assert summary.current_streak == 0
        assert summary.longest_streak == 3

    def test_unsorted_input(self):
        """Records are ordered by date before scanning."""
        records = make_records([T, T, F, T, T, T])
        shuffled = records[:]
        random.Random(7).shuffle(shuffled)

        assert calculate_streaks(shuffled) == calculate_streaks(records)

    def test_to_dict(self):
        data = calculate_streaks(make_records([F, T, T])).to_dict()
        assert data == {"current_streak": 2, "longest_streak": 2}
