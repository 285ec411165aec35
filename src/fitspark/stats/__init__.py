"""Progress statistics and achievement rules."""

from .achievement_rules import AchievementRules, evaluate_achievements
from .aggregates import (
    DaySummary,
    ProgressStats,
    WeeklyGoal,
    WeightSummary,
    compute_stats,
    summarize_weight,
    weekly_breakdown,
)
from .streaks import StreakSummary, calculate_streaks
from .windows import TimeWindow, filter_window, recent_records, sort_by_date, week_start

__all__ = [
    "AchievementRules",
    "DaySummary",
    "ProgressStats",
    "StreakSummary",
    "TimeWindow",
    "WeeklyGoal",
    "WeightSummary",
    "calculate_streaks",
    "compute_stats",
    "evaluate_achievements",
    "filter_window",
    "recent_records",
    "sort_by_date",
    "summarize_weight",
    "week_start",
    "weekly_breakdown",
]
