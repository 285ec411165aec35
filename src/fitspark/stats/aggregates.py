"""Aggregate progress statistics."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..models.progress import ProgressRecord
from .windows import current_week, sort_by_date, week_start

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class WeeklyGoal:
    """Weekly exercise target, e.g. 5 days x 35 minutes = 175 minutes."""

    days_per_week: int = 5
    minutes_per_day: int = 35
    override_minutes: int | None = None  # User preference wins when set

    @property
    def minutes(self) -> int:
        if self.override_minutes:
            return self.override_minutes
        return self.days_per_week * self.minutes_per_day


@dataclass
class ProgressStats:
    """Totals over a window of progress records."""

    record_count: int = 0
    completed_count: int = 0
    total_minutes: int = 0
    average_minutes_per_record: float = 0.0
    completion_rate: float = 0.0  # percent
    average_mood: float = 0.0
    days_active: int = 0
    weekly_total_minutes: int = 0
    weekly_goal_minutes: int = 0
    weekly_goal_progress: float = 0.0  # percent, capped at 100

    def to_dict(self) -> dict:
        return {
            "record_count": self.record_count,
            "completed_count": self.completed_count,
            "total_minutes": self.total_minutes,
            "average_minutes_per_record": round(self.average_minutes_per_record, 1),
            "completion_rate": round(self.completion_rate, 1),
            "average_mood": round(self.average_mood, 1),
            "days_active": self.days_active,
            "weekly_total_minutes": self.weekly_total_minutes,
            "weekly_goal_minutes": self.weekly_goal_minutes,
            "weekly_goal_progress": round(self.weekly_goal_progress, 1),
        }


@dataclass
class WeightSummary:
    """Weight trend from logged entries."""

    latest_weight: float | None = None
    weight_change: float = 0.0  # start - latest, positive means weight lost
    entries: list[tuple[date, float]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "latest_weight": self.latest_weight,
            "weight_change": self.weight_change,
            "entries": [{"date": d.isoformat(), "weight": w} for d, w in self.entries],
        }


@dataclass
class DaySummary:
    """One bar of the weekly chart."""

    date: date
    label: str
    minutes_completed: int = 0
    completed: bool = False

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "label": self.label,
            "minutes_completed": self.minutes_completed,
            "completed": self.completed,
        }


def total_minutes(records: Iterable[ProgressRecord]) -> int:
    """Sum of minutes, missing values counted as 0."""
    return sum(r.minutes_completed or 0 for r in records)


def compute_stats(
    records: Iterable[ProgressRecord],
    today: date,
    goal: WeeklyGoal | None = None,
    history: Iterable[ProgressRecord] | None = None,
) -> ProgressStats:
    """Compute statistics for records already filtered to a window.

    The weekly figures cover the current Sunday-based calendar week, taken
    from ``history`` when given and from ``records`` otherwise. Empty input
    yields zero values throughout.
    """
    records = list(records)
    goal = goal or WeeklyGoal()

    count = len(records)
    completed = sum(1 for r in records if r.completed)
    minutes = total_minutes(records)
    moods = [r.mood for r in records if r.mood is not None]

    weekly_source = records if history is None else history
    weekly_minutes = total_minutes(current_week(weekly_source, today))
    goal_minutes = goal.minutes

    return ProgressStats(
        record_count=count,
        completed_count=completed,
        total_minutes=minutes,
        average_minutes_per_record=minutes / count if count else 0.0,
        completion_rate=completed / count * 100 if count else 0.0,
        average_mood=sum(moods) / len(moods) if moods else 0.0,
        days_active=sum(1 for r in records if (r.minutes_completed or 0) > 0),
        weekly_total_minutes=weekly_minutes,
        weekly_goal_minutes=goal_minutes,
        weekly_goal_progress=min(weekly_minutes / goal_minutes * 100, 100.0) if goal_minutes else 0.0,
    )


def summarize_weight(
    records: Iterable[ProgressRecord],
    start_weight: float | None = None,
    current_weight: float | None = None,
) -> WeightSummary:
    """Weight entries in date order plus change since the starting weight."""
    entries = [(r.date, r.weight) for r in sort_by_date(records) if r.weight]
    latest = entries[-1][1] if entries else current_weight
    change = start_weight - latest if start_weight and latest else 0.0
    return WeightSummary(latest_weight=latest, weight_change=change, entries=entries)


def weekly_breakdown(records: Iterable[ProgressRecord], today: date) -> list[DaySummary]:
    """Per-day minutes for the current week, Sunday through Saturday."""
    start = week_start(today)
    by_date: dict[date, list[ProgressRecord]] = {}
    for record in records:
        by_date.setdefault(record.date, []).append(record)

    days = []
    for offset, label in enumerate(WEEKDAY_LABELS):
        day = start + timedelta(days=offset)
        day_records = by_date.get(day, [])
        days.append(
            DaySummary(
                date=day,
                label=label,
                minutes_completed=total_minutes(day_records),
                completed=any(r.completed for r in day_records),
            )
        )
    return days
