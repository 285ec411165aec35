"""Date-window helpers for progress records."""

from collections.abc import Iterable
from datetime import date, timedelta
from enum import Enum

from ..models.progress import ProgressRecord


class TimeWindow(str, Enum):
    """Named windows offered on the progress page."""

    LAST_7_DAYS = "7-days"
    LAST_30_DAYS = "30-days"
    ALL_TIME = "all-time"
    CUSTOM = "custom"

    @property
    def days(self) -> int | None:
        """Cutoff offset in days, None when the window is unbounded."""
        return {
            TimeWindow.LAST_7_DAYS: 7,
            TimeWindow.LAST_30_DAYS: 30,
        }.get(self)


def sort_by_date(records: Iterable[ProgressRecord]) -> list[ProgressRecord]:
    """Return records oldest first."""
    return sorted(records, key=lambda r: r.date)


def filter_window(
    records: Iterable[ProgressRecord],
    window: TimeWindow,
    today: date,
    start: date | None = None,
    end: date | None = None,
) -> list[ProgressRecord]:
    """Restrict records to a time window, oldest first.

    Named windows keep records dated on or after ``today - N days``. The
    custom window keeps ``start <= date <= end``, either bound optional.
    """
    if window == TimeWindow.CUSTOM:
        selected = [
            r for r in records
            if (start is None or r.date >= start) and (end is None or r.date <= end)
        ]
    elif window.days is None:
        selected = list(records)
    else:
        cutoff = today - timedelta(days=window.days)
        selected = [r for r in records if r.date >= cutoff]

    return sort_by_date(selected)


def week_start(today: date) -> date:
    """Most recent Sunday on or before ``today``."""
    # date.weekday(): Monday=0 ... Sunday=6
    return today - timedelta(days=(today.weekday() + 1) % 7)


def current_week(records: Iterable[ProgressRecord], today: date) -> list[ProgressRecord]:
    """Records from the current Sunday-based calendar week up to today."""
    start = week_start(today)
    return sort_by_date(r for r in records if start <= r.date <= today)


def recent_records(records: Iterable[ProgressRecord], count: int) -> list[ProgressRecord]:
    """The newest ``count`` records, oldest first."""
    if count <= 0:
        return []
    return sort_by_date(records)[-count:]
