"""Workout streak calculation."""

from collections.abc import Iterable
from dataclasses import dataclass

from ..models.progress import ProgressRecord
from .windows import sort_by_date


@dataclass(frozen=True)
class StreakSummary:
    """Current and best runs of completed days."""

    current_streak: int = 0
    longest_streak: int = 0

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
        }


def calculate_streaks(records: Iterable[ProgressRecord]) -> StreakSummary:
    """Compute current and longest streaks from a user's history.

    Records are sorted by date first. A single pass from newest to oldest
    counts runs of completed records: the run touching the newest record is
    the current streak, and the longest run anywhere is the longest streak.

    Args:
        records: All of a user's progress records, in any order

    Returns:
        StreakSummary with both values >= 0
    """
    newest_first = list(reversed(sort_by_date(records)))

    current = 0
    longest = 0
    running = 0
    in_current_run = True

    for record in newest_first:
        if record.completed:
            running += 1
            if in_current_run:
                current = running
        else:
            longest = max(longest, running)
            running = 0
            in_current_run = False

    longest = max(longest, running)
    return StreakSummary(current_streak=current, longest_streak=longest)
