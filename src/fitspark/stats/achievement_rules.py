"""Rules that decide which badges a user has just earned.

Thresholds are exact: ``first-workout`` fires when the lifetime completed
count is exactly 1 and ``first-week`` when it is exactly 7. The rules are
meant to run after every completed submission; a history imported in bulk
can step over a threshold without firing it.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from ..models.achievement import BadgeType
from ..models.progress import ProgressRecord


@dataclass(frozen=True)
class AchievementRules:
    """Thresholds for the badge rules."""

    first_workout_count: int = 1
    first_week_count: int = 7
    consistency_window: int = 5


def evaluate_achievements(
    completed_day_count: int,
    recent_window: Sequence[ProgressRecord],
    existing_badges: Collection[BadgeType | str],
    rules: AchievementRules | None = None,
) -> list[BadgeType]:
    """Return newly earned badges in rule order.

    Args:
        completed_day_count: Lifetime number of completed records
        recent_window: The newest records in date order
        existing_badges: Badge types the user already holds
        rules: Thresholds to apply

    Returns:
        Badges that qualify now and are not in ``existing_badges``
    """
    rules = rules or AchievementRules()
    held = {BadgeType(b) for b in existing_badges}
    earned: list[BadgeType] = []

    if completed_day_count == rules.first_workout_count and BadgeType.FIRST_WORKOUT not in held:
        earned.append(BadgeType.FIRST_WORKOUT)

    if completed_day_count == rules.first_week_count and BadgeType.FIRST_WEEK not in held:
        earned.append(BadgeType.FIRST_WEEK)

    if (
        len(recent_window) == rules.consistency_window
        and all(r.completed for r in recent_window)
        and BadgeType.CONSISTENCY not in held
    ):
        earned.append(BadgeType.CONSISTENCY)

    return earned
