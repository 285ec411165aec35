"""Progress submission and statistics."""

import logging
from dataclasses import dataclass, field
from datetime import date

from ..config import Settings, get_settings
from ..db.repositories import ProgressRepository, UserRepository
from ..errors import NotFoundError
from ..models.achievement import Achievement
from ..models.progress import ProgressRecord
from ..models.user import User
from ..stats.aggregates import (
    DaySummary,
    ProgressStats,
    WeeklyGoal,
    WeightSummary,
    compute_stats,
    summarize_weight,
    weekly_breakdown,
)
from ..stats.streaks import StreakSummary, calculate_streaks
from ..stats.windows import TimeWindow, filter_window
from .achievements import AchievementService

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of logging a day's progress."""

    record: ProgressRecord
    created: bool
    new_achievements: list[Achievement] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            "created": self.created,
            "new_achievements": [a.to_dict() for a in self.new_achievements],
        }


@dataclass
class StatsReport:
    """Everything the progress page shows for one window."""

    window: TimeWindow
    streaks: StreakSummary
    stats: ProgressStats
    weight: WeightSummary
    week: list[DaySummary]

    def to_dict(self) -> dict:
        return {
            "window": self.window.value,
            **self.streaks.to_dict(),
            **self.stats.to_dict(),
            "weight": self.weight.to_dict(),
            "week": [d.to_dict() for d in self.week],
        }


class ProgressService:
    """Logs daily progress and derives statistics from the full history."""

    def __init__(
        self,
        progress_repo: ProgressRepository,
        user_repo: UserRepository,
        achievements: AchievementService,
        settings: Settings | None = None,
    ):
        self.progress_repo = progress_repo
        self.user_repo = user_repo
        self.achievements = achievements
        self.settings = settings or get_settings()

    async def submit(self, user: User, record: ProgressRecord) -> SubmissionResult:
        """Store (or patch) the day's record, then award badges.

        Badge evaluation runs synchronously so that every completed
        submission is evaluated with the updated lifetime count.
        """
        record.user_id = user.id
        stored, created = await self.progress_repo.upsert(record)
        logger.info(
            "Progress %s for user %s on %s (completed=%s)",
            "logged" if created else "updated",
            user.id,
            stored.date,
            stored.completed,
        )

        await self._sync_user(user, stored)

        new_achievements: list[Achievement] = []
        if stored.completed:
            new_achievements = await self.achievements.check_and_award(user)

        return SubmissionResult(record=stored, created=created, new_achievements=new_achievements)

    async def get(self, progress_id: int) -> ProgressRecord:
        record = await self.progress_repo.get(progress_id)
        if record is None:
            raise NotFoundError("Progress not found")
        return record

    async def patch(self, progress_id: int, updates: dict) -> SubmissionResult:
        """Patch fields of an existing record.

        A patch that marks the day completed is evaluated for badges like a
        new completed submission.

        Raises:
            NotFoundError: No record with this id.
        """
        record = await self.get(progress_id)
        was_completed = record.completed
        record.apply_patch(updates)
        await self.progress_repo.update(record)

        user = await self.user_repo.get(record.user_id)
        if user is None:
            raise NotFoundError("User not found")
        await self._sync_user(user, record)

        new_achievements: list[Achievement] = []
        if record.completed and not was_completed:
            new_achievements = await self.achievements.check_and_award(user)

        return SubmissionResult(record=record, created=False, new_achievements=new_achievements)

    async def report(
        self,
        user: User,
        window: TimeWindow = TimeWindow.LAST_30_DAYS,
        today: date | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> StatsReport:
        """Streaks over the full history and aggregates over the window."""
        today = today or date.today()
        history = await self.progress_repo.list_for_user(user.id)
        windowed = filter_window(history, window, today, start=start, end=end)

        goal = WeeklyGoal(
            days_per_week=self.settings.weekly_goal_days,
            minutes_per_day=self.settings.weekly_goal_minutes_per_day,
            override_minutes=user.preferences.weekly_goal_minutes,
        )

        return StatsReport(
            window=window,
            streaks=calculate_streaks(history),
            stats=compute_stats(windowed, today, goal, history=history),
            weight=summarize_weight(history, user.start_weight, user.current_weight),
            week=weekly_breakdown(history, today),
        )

    async def _sync_user(self, user: User, record: ProgressRecord) -> None:
        """Carry weight and program day from the record onto the user."""
        changed = False
        if record.weight:
            user.current_weight = record.weight
            changed = True
        if record.completed and record.day >= user.current_day:
            user.current_day = min(record.day + 1, self.settings.program_days)
            changed = True
        if changed:
            await self.user_repo.update(user)
