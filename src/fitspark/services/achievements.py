"""Badge unlocking after progress submissions."""

import asyncio
import logging
from collections import Counter
from contextlib import asynccontextmanager

from ..clients.coach import Coach
from ..db.repositories import AchievementRepository, ProgressRepository
from ..errors import CoachError
from ..models.achievement import FALLBACK_BADGE, Achievement, BadgeContent, BadgeType
from ..models.user import User
from ..stats.achievement_rules import AchievementRules, evaluate_achievements
from ..stats.windows import recent_records

logger = logging.getLogger(__name__)


class AchievementService:
    """Evaluates badge rules for a user and persists new badges.

    Evaluation for the same user is serialized with a per-user lock, and
    inserts are insert-if-absent, so concurrent submissions cannot award a
    badge twice.
    """

    def __init__(
        self,
        progress_repo: ProgressRepository,
        achievement_repo: AchievementRepository,
        coach: Coach,
        rules: AchievementRules | None = None,
    ):
        self.progress_repo = progress_repo
        self.achievement_repo = achievement_repo
        self.coach = coach
        self.rules = rules or AchievementRules()
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_holders: Counter[int] = Counter()

    @asynccontextmanager
    async def _user_lock(self, user_id: int):
        """Hold the user's evaluation lock; dropped once nobody holds or awaits it."""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_holders[user_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[user_id] -= 1
            if not self._lock_holders[user_id]:
                del self._lock_holders[user_id]
                del self._locks[user_id]

    async def check_and_award(self, user: User) -> list[Achievement]:
        """Re-derive the user's history and award any newly earned badges.

        Must run after every completed submission, with the new record
        already stored.

        Returns:
            Achievements inserted by this call
        """
        async with self._user_lock(user.id):
            history = await self.progress_repo.list_for_user(user.id)
            completed_count = sum(1 for r in history if r.completed)
            window = recent_records(history, self.rules.consistency_window)
            existing = await self.achievement_repo.badge_types_for_user(user.id)

            earned = evaluate_achievements(completed_count, window, existing, self.rules)
            awarded = []
            for badge_type in earned:
                content = await self._badge_content(badge_type, user)
                achievement = Achievement.from_content(
                    user.id, badge_type, content, theme=user.theme.value
                )
                if await self.achievement_repo.create_if_absent(achievement):
                    logger.info("User %s earned badge %s", user.id, badge_type.value)
                    awarded.append(achievement)

        return awarded

    async def _badge_content(self, badge_type: BadgeType, user: User) -> BadgeContent:
        """Badge text from the coach, or the stock badge if that fails."""
        try:
            return await self.coach.generate_badge(badge_type.value, user.theme, user.name)
        except CoachError as e:
            logger.warning("Using fallback badge text for %s: %s", badge_type.value, e)
            return FALLBACK_BADGE
        except Exception:
            logger.exception("Unexpected error generating badge text for %s", badge_type.value)
            return FALLBACK_BADGE
