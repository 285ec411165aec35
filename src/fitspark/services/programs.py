"""Personalised program generation."""

import logging

from ..clients.coach import Coach, ProgramRequest
from ..config import Settings, get_settings
from ..db.repositories import VideoRepository, WorkoutPlanRepository
from ..models.user import User
from ..models.workout import DailyWorkoutPlan

logger = logging.getLogger(__name__)


class ProgramService:
    """Builds a user's program with the coach and stores it."""

    def __init__(
        self,
        plan_repo: WorkoutPlanRepository,
        video_repo: VideoRepository,
        coach: Coach,
        settings: Settings | None = None,
    ):
        self.plan_repo = plan_repo
        self.video_repo = video_repo
        self.coach = coach
        self.settings = settings or get_settings()

    async def generate_for_user(self, user: User) -> list[DailyWorkoutPlan]:
        """Generate and store a program, replacing any existing one.

        Raises:
            ProgramGenerationError: The coach could not produce a program.
        """
        videos = await self.video_repo.list_approved()
        request = ProgramRequest.for_user(user, videos, days=self.settings.program_days)

        plans = await self.coach.generate_program(request)
        plans = plans[: self.settings.program_days]
        for plan in plans:
            plan.user_id = user.id

        await self.plan_repo.create_many(user.id, plans)
        logger.info("Stored %d-day program for user %s", len(plans), user.id)
        return plans
