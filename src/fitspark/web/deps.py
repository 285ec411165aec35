"""Request dependencies: services and the caller's session."""

from dataclasses import dataclass, replace
from pathlib import Path

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..clients.coach import Coach, CoachClient
from ..config import Settings
from ..db.repositories import (
    AchievementRepository,
    ProgressRepository,
    UserRepository,
    VideoRepository,
    WorkoutPlanRepository,
)
from ..errors import AuthError
from ..security import AuthSession, load_session
from ..services.accounts import AccountService
from ..services.achievements import AchievementService
from ..services.programs import ProgramService
from ..services.progress import ProgressService
from ..stats.achievement_rules import AchievementRules
from .job_tracker import JobTracker


@dataclass
class AppServices:
    """Repositories and services shared by all requests of one app."""

    settings: Settings
    coach: Coach
    users: UserRepository
    plans: WorkoutPlanRepository
    videos: VideoRepository
    progress_repo: ProgressRepository
    achievements_repo: AchievementRepository
    accounts: AccountService
    achievements: AchievementService
    progress: ProgressService
    programs: ProgramService
    jobs: JobTracker

    @classmethod
    def build(cls, settings: Settings, db_path: Path, coach: Coach | None = None) -> "AppServices":
        coach = coach or CoachClient(settings)
        users = UserRepository(db_path)
        plans = WorkoutPlanRepository(db_path)
        videos = VideoRepository(db_path)
        progress_repo = ProgressRepository(db_path)
        achievements_repo = AchievementRepository(db_path)

        achievements = AchievementService(
            progress_repo,
            achievements_repo,
            coach,
            AchievementRules(consistency_window=settings.consistency_window),
        )
        return cls(
            settings=settings,
            coach=coach,
            users=users,
            plans=plans,
            videos=videos,
            progress_repo=progress_repo,
            achievements_repo=achievements_repo,
            accounts=AccountService(users),
            achievements=achievements,
            progress=ProgressService(progress_repo, users, achievements, settings),
            programs=ProgramService(plans, videos, coach, settings),
            jobs=JobTracker(),
        )


bearer_scheme = HTTPBearer(auto_error=False)


def get_services(request: Request) -> AppServices:
    """Get the service container from app state."""
    return request.app.state.services


async def get_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthSession:
    """Session of the caller, from the ``Authorization: Bearer`` header.

    The admin flag is re-read from the stored user, so a demotion applies to
    tokens already issued.
    """
    if credentials is None:
        raise AuthError("Missing auth token")
    services = get_services(request)
    session = load_session(credentials.credentials, services.settings)
    user = await services.users.get(session.user_id)
    if user is None:
        raise AuthError("Account no longer exists")
    if user.is_admin != session.is_admin:
        session = replace(session, is_admin=user.is_admin)
    return session


def get_admin_session(session: AuthSession = Depends(get_session)) -> AuthSession:
    session.require_admin()
    return session
