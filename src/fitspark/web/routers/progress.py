"""Progress tracking routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from ...errors import NotFoundError
from ...security import AuthSession
from ...stats.windows import TimeWindow
from ..deps import AppServices, get_services, get_session
from ..schemas import ProgressPatch, ProgressSubmit

router = APIRouter(prefix="/api", tags=["progress"])


@router.get("/users/{user_id}/progress")
async def list_progress(
    user_id: int,
    start: date | None = None,
    end: date | None = None,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """The user's progress history, oldest first."""
    session.require_access(user_id)
    records = await services.progress_repo.list_for_user(user_id, start=start, end=end)
    return [r.to_dict() for r in records]


@router.get("/users/{user_id}/progress/{day}")
async def get_daily_progress(
    user_id: int,
    day: date,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """The record for one calendar day."""
    session.require_access(user_id)
    record = await services.progress_repo.get_by_date(user_id, day)
    if record is None:
        raise NotFoundError("Progress not found")
    return record.to_dict()


@router.post("/users/{user_id}/progress", status_code=201)
async def submit_progress(
    user_id: int,
    body: ProgressSubmit,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Log (or update) a day's progress and award any new badges."""
    session.require_access(user_id)
    user = await services.accounts.get(user_id)
    record = body.to_record(user_id, date.today(), current_day=user.current_day)
    result = await services.progress.submit(user, record)
    return result.to_dict()


@router.patch("/progress/{progress_id}")
async def patch_progress(
    progress_id: int,
    body: ProgressPatch,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Patch fields of an existing record."""
    record = await services.progress.get(progress_id)
    session.require_access(record.user_id)
    result = await services.progress.patch(progress_id, body.model_dump(exclude_unset=True))
    return result.to_dict()


@router.get("/users/{user_id}/stats")
async def progress_stats(
    user_id: int,
    window: TimeWindow = Query(TimeWindow.LAST_30_DAYS),
    start: date | None = None,
    end: date | None = None,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Streaks, totals, weekly goal and weight trend."""
    session.require_access(user_id)
    user = await services.accounts.get(user_id)
    if start is not None or end is not None:
        window = TimeWindow.CUSTOM
    report = await services.progress.report(user, window=window, start=start, end=end)
    return report.to_dict()


@router.get("/users/{user_id}/achievements")
async def list_achievements(
    user_id: int,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Badges the user has earned."""
    session.require_access(user_id)
    achievements = await services.achievements_repo.list_for_user(user_id)
    return [a.to_dict() for a in achievements]
