"""Workout plan routes and program generation jobs."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends

from ...errors import NotFoundError, ProgramGenerationError
from ...models.user import User
from ...security import AuthSession
from ..deps import AppServices, get_services, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["workouts"])


async def run_program_job(services: AppServices, job_id: str, user: User) -> None:
    """Generate a user's program in the background, recording the outcome."""
    await services.jobs.start_job(job_id)
    try:
        plans = await services.programs.generate_for_user(user)
    except ProgramGenerationError as e:
        logger.error("Program job %s failed: %s", job_id, e)
        await services.jobs.fail_job(job_id, str(e))
        return
    except Exception as e:
        logger.exception("Program job %s crashed", job_id)
        await services.jobs.fail_job(job_id, f"Unexpected error: {e}")
        return
    await services.jobs.complete_job(job_id, len(plans))


async def schedule_program(
    services: AppServices, user: User, background_tasks: BackgroundTasks
) -> str:
    """Queue program generation for a user and return the job id."""
    job = await services.jobs.create_job(user.id)
    background_tasks.add_task(run_program_job, services, job.id, user)
    return job.id


@router.get("/users/{user_id}/workout-plans")
async def list_workout_plans(
    user_id: int,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """All days of the user's program."""
    session.require_access(user_id)
    plans = await services.plans.list_for_user(user_id)
    return [p.to_dict() for p in plans]


@router.get("/users/{user_id}/workout-plan/{day}")
async def get_workout_plan(
    user_id: int,
    day: int,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """One day of the user's program."""
    session.require_access(user_id)
    plan = await services.plans.get(user_id, day)
    if plan is None:
        raise NotFoundError("Workout plan not found")
    return plan.to_dict()


@router.post("/users/{user_id}/workout-plans/regenerate", status_code=202)
async def regenerate_program(
    user_id: int,
    background_tasks: BackgroundTasks,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Replace the user's program with a freshly generated one."""
    session.require_access(user_id)
    user = await services.accounts.get(user_id)
    job_id = await schedule_program(services, user, background_tasks)
    return {"job_id": job_id}


@router.get("/jobs/{job_id}")
async def get_job(
    job_id: str,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Status of a program generation job."""
    job = await services.jobs.get_job(job_id)
    if job is None:
        raise NotFoundError("Job not found")
    session.require_access(job.user_id)
    return job.to_dict()


@router.get("/users/{user_id}/program-job")
async def latest_program_job(
    user_id: int,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """The user's most recent generation job, for polling after signup."""
    session.require_access(user_id)
    job = await services.jobs.latest_for_user(user_id)
    if job is None:
        raise NotFoundError("No program job for this user")
    return job.to_dict()
