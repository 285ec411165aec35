"""Registration and login routes."""

from fastapi import APIRouter, BackgroundTasks, Depends

from ...security import AuthSession, save_session
from ..deps import AppServices, get_services, get_session
from ..schemas import LoginRequest, RegisterRequest
from .workouts import schedule_program

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    background_tasks: BackgroundTasks,
    services: AppServices = Depends(get_services),
):
    """Create an account and start generating the user's program."""
    user = await services.accounts.register(body.to_user(), body.password)
    job_id = await schedule_program(services, user, background_tasks)

    session = AuthSession.for_user(user, services.settings)
    return {
        "user": user.to_dict(),
        "token": save_session(session, services.settings),
        "program_job_id": job_id,
    }


@router.post("/login")
async def login(body: LoginRequest, services: AppServices = Depends(get_services)):
    """Exchange credentials for a bearer token."""
    user = await services.accounts.authenticate(body.username, body.password)
    session = AuthSession.for_user(user, services.settings)
    return {
        "user": user.to_dict(),
        "token": save_session(session, services.settings),
        "expires_at": session.expires_at.isoformat(),
    }


@router.get("/me")
async def me(
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """The logged-in user."""
    user = await services.accounts.get(session.user_id)
    return user.to_dict()
