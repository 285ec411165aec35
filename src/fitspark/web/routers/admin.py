"""Admin user management routes."""

from fastapi import APIRouter, BackgroundTasks, Depends, Response

from ...security import AuthSession
from ..deps import AppServices, get_admin_session, get_services
from ..schemas import AdminUserCreate, AdminUserUpdate
from .workouts import schedule_program

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users")
async def list_users(
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    users = await services.users.list_all()
    return [u.to_dict() for u in users]


@router.post("/users", status_code=201)
async def create_user(
    body: AdminUserCreate,
    background_tasks: BackgroundTasks,
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    """Create a user; program generation only when requested."""
    user = await services.accounts.register(body.to_user(is_admin=body.is_admin), body.password)
    response = user.to_dict()
    if body.generate_program:
        response["program_job_id"] = await schedule_program(services, user, background_tasks)
    return response


@router.patch("/users/{user_id}")
async def update_user(
    user_id: int,
    body: AdminUserUpdate,
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    user = await services.accounts.update(
        user_id, body.model_dump(exclude_unset=True, mode="json"), as_admin=True
    )
    return user.to_dict()


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    session: AuthSession = Depends(get_admin_session),
    services: AppServices = Depends(get_services),
):
    await services.accounts.delete(user_id)
    return Response(status_code=204)
