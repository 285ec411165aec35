"""User profile routes."""

from fastapi import APIRouter, Depends

from ...security import AuthSession
from ..deps import AppServices, get_services, get_session
from ..schemas import UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}")
async def get_user(
    user_id: int,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    session.require_access(user_id)
    user = await services.accounts.get(user_id)
    return user.to_dict()


@router.patch("/{user_id}")
async def update_user(
    user_id: int,
    body: UserUpdate,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """Update profile fields (weight log, theme, goals...)."""
    session.require_access(user_id)
    user = await services.accounts.update(user_id, body.model_dump(exclude_unset=True, mode="json"))
    return user.to_dict()


@router.get("/{user_id}/motivation")
async def daily_motivation(
    user_id: int,
    session: AuthSession = Depends(get_session),
    services: AppServices = Depends(get_services),
):
    """A motivational message for the user's current program day."""
    session.require_access(user_id)
    user = await services.accounts.get(user_id)
    message = await services.coach.generate_motivation(user.theme, user.current_day, user.name)
    return {"message": message}
