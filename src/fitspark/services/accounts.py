"""Account registration, login and profile updates."""

import logging
from dataclasses import replace

from ..db.repositories import UserRepository
from ..errors import AuthError, ConflictError, NotFoundError
from ..models.user import FitnessGoals, Preferences, Theme, User
from ..security import hash_password, verify_password

logger = logging.getLogger(__name__)

# Fields a user may change on their own profile
PROFILE_FIELDS = {
    "name", "email", "age", "start_weight", "current_weight", "target_weight",
    "theme", "current_day", "fitness_goals", "preferences",
}
# Admins may additionally change these
ADMIN_FIELDS = PROFILE_FIELDS | {"username", "is_admin"}


class AccountService:
    """User lifecycle on top of the user repository."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register(self, user: User, password: str) -> User:
        """Create an account.

        Raises:
            ConflictError: Username or email already in use.
        """
        if await self.user_repo.get_by_username(user.username) or await self.user_repo.get_by_email(user.email):
            raise ConflictError("User already exists")

        user = replace(user, password_hash=hash_password(password))
        if user.current_weight is None:
            user.current_weight = user.start_weight
        if user.fitness_goals is None:
            user.fitness_goals = FitnessGoals(motivation_style=user.theme)

        user.id = await self.user_repo.create(user)
        stored = await self.user_repo.get(user.id)
        logger.info("Registered user %s (%s)", stored.id, stored.username)
        return stored

    async def authenticate(self, username: str, password: str) -> User:
        """Check credentials.

        Raises:
            AuthError: Unknown user or wrong password.
        """
        user = await self.user_repo.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError("Invalid credentials")
        return user

    async def get(self, user_id: int) -> User:
        user = await self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update(self, user_id: int, updates: dict, as_admin: bool = False) -> User:
        """Apply a partial update. A ``password`` entry is re-hashed."""
        user = await self.get(user_id)
        allowed = ADMIN_FIELDS if as_admin else PROFILE_FIELDS

        for key, value in updates.items():
            if key == "password":
                if value:
                    user.password_hash = hash_password(value)
            elif key in allowed and value is not None:
                setattr(user, key, _coerce(key, value))

        await self.user_repo.update(user)
        return await self.get(user_id)

    async def delete(self, user_id: int) -> None:
        await self.get(user_id)
        await self.user_repo.delete(user_id)
        logger.info("Deleted user %s", user_id)


def _coerce(key: str, value):
    if key == "theme":
        return Theme(value)
    if key == "fitness_goals" and isinstance(value, dict):
        return FitnessGoals.from_dict(value)
    if key == "preferences" and isinstance(value, dict):
        return Preferences.from_dict(value)
    return value
