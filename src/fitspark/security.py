"""Password hashing and session tokens.

A session is an explicit value: ``load_session`` turns a bearer token into
an ``AuthSession`` and ``save_session`` turns it back into a token. Nothing
holds a "current user" globally.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from .config import Settings, get_settings
from .errors import AuthError, PermissionDenied
from .models.user import User


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


@dataclass(frozen=True)
class AuthSession:
    """The authenticated caller of a request."""

    user_id: int
    username: str
    is_admin: bool
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def for_user(cls, user: User, settings: Settings | None = None) -> "AuthSession":
        """Start a new session for a user."""
        settings = settings or get_settings()
        now = datetime.now(timezone.utc).replace(microsecond=0)
        return cls(
            user_id=user.id,
            username=user.username,
            is_admin=user.is_admin,
            issued_at=now,
            expires_at=now + timedelta(minutes=settings.token_expire_minutes),
        )

    def can_access(self, user_id: int) -> bool:
        """Owners and admins may access a user's resources."""
        return self.is_admin or self.user_id == user_id

    def require_access(self, user_id: int) -> None:
        if not self.can_access(user_id):
            raise PermissionDenied("Not allowed to access this user's data")

    def require_admin(self) -> None:
        if not self.is_admin:
            raise PermissionDenied("Admin access required")


def save_session(session: AuthSession, settings: Settings | None = None) -> str:
    """Encode a session as a signed bearer token."""
    settings = settings or get_settings()
    claims = {
        "sub": str(session.user_id),
        "username": session.username,
        "admin": session.is_admin,
        "iat": int(session.issued_at.timestamp()),
        "exp": int(session.expires_at.timestamp()),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.token_algorithm)


def load_session(token: str, settings: Settings | None = None) -> AuthSession:
    """Decode and validate a bearer token.

    Raises:
        AuthError: The token is malformed, has a bad signature, or expired.
    """
    settings = settings or get_settings()
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
        return AuthSession(
            user_id=int(claims["sub"]),
            username=claims["username"],
            is_admin=bool(claims.get("admin", False)),
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
    except (JWTError, KeyError, ValueError) as e:
        raise AuthError("Invalid or expired token") from e
