"""Achievement (badge) models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BadgeType(str, Enum):
    """Badges a user can unlock, each at most once."""

    FIRST_WORKOUT = "first-workout"
    FIRST_WEEK = "first-week"
    CONSISTENCY = "consistency"


@dataclass
class BadgeContent:
    """Display text for a badge."""

    title: str
    description: str
    icon: str  # Font Awesome icon name


FALLBACK_BADGE = BadgeContent(
    title="Achievement Unlocked",
    description="Great job on your progress!",
    icon="trophy",
)


@dataclass
class Achievement:
    """An unlocked badge."""

    user_id: int
    badge_type: BadgeType
    title: str
    description: str
    icon: str
    theme: str
    earned_at: datetime | None = None
    id: int | None = None

    @classmethod
    def from_content(
        cls, user_id: int, badge_type: BadgeType, content: BadgeContent, theme: str
    ) -> "Achievement":
        return cls(
            user_id=user_id,
            badge_type=badge_type,
            title=content.title,
            description=content.description,
            icon=content.icon,
            theme=theme,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "badge_type": self.badge_type.value,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "theme": self.theme,
            "earned_at": self.earned_at.isoformat() if self.earned_at else None,
        }
