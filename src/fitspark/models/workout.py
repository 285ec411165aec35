"""Workout plan models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class PlanExercise:
    """An exercise inside a daily workout."""

    name: str
    duration: int  # minutes
    instructions: str = ""
    video_id: int | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "duration": self.duration,
            "instructions": self.instructions,
            "video_id": self.video_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlanExercise":
        # Model output uses camelCase keys
        video_id = data.get("video_id", data.get("videoId"))
        try:
            video_id = int(video_id) if video_id not in (None, "") else None
        except (TypeError, ValueError):
            video_id = None
        return cls(
            name=data["name"],
            duration=int(data.get("duration", 0)),
            instructions=data.get("instructions", ""),
            video_id=video_id,
        )


@dataclass
class DailyWorkoutPlan:
    """One day of a user's personalised program."""

    day: int
    title: str
    total_minutes: int
    exercises: list[PlanExercise] = field(default_factory=list)
    description: str = ""
    motivation_message: str = ""
    theme: str = "fun"
    user_id: int | None = None
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "day": self.day,
            "theme": self.theme,
            "title": self.title,
            "description": self.description,
            "total_minutes": self.total_minutes,
            "exercises": [e.to_dict() for e in self.exercises],
            "motivation_message": self.motivation_message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "DailyWorkoutPlan":
        """Create from dictionary (storage or model output)."""
        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data.get("user_id"),
            day=int(data["day"]),
            theme=data.get("theme", "fun"),
            title=data["title"],
            description=data.get("description") or "",
            total_minutes=int(data.get("total_minutes", data.get("totalMinutes", 0))),
            exercises=[PlanExercise.from_dict(e) for e in data.get("exercises", [])],
            motivation_message=data.get("motivation_message", data.get("motivationMessage")) or "",
        )
