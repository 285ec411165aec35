"""Daily progress models."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class ExerciseLog:
    """Completion of a single exercise within a day's workout."""

    name: str
    completed: bool = False
    duration: int = 0  # minutes

    def to_dict(self) -> dict:
        return {"name": self.name, "completed": self.completed, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseLog":
        return cls(
            name=data["name"],
            completed=bool(data.get("completed", False)),
            duration=data.get("duration", 0),
        )


@dataclass
class ProgressRecord:
    """A user's logged progress for one calendar day.

    There is at most one record per user per date; logging the same day
    again patches the existing record.
    """

    user_id: int
    date: date
    day: int = 1  # Program day the entry belongs to
    completed: bool = False
    minutes_completed: int = 0
    weight: float | None = None  # lbs
    mood: int | None = None  # 1-5
    notes: str | None = None
    exercises: list[ExerciseLog] = field(default_factory=list)
    id: int | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if self.minutes_completed is None:
            self.minutes_completed = 0
        if self.minutes_completed < 0:
            raise ValueError("minutes_completed must be non-negative")
        if self.weight is not None and self.weight <= 0:
            raise ValueError("weight must be positive")
        if self.mood is not None and not 1 <= self.mood <= 5:
            raise ValueError("mood must be between 1 and 5")

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "day": self.day,
            "completed": self.completed,
            "minutes_completed": self.minutes_completed,
            "weight": self.weight,
            "mood": self.mood,
            "notes": self.notes,
            "exercises": [e.to_dict() for e in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "ProgressRecord":
        """Create from dictionary."""
        record_date = data["date"]
        if isinstance(record_date, str):
            record_date = date.fromisoformat(record_date[:10])

        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data["user_id"],
            date=record_date,
            day=data.get("day", 1),
            completed=bool(data.get("completed", False)),
            minutes_completed=data.get("minutes_completed") or 0,
            weight=data.get("weight"),
            mood=data.get("mood"),
            notes=data.get("notes"),
            exercises=[ExerciseLog.from_dict(e) for e in data.get("exercises") or []],
        )

    def apply_patch(self, updates: dict) -> None:
        """Apply a partial update, ignoring unknown and ``None`` values."""
        for key in ("day", "completed", "minutes_completed", "weight", "mood", "notes"):
            if updates.get(key) is not None:
                setattr(self, key, updates[key])
        if updates.get("exercises") is not None:
            self.exercises = [
                e if isinstance(e, ExerciseLog) else ExerciseLog.from_dict(e)
                for e in updates["exercises"]
            ]
        # Re-run validation on the patched values
        self.__post_init__()
