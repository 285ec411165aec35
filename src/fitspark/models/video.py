"""Exercise video catalog models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .user import Theme


class ExerciseType(str, Enum):
    """Kinds of exercise covered by the catalog."""

    CHAIR_YOGA = "chair-yoga"
    WEIGHTS = "weights"
    WALKING = "walking"
    ELLIPTICAL = "elliptical"
    STRETCHING = "stretching"


class SkillLevel(str, Enum):
    """Difficulty of a video."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class Video:
    """A catalog video that workout plans may reference."""

    title: str
    youtube_id: str
    duration: int  # minutes
    exercise_type: ExerciseType
    skill_level: SkillLevel
    effort_level: int  # 1-5
    theme_compatibility: list[Theme] = field(default_factory=lambda: list(Theme))
    equipment: str | None = None  # none, light-weights, resistance-band
    description: str | None = None
    thumbnail_url: str | None = None
    is_approved: bool = False
    id: int | None = None
    created_at: datetime | None = None

    def __post_init__(self):
        if not 1 <= self.effort_level <= 5:
            raise ValueError("effort_level must be between 1 and 5")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "youtube_id": self.youtube_id,
            "duration": self.duration,
            "exercise_type": self.exercise_type.value,
            "skill_level": self.skill_level.value,
            "effort_level": self.effort_level,
            "equipment": self.equipment,
            "theme_compatibility": [t.value for t in self.theme_compatibility],
            "description": self.description,
            "thumbnail_url": self.thumbnail_url,
            "is_approved": self.is_approved,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Video":
        return cls(
            id=id if id is not None else data.get("id"),
            title=data["title"],
            youtube_id=data["youtube_id"],
            duration=data["duration"],
            exercise_type=ExerciseType(data["exercise_type"]),
            skill_level=SkillLevel(data["skill_level"]),
            effort_level=data["effort_level"],
            equipment=data.get("equipment"),
            theme_compatibility=[Theme(t) for t in data.get("theme_compatibility", [])],
            description=data.get("description"),
            thumbnail_url=data.get("thumbnail_url"),
            is_approved=bool(data.get("is_approved", False)),
        )

    def suits_theme(self, theme: Theme | str) -> bool:
        return Theme(theme) in self.theme_compatibility


# Starter catalog seeded by ``fitspark init``
STARTER_VIDEOS = [
    Video(
        title="Gentle Chair Yoga for Seniors",
        youtube_id="KEjiXtb2hRg",
        duration=15,
        exercise_type=ExerciseType.CHAIR_YOGA,
        skill_level=SkillLevel.BEGINNER,
        effort_level=1,
        equipment="none",
        description="Seated stretches and breathing to loosen up joints.",
        is_approved=True,
    ),
    Video(
        title="Light Weight Training for 55+",
        youtube_id="Ev6yE55kYGw",
        duration=20,
        exercise_type=ExerciseType.WEIGHTS,
        skill_level=SkillLevel.BEGINNER,
        effort_level=3,
        equipment="light-weights",
        description="Full-body strength circuit with light dumbbells.",
        is_approved=True,
    ),
    Video(
        title="Morning Stretching Routine",
        youtube_id="g_tea8ZNk5A",
        duration=10,
        exercise_type=ExerciseType.STRETCHING,
        skill_level=SkillLevel.BEGINNER,
        effort_level=1,
        equipment="none",
        description="Ten minutes of mobility to start the day.",
        is_approved=True,
    ),
    Video(
        title="Low-Impact Cardio for Seniors",
        youtube_id="smcGD6kK5v8",
        duration=25,
        exercise_type=ExerciseType.WALKING,
        skill_level=SkillLevel.INTERMEDIATE,
        effort_level=3,
        equipment="none",
        description="Indoor walking workout that is easy on the knees.",
        is_approved=True,
    ),
]
