"""User account and fitness profile models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Theme(str, Enum):
    """Coaching tone used for plans, motivation and badges."""

    FUN = "fun"  # Encouraging, playful
    AGGRESSIVE = "aggressive"  # Intense, challenging
    DRILL = "drill"  # Military-style discipline


class FitnessLevel(str, Enum):
    """Self-reported fitness level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class PrimaryGoal(str, Enum):
    """Primary goal chosen during onboarding."""

    WEIGHT_LOSS = "weight-loss"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    OVERALL_HEALTH = "overall-health"

    @property
    def phrase(self) -> str:
        """Goal phrased as an action, for prompts."""
        return {
            PrimaryGoal.WEIGHT_LOSS: "lose weight",
            PrimaryGoal.STRENGTH: "build strength",
            PrimaryGoal.ENDURANCE: "improve endurance",
            PrimaryGoal.FLEXIBILITY: "increase flexibility",
            PrimaryGoal.OVERALL_HEALTH: "improve overall health",
        }[self]


@dataclass
class FitnessGoals:
    """Onboarding answers that shape the generated program."""

    primary_goal: PrimaryGoal = PrimaryGoal.OVERALL_HEALTH
    time_commitment: int = 30  # Minutes per day
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    health_concerns: list[str] = field(default_factory=list)
    motivation_style: Theme = Theme.FUN
    preferred_activities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "primary_goal": self.primary_goal.value,
            "time_commitment": self.time_commitment,
            "fitness_level": self.fitness_level.value,
            "health_concerns": self.health_concerns,
            "motivation_style": self.motivation_style.value,
            "preferred_activities": self.preferred_activities,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FitnessGoals":
        return cls(
            primary_goal=PrimaryGoal(data.get("primary_goal", "overall-health")),
            time_commitment=data.get("time_commitment", 30),
            fitness_level=FitnessLevel(data.get("fitness_level", "beginner")),
            health_concerns=list(data.get("health_concerns", [])),
            motivation_style=Theme(data.get("motivation_style", "fun")),
            preferred_activities=list(data.get("preferred_activities", [])),
        )


@dataclass
class Preferences:
    """Notification and goal preferences."""

    notifications: bool = True
    reminder_time: str = "08:00"
    weekly_goal_minutes: int | None = None  # None -> configured default

    def to_dict(self) -> dict:
        return {
            "notifications": self.notifications,
            "reminder_time": self.reminder_time,
            "weekly_goal_minutes": self.weekly_goal_minutes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Preferences":
        return cls(
            notifications=data.get("notifications", True),
            reminder_time=data.get("reminder_time", "08:00"),
            weekly_goal_minutes=data.get("weekly_goal_minutes"),
        )


@dataclass
class User:
    """A registered user.

    ``password_hash`` never leaves the service layer: ``to_dict`` omits it
    unless explicitly asked for by the repository.
    """

    username: str
    email: str
    name: str
    password_hash: str = ""
    age: int | None = None
    start_weight: float | None = None  # lbs
    current_weight: float | None = None
    target_weight: float | None = None
    theme: Theme = Theme.FUN
    current_day: int = 1
    is_admin: bool = False
    fitness_goals: FitnessGoals | None = None
    preferences: Preferences = field(default_factory=Preferences)
    start_date: datetime | None = None
    id: int | None = None

    def to_dict(self, include_password: bool = False) -> dict:
        """Convert to dictionary for storage or responses."""
        data = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "name": self.name,
            "age": self.age,
            "start_weight": self.start_weight,
            "current_weight": self.current_weight,
            "target_weight": self.target_weight,
            "theme": self.theme.value,
            "current_day": self.current_day,
            "is_admin": self.is_admin,
            "fitness_goals": self.fitness_goals.to_dict() if self.fitness_goals else None,
            "preferences": self.preferences.to_dict(),
            "start_date": self.start_date.isoformat() if self.start_date else None,
        }
        if include_password:
            data["password_hash"] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "User":
        """Create from dictionary."""
        goals = data.get("fitness_goals")
        start_date = data.get("start_date")
        if isinstance(start_date, str):
            start_date = datetime.fromisoformat(start_date)

        return cls(
            id=id if id is not None else data.get("id"),
            username=data["username"],
            email=data["email"],
            name=data["name"],
            password_hash=data.get("password_hash", ""),
            age=data.get("age"),
            start_weight=data.get("start_weight"),
            current_weight=data.get("current_weight"),
            target_weight=data.get("target_weight"),
            theme=Theme(data.get("theme", "fun")),
            current_day=data.get("current_day", 1),
            is_admin=bool(data.get("is_admin", False)),
            fitness_goals=FitnessGoals.from_dict(goals) if goals else None,
            preferences=Preferences.from_dict(data.get("preferences") or {}),
            start_date=start_date,
        )

    @property
    def weight_to_goal(self) -> float:
        """Remaining distance to the target weight in lbs (0 if unknown)."""
        current = self.current_weight or self.start_weight
        if current is None or self.target_weight is None:
            return 0.0
        return abs(current - self.target_weight)
