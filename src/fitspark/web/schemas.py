"""Request bodies for the JSON API."""

from datetime import date as date_type

from pydantic import BaseModel, Field

from ..models.progress import ExerciseLog, ProgressRecord
from ..models.user import FitnessGoals, FitnessLevel, PrimaryGoal, Theme, User
from ..models.video import ExerciseType, SkillLevel, Video


class FitnessGoalsIn(BaseModel):
    primary_goal: PrimaryGoal = PrimaryGoal.OVERALL_HEALTH
    time_commitment: int = Field(30, ge=5, le=180)
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    health_concerns: list[str] = []
    motivation_style: Theme = Theme.FUN
    preferred_activities: list[str] = []

    def to_model(self) -> FitnessGoals:
        return FitnessGoals.from_dict(self.model_dump(mode="json"))


class PreferencesIn(BaseModel):
    notifications: bool = True
    reminder_time: str = "08:00"
    weekly_goal_minutes: int | None = Field(None, ge=1)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    email: str
    age: int | None = Field(None, ge=1, le=120)
    start_weight: float | None = Field(None, gt=0)
    target_weight: float | None = Field(None, gt=0)
    theme: Theme = Theme.FUN
    fitness_goals: FitnessGoalsIn | None = None

    def to_user(self, is_admin: bool = False) -> User:
        return User(
            username=self.username,
            email=self.email,
            name=self.name,
            age=self.age,
            start_weight=self.start_weight,
            current_weight=self.start_weight,
            target_weight=self.target_weight,
            theme=self.theme,
            is_admin=is_admin,
            fitness_goals=self.fitness_goals.to_model() if self.fitness_goals else None,
        )


class AdminUserCreate(RegisterRequest):
    is_admin: bool = False
    generate_program: bool = False


class LoginRequest(BaseModel):
    username: str
    password: str


class UserUpdate(BaseModel):
    """Partial profile update; unset fields are left alone."""

    name: str | None = None
    email: str | None = None
    password: str | None = Field(None, min_length=6)
    age: int | None = Field(None, ge=1, le=120)
    start_weight: float | None = Field(None, gt=0)
    current_weight: float | None = Field(None, gt=0)
    target_weight: float | None = Field(None, gt=0)
    theme: Theme | None = None
    current_day: int | None = Field(None, ge=1)
    fitness_goals: FitnessGoalsIn | None = None
    preferences: PreferencesIn | None = None


class AdminUserUpdate(UserUpdate):
    username: str | None = Field(None, min_length=3, max_length=50)
    is_admin: bool | None = None


class ExerciseLogIn(BaseModel):
    name: str
    completed: bool = False
    duration: int = Field(0, ge=0)


class ProgressSubmit(BaseModel):
    date: date_type | None = None  # Defaults to today
    day: int | None = Field(None, ge=1)  # Defaults to the user's current day
    completed: bool = False
    minutes_completed: int = Field(0, ge=0)
    weight: float | None = Field(None, gt=0)
    mood: int | None = Field(None, ge=1, le=5)
    notes: str | None = None
    exercises: list[ExerciseLogIn] = []

    def to_record(self, user_id: int, today: date_type, current_day: int = 1) -> ProgressRecord:
        return ProgressRecord(
            user_id=user_id,
            date=self.date or today,
            day=self.day or current_day,
            completed=self.completed,
            minutes_completed=self.minutes_completed,
            weight=self.weight,
            mood=self.mood,
            notes=self.notes,
            exercises=[ExerciseLog(**e.model_dump()) for e in self.exercises],
        )


class ProgressPatch(BaseModel):
    day: int | None = Field(None, ge=1)
    completed: bool | None = None
    minutes_completed: int | None = Field(None, ge=0)
    weight: float | None = Field(None, gt=0)
    mood: int | None = Field(None, ge=1, le=5)
    notes: str | None = None
    exercises: list[ExerciseLogIn] | None = None


class VideoIn(BaseModel):
    title: str = Field(min_length=1)
    youtube_id: str = Field(min_length=1)
    duration: int = Field(gt=0)
    exercise_type: ExerciseType
    skill_level: SkillLevel
    effort_level: int = Field(ge=1, le=5)
    equipment: str | None = None
    theme_compatibility: list[Theme] = list(Theme)
    description: str | None = None
    thumbnail_url: str | None = None
    is_approved: bool = False

    def to_video(self) -> Video:
        return Video.from_dict(self.model_dump(mode="json"))


class VideoUpdate(BaseModel):
    title: str | None = None
    youtube_id: str | None = None
    duration: int | None = Field(None, gt=0)
    exercise_type: ExerciseType | None = None
    skill_level: SkillLevel | None = None
    effort_level: int | None = Field(None, ge=1, le=5)
    equipment: str | None = None
    theme_compatibility: list[Theme] | None = None
    description: str | None = None
    thumbnail_url: str | None = None
    is_approved: bool | None = None
