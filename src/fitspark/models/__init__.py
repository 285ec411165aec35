"""Data models for FitSpark."""

from .achievement import FALLBACK_BADGE, Achievement, BadgeContent, BadgeType
from .progress import ExerciseLog, ProgressRecord
from .user import FitnessGoals, FitnessLevel, Preferences, PrimaryGoal, Theme, User
from .video import ExerciseType, SkillLevel, Video
from .workout import DailyWorkoutPlan, PlanExercise

__all__ = [
    "Achievement",
    "BadgeContent",
    "BadgeType",
    "DailyWorkoutPlan",
    "ExerciseLog",
    "ExerciseType",
    "FALLBACK_BADGE",
    "FitnessGoals",
    "FitnessLevel",
    "PlanExercise",
    "Preferences",
    "PrimaryGoal",
    "ProgressRecord",
    "SkillLevel",
    "Theme",
    "User",
    "Video",
]
