"""Database layer for FitSpark."""

from .engine import get_db_path, init_db, seed_videos
from .repositories import (
    AchievementRepository,
    ProgressRepository,
    UserRepository,
    VideoRepository,
    WorkoutPlanRepository,
)

__all__ = [
    "AchievementRepository",
    "get_db_path",
    "init_db",
    "ProgressRepository",
    "seed_videos",
    "UserRepository",
    "VideoRepository",
    "WorkoutPlanRepository",
]
