"""Application services."""

from .accounts import AccountService
from .achievements import AchievementService
from .programs import ProgramService
from .progress import ProgressService, StatsReport, SubmissionResult

__all__ = [
    "AccountService",
    "AchievementService",
    "ProgramService",
    "ProgressService",
    "StatsReport",
    "SubmissionResult",
]
