"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest

from fitspark.config import Settings
from fitspark.db import init_db
from fitspark.errors import CoachError, ProgramGenerationError
from fitspark.models.achievement import BadgeContent
from fitspark.models.progress import ProgressRecord
from fitspark.models.user import FitnessGoals, FitnessLevel, PrimaryGoal, Theme, User
from fitspark.models.workout import DailyWorkoutPlan, PlanExercise


class StubCoach:
    """Deterministic stand-in for the OpenAI-backed coach."""

    def __init__(self, fail_badges: bool = False, fail_program: bool = False):
        self.fail_badges = fail_badges
        self.fail_program = fail_program
        self.badge_calls: list[str] = []
        self.program_requests = []

    async def generate_program(self, request):
        self.program_requests.append(request)
        if self.fail_program:
            raise ProgramGenerationError("Failed to generate personalized program")
        return [
            DailyWorkoutPlan(
                day=day,
                title=f"Day {day}",
                total_minutes=30,
                exercises=[PlanExercise(name="Walking", duration=30)],
                theme=request.theme.value,
            )
            for day in range(1, request.days + 1)
        ]

    async def generate_motivation(self, theme, day, user_name):
        return f"Keep it up {user_name}, day {day}!"

    async def generate_badge(self, badge_type, theme, user_name):
        self.badge_calls.append(badge_type)
        if self.fail_badges:
            raise CoachError("Badge generation failed")
        return BadgeContent(title=f"{badge_type} badge", description="Nice work", icon="star")


def make_records(
    pattern: list[bool],
    end: date = date(2024, 3, 10),
    user_id: int = 1,
    minutes: int = 30,
) -> list[ProgressRecord]:
    """One record per consecutive day, oldest first, ending on ``end``."""
    start = end - timedelta(days=len(pattern) - 1)
    return [
        ProgressRecord(
            user_id=user_id,
            date=start + timedelta(days=i),
            day=i + 1,
            completed=done,
            minutes_completed=minutes if done else 0,
        )
        for i, done in enumerate(pattern)
    ]


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema applied."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary data directory."""
    return Settings(
        data_dir=tmp_path,
        secret_key="test-secret",
        openai_api_key="test-key",
    )


@pytest.fixture
def stub_coach():
    return StubCoach()


@pytest.fixture
def sample_user():
    """Create a sample user for testing."""
    return User(
        username="jane",
        email="jane@example.com",
        name="Jane",
        age=58,
        start_weight=180.0,
        current_weight=180.0,
        target_weight=160.0,
        theme=Theme.FUN,
        fitness_goals=FitnessGoals(
            primary_goal=PrimaryGoal.WEIGHT_LOSS,
            time_commitment=30,
            fitness_level=FitnessLevel.BEGINNER,
            health_concerns=["Joint pain or arthritis"],
            preferred_activities=["Walking", "Chair Yoga"],
        ),
    )
