"""Tests for the SQLite repositories."""

import asyncio
from datetime import date

import pytest

from fitspark.db import (
    AchievementRepository,
    ProgressRepository,
    UserRepository,
    VideoRepository,
    WorkoutPlanRepository,
    init_db,
    seed_videos,
)
from fitspark.errors import ConflictError
from fitspark.models.achievement import Achievement, BadgeType
from fitspark.models.progress import ExerciseLog, ProgressRecord
from fitspark.models.user import Theme
from fitspark.models.video import STARTER_VIDEOS, ExerciseType
from fitspark.models.workout import DailyWorkoutPlan


def _create_user(db_path, user):
    return asyncio.run(UserRepository(db_path).create(user))


class TestUserRepository:
    def test_create_and_get(self, db_path, sample_user):
        repo = UserRepository(db_path)
        user_id = asyncio.run(repo.create(sample_user))

        stored = asyncio.run(repo.get(user_id))

        assert stored.username == "jane"
        assert stored.fitness_goals.preferred_activities == ["Walking", "Chair Yoga"]
        assert stored.start_date is not None
        assert asyncio.run(repo.get_by_email("jane@example.com")).id == user_id

    def test_duplicate_username(self, db_path, sample_user):
        repo = UserRepository(db_path)
        asyncio.run(repo.create(sample_user))
        sample_user.email = "other@example.com"

        with pytest.raises(ConflictError):
            asyncio.run(repo.create(sample_user))

    def test_update(self, db_path, sample_user):
        repo = UserRepository(db_path)
        sample_user.id = asyncio.run(repo.create(sample_user))
        sample_user.theme = Theme.DRILL
        sample_user.current_day = 4

        asyncio.run(repo.update(sample_user))
        stored = asyncio.run(repo.get(sample_user.id))

        assert stored.theme == Theme.DRILL
        assert stored.current_day == 4

    def test_delete_removes_dependent_rows(self, db_path, sample_user):
        user_id = _create_user(db_path, sample_user)
        progress = ProgressRepository(db_path)
        asyncio.run(progress.upsert(ProgressRecord(user_id=user_id, date=date(2024, 3, 10))))

        asyncio.run(UserRepository(db_path).delete(user_id))

        assert asyncio.run(UserRepository(db_path).get(user_id)) is None
        assert asyncio.run(progress.list_for_user(user_id)) == []


class TestProgressRepository:
    """One record per user per day."""

    def test_upsert_creates_then_patches(self, db_path, sample_user):
        user_id = _create_user(db_path, sample_user)
        repo = ProgressRepository(db_path)
        day = date(2024, 3, 10)

        first, created = asyncio.run(
            repo.upsert(ProgressRecord(user_id=user_id, date=day, mood=3, notes="morning walk"))
        )
        assert created is True

        second, created = asyncio.run(
            repo.upsert(
                ProgressRecord(user_id=user_id, date=day, completed=True, minutes_completed=30)
            )
        )
        assert created is False
        assert second.id == first.id
        assert second.completed is True
        assert second.minutes_completed == 30
        # Optional fields omitted on the second submission are kept
        assert second.mood == 3
        assert second.notes == "morning walk"

        assert len(asyncio.run(repo.list_for_user(user_id))) == 1

    def test_list_ordered_and_filtered(self, db_path, sample_user):
        user_id = _create_user(db_path, sample_user)
        repo = ProgressRepository(db_path)
        for day in (12, 10, 11):
            asyncio.run(repo.upsert(ProgressRecord(user_id=user_id, date=date(2024, 3, day))))

        records = asyncio.run(repo.list_for_user(user_id))
        assert [r.date.day for r in records] == [10, 11, 12]

        windowed = asyncio.run(repo.list_for_user(user_id, start=date(2024, 3, 11)))
        assert [r.date.day for r in windowed] == [11, 12]

    def test_update_and_exercises(self, db_path, sample_user):
        user_id = _create_user(db_path, sample_user)
        repo = ProgressRepository(db_path)
        record, _ = asyncio.run(repo.upsert(ProgressRecord(user_id=user_id, date=date(2024, 3, 10))))

        record.exercises = [ExerciseLog(name="Stretching", completed=True, duration=10)]
        record.weight = 178.0
        asyncio.run(repo.update(record))

        stored = asyncio.run(repo.get(record.id))
        assert stored.weight == 178.0
        assert stored.exercises[0].name == "Stretching"
        assert stored.updated_at is not None


class TestAchievementRepository:
    def test_create_if_absent_is_idempotent(self, db_path, sample_user):
        user_id = _create_user(db_path, sample_user)
        repo = AchievementRepository(db_path)
        badge = Achievement(
            user_id=user_id,
            badge_type=BadgeType.FIRST_WORKOUT,
            title="First Steps",
            description="Your first workout!",
            icon="star",
            theme="fun",
        )

        assert asyncio.run(repo.create_if_absent(badge)) is True
        assert asyncio.run(repo.create_if_absent(badge)) is False

        assert asyncio.run(repo.badge_types_for_user(user_id)) == {BadgeType.FIRST_WORKOUT}
        assert asyncio.run(repo.has(user_id, BadgeType.FIRST_WORKOUT)) is True
        stored = asyncio.run(repo.list_for_user(user_id))
        assert len(stored) == 1
        assert stored[0].earned_at is not None


class TestWorkoutPlanRepository:
    def test_create_many_replaces_program(self, db_path, sample_user):
        user_id = _create_user(db_path, sample_user)
        repo = WorkoutPlanRepository(db_path)
        plans = [DailyWorkoutPlan(day=d, title=f"Day {d}", total_minutes=20) for d in (2, 1)]

        asyncio.run(repo.create_many(user_id, plans))
        asyncio.run(repo.create_many(user_id, plans[:1]))

        stored = asyncio.run(repo.list_for_user(user_id))
        assert [p.day for p in stored] == [2]
        assert asyncio.run(repo.get(user_id, 2)).title == "Day 2"
        assert asyncio.run(repo.get(user_id, 1)) is None


class TestVideoRepository:
    def test_seed_only_once(self, db_path):
        assert asyncio.run(seed_videos(db_path)) == len(STARTER_VIDEOS)
        assert asyncio.run(seed_videos(db_path)) == 0
        assert len(asyncio.run(VideoRepository(db_path).list_approved())) == len(STARTER_VIDEOS)

    def test_filters(self, db_path):
        asyncio.run(seed_videos(db_path))
        repo = VideoRepository(db_path)

        yoga = asyncio.run(repo.list_all(exercise_type=ExerciseType.CHAIR_YOGA))

        assert [v.exercise_type for v in yoga] == [ExerciseType.CHAIR_YOGA]


def test_init_db_is_repeatable(temp_db_path):
    asyncio.run(init_db(temp_db_path))
    asyncio.run(init_db(temp_db_path))
    assert temp_db_path.exists()
