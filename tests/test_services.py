"""Tests for the account, progress, achievement and program services."""

import asyncio
import json
from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from conftest import StubCoach
from fitspark.clients.coach import CoachClient
from fitspark.db import (
    AchievementRepository,
    ProgressRepository,
    UserRepository,
    VideoRepository,
    WorkoutPlanRepository,
    seed_videos,
)
from fitspark.errors import AuthError, ConflictError, NotFoundError, ProgramGenerationError
from fitspark.models.achievement import BadgeType
from fitspark.models.progress import ProgressRecord
from fitspark.models.user import Theme
from fitspark.services import AccountService, AchievementService, ProgramService, ProgressService
from fitspark.stats.windows import TimeWindow

START = date(2024, 3, 4)


class CrashingBadgeCoach(StubCoach):
    """Badge text raises something other than a coach error."""

    async def generate_badge(self, badge_type, theme, user_name):
        raise RuntimeError("unexpected reply")


def openai_coach(settings, choices) -> CoachClient:
    """A real coach client over a fake completions endpoint."""

    async def create(**kwargs):
        return SimpleNamespace(choices=choices)

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return CoachClient(settings, client=client)


class ServiceHarness:
    """Services wired against one temporary database."""

    def __init__(self, db_path, settings, coach):
        self.coach = coach
        self.users = UserRepository(db_path)
        self.progress_repo = ProgressRepository(db_path)
        self.achievement_repo = AchievementRepository(db_path)
        self.accounts = AccountService(self.users)
        self.achievements = AchievementService(self.progress_repo, self.achievement_repo, coach)
        self.progress = ProgressService(self.progress_repo, self.users, self.achievements, settings)
        self.programs = ProgramService(
            WorkoutPlanRepository(db_path), VideoRepository(db_path), coach, settings
        )

    async def log_day(self, user, offset: int, completed: bool = True, **kwargs):
        record = ProgressRecord(
            user_id=user.id,
            date=START + timedelta(days=offset),
            day=offset + 1,
            completed=completed,
            minutes_completed=30 if completed else 0,
            **kwargs,
        )
        return await self.progress.submit(user, record)


@pytest.fixture
def harness(db_path, settings, stub_coach):
    return ServiceHarness(db_path, settings, stub_coach)


@pytest.fixture
def user(harness, sample_user):
    return asyncio.run(harness.accounts.register(sample_user, "walking123"))


class TestAccountService:
    def test_register_hashes_password(self, harness, user):
        assert user.id is not None
        assert user.password_hash and user.password_hash != "walking123"

    def test_register_duplicate(self, harness, user, sample_user):
        with pytest.raises(ConflictError):
            asyncio.run(harness.accounts.register(sample_user, "another1"))

    def test_authenticate(self, harness, user):
        assert asyncio.run(harness.accounts.authenticate("jane", "walking123")).id == user.id

        with pytest.raises(AuthError):
            asyncio.run(harness.accounts.authenticate("jane", "wrong-password"))
        with pytest.raises(AuthError):
            asyncio.run(harness.accounts.authenticate("nobody", "walking123"))

    def test_update_profile_fields_only(self, harness, user):
        updated = asyncio.run(
            harness.accounts.update(
                user.id, {"theme": "drill", "is_admin": True, "preferences": {"weekly_goal_minutes": 150}}
            )
        )

        assert updated.theme == Theme.DRILL
        assert updated.is_admin is False
        assert updated.preferences.weekly_goal_minutes == 150

    def test_admin_update(self, harness, user):
        updated = asyncio.run(harness.accounts.update(user.id, {"is_admin": True}, as_admin=True))
        assert updated.is_admin is True

    def test_password_change(self, harness, user):
        asyncio.run(harness.accounts.update(user.id, {"password": "new-secret"}))
        assert asyncio.run(harness.accounts.authenticate("jane", "new-secret")).id == user.id

    def test_get_missing(self, harness):
        with pytest.raises(NotFoundError):
            asyncio.run(harness.accounts.get(999))


class TestProgressSubmission:
    def test_first_completed_workout_awards_badge(self, harness, user):
        result = asyncio.run(harness.log_day(user, 0, weight=178.5))

        assert result.created is True
        assert [a.badge_type for a in result.new_achievements] == [BadgeType.FIRST_WORKOUT]
        assert result.new_achievements[0].title == "first-workout badge"

        stored = asyncio.run(harness.users.get(user.id))
        assert stored.current_weight == 178.5
        assert stored.current_day == 2

    def test_incomplete_day_skips_evaluation(self, harness, user):
        result = asyncio.run(harness.log_day(user, 0, completed=False))

        assert result.new_achievements == []
        assert harness.coach.badge_calls == []

    def test_badges_over_a_week(self, harness, user):
        async def run_week():
            earned = []
            for offset in range(8):
                result = await harness.log_day(user, offset)
                earned.append([a.badge_type for a in result.new_achievements])
            return earned

        earned = asyncio.run(run_week())

        assert earned[0] == [BadgeType.FIRST_WORKOUT]
        assert earned[4] == [BadgeType.CONSISTENCY]
        assert earned[6] == [BadgeType.FIRST_WEEK]
        assert earned[1] == earned[2] == earned[3] == earned[5] == earned[7] == []

    def test_resubmitting_a_day_does_not_duplicate(self, harness, user):
        async def submit_twice():
            await harness.log_day(user, 0)
            return await harness.log_day(user, 0, mood=5)

        second = asyncio.run(submit_twice())

        assert second.created is False
        assert second.new_achievements == []
        assert len(asyncio.run(harness.progress_repo.list_for_user(user.id))) == 1
        assert len(asyncio.run(harness.achievement_repo.list_for_user(user.id))) == 1

    def test_badge_text_failure_uses_fallback(self, db_path, settings, sample_user):
        harness = ServiceHarness(db_path, settings, StubCoach(fail_badges=True))
        user = asyncio.run(harness.accounts.register(sample_user, "walking123"))

        result = asyncio.run(harness.log_day(user, 0))

        badge = result.new_achievements[0]
        assert badge.title == "Achievement Unlocked"
        assert badge.description == "Great job on your progress!"
        assert badge.icon == "trophy"

    @pytest.mark.parametrize(
        "make_coach",
        [
            lambda settings: CrashingBadgeCoach(),
            lambda settings: openai_coach(settings, choices=[]),
            lambda settings: openai_coach(
                settings,
                choices=[
                    SimpleNamespace(
                        message=SimpleNamespace(
                            content=json.dumps({"title": {"text": "Hi"}, "description": ["x"]})
                        )
                    )
                ],
            ),
        ],
        ids=["unexpected-error", "no-choices", "non-text-fields"],
    )
    def test_bad_badge_reply_never_fails_submission(self, db_path, settings, sample_user, make_coach):
        harness = ServiceHarness(db_path, settings, make_coach(settings))
        user = asyncio.run(harness.accounts.register(sample_user, "walking123"))

        result = asyncio.run(harness.log_day(user, 0))

        badge = result.new_achievements[0]
        assert badge.badge_type == BadgeType.FIRST_WORKOUT
        assert badge.title == "Achievement Unlocked"
        stored = asyncio.run(harness.achievement_repo.list_for_user(user.id))
        assert [a.title for a in stored] == ["Achievement Unlocked"]

    def test_concurrent_evaluation_awards_once(self, harness, user):
        async def race():
            await harness.progress_repo.upsert(
                ProgressRecord(user_id=user.id, date=START, completed=True, minutes_completed=30)
            )
            return await asyncio.gather(
                harness.achievements.check_and_award(user),
                harness.achievements.check_and_award(user),
            )

        results = asyncio.run(race())

        assert sum(len(r) for r in results) == 1
        assert len(asyncio.run(harness.achievement_repo.list_for_user(user.id))) == 1
        assert harness.achievements._locks == {}

    def test_patch_to_completed_evaluates_badges(self, harness, user):
        logged = asyncio.run(harness.log_day(user, 0, completed=False))

        result = asyncio.run(harness.progress.patch(logged.record.id, {"completed": True, "minutes_completed": 25}))

        assert result.record.completed is True
        assert [a.badge_type for a in result.new_achievements] == [BadgeType.FIRST_WORKOUT]

    def test_patch_missing_record(self, harness):
        with pytest.raises(NotFoundError):
            asyncio.run(harness.progress.patch(12345, {"completed": True}))


class TestReport:
    def test_report(self, harness, user):
        async def log_history():
            for offset, done in enumerate([True, True, False, True, True, True]):
                await harness.log_day(user, offset, completed=done)

        asyncio.run(log_history())
        today = START + timedelta(days=5)  # Saturday 2024-03-09

        report = asyncio.run(
            harness.progress.report(user, window=TimeWindow.ALL_TIME, today=today)
        )

        assert report.streaks.current_streak == 3
        assert report.streaks.longest_streak == 3
        assert report.stats.completed_count == 5
        assert report.stats.total_minutes == 150
        assert report.stats.weekly_total_minutes == 150
        assert report.stats.weekly_goal_minutes == 175
        assert len(report.week) == 7

    def test_custom_window_keeps_current_week(self, harness, user):
        async def log_history():
            for offset in range(10):
                await harness.log_day(user, offset)

        asyncio.run(log_history())
        today = START + timedelta(days=9)  # Wednesday 2024-03-13

        report = asyncio.run(
            harness.progress.report(
                user,
                window=TimeWindow.CUSTOM,
                today=today,
                start=START,
                end=START + timedelta(days=4),
            )
        )

        assert report.stats.completed_count == 5
        assert report.stats.weekly_total_minutes == 120
        assert report.stats.weekly_total_minutes == sum(d.minutes_completed for d in report.week)

    def test_empty_report(self, harness, user):
        report = asyncio.run(harness.progress.report(user, today=START))

        data = report.to_dict()
        assert data["current_streak"] == 0
        assert data["average_minutes_per_record"] == 0
        assert data["window"] == "30-days"

    def test_weekly_goal_preference(self, harness, user):
        asyncio.run(harness.accounts.update(user.id, {"preferences": {"weekly_goal_minutes": 120}}))
        user = asyncio.run(harness.accounts.get(user.id))

        report = asyncio.run(harness.progress.report(user, today=START))

        assert report.stats.weekly_goal_minutes == 120


class TestProgramService:
    def test_generates_and_stores_program(self, harness, user, db_path, settings):
        asyncio.run(seed_videos(db_path))

        plans = asyncio.run(harness.programs.generate_for_user(user))

        assert len(plans) == settings.program_days
        request = harness.coach.program_requests[0]
        assert request.name == "Jane"
        assert request.videos and all(v.is_approved for v in request.videos)
        stored = asyncio.run(WorkoutPlanRepository(db_path).list_for_user(user.id))
        assert len(stored) == settings.program_days

    def test_generation_failure_propagates(self, db_path, settings, sample_user):
        harness = ServiceHarness(db_path, settings, StubCoach(fail_program=True))
        user = asyncio.run(harness.accounts.register(sample_user, "walking123"))

        with pytest.raises(ProgramGenerationError):
            asyncio.run(harness.programs.generate_for_user(user))
