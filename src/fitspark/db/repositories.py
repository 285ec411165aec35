"""Data access layer for FitSpark."""

import json
from datetime import date, datetime
from pathlib import Path

import aiosqlite

from ..errors import ConflictError
from ..models.achievement import Achievement, BadgeType
from ..models.progress import ExerciseLog, ProgressRecord
from ..models.user import FitnessGoals, Preferences, Theme, User
from ..models.video import ExerciseType, SkillLevel, Video
from ..models.workout import DailyWorkoutPlan, PlanExercise
from .engine import get_db_path


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class UserRepository:
    """Repository for user accounts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user: User) -> int:
        """Create a new user. Raises ConflictError on duplicate username/email."""
        async with aiosqlite.connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    """
                    INSERT INTO users
                    (username, email, name, password_hash, age, start_weight, current_weight,
                     target_weight, theme, current_day, is_admin, fitness_goals, preferences)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user.username,
                        user.email,
                        user.name,
                        user.password_hash,
                        user.age,
                        user.start_weight,
                        user.current_weight,
                        user.target_weight,
                        user.theme.value,
                        user.current_day,
                        int(user.is_admin),
                        json.dumps(user.fitness_goals.to_dict()) if user.fitness_goals else None,
                        json.dumps(user.preferences.to_dict()),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise ConflictError("User already exists") from e
            await db.commit()
            return cursor.lastrowid

    async def get(self, user_id: int) -> User | None:
        """Get a user by ID."""
        return await self._fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))

    async def get_by_username(self, username: str) -> User | None:
        return await self._fetch_one("SELECT * FROM users WHERE username = ?", (username,))

    async def get_by_email(self, email: str) -> User | None:
        return await self._fetch_one("SELECT * FROM users WHERE email = ?", (email,))

    async def list_all(self) -> list[User]:
        """List all users."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM users ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def update(self, user: User) -> None:
        """Update an existing user."""
        if user.id is None:
            raise ValueError("User must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            try:
                await db.execute(
                    """
                    UPDATE users SET
                        username = ?, email = ?, name = ?, password_hash = ?, age = ?,
                        start_weight = ?, current_weight = ?, target_weight = ?, theme = ?,
                        current_day = ?, is_admin = ?, fitness_goals = ?, preferences = ?
                    WHERE id = ?
                    """,
                    (
                        user.username,
                        user.email,
                        user.name,
                        user.password_hash,
                        user.age,
                        user.start_weight,
                        user.current_weight,
                        user.target_weight,
                        user.theme.value,
                        user.current_day,
                        int(user.is_admin),
                        json.dumps(user.fitness_goals.to_dict()) if user.fitness_goals else None,
                        json.dumps(user.preferences.to_dict()),
                        user.id,
                    ),
                )
            except aiosqlite.IntegrityError as e:
                raise ConflictError("Username or email already taken") from e
            await db.commit()

    async def delete(self, user_id: int) -> None:
        """Delete a user together with their plans, progress and achievements."""
        async with aiosqlite.connect(self.db_path) as db:
            for table in ("achievements", "daily_progress", "workout_plans"):
                await db.execute(f"DELETE FROM {table} WHERE user_id = ?", (user_id,))
            await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
            await db.commit()

    async def _fetch_one(self, query: str, params: tuple) -> User | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        """Convert a database row to a User."""
        goals = json.loads(row["fitness_goals"]) if row["fitness_goals"] else None
        return User(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            name=row["name"],
            password_hash=row["password_hash"],
            age=row["age"],
            start_weight=row["start_weight"],
            current_weight=row["current_weight"],
            target_weight=row["target_weight"],
            theme=Theme(row["theme"]),
            current_day=row["current_day"],
            is_admin=bool(row["is_admin"]),
            fitness_goals=FitnessGoals.from_dict(goals) if goals else None,
            preferences=Preferences.from_dict(json.loads(row["preferences"] or "{}")),
            start_date=_parse_timestamp(row["start_date"]),
        )


class WorkoutPlanRepository:
    """Repository for generated daily workout plans."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create_many(self, user_id: int, plans: list[DailyWorkoutPlan]) -> int:
        """Store a user's program, replacing any previous one."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM workout_plans WHERE user_id = ?", (user_id,))
            await db.executemany(
                """
                INSERT INTO workout_plans
                (user_id, day, theme, title, description, total_minutes, exercises,
                 motivation_message)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        user_id,
                        plan.day,
                        plan.theme,
                        plan.title,
                        plan.description,
                        plan.total_minutes,
                        json.dumps([e.to_dict() for e in plan.exercises]),
                        plan.motivation_message,
                    )
                    for plan in plans
                ],
            )
            await db.commit()
        return len(plans)

    async def get(self, user_id: int, day: int) -> DailyWorkoutPlan | None:
        """Get the plan for one program day."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_plans WHERE user_id = ? AND day = ?",
                (user_id, day),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_plan(row)

    async def list_for_user(self, user_id: int) -> list[DailyWorkoutPlan]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM workout_plans WHERE user_id = ? ORDER BY day",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    async def delete_for_user(self, user_id: int) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM workout_plans WHERE user_id = ?", (user_id,))
            await db.commit()

    def _row_to_plan(self, row: aiosqlite.Row) -> DailyWorkoutPlan:
        return DailyWorkoutPlan(
            id=row["id"],
            user_id=row["user_id"],
            day=row["day"],
            theme=row["theme"],
            title=row["title"],
            description=row["description"] or "",
            total_minutes=row["total_minutes"],
            exercises=[PlanExercise.from_dict(e) for e in json.loads(row["exercises"])],
            motivation_message=row["motivation_message"] or "",
            created_at=_parse_timestamp(row["created_at"]),
        )


class VideoRepository:
    """Repository for the exercise video catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, video: Video) -> int:
        """Add a video to the catalog."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO videos
                (title, youtube_id, duration, exercise_type, skill_level, effort_level,
                 equipment, theme_compatibility, description, thumbnail_url, is_approved)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                self._video_params(video),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, video_id: int) -> Video | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM videos WHERE id = ?", (video_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_video(row)

    async def list_all(
        self,
        approved_only: bool = False,
        exercise_type: ExerciseType | None = None,
        theme: Theme | None = None,
    ) -> list[Video]:
        """List videos, optionally filtered."""
        query = "SELECT * FROM videos"
        clauses = []
        params: list = []
        if approved_only:
            clauses.append("is_approved = 1")
        if exercise_type is not None:
            clauses.append("exercise_type = ?")
            params.append(exercise_type.value)
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY id"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            videos = [self._row_to_video(row) for row in rows]

        if theme is not None:
            videos = [v for v in videos if v.suits_theme(theme)]
        return videos

    async def list_approved(self) -> list[Video]:
        return await self.list_all(approved_only=True)

    async def update(self, video: Video) -> None:
        if video.id is None:
            raise ValueError("Video must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE videos SET
                    title = ?, youtube_id = ?, duration = ?, exercise_type = ?,
                    skill_level = ?, effort_level = ?, equipment = ?,
                    theme_compatibility = ?, description = ?, thumbnail_url = ?,
                    is_approved = ?
                WHERE id = ?
                """,
                (*self._video_params(video), video.id),
            )
            await db.commit()

    async def delete(self, video_id: int) -> None:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM videos WHERE id = ?", (video_id,))
            await db.commit()

    def _video_params(self, video: Video) -> tuple:
        return (
            video.title,
            video.youtube_id,
            video.duration,
            video.exercise_type.value,
            video.skill_level.value,
            video.effort_level,
            video.equipment,
            json.dumps([t.value for t in video.theme_compatibility]),
            video.description,
            video.thumbnail_url,
            int(video.is_approved),
        )

    def _row_to_video(self, row: aiosqlite.Row) -> Video:
        return Video(
            id=row["id"],
            title=row["title"],
            youtube_id=row["youtube_id"],
            duration=row["duration"],
            exercise_type=ExerciseType(row["exercise_type"]),
            skill_level=SkillLevel(row["skill_level"]),
            effort_level=row["effort_level"],
            equipment=row["equipment"],
            theme_compatibility=[Theme(t) for t in json.loads(row["theme_compatibility"])],
            description=row["description"],
            thumbnail_url=row["thumbnail_url"],
            is_approved=bool(row["is_approved"]),
            created_at=_parse_timestamp(row["created_at"]),
        )


class ProgressRepository:
    """Repository for daily progress records (one per user per day)."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def upsert(self, record: ProgressRecord) -> tuple[ProgressRecord, bool]:
        """Insert the day's record or patch the existing one.

        Optional fields left empty on the new record keep their stored
        values. Returns the stored record and whether it was newly created.
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT id FROM daily_progress WHERE user_id = ? AND date = ?",
                (record.user_id, record.date.isoformat()),
            )
            created = await cursor.fetchone() is None

            await db.execute(
                """
                INSERT INTO daily_progress
                (user_id, date, day, minutes_completed, weight, completed, exercises,
                 notes, mood, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT (user_id, date) DO UPDATE SET
                    day = excluded.day,
                    minutes_completed = excluded.minutes_completed,
                    completed = excluded.completed,
                    weight = COALESCE(excluded.weight, daily_progress.weight),
                    mood = COALESCE(excluded.mood, daily_progress.mood),
                    notes = COALESCE(excluded.notes, daily_progress.notes),
                    exercises = CASE WHEN excluded.exercises = '[]'
                        THEN daily_progress.exercises ELSE excluded.exercises END,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (
                    record.user_id,
                    record.date.isoformat(),
                    record.day,
                    record.minutes_completed,
                    record.weight,
                    int(record.completed),
                    json.dumps([e.to_dict() for e in record.exercises]),
                    record.notes,
                    record.mood,
                ),
            )
            await db.commit()

            cursor = await db.execute(
                "SELECT * FROM daily_progress WHERE user_id = ? AND date = ?",
                (record.user_id, record.date.isoformat()),
            )
            row = await cursor.fetchone()
            return self._row_to_record(row), created

    async def get(self, progress_id: int) -> ProgressRecord | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM daily_progress WHERE id = ?", (progress_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def get_by_date(self, user_id: int, day: date) -> ProgressRecord | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM daily_progress WHERE user_id = ? AND date = ?",
                (user_id, day.isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def list_for_user(
        self,
        user_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[ProgressRecord]:
        """List a user's records oldest first, optionally within [start, end]."""
        query = "SELECT * FROM daily_progress WHERE user_id = ?"
        params: list = [user_id]
        if start is not None:
            query += " AND date >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND date <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def update(self, record: ProgressRecord) -> None:
        """Write back a patched record."""
        if record.id is None:
            raise ValueError("Progress record must have an ID to update")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE daily_progress SET
                    day = ?, minutes_completed = ?, weight = ?, completed = ?,
                    exercises = ?, notes = ?, mood = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    record.day,
                    record.minutes_completed,
                    record.weight,
                    int(record.completed),
                    json.dumps([e.to_dict() for e in record.exercises]),
                    record.notes,
                    record.mood,
                    record.id,
                ),
            )
            await db.commit()

    def _row_to_record(self, row: aiosqlite.Row) -> ProgressRecord:
        return ProgressRecord(
            id=row["id"],
            user_id=row["user_id"],
            date=date.fromisoformat(row["date"]),
            day=row["day"],
            completed=bool(row["completed"]),
            minutes_completed=row["minutes_completed"] or 0,
            weight=row["weight"],
            mood=row["mood"],
            notes=row["notes"],
            exercises=[ExerciseLog.from_dict(e) for e in json.loads(row["exercises"] or "[]")],
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class AchievementRepository:
    """Repository for unlocked achievements."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def list_for_user(self, user_id: int) -> list[Achievement]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM achievements WHERE user_id = ? ORDER BY earned_at, id",
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_achievement(row) for row in rows]

    async def badge_types_for_user(self, user_id: int) -> set[BadgeType]:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT badge_type FROM achievements WHERE user_id = ?", (user_id,)
            )
            rows = await cursor.fetchall()
            return {BadgeType(row[0]) for row in rows}

    async def has(self, user_id: int, badge_type: BadgeType) -> bool:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT 1 FROM achievements WHERE user_id = ? AND badge_type = ?",
                (user_id, badge_type.value),
            )
            return await cursor.fetchone() is not None

    async def create_if_absent(self, achievement: Achievement) -> bool:
        """Insert the badge unless the user already holds it.

        Returns True when a row was inserted.
        """
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO achievements
                (user_id, badge_type, title, description, icon, theme)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    achievement.user_id,
                    achievement.badge_type.value,
                    achievement.title,
                    achievement.description,
                    achievement.icon,
                    achievement.theme,
                ),
            )
            await db.commit()
            return cursor.rowcount == 1

    def _row_to_achievement(self, row: aiosqlite.Row) -> Achievement:
        return Achievement(
            id=row["id"],
            user_id=row["user_id"],
            badge_type=BadgeType(row["badge_type"]),
            title=row["title"],
            description=row["description"],
            icon=row["icon"],
            theme=row["theme"],
            earned_at=_parse_timestamp(row["earned_at"]),
        )
