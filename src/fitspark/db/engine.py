"""Database engine setup and initialization."""

import json
import logging
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fitspark.db"


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Add columns introduced after a database was first created."""
    cursor = await db.execute("PRAGMA table_info(users)")
    columns = await cursor.fetchall()
    user_columns = {col[1] for col in columns}

    if "preferences" not in user_columns:
        await db.execute("ALTER TABLE users ADD COLUMN preferences TEXT DEFAULT '{}'")

    cursor = await db.execute("PRAGMA table_info(daily_progress)")
    columns = await cursor.fetchall()
    progress_columns = {col[1] for col in columns}

    if "updated_at" not in progress_columns:
        await db.execute("ALTER TABLE daily_progress ADD COLUMN updated_at TIMESTAMP")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT UNIQUE NOT NULL,
                email TEXT UNIQUE NOT NULL,
                name TEXT NOT NULL,
                password_hash TEXT NOT NULL,
                age INTEGER,
                start_weight REAL,
                current_weight REAL,
                target_weight REAL,
                theme TEXT NOT NULL DEFAULT 'fun',
                current_day INTEGER NOT NULL DEFAULT 1,
                is_admin INTEGER DEFAULT 0,
                fitness_goals TEXT,
                preferences TEXT DEFAULT '{}',
                start_date TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_plans (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                day INTEGER NOT NULL,
                theme TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT DEFAULT '',
                total_minutes INTEGER NOT NULL,
                exercises TEXT NOT NULL DEFAULT '[]',
                motivation_message TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS videos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                youtube_id TEXT NOT NULL,
                duration INTEGER NOT NULL,
                exercise_type TEXT NOT NULL,
                skill_level TEXT NOT NULL,
                effort_level INTEGER NOT NULL,
                equipment TEXT,
                theme_compatibility TEXT NOT NULL DEFAULT '[]',
                description TEXT,
                thumbnail_url TEXT,
                is_approved INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # One record per user per day
        await db.execute("""
            CREATE TABLE IF NOT EXISTS daily_progress (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                date TEXT NOT NULL,
                day INTEGER NOT NULL DEFAULT 1,
                minutes_completed INTEGER DEFAULT 0,
                weight REAL,
                completed INTEGER DEFAULT 0,
                exercises TEXT DEFAULT '[]',
                notes TEXT,
                mood INTEGER,
                updated_at TIMESTAMP,
                UNIQUE (user_id, date),
                FOREIGN KEY (user_id) REFERENCES users(id)
            )
        """)

        # One badge of each type per user
        await db.execute("""
            CREATE TABLE IF NOT EXISTS achievements (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                badge_type TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT NOT NULL,
                icon TEXT NOT NULL,
                theme TEXT NOT NULL,
                earned_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, badge_type),
                FOREIGN KEY (user_id) REFERENCES users(id)
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_plans_user_day
            ON workout_plans(user_id, day)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_daily_progress_user_date
            ON daily_progress(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_achievements_user
            ON achievements(user_id)
        """)

        await db.commit()

        await _run_migrations(db)

    logger.info("Database initialized at %s", db_path)


async def seed_videos(db_path: Path | None = None) -> int:
    """Seed the video catalog with the starter videos.

    Only runs against an empty catalog. Returns the number of videos added.
    """
    from ..models.video import STARTER_VIDEOS

    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        cursor = await db.execute("SELECT COUNT(*) FROM videos")
        (existing,) = await cursor.fetchone()
        if existing:
            return 0

        for video in STARTER_VIDEOS:
            await db.execute(
                """
                INSERT INTO videos
                (title, youtube_id, duration, exercise_type, skill_level, effort_level,
                 equipment, theme_compatibility, description, thumbnail_url, is_approved)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
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
                ),
            )

        await db.commit()

    logger.info("Seeded %d starter videos", len(STARTER_VIDEOS))
    return len(STARTER_VIDEOS)
