"""API routers."""

from . import admin, auth, progress, users, videos, workouts

__all__ = ["admin", "auth", "progress", "users", "videos", "workouts"]
