"""CLI commands for FitSpark."""

from .init import init
from .register import register
from .serve import serve
from .stats import achievements, log, stats
from .users import users

__all__ = [
    "achievements",
    "init",
    "log",
    "register",
    "serve",
    "stats",
    "users",
]
