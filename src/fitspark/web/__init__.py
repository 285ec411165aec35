"""Web API for FitSpark."""

from .app import create_app

__all__ = ["create_app"]
