"""External service clients."""

from .coach import Coach, CoachClient, ProgramRequest, parse_program

__all__ = ["Coach", "CoachClient", "ProgramRequest", "parse_program"]
