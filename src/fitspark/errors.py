"""Exception types shared across the application."""


class FitSparkError(Exception):
    """Base class for application errors."""


class NotFoundError(FitSparkError):
    """A requested record does not exist."""


class ConflictError(FitSparkError):
    """A record clashes with an existing one (duplicate username, email...)."""


class AuthError(FitSparkError):
    """Credentials or session token are missing or invalid."""


class PermissionDenied(FitSparkError):
    """The session is valid but may not access the resource."""


class CoachError(FitSparkError):
    """The coaching model could not produce a usable response."""


class ProgramGenerationError(CoachError):
    """A personalised workout program could not be generated."""
