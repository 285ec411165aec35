"""FitSpark: personalised fitness programs, progress tracking and achievements."""

__version__ = "0.1.0"
