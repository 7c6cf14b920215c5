"""Scoring errors."""


class ScoringError(Exception):
    """Base exception for the scoring package."""
    pass


class ScoringInputError(ScoringError):
    """Raised by the engine's input stage when resume/job data is unusable."""
    pass
