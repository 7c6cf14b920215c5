"""API route handlers."""

from .scoring import router as scoring_router

__all__ = ['scoring_router']
