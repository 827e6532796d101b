"""Matches feature module."""

from .router import router as matches_router
from .schemas import MatchIdPage

__all__ = ["matches_router", "MatchIdPage"]
