"""API endpoint modules."""

from .forum import router as forum_router
from .votes import router as votes_router

__all__ = ["forum_router", "votes_router"]
