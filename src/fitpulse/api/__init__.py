"""HTTP API for the FitPulse server."""

from .endpoints import forum_router, votes_router

__all__ = ["forum_router", "votes_router"]
