"""SQLAlchemy models for the FitPulse forum."""

from .post import ForumPost
from .vote import ForumVote, VotePolarity

__all__ = ["ForumPost", "ForumVote", "VotePolarity"]
