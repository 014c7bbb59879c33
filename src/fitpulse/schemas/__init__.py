"""Pydantic schemas for request and response validation."""

from .post import ForumPostCreate, ForumPostResponse
from .vote import MyVoteResponse, VoteCast, VoteCountsResponse

__all__ = [
    "ForumPostCreate",
    "ForumPostResponse",
    "MyVoteResponse",
    "VoteCast",
    "VoteCountsResponse",
]
