"""Data access helpers."""

from .forum_repo import ForumPostRepository, PostSnapshot, VoteMutation

__all__ = ["ForumPostRepository", "PostSnapshot", "VoteMutation"]
