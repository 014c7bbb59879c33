"""SQLAlchemy models for forum posts."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, attribute_keyed_dict, mapped_column, relationship

from fitpulse.db.session import Base

if TYPE_CHECKING:
    from .vote import ForumVote, VotePolarity


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class ForumPost(Base):
    """A forum post carrying aggregate vote counters.

    ``version`` is bumped by every applied vote so that concurrent writers
    can detect that the row moved underneath them.
    """

    __tablename__ = "forum_post"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_forum_post_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_forum_post_downvotes_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    author_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    upvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    downvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    version: Mapped[int] = mapped_column(default=0, nullable=False)

    # Keyed by normalized voter identity.
    votes: Mapped[dict[str, ForumVote]] = relationship(
        collection_class=attribute_keyed_dict("voter_key"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def voted_user(self) -> dict[str, VotePolarity]:
        """Return each voter's current polarity on this post."""
        return {key: vote.polarity for key, vote in self.votes.items()}
