"""Models capturing voting interactions on forum posts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fitpulse.db.session import Base

from .post import utcnow


class VotePolarity(str, enum.Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"


class ForumVote(Base):
    """A voter's current vote on a post.

    The composite primary key allows at most one active vote per
    (post, voter) pair.
    """

    __tablename__ = "forum_vote"
    __table_args__ = (
        CheckConstraint("polarity IN ('up', 'down')", name="ck_forum_vote_polarity"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("forum_post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    voter_key: Mapped[str] = mapped_column(String(320), primary_key=True)
    polarity: Mapped[VotePolarity] = mapped_column(
        Enum(
            VotePolarity,
            native_enum=False,
            create_constraint=False,
            length=8,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
