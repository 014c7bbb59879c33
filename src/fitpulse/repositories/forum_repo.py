"""Data access helpers for forum posts and their votes."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitpulse.models import ForumPost, ForumVote, VotePolarity
from fitpulse.models.post import utcnow

__all__ = ["ForumPostRepository", "PostSnapshot", "VoteMutation"]


@dataclass(frozen=True)
class PostSnapshot:
    """Counters of a post as read at ``version``, plus one voter's recorded state."""

    post_id: int
    upvotes: int
    downvotes: int
    version: int
    prior: VotePolarity | None = None


@dataclass(frozen=True)
class VoteMutation:
    """Counter deltas and the polarity to record for the voter."""

    upvotes_delta: int
    downvotes_delta: int
    polarity: VotePolarity


class ForumPostRepository:
    """Thin wrapper around database access for forum posts.

    Reads return detached snapshots rather than ORM instances so that a
    retried vote always sees the committed row, not a cached identity.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(self, *, title: str, body: str, author_email: str | None = None) -> ForumPost:
        """Insert a new post with zeroed counters and return it."""
        post = ForumPost(
            title=title,
            body=body,
            author_email=author_email,
            upvotes=0,
            downvotes=0,
            version=0,
        )
        self.session.add(post)
        self.session.commit()
        return post

    def get_by_id(self, post_id: int) -> ForumPost | None:
        """Return a post by identifier."""
        return self.session.execute(
            select(ForumPost)
            .where(ForumPost.id == post_id)
            .execution_options(populate_existing=True)
        ).scalars().first()

    def list_recent(self, limit: int) -> list[ForumPost]:
        """Return posts newest first."""
        result = self.session.execute(
            select(ForumPost).order_by(ForumPost.id.desc()).limit(limit)
        )
        return list(result.scalars())

    def find_one(self, post_id: int, voter_key: str | None = None) -> PostSnapshot | None:
        """Return the post's counters and ``voter_key``'s recorded polarity."""
        row = self.session.execute(
            select(ForumPost.id, ForumPost.upvotes, ForumPost.downvotes, ForumPost.version)
            .where(ForumPost.id == post_id)
        ).first()
        if row is None:
            return None

        prior = None
        if voter_key is not None:
            prior = self.session.execute(
                select(ForumVote.polarity).where(
                    ForumVote.post_id == post_id,
                    ForumVote.voter_key == voter_key,
                )
            ).scalar_one_or_none()
        return PostSnapshot(
            post_id=row.id,
            upvotes=row.upvotes,
            downvotes=row.downvotes,
            version=row.version,
            prior=prior,
        )

    def atomic_update(
        self,
        snapshot: PostSnapshot,
        voter_key: str,
        mutation: VoteMutation,
    ) -> PostSnapshot | None:
        """Apply ``mutation`` only if the post is still at ``snapshot.version``.

        Counters, version and the voter's row change in one transaction.
        Returns the new snapshot, or ``None`` when another writer got there
        first; in that case nothing is written.
        """
        result = self.session.execute(
            update(ForumPost)
            .where(ForumPost.id == snapshot.post_id, ForumPost.version == snapshot.version)
            .values(
                upvotes=ForumPost.upvotes + mutation.upvotes_delta,
                downvotes=ForumPost.downvotes + mutation.downvotes_delta,
                version=ForumPost.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.session.rollback()
            return None

        try:
            if snapshot.prior is None:
                self.session.execute(
                    insert(ForumVote).values(
                        post_id=snapshot.post_id,
                        voter_key=voter_key,
                        polarity=mutation.polarity,
                        updated_at=utcnow(),
                    )
                )
            else:
                written = self.session.execute(
                    update(ForumVote)
                    .where(
                        ForumVote.post_id == snapshot.post_id,
                        ForumVote.voter_key == voter_key,
                    )
                    .values(polarity=mutation.polarity, updated_at=utcnow())
                    .execution_options(synchronize_session=False)
                )
                if written.rowcount != 1:
                    self.session.rollback()
                    return None
        except IntegrityError:
            self.session.rollback()
            return None

        self.session.commit()
        return PostSnapshot(
            post_id=snapshot.post_id,
            upvotes=snapshot.upvotes + mutation.upvotes_delta,
            downvotes=snapshot.downvotes + mutation.downvotes_delta,
            version=snapshot.version + 1,
            prior=mutation.polarity,
        )
