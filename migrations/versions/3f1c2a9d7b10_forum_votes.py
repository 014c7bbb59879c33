"""forum posts and votes

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the forum post and per-voter vote tables."""
    op.create_table(
        "forum_post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("author_email", sa.String(length=320), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.CheckConstraint("upvotes >= 0", name="ck_forum_post_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="ck_forum_post_downvotes_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "forum_vote",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("voter_key", sa.String(length=320), nullable=False),
        sa.Column("polarity", sa.String(length=8), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("polarity IN ('up', 'down')", name="ck_forum_vote_polarity"),
        sa.ForeignKeyConstraint(["post_id"], ["forum_post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "voter_key"),
    )


def downgrade() -> None:
    """Drop the forum tables."""
    op.drop_table("forum_vote")
    op.drop_table("forum_post")
