"""Unit tests for the ORM models in fitpulse.models.

These tests verify basic mapping correctness: table names, the composite
primary key on votes and the counter check constraints.
"""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import attributes

from fitpulse.models import ForumPost, ForumVote, VotePolarity


def test_table_names() -> None:
    assert ForumPost.__tablename__ == "forum_post"
    assert ForumVote.__tablename__ == "forum_vote"


def test_votes_composite_primary_key() -> None:
    pk_names = {c.name for c in ForumVote.__table__.primary_key}
    assert pk_names == {"post_id", "voter_key"}


def test_votes_relationship_is_instrumented() -> None:
    assert isinstance(ForumPost.votes, attributes.InstrumentedAttribute)


def test_voted_user_is_keyed_by_voter(db_session, forum_post) -> None:
    forum_post.votes["a@x.com"] = ForumVote(voter_key="a@x.com", polarity=VotePolarity.UP)
    db_session.commit()

    assert forum_post.voted_user == {"a@x.com": VotePolarity.UP}


def test_counters_cannot_go_negative(db_session, forum_post) -> None:
    forum_post.downvotes = -1
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
