"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from fitpulse.core.settings import settings
from fitpulse.db.session import get_db
from fitpulse.repositories.forum_repo import ForumPostRepository
from fitpulse.services.vote_ledger import VoteLedger

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_forum_repository(db: SessionDep) -> ForumPostRepository:
    """Return a forum repository bound to the request session."""
    return ForumPostRepository(db)


ForumRepositoryDep = Annotated[ForumPostRepository, Depends(get_forum_repository)]


def get_vote_ledger(repository: ForumRepositoryDep) -> VoteLedger:
    """Return a vote ledger configured from application settings."""
    return VoteLedger(
        repository,
        max_retries=settings.vote_max_retries,
        timeout_seconds=settings.vote_store_timeout_seconds,
        backoff_seconds=settings.vote_retry_backoff_seconds,
    )


# Type alias for vote ledger dependency
VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
