# src/fitpulse/api/endpoints/votes.py
"""Vote-related endpoints for the FitPulse API."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from fitpulse.api.dependencies import VoteLedgerDep
from fitpulse.models import VotePolarity
from fitpulse.schemas.vote import MyVoteResponse, VoteCast, VoteCountsResponse
from fitpulse.services.vote_ledger import (
    InvalidVoteError,
    PostNotFoundError,
    VoteConflictError,
    VoteTimeoutError,
)

router = APIRouter(prefix="/vote", tags=["votes"])

RETRY_AFTER_SECONDS = "1"

LEDGER_ERRORS = (PostNotFoundError, InvalidVoteError, VoteConflictError, VoteTimeoutError)
LedgerError = PostNotFoundError | InvalidVoteError | VoteConflictError | VoteTimeoutError


def _to_http_error(err: LedgerError) -> HTTPException:
    if isinstance(err, PostNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    if isinstance(err, InvalidVoteError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))
    # Conflict or timeout: the caller may retry.
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(err),
        headers={"Retry-After": RETRY_AFTER_SECONDS},
    )


def _cast(
    ledger: VoteLedgerDep,
    post_id: int,
    vote_data: VoteCast,
    polarity: VotePolarity,
) -> VoteCountsResponse:
    try:
        tally = ledger.cast_vote(post_id, vote_data.voter_identity, polarity)
    except LEDGER_ERRORS as err:
        raise _to_http_error(err) from err
    return VoteCountsResponse(upvotes=tally.upvotes, downvotes=tally.downvotes)


@router.post("/{post_id}/up")
def upvote(post_id: int, vote_data: VoteCast, ledger: VoteLedgerDep) -> VoteCountsResponse:
    """Upvote a post, switching away from a downvote if the voter had one."""
    return _cast(ledger, post_id, vote_data, VotePolarity.UP)


@router.post("/{post_id}/down")
def downvote(post_id: int, vote_data: VoteCast, ledger: VoteLedgerDep) -> VoteCountsResponse:
    """Downvote a post, switching away from an upvote if the voter had one."""
    return _cast(ledger, post_id, vote_data, VotePolarity.DOWN)


@router.get("/{post_id}/my-vote")
def get_my_vote(
    post_id: int,
    voter_identity: Annotated[str, Query(alias="voterIdentity", min_length=1, max_length=320)],
    ledger: VoteLedgerDep,
) -> MyVoteResponse:
    """Get a voter's current vote on a specific post."""
    try:
        polarity = ledger.get_vote(post_id, voter_identity)
    except LEDGER_ERRORS as err:
        raise _to_http_error(err) from err
    return MyVoteResponse(polarity=polarity)
