"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from fitpulse.models import VotePolarity


class VoteCast(BaseModel):
    """Schema for casting a vote."""

    model_config = ConfigDict(populate_by_name=True)

    voter_identity: str = Field(
        ...,
        alias="voterIdentity",
        min_length=1,
        max_length=320,
        description="Email of the member casting the vote",
    )


class VoteCountsResponse(BaseModel):
    """Post counters after a vote."""

    upvotes: int = Field(..., ge=0)
    downvotes: int = Field(..., ge=0)


class MyVoteResponse(BaseModel):
    """The caller's current vote on a post."""

    polarity: VotePolarity | None = None
