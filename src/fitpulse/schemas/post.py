# src/fitpulse/schemas/post.py
"""Forum post Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fitpulse.models import VotePolarity


class ForumPostCreate(BaseModel):
    """Schema for creating a new forum post."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=10000, description="Post text")
    author_email: str | None = Field(
        None,
        alias="authorEmail",
        max_length=320,
        description="Email of the member writing the post",
    )


class ForumPostResponse(BaseModel):
    """Schema for forum post information returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    body: str
    author_email: str | None = Field(None, alias="authorEmail")
    created_at: datetime = Field(..., alias="createdAt")
    upvotes: int
    downvotes: int
    voted_user: dict[str, VotePolarity] = Field(default_factory=dict, alias="votedUser")

    @model_validator(mode="before")
    @classmethod
    def _from_orm_post(cls, data: object) -> object:
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "title": data.title,
            "body": data.body,
            "author_email": data.author_email,
            "created_at": data.created_at,
            "upvotes": data.upvotes,
            "downvotes": data.downvotes,
            "voted_user": data.voted_user,
        }
