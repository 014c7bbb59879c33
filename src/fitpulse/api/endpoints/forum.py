"""Forum post endpoints for the FitPulse API."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from fitpulse.api.dependencies import ForumRepositoryDep
from fitpulse.schemas.post import ForumPostCreate, ForumPostResponse
from fitpulse.utils.identity import normalize_identity

router = APIRouter(prefix="/forum", tags=["forum"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(post_data: ForumPostCreate, repository: ForumRepositoryDep) -> ForumPostResponse:
    """Save a new forum post with zeroed vote counters."""
    author_email = None
    if post_data.author_email is not None:
        try:
            author_email = normalize_identity(post_data.author_email)
        except ValueError as err:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err

    post = repository.create(
        title=post_data.title,
        body=post_data.body,
        author_email=author_email,
    )
    return ForumPostResponse.model_validate(post)


@router.get("")
def list_posts(
    repository: ForumRepositoryDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[ForumPostResponse]:
    """Return the newest forum posts first."""
    return [ForumPostResponse.model_validate(post) for post in repository.list_recent(limit)]


@router.get("/{post_id}")
def get_post(post_id: int, repository: ForumRepositoryDep) -> ForumPostResponse:
    """Return a forum post with its counters and per-voter state."""
    post = repository.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return ForumPostResponse.model_validate(post)
