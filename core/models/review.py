# =============================================================================
# core/models/review.py - Review Schemas
# =============================================================================
# A user may review a tool once. The (user_id, tool_id) uniqueness lives in
# the database; a second insert surfaces as AlreadyReviewedError.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """
    Payload for POST /api/reviews.

    The reviewer is taken from the bearer token, never from the body.

    Example:
        {
            "tool_id": "550e8400-e29b-41d4-a716-446655440000",
            "rating": 5,
            "review_text": "Great tool, works perfectly"
        }
    """

    tool_id: UUID = Field(..., description="Tool being reviewed")

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Star rating, 1 to 5 inclusive"
    )

    review_text: str = Field(
        ...,
        min_length=10,
        description="Review body, at least 10 characters"
    )


class Reviewer(BaseModel):
    """The public part of the reviewing user."""
    username: str


class ReviewWithUser(BaseModel):
    """A stored review joined with the reviewer's username."""

    id: UUID
    user_id: UUID
    tool_id: UUID
    rating: int
    review_text: str
    created_at: datetime
    # None when the mirrored users row is missing
    user: Reviewer | None = None
