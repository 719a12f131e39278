# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================
# - GET /reviews/{tool_id}: public, newest first, with reviewer username
# - POST /reviews: authenticated, one review per user per tool
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status

from app.dependencies import CurrentUser
from core.models.common import SuccessResponse
from core.models.review import ReviewCreate, ReviewWithUser
from core.services.review_service import ReviewService

router = APIRouter()


@router.get("/{tool_id}", response_model=list[ReviewWithUser])
def list_reviews(
    tool_id: Annotated[UUID, Path(description="Tool UUID")],
):
    """
    List a tool's reviews with the reviewer's username.
    """
    return ReviewService.list_reviews(tool_id)


@router.post("", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
def submit_review(
    review: ReviewCreate,
    user: CurrentUser,
):
    """
    Submit a review for a tool.

    - **rating**: 1 to 5
    - **review_text**: at least 10 characters

    Raises:
        400: Validation failure, or the user already reviewed this tool
        401: Not authenticated
    """
    ReviewService.submit_review(user.id, review)
    return SuccessResponse()
