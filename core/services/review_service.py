# =============================================================================
# core/services/review_service.py - Review Business Logic
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.review import ReviewCreate, ReviewWithUser
from app.exceptions import AlreadyReviewedError

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for listing and submitting reviews."""

    @staticmethod
    def list_reviews(tool_id: str | UUID) -> list[ReviewWithUser]:
        """
        List a tool's reviews with reviewer usernames, newest first.
        """
        rows = SupabaseClient.fetch_reviews(tool_id)
        return [ReviewWithUser(**row) for row in rows]

    @staticmethod
    def submit_review(user_id: str | UUID, payload: ReviewCreate) -> None:
        """
        Insert a review for the user.

        The one-review-per-(user, tool) rule is the database's unique
        constraint; this never overwrites an existing review.

        Raises:
            AlreadyReviewedError: If the user already reviewed this tool
        """
        row = {
            "user_id": str(user_id),
            "tool_id": str(payload.tool_id),
            "rating": payload.rating,
            "review_text": payload.review_text,
        }

        try:
            SupabaseClient.insert_review(row)
        except SupabaseClientError as e:
            if e.is_unique_violation:
                logger.info(f"Duplicate review rejected: user {user_id}, tool {payload.tool_id}")
                raise AlreadyReviewedError(str(payload.tool_id))
            raise

        logger.info(f"Review submitted: {payload.rating} stars for tool {payload.tool_id}")
