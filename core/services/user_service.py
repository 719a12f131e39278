# =============================================================================
# core/services/user_service.py - Mirrored User Operations
# =============================================================================
# Admin-flag lookups for the admin guard, plus the operations behind
# scripts/manage_admins.py.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.user import UserCreate, UserProfile

logger = logging.getLogger(__name__)


class UserService:
    """Service for mirrored user rows."""

    @staticmethod
    def is_admin(user_id: str | UUID) -> bool:
        """
        Check the admin flag for a user.

        A user without a mirrored row is not an admin.
        """
        user = SupabaseClient.fetch_user(user_id)
        if not user:
            return False
        return user.get("is_admin") is True

    @staticmethod
    def get_profile(user_id: str | UUID, email: str | None = None) -> UserProfile:
        """
        Get the mirrored profile for a user.

        Falls back to a bare profile (id + token email) when the users row
        hasn't been created yet.
        """
        user = SupabaseClient.fetch_user(user_id)
        if user:
            return UserProfile(**user)
        return UserProfile(id=user_id, email=email)

    @staticmethod
    def list_admins() -> list[dict]:
        return SupabaseClient.fetch_admins()

    @staticmethod
    def promote(email: str) -> dict | None:
        """
        Grant the admin flag to the user with this email.

        Returns:
            The updated user row, or None if no user has that email
        """
        user = SupabaseClient.set_admin_by_email(email, True)
        if user:
            logger.info(f"Promoted {email} to admin")
        else:
            logger.warning(f"No user with email {email}")
        return user

    @staticmethod
    def sync_user(user: UserCreate) -> dict:
        """Insert or update the mirrored row for an identity-provider user."""
        row = SupabaseClient.upsert_user(user.to_row())
        logger.info(f"Synced user {user.id} ({user.username})")
        return row
