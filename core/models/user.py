# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# Users live in Supabase Auth and are mirrored into public.users so the API
# can look up usernames and the admin flag.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """
    Schema for mirroring an identity-provider user into public.users.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "username": "gabe",
            "email": "gabe@example.com"
        }
    """

    id: UUID = Field(..., description="Matches auth.users.id")

    username: str = Field(
        ...,
        min_length=3,
        description="Public display name, at least 3 characters"
    )

    email: EmailStr = Field(..., description="Account email address")

    is_admin: bool = Field(default=False, description="Grants access to /api/admin/*")

    def to_row(self) -> dict:
        return {
            "id": str(self.id),
            "username": self.username,
            "email": str(self.email),
            "is_admin": self.is_admin,
        }


class UserProfile(BaseModel):
    """Mirrored profile returned by GET /api/auth/me."""

    id: UUID
    username: str | None = None
    email: str | None = None
    is_admin: bool = False
    created_at: datetime | None = None
