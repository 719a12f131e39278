# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict
from uuid import UUID
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user resolved from a Supabase Auth token.

    Attached to handlers by the guards; carries only what the identity
    provider returned, not the mirrored users row.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
