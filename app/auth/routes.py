# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login happen client-side against Supabase Auth. These routes are
# for reading the caller's identity after authentication.
# =============================================================================

import logging
from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from core.models.user import UserProfile
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserProfile)
def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserProfile:
    """
    Get the current authenticated user's profile.

    Includes the admin flag so the client knows whether to show the admin
    panel.

    Raises:
        401: If not authenticated
    """
    return UserService.get_profile(user.id, email=user.email)
