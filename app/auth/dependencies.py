# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Two guards, both stateless per request:
# - get_current_user: bearer token -> Supabase Auth user (401 on failure)
# - get_current_admin: get_current_user + users.is_admin (403 if not admin)
#
# Tokens are exchanged with Supabase Auth on every request; nothing is cached.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.models import AuthUser
from app.exceptions import ForbiddenError, UnauthorizedError
from core.services.user_service import UserService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

# Missing/malformed headers are turned into our own 401 below instead of
# FastAPI's default error body
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Resolve the caller from the `Authorization: Bearer <token>` header.

    Raises:
        UnauthorizedError: 401 if the header is missing/malformed or the
            token is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        logger.warning("Request without bearer token")
        raise UnauthorizedError()

    auth_user = SupabaseClient.fetch_auth_user(credentials.credentials)
    if auth_user is None:
        logger.warning("Invalid or expired token")
        raise UnauthorizedError("Invalid or expired token")

    try:
        user_id = UUID(str(auth_user.id))
    except ValueError:
        logger.warning(f"Invalid UUID from identity provider: {auth_user.id}")
        raise UnauthorizedError("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_id, email=getattr(auth_user, "email", None))


def get_current_admin(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Require an authenticated user whose mirrored row has is_admin = true.

    Raises:
        UnauthorizedError: 401 from get_current_user
        ForbiddenError: 403 if the user is not an admin
    """
    if not UserService.is_admin(user.id):
        logger.warning(f"Non-admin user {user.id} denied admin access")
        raise ForbiddenError(str(user.id))

    return user
