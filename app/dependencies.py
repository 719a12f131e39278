# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.auth import AuthUser, get_current_admin, get_current_user


# Type aliases for the two guards
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
CurrentAdmin = Annotated[AuthUser, Depends(get_current_admin)]
