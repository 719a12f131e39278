# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the API as {"error": ..., "code": ...} with the status
# code of its category: 400 validation/conflict, 401/403 auth, 404 missing,
# 500 everything else.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SteamFamilyException(Exception):
    """
    Base exception for the SteamFamily API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "STEAMFAMILY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(SteamFamilyException):
    """Raised when the bearer token is missing, malformed or rejected."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Sign in and send the access token as 'Authorization: Bearer <token>'",
        )


class ForbiddenError(SteamFamilyException):
    """Raised when a valid user lacks the admin flag."""

    def __init__(self, user_id: str | None = None):
        super().__init__(
            message="Forbidden",
            code="FORBIDDEN",
            status_code=403,
            suggestion="This endpoint requires an administrator account",
            details={"user_id": user_id} if user_id else None,
        )


# =============================================================================
# Validation / Conflict Exceptions
# =============================================================================

class ValidationFailedError(SteamFamilyException):
    """Raised when a payload fails field-level validation."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": errors} if errors else None,
        )


class AlreadyReviewedError(SteamFamilyException):
    """Raised when a user submits a second review for the same tool."""

    def __init__(self, tool_id: str):
        super().__init__(
            message="You have already reviewed this tool",
            code="ALREADY_REVIEWED",
            status_code=400,
            details={"tool_id": tool_id},
        )


class SlugConflictError(SteamFamilyException):
    """Raised when a tool slug is already taken."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"A tool with slug '{slug}' already exists",
            code="SLUG_CONFLICT",
            status_code=400,
            suggestion="Choose a different slug",
            details={"slug": slug},
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class ToolNotFoundError(SteamFamilyException):
    """Raised when a tool slug or id doesn't exist."""

    def __init__(self, key: str):
        super().__init__(
            message="Tool not found",
            code="TOOL_NOT_FOUND",
            status_code=404,
            suggestion="Check that the slug or id is correct",
            details={"tool": key},
        )


# =============================================================================
# Datastore Exceptions
# =============================================================================

class DatastoreError(SteamFamilyException):
    """Raised for unclassified datastore failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="DATASTORE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def steamfamily_exception_handler(
    request: Request,
    exc: SteamFamilyException
) -> JSONResponse:
    """Convert SteamFamilyException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Build a one-line message naming the first offending field.

    Example: "short_desc: String should have at least 10 characters"
    """
    if not errors:
        return "Validation error"
    first = errors[0]
    # loc is a character offset here, not a field
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    # Drop the "body" prefix FastAPI adds to request body locations
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic request validation errors.

    Rewritten from FastAPI's default 422 to a 400 naming the offending field.
    """
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    error = ValidationFailedError(describe_validation_errors(errors), errors=errors)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )
