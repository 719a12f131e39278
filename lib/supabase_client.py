# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Tools and their download buttons
# - Download events and reviews
# - Mirrored users (admin flag lookups)
# - Exchanging bearer tokens with Supabase Auth
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   tools = SupabaseClient.fetch_tools(limit=6)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for "no rows" on .single()
NO_ROWS_CODE = "PGRST116"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"

TOOL_WITH_BUTTONS = "*, download_buttons (*)"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    `db_code` carries the Postgres/PostgREST error code when the failure
    came from the database, so callers can translate known constraint
    violations into domain errors.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        db_code: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        self.db_code = db_code

    @property
    def is_unique_violation(self) -> bool:
        return self.db_code == UNIQUE_VIOLATION_CODE

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def _db_code(exc: Exception) -> str | None:
    """Pull the Postgres/PostgREST error code off a postgrest APIError."""
    code = getattr(exc, "code", None)
    if code:
        return str(code)
    if NO_ROWS_CODE in str(exc):
        return NO_ROWS_CODE
    return None


def _is_no_rows(exc: Exception) -> bool:
    return _db_code(exc) == NO_ROWS_CODE


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_auth_user(cls, token: str) -> Any | None:
        """
        Exchange a bearer token for the identity-provider user.

        Returns:
            The Supabase Auth user (has .id and .email), or None if the token
            is invalid or expired
        """
        client = cls.get_client()

        try:
            response = client.auth.get_user(token)
        except Exception as e:
            logger.debug(f"Token rejected by Supabase Auth: {e}")
            return None

        if response is None:
            return None
        return response.user

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a mirrored user row by ID.

        Returns:
            User dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("users")
                .select("id, username, email, is_admin, created_at")
                .eq("id", user_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if _is_no_rows(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                details={"user_id": user_id_str},
                db_code=_db_code(e),
            )

    @classmethod
    def fetch_admins(cls) -> list[dict[str, Any]]:
        """Fetch all users with the admin flag set."""
        client = cls.get_client()

        try:
            response = (
                client.table("users")
                .select("id, username, email")
                .eq("is_admin", True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch admin users: {e}",
                code="FETCH_ADMINS_FAILED",
                db_code=_db_code(e),
            )

    @classmethod
    def set_admin_by_email(cls, email: str, is_admin: bool = True) -> dict[str, Any] | None:
        """
        Set the admin flag for the user with this email.

        Returns:
            Updated user dict, or None if no user has that email
        """
        client = cls.get_client()

        try:
            response = (
                client.table("users")
                .update({"is_admin": is_admin})
                .eq("email", email)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update admin flag: {e}",
                code="UPDATE_ADMIN_FAILED",
                details={"email": email},
                db_code=_db_code(e),
            )

    @classmethod
    def upsert_user(cls, row: dict[str, Any]) -> dict[str, Any]:
        """Insert or update a mirrored user row keyed by id."""
        client = cls.get_client()

        try:
            response = client.table("users").upsert(row).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Upsert returned no data",
                code="UPSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upsert user: {e}",
                code="UPSERT_USER_FAILED",
                details={"user_id": row.get("id")},
                db_code=_db_code(e),
            )

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_tools(cls, limit: int | None = None) -> list[dict[str, Any]]:
        """
        Fetch tools with their download buttons, newest first.

        Args:
            limit: Maximum number of tools to return (default: all)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = (
                client.table("tools")
                .select(TOOL_WITH_BUTTONS)
                .order("created_at", desc=True)
            )
            if limit is not None:
                query = query.limit(limit)

            response = query.execute()
            tools = response.data or []

            logger.debug(f"Fetched {len(tools)} tools")
            return tools

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch tools: {e}",
                code="FETCH_TOOLS_FAILED",
                details={"limit": limit},
                db_code=_db_code(e),
            )

    @classmethod
    def fetch_tool_by_slug(cls, slug: str) -> dict[str, Any] | None:
        """
        Fetch one tool with its download buttons by slug.

        Returns:
            Tool dict, or None if not found
        """
        client = cls.get_client()

        try:
            response = (
                client.table("tools")
                .select(TOOL_WITH_BUTTONS)
                .eq("slug", slug)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if _is_no_rows(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch tool: {e}",
                code="FETCH_TOOL_FAILED",
                details={"slug": slug},
                db_code=_db_code(e),
            )

    @classmethod
    def insert_tool(cls, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a tool row.

        Returns:
            Inserted tool dict with generated id and timestamps

        Raises:
            SupabaseClientError: If insert fails (db_code 23505 on duplicate slug)
        """
        client = cls.get_client()

        try:
            response = client.table("tools").insert(row).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert tool: {e}",
                code="INSERT_TOOL_FAILED",
                details={"slug": row.get("slug")},
                db_code=_db_code(e),
            )

    @classmethod
    def update_tool(cls, tool_id: str | UUID, row: dict[str, Any]) -> dict[str, Any] | None:
        """
        Update a tool row.

        Returns:
            Updated tool dict, or None if no tool has this ID
        """
        client = cls.get_client()
        tool_id_str = cls._normalize_uuid(tool_id)

        try:
            response = (
                client.table("tools")
                .update(row)
                .eq("id", tool_id_str)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update tool: {e}",
                code="UPDATE_TOOL_FAILED",
                details={"tool_id": tool_id_str},
                db_code=_db_code(e),
            )

    @classmethod
    def delete_tool(cls, tool_id: str | UUID) -> bool:
        """
        Delete a tool. Buttons, downloads and reviews cascade in the database.

        Returns:
            True if a row was deleted
        """
        client = cls.get_client()
        tool_id_str = cls._normalize_uuid(tool_id)

        try:
            response = (
                client.table("tools")
                .delete()
                .eq("id", tool_id_str)
                .execute()
            )
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete tool: {e}",
                code="DELETE_TOOL_FAILED",
                details={"tool_id": tool_id_str},
                db_code=_db_code(e),
            )

    # -------------------------------------------------------------------------
    # Download Buttons
    # -------------------------------------------------------------------------

    @classmethod
    def delete_buttons(cls, tool_id: str | UUID) -> None:
        """Delete every download button of a tool."""
        client = cls.get_client()
        tool_id_str = cls._normalize_uuid(tool_id)

        try:
            client.table("download_buttons").delete().eq("tool_id", tool_id_str).execute()

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete download buttons: {e}",
                code="DELETE_BUTTONS_FAILED",
                details={"tool_id": tool_id_str},
                db_code=_db_code(e),
            )

    @classmethod
    def insert_buttons(cls, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert download button rows in one request."""
        if not rows:
            return []

        client = cls.get_client()

        try:
            response = client.table("download_buttons").insert(rows).execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert download buttons: {e}",
                code="INSERT_BUTTONS_FAILED",
                details={"tool_id": rows[0].get("tool_id"), "count": len(rows)},
                db_code=_db_code(e),
            )

    # -------------------------------------------------------------------------
    # Downloads
    # -------------------------------------------------------------------------

    @classmethod
    def insert_download(cls, row: dict[str, Any]) -> dict[str, Any] | None:
        """Append a download event."""
        client = cls.get_client()

        try:
            response = client.table("downloads").insert(row).execute()
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to record download: {e}",
                code="INSERT_DOWNLOAD_FAILED",
                details={"tool_id": row.get("tool_id")},
                db_code=_db_code(e),
            )

    @classmethod
    def count_downloads(cls, tool_id: str | UUID | None = None) -> int:
        """
        Count download events, for one tool or across the catalog.

        Uses an exact head-only count so no rows are transferred.
        """
        return cls._count("downloads", tool_id)

    # -------------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------------

    @classmethod
    def insert_review(cls, row: dict[str, Any]) -> dict[str, Any] | None:
        """
        Insert a review.

        Raises:
            SupabaseClientError: If insert fails. A repeat review for the same
                (user_id, tool_id) has db_code 23505.
        """
        client = cls.get_client()

        try:
            response = client.table("reviews").insert(row).execute()
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert review: {e}",
                code="INSERT_REVIEW_FAILED",
                details={"tool_id": row.get("tool_id"), "user_id": row.get("user_id")},
                db_code=_db_code(e),
            )

    @classmethod
    def fetch_reviews(cls, tool_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch reviews for a tool with the reviewer's username, newest first.
        """
        client = cls.get_client()
        tool_id_str = cls._normalize_uuid(tool_id)

        try:
            response = (
                client.table("reviews")
                .select("*, user:users (username)")
                .eq("tool_id", tool_id_str)
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch reviews: {e}",
                code="FETCH_REVIEWS_FAILED",
                details={"tool_id": tool_id_str},
                db_code=_db_code(e),
            )

    @classmethod
    def fetch_ratings(cls, tool_id: str | UUID | None = None) -> list[int]:
        """Fetch review ratings, for one tool or across the catalog."""
        client = cls.get_client()

        try:
            query = client.table("reviews").select("rating")
            if tool_id is not None:
                query = query.eq("tool_id", cls._normalize_uuid(tool_id))

            response = query.execute()
            return [row["rating"] for row in (response.data or [])]

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch ratings: {e}",
                code="FETCH_RATINGS_FAILED",
                details={"tool_id": str(tool_id) if tool_id else None},
                db_code=_db_code(e),
            )

    @classmethod
    def count_reviews(cls) -> int:
        """Count reviews across the catalog."""
        return cls._count("reviews")

    @classmethod
    def count_tools(cls) -> int:
        """Count tools in the catalog."""
        return cls._count("tools")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _count(cls, table: str, tool_id: str | UUID | None = None) -> int:
        client = cls.get_client()

        try:
            query = client.table(table).select("id", count="exact", head=True)
            if tool_id is not None:
                query = query.eq("tool_id", cls._normalize_uuid(tool_id))

            response = query.execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table},
                db_code=_db_code(e),
            )
