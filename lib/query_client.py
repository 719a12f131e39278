# =============================================================================
# lib/query_client.py - Cache-Backed API Client
# =============================================================================
# Client-side data layer for the SteamFamily API:
# - QueryCache: responses keyed by (route, *params) tuples, invalidated by
#   key prefix after mutations
# - DirectoryClient: httpx wrapper exposing one method per API route
# - filter_tools / collect_tags: the browse page's search and tag filter
#
# Reads go through the cache; writes go straight to the API and then
# invalidate every cached query they can affect. Nothing outside the cache
# holds server state.
#
# Usage:
#   from lib.query_client import DirectoryClient
#   with DirectoryClient("http://localhost:5000", token=access_token) as api:
#       tools = api.list_tools()
#       api.submit_review(tools[0].id, 5, "Great tool, works perfectly")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, TypeVar
from uuid import UUID

import httpx

from core.models import (
    AdminLoginResponse,
    AdminStats,
    DownloadCreate,
    ReviewCreate,
    ReviewWithUser,
    ToolCreate,
    ToolUpdate,
    ToolWithStats,
    UserProfile,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

QueryKey = tuple[str, ...]

TOOLS_KEY: QueryKey = ("/api/tools",)
ADMIN_TOOLS_KEY: QueryKey = ("/api/admin/tools",)
ADMIN_STATS_KEY: QueryKey = ("/api/admin/stats",)
REVIEWS_KEY: QueryKey = ("/api/reviews",)
ME_KEY: QueryKey = ("/api/auth/me",)


class APIError(Exception):
    """
    Non-2xx response from the API.

    `message` is the server's {"error": ...} text when present.
    """

    def __init__(self, status_code: int, message: str, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


# =============================================================================
# Query Cache
# =============================================================================

class QueryCache:
    """
    In-memory cache of query results keyed by tuples.

    Keys start with the route and continue with its parameters, e.g.
    ("/api/tools", "my-slug"). Invalidating ("/api/tools",) drops the tool
    list and every per-slug entry below it.
    """

    def __init__(self):
        self._entries: dict[QueryKey, Any] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: QueryKey) -> Any | None:
        return self._entries.get(key)

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = value

    def fetch(self, key: QueryKey, loader: Callable[[], T]) -> T:
        """Return the cached value for key, loading and storing it on a miss."""
        if key in self._entries:
            return self._entries[key]
        value = loader()
        self._entries[key] = value
        return value

    def invalidate(self, *prefixes: QueryKey) -> int:
        """
        Drop every entry whose key starts with one of the prefixes.

        Returns:
            Number of entries removed
        """
        stale = [
            key for key in self._entries
            if any(key[:len(prefix)] == prefix for prefix in prefixes)
        ]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached queries")
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()


# =============================================================================
# API Client
# =============================================================================

class DirectoryClient:
    """
    Typed client for the SteamFamily API.

    Args:
        base_url: API root, e.g. "http://localhost:5000"
        token: Supabase access token for signed-in/admin routes
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self.cache = QueryCache()
        self._token = token
        self._http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def __enter__(self) -> DirectoryClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def set_token(self, token: str | None) -> None:
        """Switch identity (sign in/out). Cached user-specific data is dropped."""
        self._token = token
        self.cache.invalidate(ME_KEY, ADMIN_TOOLS_KEY, ADMIN_STATS_KEY)

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        response = self._http.request(method, path, json=json, headers=headers)

        if response.is_error:
            message = response.reason_phrase
            code = None
            try:
                body = response.json()
                message = body.get("error", message)
                code = body.get("code")
            except ValueError:
                pass
            raise APIError(response.status_code, message, code)

        if not response.content:
            return None
        return response.json()

    # -------------------------------------------------------------------------
    # Public Reads
    # -------------------------------------------------------------------------

    def list_tools(self) -> list[ToolWithStats]:
        return self.cache.fetch(
            TOOLS_KEY,
            lambda: [ToolWithStats(**t) for t in self._request("GET", "/api/tools")],
        )

    def featured_tools(self) -> list[ToolWithStats]:
        return self.cache.fetch(
            TOOLS_KEY + ("featured",),
            lambda: [ToolWithStats(**t) for t in self._request("GET", "/api/tools/featured")],
        )

    def get_tool(self, slug: str) -> ToolWithStats:
        return self.cache.fetch(
            TOOLS_KEY + (slug,),
            lambda: ToolWithStats(**self._request("GET", f"/api/tools/{slug}")),
        )

    def list_reviews(self, tool_id: str | UUID) -> list[ReviewWithUser]:
        tool_id = str(tool_id)
        return self.cache.fetch(
            REVIEWS_KEY + (tool_id,),
            lambda: [ReviewWithUser(**r) for r in self._request("GET", f"/api/reviews/{tool_id}")],
        )

    # -------------------------------------------------------------------------
    # Signed-in
    # -------------------------------------------------------------------------

    def me(self) -> UserProfile:
        return self.cache.fetch(
            ME_KEY,
            lambda: UserProfile(**self._request("GET", "/api/auth/me")),
        )

    def record_download(self, tool_id: str | UUID, button_label: str) -> None:
        """Record a download. Invalidates tool queries (download_count changed)."""
        payload = DownloadCreate(tool_id=tool_id, button_label=button_label)
        self._request("POST", "/api/downloads", json=payload.model_dump(mode="json"))
        self.cache.invalidate(TOOLS_KEY, ADMIN_TOOLS_KEY, ADMIN_STATS_KEY)

    def submit_review(self, tool_id: str | UUID, rating: int, review_text: str) -> None:
        """
        Submit a review. Validated locally first with the server's rules.

        Raises:
            pydantic.ValidationError: If the review breaks a field rule
            APIError: 400 if the user already reviewed the tool
        """
        payload = ReviewCreate(tool_id=tool_id, rating=rating, review_text=review_text)
        self._request("POST", "/api/reviews", json=payload.model_dump(mode="json"))
        self.cache.invalidate(
            REVIEWS_KEY + (str(payload.tool_id),),
            TOOLS_KEY,
            ADMIN_TOOLS_KEY,
            ADMIN_STATS_KEY,
        )

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    def test_login(self) -> AdminLoginResponse:
        return AdminLoginResponse(**self._request("GET", "/api/admin/test-login"))

    def admin_tools(self) -> list[ToolWithStats]:
        return self.cache.fetch(
            ADMIN_TOOLS_KEY,
            lambda: [ToolWithStats(**t) for t in self._request("GET", "/api/admin/tools")],
        )

    def admin_stats(self) -> AdminStats:
        return self.cache.fetch(
            ADMIN_STATS_KEY,
            lambda: AdminStats(**self._request("GET", "/api/admin/stats")),
        )

    def create_tool(self, tool: ToolCreate | dict[str, Any]) -> ToolWithStats:
        payload = tool if isinstance(tool, ToolCreate) else ToolCreate(**tool)
        created = self._request("POST", "/api/admin/tools", json=_tool_body(payload))
        self._invalidate_catalog()
        return ToolWithStats(**created)

    def update_tool(self, tool_id: str | UUID, tool: ToolUpdate | dict[str, Any]) -> ToolWithStats:
        payload = tool if isinstance(tool, ToolUpdate) else ToolUpdate(**tool)
        updated = self._request("PUT", f"/api/admin/tools/{tool_id}", json=_tool_body(payload))
        self._invalidate_catalog()
        return ToolWithStats(**updated)

    def delete_tool(self, tool_id: str | UUID) -> None:
        self._request("DELETE", f"/api/admin/tools/{tool_id}")
        self._invalidate_catalog()

    def _invalidate_catalog(self) -> None:
        self.cache.invalidate(TOOLS_KEY, ADMIN_TOOLS_KEY, ADMIN_STATS_KEY)


def _tool_body(payload: ToolCreate | ToolUpdate) -> dict[str, Any]:
    """Serialize a tool payload the way the admin panel sends it."""
    body = payload.model_dump(mode="json", exclude={"download_buttons"})
    body["downloadButtons"] = [b.model_dump(mode="json") for b in payload.download_buttons]
    return body


# =============================================================================
# Browse Filters
# =============================================================================

def collect_tags(tools: Iterable[ToolWithStats]) -> list[str]:
    """All distinct tags across the tools, sorted."""
    return sorted({tag for tool in tools for tag in tool.tags})


def filter_tools(
    tools: Iterable[ToolWithStats],
    search: str | None = None,
    tag: str | None = None,
) -> list[ToolWithStats]:
    """
    Filter tools the way the browse page does.

    - search: case-insensitive substring of title, short_desc or any tag
    - tag: exact tag match
    """
    term = (search or "").strip().lower()

    def matches(tool: ToolWithStats) -> bool:
        if tag and tag not in tool.tags:
            return False
        if not term:
            return True
        return (
            term in tool.title.lower()
            or term in tool.short_desc.lower()
            or any(term in t.lower() for t in tool.tags)
        )

    return [tool for tool in tools if matches(tool)]
