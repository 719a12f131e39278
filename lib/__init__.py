# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database and auth calls
# - query_client.py: Cache-backed HTTP client for the API
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.query_client import (
    APIError,
    DirectoryClient,
    QueryCache,
    collect_tags,
    filter_tools,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # API client
    "APIError",
    "DirectoryClient",
    "QueryCache",
    "collect_tags",
    "filter_tools",
]
