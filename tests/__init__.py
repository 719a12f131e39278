# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SteamFamily API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_stats.py: Read-time statistics
# - test_supabase_client.py: Query building and error translation
# - test_auth.py: 401/403 guards and /api/auth/me
# - test_routes.py: Integration tests for API endpoints
# - test_query_client.py: Client cache, invalidation and browse filters
# - test_manage_admins.py: Admin bootstrap script
#
# Run tests with: pytest
# =============================================================================
