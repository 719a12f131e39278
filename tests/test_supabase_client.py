# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# Tests the query building and error translation of SupabaseClient against
# a MagicMock client, so no database calls are made.
# =============================================================================

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


class FakeAPIError(Exception):
    """Shape of postgrest.exceptions.APIError: message plus a `code`."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


@pytest.fixture
def mock_client():
    """Patch SupabaseClient.get_client with a MagicMock query builder."""
    client = MagicMock()
    with patch.object(SupabaseClient, "get_client", return_value=client):
        yield client


def _builder(client: MagicMock) -> MagicMock:
    """The chained builder returned by client.table(...)."""
    return client.table.return_value


class TestReads:
    def test_fetch_tools_orders_newest_first(self, mock_client):
        builder = _builder(mock_client)
        query = builder.select.return_value.order.return_value
        query.execute.return_value = SimpleNamespace(data=[{"id": "t1"}])

        tools = SupabaseClient.fetch_tools()

        mock_client.table.assert_called_with("tools")
        builder.select.assert_called_with("*, download_buttons (*)")
        builder.select.return_value.order.assert_called_with("created_at", desc=True)
        query.limit.assert_not_called()
        assert tools == [{"id": "t1"}]

    def test_fetch_tools_with_limit(self, mock_client):
        query = _builder(mock_client).select.return_value.order.return_value
        query.limit.return_value.execute.return_value = SimpleNamespace(data=[])

        assert SupabaseClient.fetch_tools(limit=6) == []
        query.limit.assert_called_with(6)

    def test_fetch_tool_by_slug_no_rows_is_none(self, mock_client):
        chain = _builder(mock_client).select.return_value.eq.return_value.single.return_value
        chain.execute.side_effect = FakeAPIError("JSON object requested, multiple (or no) rows returned", "PGRST116")

        assert SupabaseClient.fetch_tool_by_slug("missing") is None

    def test_fetch_tool_by_slug_other_error_raises(self, mock_client):
        chain = _builder(mock_client).select.return_value.eq.return_value.single.return_value
        chain.execute.side_effect = FakeAPIError("connection refused", "08006")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_tool_by_slug("x")

        assert exc_info.value.code == "FETCH_TOOL_FAILED"
        assert exc_info.value.db_code == "08006"

    def test_count_downloads_uses_head_count(self, mock_client):
        builder = _builder(mock_client)
        builder.select.return_value.eq.return_value.execute.return_value = SimpleNamespace(data=[], count=7)

        assert SupabaseClient.count_downloads("tool-1") == 7
        builder.select.assert_called_with("id", count="exact", head=True)
        builder.select.return_value.eq.assert_called_with("tool_id", "tool-1")

    def test_count_none_is_zero(self, mock_client):
        _builder(mock_client).select.return_value.execute.return_value = SimpleNamespace(data=[], count=None)

        assert SupabaseClient.count_tools() == 0

    def test_fetch_ratings(self, mock_client):
        chain = _builder(mock_client).select.return_value.eq.return_value
        chain.execute.return_value = SimpleNamespace(data=[{"rating": 4}, {"rating": 5}])

        assert SupabaseClient.fetch_ratings("tool-1") == [4, 5]


class TestWrites:
    def test_insert_review_duplicate_keeps_db_code(self, mock_client):
        _builder(mock_client).insert.return_value.execute.side_effect = FakeAPIError(
            "duplicate key value violates unique constraint", "23505"
        )

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_review({"user_id": "u", "tool_id": "t", "rating": 5, "review_text": "x" * 10})

        assert exc_info.value.is_unique_violation

    def test_insert_buttons_empty_skips_request(self, mock_client):
        assert SupabaseClient.insert_buttons([]) == []
        mock_client.table.assert_not_called()

    def test_delete_tool_reports_missing(self, mock_client):
        _builder(mock_client).delete.return_value.eq.return_value.execute.return_value = SimpleNamespace(data=[])

        assert SupabaseClient.delete_tool("nope") is False

    def test_insert_tool_no_data(self, mock_client):
        _builder(mock_client).insert.return_value.execute.return_value = SimpleNamespace(data=[])

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.insert_tool({"slug": "x"})

        assert exc_info.value.code == "INSERT_NO_DATA"


class TestAuth:
    def test_invalid_token_is_none(self, mock_client):
        mock_client.auth.get_user.side_effect = Exception("invalid JWT")

        assert SupabaseClient.fetch_auth_user("bad") is None

    def test_valid_token_returns_user(self, mock_client):
        user = SimpleNamespace(id="550e8400-e29b-41d4-a716-446655440000", email="a@example.com")
        mock_client.auth.get_user.return_value = SimpleNamespace(user=user)

        assert SupabaseClient.fetch_auth_user("good") is user
        mock_client.auth.get_user.assert_called_with("good")


class TestFakeDatastoreCoverage:
    def test_fake_mirrors_every_query_method(self):
        """Every public query on SupabaseClient is stood in for by FakeDatastore."""
        from tests.conftest import FakeDatastore

        queries = {
            name for name, value in vars(SupabaseClient).items()
            if isinstance(value, classmethod) and not name.startswith("_")
        } - {"get_client"}

        assert queries == set(FakeDatastore.METHODS)
        assert "fetch_tool" not in queries
