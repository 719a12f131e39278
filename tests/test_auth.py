# =============================================================================
# tests/test_auth.py - Authentication Guard Tests
# =============================================================================
# Tests for get_current_user / get_current_admin through real endpoints:
# - 401 for missing, malformed and rejected tokens
# - 403 for valid users without the admin flag
# - Rejected admin writes leave the datastore untouched
# - GET /api/auth/me profile lookup
# =============================================================================

import uuid

import pytest


ADMIN_WRITES = [
    ("post", "/api/admin/tools"),
    ("put", f"/api/admin/tools/{uuid.uuid4()}"),
    ("delete", f"/api/admin/tools/{uuid.uuid4()}"),
]


class TestCurrentUser:
    def test_missing_header(self, client, datastore):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_non_bearer_scheme(self, client, datastore):
        response = client.get("/api/auth/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401

    def test_empty_bearer(self, client, datastore):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer "})

        assert response.status_code == 401

    def test_rejected_token(self, client, datastore):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer expired"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"

    def test_me_returns_profile(self, client, datastore, user_headers):
        response = client.get("/api/auth/me", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == datastore.user["id"]
        assert data["username"] == "player1"
        assert data["is_admin"] is False

    def test_me_admin_flag(self, client, datastore, admin_headers):
        assert client.get("/api/auth/me", headers=admin_headers).json()["is_admin"] is True

    def test_me_without_users_row(self, client, datastore, stranger_headers):
        response = client.get("/api/auth/me", headers=stranger_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["username"] is None
        assert data["email"] == "stranger@example.com"
        assert data["is_admin"] is False


class TestCurrentAdmin:
    def test_admin_test_login(self, client, datastore, admin_headers):
        response = client.get("/api/admin/test-login", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert response.json()["admin"] == "admin@example.com"

    def test_non_admin_forbidden(self, client, datastore, user_headers):
        response = client.get("/api/admin/test-login", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_user_without_row_forbidden(self, client, datastore, stranger_headers):
        response = client.get("/api/admin/stats", headers=stranger_headers)

        assert response.status_code == 403

    def test_anonymous_is_401_not_403(self, client, datastore):
        assert client.get("/api/admin/stats").status_code == 401

    @pytest.mark.parametrize("method,path", ADMIN_WRITES)
    def test_rejected_writes_do_not_mutate(self, client, datastore, user_headers, tool_payload, method, path):
        datastore.add_tool("existing", buttons=[("Main", "https://e.com/f")])
        before = datastore.mutation_snapshot()

        kwargs = {"headers": user_headers}
        if method != "delete":
            kwargs["json"] = tool_payload
        response = getattr(client, method)(path, **kwargs)

        assert response.status_code == 403
        assert datastore.mutation_snapshot() == before

    @pytest.mark.parametrize("method,path", ADMIN_WRITES)
    def test_anonymous_writes_do_not_mutate(self, client, datastore, tool_payload, method, path):
        before = datastore.mutation_snapshot()

        kwargs = {"json": tool_payload} if method != "delete" else {}
        response = getattr(client, method)(path, **kwargs)

        assert response.status_code == 401
        assert datastore.mutation_snapshot() == before

    def test_admin_demoted_between_requests(self, client, datastore, admin_headers):
        assert client.get("/api/admin/stats", headers=admin_headers).status_code == 200

        datastore.set_admin_by_email("admin@example.com", False)

        assert client.get("/api/admin/stats", headers=admin_headers).status_code == 403
