# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeDatastore: an in-memory stand-in for the SupabaseClient methods,
#   enforcing the same constraints the database does (unique slug, one
#   review per user/tool, cascade delete)
# - A TestClient wired to the fake, with user and admin bearer tokens
# =============================================================================

import os
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from lib.supabase_client import SupabaseClient, SupabaseClientError, UNIQUE_VIOLATION_CODE

USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"
STRANGER_TOKEN = "stranger-token"

BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Fake Datastore
# =============================================================================

class FakeDatastore:
    """In-memory replacement for SupabaseClient's class methods."""

    METHODS = [
        "fetch_auth_user",
        "fetch_user",
        "fetch_admins",
        "set_admin_by_email",
        "upsert_user",
        "fetch_tools",
        "fetch_tool_by_slug",
        "insert_tool",
        "update_tool",
        "delete_tool",
        "delete_buttons",
        "insert_buttons",
        "insert_download",
        "count_downloads",
        "insert_review",
        "fetch_reviews",
        "fetch_ratings",
        "count_reviews",
        "count_tools",
    ]

    def __init__(self):
        self.users: list[dict] = []
        self.tools: list[dict] = []
        self.download_buttons: list[dict] = []
        self.downloads: list[dict] = []
        self.reviews: list[dict] = []
        self.tokens: dict[str, SimpleNamespace] = {}
        self._clock = 0

    # -- helpers -------------------------------------------------------------

    def _now(self) -> str:
        self._clock += 1
        return (BASE_TIME + timedelta(minutes=self._clock)).isoformat()

    def add_user(self, token: str | None, username: str, email: str, is_admin: bool = False) -> dict:
        user = {
            "id": str(uuid.uuid4()),
            "username": username,
            "email": email,
            "is_admin": is_admin,
            "created_at": self._now(),
        }
        self.users.append(user)
        if token:
            self.tokens[token] = SimpleNamespace(id=user["id"], email=email)
        return user

    def add_tool(self, slug: str, buttons: list[tuple[str, str]] | None = None, **fields) -> dict:
        row = {
            "title": fields.pop("title", slug.title()),
            "slug": slug,
            "short_desc": fields.pop("short_desc", "A short description"),
            "description_markdown": fields.pop("description_markdown", "A long markdown description"),
            "images": fields.pop("images", []),
            "tags": fields.pop("tags", []),
            "donation_url": None,
            "telegram_url": None,
            **fields,
        }
        tool = self.insert_tool(row)
        self.insert_buttons([
            {"tool_id": tool["id"], "label": label, "url": url, "order": i}
            for i, (label, url) in enumerate(buttons or [])
        ])
        return tool

    def _with_buttons(self, tool: dict) -> dict:
        return {
            **tool,
            "download_buttons": [dict(b) for b in self.download_buttons if b["tool_id"] == tool["id"]],
        }

    # -- auth / users ----------------------------------------------------------

    def fetch_auth_user(self, token):
        return self.tokens.get(token)

    def fetch_user(self, user_id):
        return next((dict(u) for u in self.users if u["id"] == str(user_id)), None)

    def fetch_admins(self):
        return [dict(u) for u in self.users if u["is_admin"]]

    def set_admin_by_email(self, email, is_admin=True):
        for user in self.users:
            if user["email"] == email:
                user["is_admin"] = is_admin
                return dict(user)
        return None

    def upsert_user(self, row):
        existing = self.fetch_user(row["id"])
        if existing:
            for user in self.users:
                if user["id"] == row["id"]:
                    user.update(row)
                    return dict(user)
        user = {"created_at": self._now(), **row}
        self.users.append(user)
        return dict(user)

    # -- tools -------------------------------------------------------------------

    def fetch_tools(self, limit=None):
        tools = sorted(self.tools, key=lambda t: t["created_at"], reverse=True)
        if limit is not None:
            tools = tools[:limit]
        return [self._with_buttons(t) for t in tools]

    def fetch_tool_by_slug(self, slug):
        tool = next((t for t in self.tools if t["slug"] == slug), None)
        return self._with_buttons(tool) if tool else None

    def insert_tool(self, row):
        if any(t["slug"] == row["slug"] for t in self.tools):
            raise SupabaseClientError(
                "duplicate key value violates unique constraint \"tools_slug_key\"",
                code="INSERT_TOOL_FAILED",
                db_code=UNIQUE_VIOLATION_CODE,
            )
        now = self._now()
        tool = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **row}
        self.tools.append(tool)
        return dict(tool)

    def update_tool(self, tool_id, row):
        tool_id = str(tool_id)
        if any(t["slug"] == row.get("slug") and t["id"] != tool_id for t in self.tools):
            raise SupabaseClientError(
                "duplicate key value violates unique constraint \"tools_slug_key\"",
                code="UPDATE_TOOL_FAILED",
                db_code=UNIQUE_VIOLATION_CODE,
            )
        for tool in self.tools:
            if tool["id"] == tool_id:
                tool.update(row)
                return dict(tool)
        return None

    def delete_tool(self, tool_id):
        tool_id = str(tool_id)
        before = len(self.tools)
        self.tools = [t for t in self.tools if t["id"] != tool_id]
        self.download_buttons = [b for b in self.download_buttons if b["tool_id"] != tool_id]
        self.downloads = [d for d in self.downloads if d["tool_id"] != tool_id]
        self.reviews = [r for r in self.reviews if r["tool_id"] != tool_id]
        return len(self.tools) < before

    # -- buttons -----------------------------------------------------------------

    def delete_buttons(self, tool_id):
        self.download_buttons = [b for b in self.download_buttons if b["tool_id"] != str(tool_id)]

    def insert_buttons(self, rows):
        inserted = [{"id": str(uuid.uuid4()), **row} for row in rows]
        self.download_buttons.extend(inserted)
        return [dict(b) for b in inserted]

    # -- downloads / reviews -------------------------------------------------------

    def insert_download(self, row):
        download = {"id": str(uuid.uuid4()), "downloaded_at": self._now(), **row}
        self.downloads.append(download)
        return dict(download)

    def count_downloads(self, tool_id=None):
        return sum(1 for d in self.downloads if tool_id is None or d["tool_id"] == str(tool_id))

    def insert_review(self, row):
        if any(r["user_id"] == row["user_id"] and r["tool_id"] == row["tool_id"] for r in self.reviews):
            raise SupabaseClientError(
                "duplicate key value violates unique constraint \"reviews_user_id_tool_id_key\"",
                code="INSERT_REVIEW_FAILED",
                db_code=UNIQUE_VIOLATION_CODE,
            )
        review = {"id": str(uuid.uuid4()), "created_at": self._now(), **row}
        self.reviews.append(review)
        return dict(review)

    def fetch_reviews(self, tool_id):
        rows = [r for r in self.reviews if r["tool_id"] == str(tool_id)]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        result = []
        for review in rows:
            user = self.fetch_user(review["user_id"])
            result.append({**review, "user": {"username": user["username"]} if user else None})
        return result

    def fetch_ratings(self, tool_id=None):
        return [r["rating"] for r in self.reviews if tool_id is None or r["tool_id"] == str(tool_id)]

    def count_reviews(self):
        return len(self.reviews)

    def count_tools(self):
        return len(self.tools)

    def mutation_snapshot(self) -> tuple:
        """Row counts of every table, for asserting that nothing was written."""
        return (
            len(self.users),
            len(self.tools),
            len(self.download_buttons),
            len(self.downloads),
            len(self.reviews),
            [dict(t) for t in self.tools],
        )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def datastore(monkeypatch):
    """FakeDatastore patched over every SupabaseClient data method."""
    fake = FakeDatastore()
    for name in FakeDatastore.METHODS:
        monkeypatch.setattr(SupabaseClient, name, getattr(fake, name))

    fake.user = fake.add_user(USER_TOKEN, "player1", "player1@example.com")
    fake.admin = fake.add_user(ADMIN_TOKEN, "admin", "admin@example.com", is_admin=True)
    # Valid token, but no mirrored users row
    fake.tokens[STRANGER_TOKEN] = SimpleNamespace(id=str(uuid.uuid4()), email="stranger@example.com")
    return fake


@pytest.fixture
def client(datastore):
    """TestClient for the API backed by the fake datastore."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {USER_TOKEN}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def stranger_headers():
    return {"Authorization": f"Bearer {STRANGER_TOKEN}"}


@pytest.fixture
def tool_payload():
    """Admin create payload as the admin panel sends it."""
    return {
        "title": "X",
        "slug": "x",
        "short_desc": "short description!",
        "description_markdown": "a full markdown description here",
        "images": [],
        "tags": [],
        "downloadButtons": [{"label": "Main", "url": "https://e.com/f"}],
    }
