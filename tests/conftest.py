"""
Pytest Configuration and Fixtures
==================================
Shared fixtures for the Realty Admin test suite.
"""

import pytest
import os
import sys
import copy
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from typing import Dict, Any, List

from postgrest.exceptions import APIError

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

TEST_JWT_SECRET = "test-jwt-secret-for-hs256-signing-only"


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def mock_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "test-key")
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)


# =============================================================================
# IN-MEMORY SUPABASE
# =============================================================================

class FakeQuery:
    """Chainable query against one FakeSupabase table."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_n = None

    def select(self, *columns, **kwargs):
        self.op = "select"
        return self

    def insert(self, rows):
        self.op = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, row):
        self.op = "update"
        self.payload = row
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matches(self, row) -> bool:
        return all(row.get(col) == value for col, value in self.filters)

    def execute(self):
        self.db.calls.append({
            "table": self.table,
            "op": self.op,
            "payload": copy.deepcopy(self.payload),
            "filters": list(self.filters),
            "order": self.order_by,
        })

        error = self.db.failures.get((self.table, self.op)) or self.db.failures.get((self.table, "*"))
        if error is not None:
            raise error

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "select":
            data = [copy.deepcopy(r) for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda r: r.get(column), reverse=desc)
            if self.limit_n is not None:
                data = data[:self.limit_n]
            return SimpleNamespace(data=data)

        if self.op == "insert":
            created = []
            for row in self.payload:
                stored = dict(row)
                stored.setdefault("id", self.db.next_id(self.table))
                rows.append(stored)
                created.append(copy.deepcopy(stored))
            return SimpleNamespace(data=created)

        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)

        if self.op == "delete":
            deleted = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=deleted)

        raise AssertionError(f"Unsupported op {self.op}")


class FakeSupabase:
    """
    Minimal stand-in for the supabase-py client.

    Records every executed call in `calls`. Set `failures[(table, op)]` (op may
    be "*") to an exception to make that call raise.
    """

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]] = None):
        self.tables = copy.deepcopy(tables) if tables else {}
        self.calls: List[Dict[str, Any]] = []
        self.failures: Dict[tuple, Exception] = {}
        self.auth = MagicMock()
        self._counters: Dict[str, int] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def next_id(self, table: str):
        if table == "properties":
            existing = [r["id"] for r in self.tables.get(table, [])]
            return max(existing, default=0) + 1
        self._counters[table] = self._counters.get(table, 0) + 1
        return f"{table}-{self._counters[table]}"

    def calls_to(self, table: str, op: str = None) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["table"] == table and (op is None or c["op"] == op)]


def build_api_error(code: str, message: str = "Request failed", details: str = None) -> APIError:
    """Build a PostgREST APIError the way the client raises it."""
    return APIError({"message": message, "code": code, "details": details, "hint": None})


# =============================================================================
# MOCK FIXTURES
# =============================================================================

@pytest.fixture
def api_error():
    """Factory for PostgREST errors."""
    return build_api_error


@pytest.fixture
def mock_supabase():
    """Mock Supabase client."""
    mock = MagicMock()
    mock.table.return_value.select.return_value.order.return_value.execute.return_value.data = []
    mock.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
    mock.table.return_value.insert.return_value.execute.return_value.data = []
    mock.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [{}]
    mock.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = []
    return mock


@pytest.fixture
def fake_supabase(sample_property_rows, sample_question_rows):
    """In-memory Supabase wired into the models and auth helpers."""
    fake = FakeSupabase({
        "properties": sample_property_rows,
        "quiz_questions": sample_question_rows,
        "profiles": [
            {"id": "admin-1", "role": "admin"},
            {"id": "user-1", "role": "user"},
        ],
    })
    with patch("utils.database.models.get_supabase", return_value=fake), \
            patch("utils.auth.create_session_client", return_value=fake):
        yield fake


@pytest.fixture
def no_supabase():
    """Models see an unconfigured client."""
    with patch("utils.database.models.get_supabase", return_value=None), \
            patch("utils.auth.create_session_client", return_value=None):
        yield


@pytest.fixture
def make_session_client():
    """Factory for a per-session client whose sign-in returns the given user."""
    def _make(user_id: str, email: str = "") -> FakeSupabase:
        client = FakeSupabase({"profiles": [
            {"id": "admin-1", "role": "admin"},
            {"id": "user-1", "role": "user"},
        ]})
        client.auth.sign_in_with_password.return_value = SimpleNamespace(
            user=SimpleNamespace(id=user_id, email=email)
        )
        return client

    return _make


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_property() -> Dict[str, Any]:
    """Sample property row as the table returns it."""
    return {
        "id": 7,
        "title": "Sea View Villa",
        "description": "Four bedrooms by the beach",
        "price": 450000,
        "location": "Limassol",
        "bedrooms": 4,
        "bathrooms": 3,
        "area": 220,
        "image_url": "https://example.com/villa.jpg",
        "category": "sale",
        "type": "villa",
        "created_at": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_property_rows(sample_property) -> List[Dict[str, Any]]:
    """Three properties stored out of id order."""
    return [
        {**sample_property, "id": 3, "title": "City Loft", "category": "rent", "price": 1200},
        sample_property,
        {**sample_property, "id": 5, "title": "Garden House", "category": "project"},
    ]


@pytest.fixture
def sample_question() -> Dict[str, Any]:
    """Sample bilingual quiz question row."""
    return {
        "id": "q-budget",
        "question": "Ποιος είναι ο προϋπολογισμός σας;",
        "question_en": "What is your budget?",
        "options": ["<100k", "100k-300k", ">300k"],
        "options_en": ["<100k", "100k-300k", ">300k"],
        "order_index": 2,
    }


@pytest.fixture
def sample_question_rows(sample_question) -> List[Dict[str, Any]]:
    """Quiz questions stored out of display order."""
    return [
        sample_question,
        {
            "id": "q-purpose",
            "question": "Αγορά ή ενοικίαση;",
            "question_en": "Buy or rent?",
            "options": ["Αγορά", "Ενοικίαση"],
            "options_en": ["Buy", "Rent"],
            "order_index": 1,
        },
        {
            "id": "q-size",
            "question": "Πόσα υπνοδωμάτια;",
            "question_en": "How many bedrooms?",
            "options": ["1", "2", "3+"],
            "options_en": ["1", "2", "3+"],
            "order_index": 3,
        },
    ]


@pytest.fixture
def admin_auth():
    """Signed-in admin context."""
    from utils.auth import AuthContext, AuthUser
    return AuthContext(user=AuthUser(id="admin-1", email="admin@example.com"), is_admin=True)


@pytest.fixture
def user_auth():
    """Signed-in context without admin rights."""
    from utils.auth import AuthContext, AuthUser
    return AuthContext(user=AuthUser(id="user-1", email="user@example.com"), is_admin=False)


@pytest.fixture
def make_token():
    """Sign an access token the way Supabase Auth does."""
    import jwt

    def _make(user_id: str, email: str = "", secret: str = TEST_JWT_SECRET, **claims) -> str:
        payload = {"sub": user_id, "email": email, "aud": "authenticated", **claims}
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make
