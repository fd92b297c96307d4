"""
API Endpoint Tests
==================
Admin gate, CRUD routes and error status mapping for the FastAPI backend.
"""

import time

import httpx
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from backend.main import app
from backend.utils.auth_middleware import User, require_admin


@pytest.fixture
def client(fake_supabase):
    """Test client backed by the in-memory Supabase."""
    with patch("backend.routers.health.get_supabase", return_value=fake_supabase):
        yield TestClient(app)


@pytest.fixture
def admin_headers(make_token):
    return {"Authorization": f"Bearer {make_token('admin-1', 'admin@example.com')}"}


@pytest.fixture
def user_headers(make_token):
    return {"Authorization": f"Bearer {make_token('user-1', 'user@example.com')}"}


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_needs_no_auth(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["subsystems"]["supabase"]["details"] == {
            "properties": "ok",
            "quiz_questions": "ok",
        }

    def test_health_not_configured(self):
        with patch("backend.routers.health.get_supabase", return_value=None):
            response = TestClient(app).get("/api/health")
        assert response.json()["status"] == "critical"
        assert response.json()["alerts"][0]["subsystem"] == "supabase"

    def test_health_degraded_when_one_table_fails(self, client, fake_supabase, api_error):
        fake_supabase.failures[("quiz_questions", "select")] = api_error("42P01", "relation does not exist")
        response = client.get("/api/health")
        assert response.json()["status"] == "degraded"


class TestAdminGate:
    """Every admin route is closed to anyone without the admin role."""

    def test_no_token_is_401(self, client, fake_supabase):
        response = client.get("/api/admin/properties")
        assert response.status_code == 401
        assert fake_supabase.calls == []

    def test_wrong_signature_is_401(self, client, make_token):
        token = make_token("admin-1", secret="some-other-secret-of-sufficient-length")
        response = client.get("/api/admin/properties", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_expired_token_is_401(self, client, make_token):
        token = make_token("admin-1", exp=int(time.time()) - 60)
        response = client.get("/api/admin/properties", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/admin/properties"),
        ("delete", "/api/admin/properties/7"),
        ("get", "/api/admin/quiz-questions"),
        ("delete", "/api/admin/quiz-questions/q-budget"),
    ])
    def test_non_admin_is_403_without_table_calls(self, client, fake_supabase, user_headers, method, path):
        response = getattr(client, method)(path, headers=user_headers)

        assert response.status_code == 403
        touched = {c["table"] for c in fake_supabase.calls}
        assert touched == {"profiles"}

    def test_cookie_token(self, client, make_token):
        client.cookies.set("sb-access-token", make_token("admin-1", "admin@example.com"))
        response = client.get("/api/admin/properties")
        assert response.status_code == 200


class TestPropertyEndpoints:
    """CRUD for /api/admin/properties."""

    def test_list_newest_first(self, client, admin_headers):
        response = client.get("/api/admin/properties", headers=admin_headers)
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [7, 5, 3]

    def test_create_returns_201(self, client, admin_headers, fake_supabase):
        response = client.post(
            "/api/admin/properties",
            json={"title": "Flat A", "price": 100000, "category": "sale"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["id"] == 8
        assert response.json()["title"] == "Flat A"
        assert len(fake_supabase.calls_to("properties", "insert")) == 1

    def test_create_rejects_unknown_category(self, client, admin_headers, fake_supabase):
        response = client.post(
            "/api/admin/properties",
            json={"title": "Flat A", "category": "auction"},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert fake_supabase.calls_to("properties", "insert") == []

    def test_update(self, client, admin_headers):
        response = client.put(
            "/api/admin/properties/5",
            json={"title": "Garden House (renovated)", "price": 275000, "category": "rent"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["id"] == 5
        assert response.json()["title"] == "Garden House (renovated)"

    def test_update_missing_is_404(self, client, admin_headers):
        response = client.put("/api/admin/properties/404", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404

    def test_delete(self, client, admin_headers, fake_supabase):
        response = client.delete("/api/admin/properties/3", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"deleted": 3}
        assert [r["id"] for r in fake_supabase.tables["properties"]] == [7, 5]

    def test_delete_permission_error_is_403(self, client, admin_headers, fake_supabase, api_error):
        fake_supabase.failures[("properties", "delete")] = api_error("42501", "permission denied for table properties")
        response = client.delete("/api/admin/properties/3", headers=admin_headers)
        assert response.status_code == 403
        assert "permission denied" in response.json()["detail"]

    def test_network_error_is_502(self, client, admin_headers, fake_supabase):
        fake_supabase.failures[("properties", "select")] = httpx.ConnectError("connection refused")
        response = client.get("/api/admin/properties", headers=admin_headers)
        assert response.status_code == 502


class TestQuizQuestionEndpoints:
    """CRUD for /api/admin/quiz-questions."""

    def test_list_by_order_index(self, client, admin_headers):
        response = client.get("/api/admin/quiz-questions", headers=admin_headers)
        assert [q["id"] for q in response.json()] == ["q-purpose", "q-budget", "q-size"]

    def test_create(self, client, admin_headers):
        response = client.post(
            "/api/admin/quiz-questions",
            json={
                "question": "Περιοχή;",
                "question_en": "Area?",
                "options": ["Λεμεσός", "Πάφος"],
                "options_en": ["Limassol", "Paphos"],
                "order_index": 4,
            },
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["options_en"] == ["Limassol", "Paphos"]

    def test_create_mismatched_options_is_422(self, client, admin_headers, fake_supabase):
        response = client.post(
            "/api/admin/quiz-questions",
            json={"question": "Αγορά;", "question_en": "Buy?", "options": ["Ναι", "Όχι"], "options_en": ["Yes"]},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert "same length" in response.json()["detail"]
        assert fake_supabase.calls_to("quiz_questions") == []

    def test_update(self, client, admin_headers, sample_question):
        body = {k: v for k, v in sample_question.items() if k != "id"}
        body["order_index"] = 0
        response = client.put("/api/admin/quiz-questions/q-budget", json=body, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["order_index"] == 0

    def test_delete_missing_is_404(self, client, admin_headers):
        response = client.delete("/api/admin/quiz-questions/q-ghost", headers=admin_headers)
        assert response.status_code == 404


class TestNotConfigured:

    @pytest.fixture
    def client(self, no_supabase):
        app.dependency_overrides[require_admin] = lambda: User(id="admin-1", email="admin@example.com", role="admin")
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_list_is_503(self, client):
        response = client.get("/api/admin/properties")
        assert response.status_code == 503
        assert "SUPABASE_URL" in response.json()["detail"]
