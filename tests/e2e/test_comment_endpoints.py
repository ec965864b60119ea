"""End-to-end tests for the comment endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from reel.config import Settings
from reel.interface.api.app import create_app
from reel.util.di.container import setup_di
from reel.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


@pytest.fixture
def auth_cookies():
    """Cookie for a signed-in user who owns nothing."""
    token = create_token(str(uuid4()), "viewer", Settings().auth)
    return {"auth_token": token}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestReadEndpoints:
    """Read endpoints are public.

    Note: Each request gets fresh in-memory repositories, so these tests
    focus on status mapping. Flows across requests are covered by the
    use case tests.
    """

    def test_unknown_video_returns_404(self, client):
        response = client.get(f"/comments/video/{uuid4()}")

        assert response.status_code == 404
        assert "Video not found" in response.json()["detail"]

    def test_malformed_video_id_returns_400(self, client):
        response = client.get("/comments/video/not-a-uuid")

        assert response.status_code == 400

    def test_page_must_be_positive(self, client):
        response = client.get(f"/comments/video/{uuid4()}", params={"page": 0})

        assert response.status_code == 422

    def test_unknown_thread_returns_404(self, client):
        response = client.get(f"/comments/{uuid4()}/thread")

        assert response.status_code == 404

    def test_user_without_comments_gets_empty_page(self, client):
        response = client.get(f"/comments/user/{uuid4()}")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["comments"] == []
        assert body["pagination"]["total"] == 0


class TestWriteEndpoints:
    """Write endpoints require the auth_token cookie."""

    def test_create_without_auth_returns_401(self, client):
        response = client.post(
            "/comments", json={"video_id": str(uuid4()), "content": "hi"}
        )

        assert response.status_code == 401
        assert "Authentication required" in response.json()["detail"]

    def test_create_with_invalid_token_returns_401(self, client):
        response = client.post(
            "/comments",
            json={"video_id": str(uuid4()), "content": "hi"},
            cookies={"auth_token": "invalid-token"},
        )

        assert response.status_code == 401

    def test_create_on_unknown_video_returns_404(self, client, auth_cookies):
        response = client.post(
            "/comments",
            json={"video_id": str(uuid4()), "content": "hi"},
            cookies=auth_cookies,
        )

        assert response.status_code == 404

    def test_delete_without_auth_returns_401(self, client):
        response = client.delete(f"/comments/{uuid4()}")

        assert response.status_code == 401

    def test_like_unknown_comment_returns_404(self, client, auth_cookies):
        response = client.post(f"/comments/{uuid4()}/like", cookies=auth_cookies)

        assert response.status_code == 404

    def test_report_with_unknown_reason_returns_400(self, client, auth_cookies):
        response = client.post(
            f"/comments/{uuid4()}/report",
            json={"reason": "boring"},
            cookies=auth_cookies,
        )

        assert response.status_code == 400

    def test_reconcile_requires_admin(self, client, auth_cookies):
        response = client.post(
            f"/videos/{uuid4()}/comments/reconcile", cookies=auth_cookies
        )

        assert response.status_code == 403
