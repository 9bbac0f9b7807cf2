"""HTTP-level tests: routing, auth gate and response envelopes.

Services are replaced through dependency overrides; the lifespan (and so
MongoDB) is never started.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api import app
from common.utils.exceptions import (
    ConflictException,
    InvalidCredentialsException,
    NotFoundException,
    ValidationException,
)
from irisehub.dependencies import (
    get_admin_service,
    get_auth_middleware,
    get_booking_service,
    get_event_service,
    get_login_service,
    get_news_service,
    get_story_service,
)
from irisehub.middleware.auth import AuthMiddleware
from irisehub.services.auth.identity import SuperAdminReviewer


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


def async_service(*methods):
    service = MagicMock()
    for name in methods:
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def services(jwt_auth):
    mocks = {
        get_login_service: async_service("super_admin_login", "admin_login"),
        get_admin_service: async_service("create", "list_active", "get_by_id", "update", "soft_delete"),
        get_story_service: async_service(
            "submit", "get_approved", "get_approved_by_id", "get_all", "approve", "reject", "delete",
        ),
        get_news_service: async_service("create", "list", "get_by_id", "update", "delete", "toggle_publish"),
        get_event_service: async_service(
            "create", "list", "list_by_type", "get_by_id", "update", "delete", "toggle_publish",
        ),
        get_booking_service: async_service(
            "create", "list", "list_by_event", "update_status", "delete", "stats",
        ),
    }
    middleware = AuthMiddleware(auth_provider=jwt_auth)

    for getter, mock in mocks.items():
        app.dependency_overrides[getter] = (lambda m: lambda: m)(mock)
    app.dependency_overrides[get_auth_middleware] = lambda: middleware

    yield {getter.__name__.replace("get_", ""): mock for getter, mock in mocks.items()}

    app.dependency_overrides.clear()


@pytest.fixture
def client(services):
    return TestClient(app)


@pytest.fixture
def admin_headers(jwt_auth, sample_admin_id):
    token = jwt_auth.create_token(sample_admin_id, name="Ada Admin", email="ada@irisehub.org", role="admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_admin_headers(jwt_auth):
    token = jwt_auth.create_token("super_admin", name="Rise Owner", email="owner@irisehub.org", role="super_admin")
    return {"Authorization": f"Bearer {token}"}


# ─────────────────────────────────────────────────────────────────
# Health
# ─────────────────────────────────────────────────────────────────


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "iRiseHub API Working"}

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ok"

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json()["success"] is False


# ─────────────────────────────────────────────────────────────────
# Admin auth
# ─────────────────────────────────────────────────────────────────


class TestAdminAuth:
    def test_super_login_returns_top_level_token(self, client, services):
        services["login_service"].super_admin_login.return_value = {
            "token": "t0k3n",
            "admin": {"id": "super_admin", "name": "Rise Owner",
                      "email": "owner@irisehub.org", "role": "super_admin"},
        }

        response = client.post("/api/admin/super-login", json={"name": "Rise Owner", "email": "owner@irisehub.org"})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["token"] == "t0k3n"
        assert body["admin"]["id"] == "super_admin"

    def test_bad_login_is_401_envelope(self, client, services):
        services["login_service"].admin_login.side_effect = InvalidCredentialsException()

        response = client.post("/api/admin/login", json={"email": "ada@irisehub.org", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "message": "Invalid email or password",
            "error": "INVALID_CREDENTIALS",
        }

    def test_me_without_token(self, client):
        response = client.get("/api/admin/me")

        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["message"] == "Not Authorized. Please login again."

    def test_me_with_bad_token(self, client):
        response = client.get("/api/admin/me", headers={"Authorization": "Bearer forged.token.value"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token. Please login again."

    def test_me_with_token(self, client, admin_headers, sample_admin_id):
        response = client.get("/api/admin/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["id"] == sample_admin_id

    def test_create_admin_requires_token(self, client, services):
        response = client.post("/api/admin/create", json={"name": "Bo", "email": "bo@x.org", "password": "secret1"})

        assert response.status_code == 401
        services["admin_service"].create.assert_not_called()

    def test_create_admin(self, client, services, admin_headers):
        services["admin_service"].create.return_value = {"id": "abc", "name": "Bo", "email": "bo@x.org"}

        response = client.post(
            "/api/admin/create",
            json={"name": "Bo", "email": "bo@x.org", "password": "secret1"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["admin"]["email"] == "bo@x.org"

    def test_single_admin_not_found(self, client, services, admin_headers):
        services["admin_service"].get_by_id.return_value = None

        response = client.get("/api/admin/single/abc", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "ADMIN_NOT_FOUND"


# ─────────────────────────────────────────────────────────────────
# Stories
# ─────────────────────────────────────────────────────────────────


class TestStoryEndpoints:
    def test_submit_multipart(self, client, services):
        services["story_service"].submit.return_value = {"id": "s1", "status": "pending"}

        response = client.post(
            "/api/stories/submit",
            data={"name": "Grace", "number": "08031234567", "email": "grace@example.com",
                  "storyTitle": "My story", "description": "A long enough description"},
            files={"image": ("me.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 200
        fields, = services["story_service"].submit.call_args[0]
        image = services["story_service"].submit.call_args[1]["image"]
        assert fields["storyTitle"] == "My story"
        assert image.content_type == "image/png"
        assert image.data == b"\x89PNG"

    def test_submit_validation_error_is_422(self, client, services):
        services["story_service"].submit.side_effect = ValidationException(
            message="Description must be at least 10 characters"
        )

        response = client.post("/api/stories/submit", data={"description": "short"})

        assert response.status_code == 422
        assert response.json()["message"] == "Description must be at least 10 characters"

    def test_approved_is_paginated(self, client, services):
        services["story_service"].get_approved.return_value = ([{"id": "s1"}], 11)

        response = client.get("/api/stories/approved?page=2&limit=5")

        body = response.json()
        assert body["data"] == [{"id": "s1"}]
        assert body["pagination"]["totalPages"] == 3
        assert body["pagination"]["hasNextPage"] is True
        services["story_service"].get_approved.assert_awaited_once_with(page=2, limit=5)

    def test_approved_story_not_found(self, client, services):
        services["story_service"].get_approved_by_id.side_effect = NotFoundException(
            "Story not found", code="STORY_NOT_FOUND"
        )

        response = client.get("/api/stories/approved/abc")

        assert response.status_code == 404
        assert response.json()["error"] == "STORY_NOT_FOUND"

    def test_moderation_requires_token(self, client, services):
        response = client.patch("/api/stories/abc/approve")

        assert response.status_code == 401
        services["story_service"].approve.assert_not_called()

    def test_super_admin_approves(self, client, services, super_admin_headers):
        services["story_service"].approve.return_value = {"id": "abc", "status": "approved"}

        response = client.patch("/api/stories/abc/approve", headers=super_admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Story approved successfully"
        story_id, reviewer = services["story_service"].approve.call_args[0]
        assert story_id == "abc"
        assert isinstance(reviewer, SuperAdminReviewer)

    def test_reject_without_body(self, client, services, admin_headers):
        services["story_service"].reject.return_value = {"id": "abc", "status": "rejected"}

        response = client.patch("/api/stories/abc/reject", headers=admin_headers)

        assert response.status_code == 200
        services["story_service"].reject.assert_awaited_once_with("abc", None)

    def test_reject_reason_too_long(self, client, services, admin_headers):
        response = client.patch(
            "/api/stories/abc/reject",
            json={"rejectedReason": "x" * 1001},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"


# ─────────────────────────────────────────────────────────────────
# News and events
# ─────────────────────────────────────────────────────────────────


class TestNewsAndEventEndpoints:
    def test_news_list_is_public(self, client, services):
        services["news_service"].list.return_value = ([], 0)

        response = client.get("/api/news/")

        assert response.status_code == 200
        assert response.json()["pagination"]["totalItems"] == 0

    def test_add_news_requires_token(self, client, services):
        response = client.post("/api/news/add", data={"title": "Hello"})

        assert response.status_code == 401
        services["news_service"].create.assert_not_called()

    def test_toggle_publish_news(self, client, services, admin_headers):
        services["news_service"].toggle_publish.return_value = {"id": "n1", "isPublished": False}

        response = client.patch("/api/news/n1/toggle-publish", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["isPublished"] is False

    def test_events_by_type(self, client, services):
        services["event_service"].list_by_type.return_value = ([{"id": "e1"}], 1)

        response = client.get("/api/events/type/coming-soon")

        assert response.status_code == 200
        assert services["event_service"].list_by_type.call_args[0][0] == "coming-soon"

    def test_event_not_found(self, client, services):
        services["event_service"].get_by_id.side_effect = NotFoundException(
            "Event not found", code="EVENT_NOT_FOUND"
        )

        response = client.get("/api/events/abc")

        assert response.status_code == 404
        assert response.json()["message"] == "Event not found"


# ─────────────────────────────────────────────────────────────────
# Bookings
# ─────────────────────────────────────────────────────────────────


class TestBookingEndpoints:
    def test_create_booking_is_201(self, client, services):
        services["booking_service"].create.return_value = {"id": "b1", "status": "pending"}

        response = client.post("/api/bookings/create", json={"eventId": "e1", "fullName": "Chioma"})

        assert response.status_code == 201
        assert response.json()["message"] == "Event registration successful!"

    def test_duplicate_booking_is_409(self, client, services):
        services["booking_service"].create.side_effect = ConflictException(
            "You have already registered for this event", code="ALREADY_REGISTERED"
        )

        response = client.post("/api/bookings/create", json={"eventId": "e1"})

        assert response.status_code == 409
        assert response.json()["error"] == "ALREADY_REGISTERED"

    def test_stats_requires_token(self, client, services):
        response = client.get("/api/bookings/stats")

        assert response.status_code == 401
        services["booking_service"].stats.assert_not_called()

    def test_update_status(self, client, services, admin_headers):
        services["booking_service"].update_status.return_value = {"id": "b1", "status": "confirmed"}

        response = client.patch("/api/bookings/b1/status", json={"status": "confirmed"}, headers=admin_headers)

        assert response.status_code == 200
        services["booking_service"].update_status.assert_awaited_once_with("b1", "confirmed")


# ─────────────────────────────────────────────────────────────────
# Unexpected errors
# ─────────────────────────────────────────────────────────────────


class TestUnexpectedErrors:
    def test_unhandled_error_is_500_envelope(self, services):
        services["news_service"].list.side_effect = RuntimeError("boom")
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/news/")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert response.json()["error"] == "INTERNAL_ERROR"
