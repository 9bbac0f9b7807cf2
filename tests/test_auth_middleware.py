"""Unit tests for AuthMiddleware.require_admin and AdminIdentity."""

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock
from bson import ObjectId

from common.utils.exceptions import InvalidTokenException, NotAuthorizedException
from irisehub.middleware.auth import AuthMiddleware
from irisehub.services.auth.identity import AdminIdentity, AdminReviewer, SuperAdminReviewer


def make_request(authorization=None):
    request = MagicMock()
    request.headers = {"Authorization": authorization} if authorization is not None else {}
    request.state = SimpleNamespace()
    request.url.path = "/api/stories/all"
    return request


@pytest.fixture
def middleware(jwt_auth):
    return AuthMiddleware(auth_provider=jwt_auth)


# ─────────────────────────────────────────────────────────────────
# require_admin
# ─────────────────────────────────────────────────────────────────


class TestRequireAdmin:
    @pytest.mark.asyncio
    async def test_valid_token_attaches_identity(self, middleware, jwt_auth, sample_admin_id):
        token = jwt_auth.create_token(sample_admin_id, name="Ada", email="ada@irisehub.org", role="admin")
        request = make_request(f"Bearer {token}")

        admin = await middleware.require_admin(request)

        assert admin == AdminIdentity(id=sample_admin_id, name="Ada", email="ada@irisehub.org", role="admin")
        assert request.state.admin is admin

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer", "Bearer a b"])
    async def test_missing_or_non_bearer_header(self, middleware, header):
        with pytest.raises(NotAuthorizedException) as exc_info:
            await middleware.require_admin(make_request(header))

        assert exc_info.value.message == "Not Authorized. Please login again."

    @pytest.mark.asyncio
    async def test_invalid_token(self, middleware):
        with pytest.raises(InvalidTokenException) as exc_info:
            await middleware.require_admin(make_request("Bearer not.a.jwt"))

        assert exc_info.value.message == "Invalid token. Please login again."

    @pytest.mark.asyncio
    async def test_token_without_subject(self, middleware):
        provider = MagicMock()
        provider.verify_token.return_value = {"name": "x"}
        gate = AuthMiddleware(auth_provider=provider)

        with pytest.raises(InvalidTokenException):
            await gate.require_admin(make_request("Bearer anything"))

    @pytest.mark.asyncio
    async def test_scheme_is_case_insensitive(self, middleware, jwt_auth):
        token = jwt_auth.create_token("super_admin", role="super_admin")

        admin = await middleware.require_admin(make_request(f"bearer {token}"))

        assert admin.is_super_admin


# ─────────────────────────────────────────────────────────────────
# AdminIdentity.reviewer
# ─────────────────────────────────────────────────────────────────


class TestReviewer:
    def test_sentinel_is_super_admin(self):
        identity = AdminIdentity(id="super_admin", name="Owner", email="o@x.org", role="super_admin")

        assert identity.reviewer == SuperAdminReviewer()

    def test_object_id_is_persisted_admin(self, sample_admin_id):
        identity = AdminIdentity(id=sample_admin_id, name="Ada", email="a@x.org", role="admin")

        assert identity.reviewer == AdminReviewer(admin_id=ObjectId(sample_admin_id))

    def test_malformed_id_treated_as_super_admin(self):
        identity = AdminIdentity(id="12345", name="Ada", email="a@x.org", role="admin")

        assert isinstance(identity.reviewer, SuperAdminReviewer)
