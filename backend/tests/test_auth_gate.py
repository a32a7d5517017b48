"""
Vitrine Backend: Authorization Gate Tests
===========================================

The gate is exercised both directly (extract_token / require_admin) and
through a protected route.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from vitrine.auth import extract_token, require_admin
from vitrine.exceptions import AuthenticationError
from vitrine.services.security import JWTTokenService, token_service


def make_request(headers):
    request = MagicMock()
    request.headers = headers
    request.state = SimpleNamespace()
    request.method = "GET"
    request.url.path = "/api/admin/submissions"
    return request


class TestExtractToken:
    def test_second_part_is_the_token(self):
        assert extract_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_not_checked(self):
        assert extract_token("Token abc") == "abc"

    def test_single_part_rejected(self):
        with pytest.raises(AuthenticationError) as exc_info:
            extract_token("abc.def.ghi")
        assert exc_info.value.error_code == "invalid_token"


class TestRequireAdmin:
    @pytest.mark.asyncio
    async def test_missing_header(self):
        with pytest.raises(AuthenticationError, match="No token provided") as exc_info:
            await require_admin(make_request({}))
        assert exc_info.value.error_code == "authentication_required"

    @pytest.mark.asyncio
    async def test_valid_token_sets_user_id(self):
        token = token_service.issue("user-42")
        request = make_request({"Authorization": f"Bearer {token}"})

        assert await require_admin(request) == "user-42"
        assert request.state.user_id == "user-42"

    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret(self):
        token = JWTTokenService(secret="not-the-server-secret").issue("user-42")

        with pytest.raises(AuthenticationError, match="Failed to authenticate token"):
            await require_admin(make_request({"Authorization": f"Bearer {token}"}))


class TestProtectedRoutes:
    @pytest.mark.asyncio
    async def test_no_header_is_401(self, test_client):
        response = await test_client.get("/api/admin/submissions")

        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "authentication_required"
        assert body["message"] == "No token provided"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_bad_token_is_401(self, test_client):
        response = await test_client.get(
            "/api/admin/submissions", headers={"Authorization": "Bearer nonsense"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_token"

    @pytest.mark.asyncio
    async def test_expired_token_is_401(self, test_client):
        expired = JWTTokenService(expires_in=-10).issue("user-1")

        response = await test_client.get(
            "/api/admin/submissions", headers={"Authorization": f"Bearer {expired}"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    @pytest.mark.asyncio
    async def test_valid_token_passes(self, test_client, auth_headers):
        response = await test_client.get("/api/admin/submissions", headers=auth_headers)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_protected_delete_without_token(self, test_client):
        response = await test_client.delete(
            "/api/projects/6f1c2d4e-0000-4000-8000-000000000001"
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unexpected_verifier_failure_is_500(self, db_tables):
        from vitrine.main import app

        # Unhandled errors are re-raised after the 500 is sent
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        with patch("vitrine.auth.token_service") as mock_tokens:
            mock_tokens.verify.side_effect = RuntimeError("verifier broke")
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get(
                    "/api/admin/submissions", headers={"Authorization": "Bearer abc"}
                )

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert "verifier broke" not in response.text
