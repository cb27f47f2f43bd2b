"""
Unit tests for API v1 routes.

Runs the router against an AuthService wired with in-memory adapters,
plus a few mocked-service cases for error mapping.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_auth_service
from src.api.errors import register_exception_handlers
from src.api.v1.routes import router
from src.domain.auth_service import AuthService
from src.domain.exceptions import ConflictError, ExpiredError, InfrastructureError
from tests.doubles import RecordingEmailClient

EMAIL = "user@example.com"
PASSWORD = "Secret123!"


@pytest.fixture
def app(service: AuthService) -> FastAPI:
    """Create test FastAPI application."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.state.auth_service = service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client: TestClient, requires_2fa: bool = False) -> None:
    response = client.post(
        "/v1/signup", json={"email": EMAIL, "password": PASSWORD, "requires_2fa": requires_2fa}
    )
    assert response.status_code == 201


def login(client: TestClient, path: str = "/v1/login") -> str:
    response = client.post(path, json={"email": EMAIL, "password": PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


class TestSignupEndpoint:
    """Tests for POST /v1/signup."""

    def test_signup_returns_201(self, client: TestClient) -> None:
        response = client.post("/v1/signup", json={"email": "User@Example.com", "password": PASSWORD})

        assert response.status_code == 201
        assert response.json() == {"message": "User created successfully", "email": EMAIL}

    def test_duplicate_returns_409_generic(self, client: TestClient) -> None:
        signup(client)

        response = client.post("/v1/signup", json={"email": EMAIL, "password": PASSWORD})

        assert response.status_code == 409
        assert EMAIL not in response.text

    def test_domain_password_policy_returns_422(self, client: TestClient) -> None:
        response = client.post("/v1/signup", json={"email": EMAIL, "password": "abcdefgh"})

        assert response.status_code == 422
        assert "three" in response.json()["detail"]

    def test_malformed_email_returns_422(self, client: TestClient) -> None:
        response = client.post("/v1/signup", json={"email": "nope", "password": PASSWORD})

        assert response.status_code == 422


class TestLoginEndpoints:
    """Tests for /v1/login, /v1/verify-2fa and /v1/elevate."""

    def test_login_returns_standard_token(self, client: TestClient) -> None:
        signup(client)

        response = client.post("/v1/login", json={"email": EMAIL, "password": PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["scope"] == "standard"
        assert body["token_type"] == "bearer"

    def test_bad_credentials_return_401(self, client: TestClient) -> None:
        signup(client)

        wrong = client.post("/v1/login", json={"email": EMAIL, "password": "Wrong123!"})
        unknown = client.post("/v1/login", json={"email": "ghost@example.com", "password": PASSWORD})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()
        assert wrong.headers["WWW-Authenticate"] == "Bearer"

    def test_two_fa_login_returns_206_then_token(
        self, client: TestClient, email_client: RecordingEmailClient
    ) -> None:
        signup(client, requires_2fa=True)

        response = client.post("/v1/login", json={"email": EMAIL, "password": PASSWORD})

        assert response.status_code == 206
        attempt_id = response.json()["attempt_id"]
        assert attempt_id == email_client.last_attempt_id()
        assert EMAIL not in response.text

        verified = client.post(
            "/v1/verify-2fa", json={"attempt_id": attempt_id, "code": email_client.last_code()}
        )
        assert verified.status_code == 200
        assert verified.json()["scope"] == "standard"

    def test_verify_2fa_unknown_attempt_returns_404(self, client: TestClient) -> None:
        response = client.post("/v1/verify-2fa", json={"attempt_id": "a" * 43, "code": "123456"})

        assert response.status_code == 404

    def test_verify_2fa_malformed_code_returns_422(self, client: TestClient) -> None:
        response = client.post("/v1/verify-2fa", json={"attempt_id": "a" * 43, "code": "12ab56"})

        assert response.status_code == 422

    def test_elevate_returns_elevated_token(self, client: TestClient) -> None:
        signup(client)

        response = client.post("/v1/elevate", json={"email": EMAIL, "password": PASSWORD})

        assert response.status_code == 200
        assert response.json()["scope"] == "elevated"


class TestTokenEndpoints:
    """Tests for bearer-protected and token verification routes."""

    def test_logout_revokes_token(self, client: TestClient) -> None:
        signup(client)
        token = login(client)

        assert client.post("/v1/logout", headers=bearer(token)).status_code == 200

        response = client.post("/v1/verify-token", json={"token": token})
        assert response.status_code == 401

    def test_missing_bearer_returns_401(self, client: TestClient) -> None:
        response = client.post("/v1/logout")

        assert response.status_code == 401

    def test_verify_token_reports_claims(self, client: TestClient) -> None:
        signup(client)
        token = login(client)

        response = client.post("/v1/verify-token", json={"token": token})

        assert response.status_code == 200
        assert response.json()["email"] == EMAIL
        assert response.json()["scope"] == "standard"

    def test_verify_elevated_token_rejects_standard(self, client: TestClient) -> None:
        signup(client)
        token = login(client)

        response = client.post("/v1/verify-elevated-token", json={"token": token})

        assert response.status_code == 403

    def test_change_password_requires_elevated(self, client: TestClient) -> None:
        signup(client)
        standard = login(client)
        elevated = login(client, "/v1/elevate")

        denied = client.patch(
            "/v1/change-password", json={"new_password": "NewPass456!"}, headers=bearer(standard)
        )
        allowed = client.patch(
            "/v1/change-password", json={"new_password": "NewPass456!"}, headers=bearer(elevated)
        )

        assert denied.status_code == 403
        assert allowed.status_code == 200
        relogin = client.post("/v1/login", json={"email": EMAIL, "password": "NewPass456!"})
        assert relogin.status_code == 200

    def test_delete_account(self, client: TestClient) -> None:
        signup(client)
        elevated = login(client, "/v1/elevate")

        response = client.delete("/v1/delete-account", headers=bearer(elevated))

        assert response.status_code == 200
        gone = client.post("/v1/login", json={"email": EMAIL, "password": PASSWORD})
        assert gone.status_code == 401


class TestErrorMapping:
    """Domain errors raised by a mocked service map to status codes."""

    @pytest.mark.parametrize(
        "error, expected_status",
        [
            (ConflictError("user@example.com"), 409),
            (ExpiredError("expired"), 410),
            (InfrastructureError("redis down"), 503),
        ],
    )
    def test_signup_error_status(self, app: FastAPI, error: Exception, expected_status: int) -> None:
        mock_service = MagicMock(spec=AuthService)
        mock_service.signup.side_effect = error

        app.dependency_overrides[get_auth_service] = lambda: mock_service
        client = TestClient(app)

        try:
            response = client.post("/v1/signup", json={"email": EMAIL, "password": PASSWORD})

            assert response.status_code == expected_status
            assert "user@example.com" not in response.text
            assert "redis" not in response.text
        finally:
            app.dependency_overrides.clear()
