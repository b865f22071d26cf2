"""
Tests for the FastAPI error handlers and identity dependency.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from service_identity.app.handlers import get_current_identity, install_exception_handlers
from service_identity.app.providers import TokenVerificationError, UserRecord
from service_identity.app.resolution import IdentityInfo
from service_identity.app.service import IdentityService
from shared.errors import ConflictError, NotFoundError
from shared.logging import request_id_var


@pytest.fixture
def token_provider():
    provider = AsyncMock()
    provider.verify_token = AsyncMock(return_value={"sub": "u1"})
    return provider


@pytest.fixture
def record_provider():
    provider = AsyncMock()
    provider.get_user_record = AsyncMock(return_value=UserRecord(uid="u1", email="a@b.com"))
    return provider


@pytest.fixture
def app(token_provider, record_provider):
    app = FastAPI()
    install_exception_handlers(app)
    app.state.identity_service = IdentityService.from_providers(token_provider, record_provider)

    @app.get("/me")
    async def me(identity: IdentityInfo = Depends(get_current_identity)):
        return identity.model_dump()

    @app.get("/tasks/{task_id}")
    async def get_task(task_id: str):
        raise NotFoundError(f"Task not found: {task_id}")

    @app.post("/republics")
    async def create_republic():
        raise ConflictError("Republic code already in use", details={"field": "code"})

    @app.get("/request-id")
    async def current_request_id():
        return {"request_id": request_id_var.get()}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


def test_authenticated_request(client, token_provider):
    response = client.get("/me", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200
    data = response.json()
    assert data["subject_id"] == "u1"
    assert data["email"] == "a@b.com"
    assert data["provider"] == "unknown"
    assert data["email_verified"] is False
    token_provider.verify_token.assert_awaited_once_with("good-token")


def test_missing_authorization_header(client, token_provider):
    response = client.get("/me")

    assert response.status_code == 401
    data = response.json()
    assert data["code"] == "UNAUTHORIZED"
    assert data["path"] == "/me"
    token_provider.verify_token.assert_not_called()


def test_rejected_token(client, token_provider):
    token_provider.verify_token.side_effect = TokenVerificationError("Token has expired")

    response = client.get("/me", headers={"Authorization": "Bearer stale-token"})

    assert response.status_code == 401
    assert "Token has expired" in response.json()["message"]


def test_provider_outage_does_not_leak(client, token_provider):
    token_provider.verify_token.side_effect = ConnectionError("10.0.0.12:443 refused")

    response = client.get("/me", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 401
    assert "10.0.0.12" not in response.text


def test_not_found_maps_to_404(client):
    response = client.get("/tasks/42")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert response.json()["message"] == "Task not found: 42"


def test_conflict_carries_details(client):
    response = client.post("/republics")

    assert response.status_code == 409
    assert response.json()["details"] == {"field": "code"}


def test_unexpected_error_is_generic_500(client):
    response = client.get("/boom")

    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_SERVER_ERROR"
    assert data["message"] == "An unexpected error occurred"
    assert "hunter2" not in response.text


def test_missing_service_is_500():
    app = FastAPI()
    install_exception_handlers(app)

    @app.get("/me")
    async def me(identity: IdentityInfo = Depends(get_current_identity)):
        return identity.model_dump()

    response = TestClient(app, raise_server_exceptions=False).get(
        "/me", headers={"Authorization": "Bearer good-token"}
    )

    assert response.status_code == 500


def test_request_id_is_bound_and_echoed(client):
    response = client.get("/request-id", headers={"X-Request-ID": "req-123"})

    assert response.json() == {"request_id": "req-123"}
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated_when_absent(client):
    response = client.get("/request-id")

    request_id = response.json()["request_id"]
    assert request_id
    assert response.headers["X-Request-ID"] == request_id


def test_oversized_request_id_is_replaced(client):
    response = client.get("/request-id", headers={"X-Request-ID": "x" * 500})

    assert response.json()["request_id"] != "x" * 500


def test_error_responses_carry_request_id(client):
    response = client.get("/me", headers={"X-Request-ID": "req-401"})

    assert response.status_code == 401
    assert response.headers["X-Request-ID"] == "req-401"
