"""Tests for the authorization gate over HTTP."""

import pytest

from fieldops.domain.errors import ProviderUnavailableError
from fieldops.domain.entities import UserRole


@pytest.mark.asyncio
async def test_missing_token_returns_401(async_client, verifier) -> None:
    """No Authorization header is rejected before any provider call."""
    resp = await async_client.get("/api/user/profile")

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "MISSING_CREDENTIAL"
    assert verifier.calls == []


@pytest.mark.asyncio
async def test_invalid_header_format_returns_401(async_client, verifier) -> None:
    resp = await async_client.get(
        "/api/user/profile",
        headers={"Authorization": "Basic dXNlcjpwYXNz"},
    )

    assert resp.status_code == 401
    assert verifier.calls == []


@pytest.mark.asyncio
async def test_rejected_token_returns_401(async_client) -> None:
    resp = await async_client.get(
        "/api/user/profile",
        headers={"Authorization": "Bearer forged"},
    )

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "INVALID_CREDENTIAL"


@pytest.mark.asyncio
async def test_provider_outage_returns_503(async_client, verifier, auth_headers) -> None:
    verifier.error = ProviderUnavailableError()

    resp = await async_client.get("/api/user/profile", headers=auth_headers["agent"])

    assert resp.status_code == 503
    assert resp.json()["error"]["retryable"] is True


@pytest.mark.asyncio
async def test_first_login_provisions_agent(async_client, user_repo, auth_headers) -> None:
    """A first authenticated request creates an agent profile."""
    resp = await async_client.get("/api/user/profile", headers=auth_headers["agent"])

    assert resp.status_code == 200
    assert resp.json() == {
        "id": "sub-agent-1",
        "email": "agent@example.com",
        "firstName": "Amal",
        "lastName": "Hassan",
        "profileImageUrl": None,
        "role": "agent",
    }
    assert user_repo.users["sub-agent-1"].role == UserRole.AGENT


@pytest.mark.asyncio
async def test_user_alias_route(async_client, auth_headers) -> None:
    resp = await async_client.get("/api/user", headers=auth_headers["manager"])

    assert resp.status_code == 200
    assert resp.json()["role"] == "manager"


@pytest.mark.asyncio
async def test_every_request_reverifies(async_client, verifier, auth_headers) -> None:
    for _ in range(2):
        await async_client.get("/api/user", headers=auth_headers["agent"])

    assert len(verifier.calls) == 2


@pytest.mark.asyncio
async def test_directory_outage_fails_closed(async_client, user_repo, auth_headers) -> None:
    """If the user store is down the request gets 503, not a guessed identity."""

    async def _down(*args, **kwargs):
        raise ConnectionRefusedError("database down")

    user_repo.upsert_from_identity = _down

    resp = await async_client.get("/api/user/profile", headers=auth_headers["agent"])

    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "DIRECTORY_UNAVAILABLE"
