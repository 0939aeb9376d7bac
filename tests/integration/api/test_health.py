"""Tests for health, readiness and metrics endpoints."""

import pytest
from sqlalchemy.exc import OperationalError


@pytest.mark.asyncio
async def test_health(async_client) -> None:
    """Health needs no credentials and no database."""
    resp = await async_client.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["message"]
    assert body["timestamp"]


@pytest.mark.asyncio
async def test_request_id_is_echoed(async_client) -> None:
    resp = await async_client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_ready_when_database_answers(async_client, mock_db_session) -> None:
    resp = await async_client.get("/api/ready")

    assert resp.status_code == 200
    assert resp.json() == {"ready": True, "checks": {"database": True}}
    mock_db_session.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_not_ready_when_database_fails(async_client, mock_db_session) -> None:
    mock_db_session.execute.side_effect = OperationalError("SELECT 1", {}, OSError("down"))

    resp = await async_client.get("/api/ready")

    assert resp.status_code == 200
    assert resp.json() == {"ready": False, "checks": {"database": False}}


@pytest.mark.asyncio
async def test_metrics_exposition(async_client) -> None:
    await async_client.get("/api/health")

    resp = await async_client.get("/metrics")

    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
