"""Tests for the dashboard statistics endpoint."""

import pytest

PAYLOAD = {
    "clientName": "Acme",
    "government": "alexandria",
    "atmCode": "ATM-7",
    "serviceType": "feeding",
}


@pytest.mark.asyncio
async def test_manager_gets_stats(async_client, auth_headers) -> None:
    await async_client.post("/api/submissions", json=PAYLOAD, headers=auth_headers["agent"])
    await async_client.post(
        "/api/submissions",
        json={**PAYLOAD, "serviceType": "maintenance"},
        headers=auth_headers["agent"],
    )

    resp = await async_client.get("/api/stats", headers=auth_headers["manager"])

    assert resp.status_code == 200
    assert resp.json() == {
        "total": 2,
        "feeding": 1,
        "maintenance": 1,
        "todayCount": 2,
        "activeAgents": 1,
    }


@pytest.mark.asyncio
async def test_agent_cannot_read_stats(async_client, auth_headers) -> None:
    resp = await async_client.get("/api/stats", headers=auth_headers["agent"])

    assert resp.status_code == 403
