"""Health & Root — verifies liveness payload and the plain-text routes."""

import customer_api.infrastructure.database as db_module


async def test_health_reports_connected(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["database"] == "Connected"
    assert body["uptime"] >= 0
    assert "timestamp" in body


async def test_health_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["database"] == "Disconnected"


async def test_root_banner(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.text == "Customer Management API is running"


async def test_favicon_is_empty(client):
    resp = await client.get("/favicon.ico")
    assert resp.status_code == 204
    assert resp.content == b""
