import pytest

from admin_console.settings import settings


@pytest.mark.asyncio
async def test_ping_uses_configured_message(api_client, monkeypatch):
    monkeypatch.setattr(settings, "ping_message", "pong")
    resp = await api_client.get("/api/ping")
    assert resp.status_code == 200
    assert resp.json() == {"message": "pong"}


@pytest.mark.asyncio
async def test_liveness(api_client):
    resp = await api_client.get("/health/live")
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readiness_without_pool_is_degraded(api_client):
    resp = await api_client.get("/health/ready")
    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["checks"]["postgres"]["ok"] is False


@pytest.mark.asyncio
async def test_readiness_reports_schema_version(app, api_client, stub_pool, stub_conn):
    from admin_console.infra.schema import SCHEMA_VERSION

    stub_conn.queue("fetchval", SCHEMA_VERSION)
    app.state.pool = stub_pool
    resp = await api_client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["migrations"]["version"] == SCHEMA_VERSION


@pytest.mark.asyncio
async def test_readiness_without_migration_row_is_degraded(app, api_client, stub_pool, stub_conn):
    app.state.pool = stub_pool
    resp = await api_client.get("/health/ready")
    assert resp.status_code == 503
    assert resp.json()["checks"]["migrations"] == {"ok": False, "error": "no_migrations"}
    assert "FROM schema_migrations" in stub_conn.queries("fetchval")[0]


@pytest.mark.asyncio
async def test_metrics_exposition(api_client):
    await api_client.get("/health/live")
    resp = await api_client.get("/metrics")
    assert resp.status_code == 200
    assert "admin_console_http_requests_total" in resp.text


@pytest.mark.asyncio
async def test_unknown_route_uses_failure_envelope(api_client):
    resp = await api_client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not Found"}
    assert resp.headers["X-Request-Id"]


@pytest.mark.asyncio
async def test_supplied_request_id_is_echoed(api_client):
    resp = await api_client.get("/health/live", headers={"X-Request-Id": "req-123"})
    assert resp.headers["X-Request-Id"] == "req-123"


@pytest.mark.asyncio
async def test_request_id_is_set_when_observability_is_off(api_client, monkeypatch):
    monkeypatch.setattr(settings, "obs_enabled", False)
    resp = await api_client.get("/health/live")
    assert resp.headers["X-Request-Id"]
