# tests/api/test_system.py
from __future__ import annotations

from fastapi.testclient import TestClient

from portfolio_backend.core.settings import settings


def test_root_health(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_api_health_reports_database(client: TestClient) -> None:
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["components"]["database"] == "healthy"
    assert body["version"] == settings.app_version
    assert isinstance(body["timestamp"], int)


def test_unknown_api_route_returns_json_404(client: TestClient) -> None:
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"detail": "Not Found"}
