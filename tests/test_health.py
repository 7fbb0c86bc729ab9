from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

import roster.app.main as main_module
from roster.app.main import app


def test_health_ok(monkeypatch):
    monkeypatch.setattr(main_module, "verify_connection", AsyncMock(return_value=True))
    client = TestClient(app)

    resp = client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["components"]["database"]["status"] == "ok"


def test_health_degraded_when_database_unreachable(monkeypatch):
    monkeypatch.setattr(main_module, "verify_connection", AsyncMock(return_value=False))
    client = TestClient(app)

    resp = client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "degraded"
    assert data["components"]["database"]["status"] == "error"
