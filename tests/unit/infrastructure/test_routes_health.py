"""Tests for GET /api/health — session replaced via dependency overrides."""

import pytest
from fastapi.testclient import TestClient

from riderdispatch.adapters.persistence.database import get_session
from riderdispatch.config import settings
from riderdispatch.main import create_app


class CountResult:
    def __init__(self, value):
        self._value = value

    def scalar_one(self):
        return self._value


class CountingSession:
    def __init__(self, active_zones=None, error: Exception | None = None):
        self._active_zones = active_zones
        self._error = error
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        if self._error:
            raise self._error
        return CountResult(self._active_zones)


@pytest.fixture
def health_client(monkeypatch):
    def _make(session, api_key="test-key"):
        monkeypatch.setattr(settings, "google_maps_api_key", api_key)
        app = create_app()
        app.dependency_overrides[get_session] = lambda: session
        return TestClient(app)

    return _make


def test_ready_when_store_zones_and_key_are_present(health_client):
    session = CountingSession(active_zones=3)
    response = health_client(session).get("/api/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "database": "connected",
        "active_zones": 3,
        "distance_oracle": "configured",
    }
    assert len(session.statements) == 1


def test_degraded_without_active_zones(health_client):
    body = health_client(CountingSession(active_zones=0)).get("/api/health").json()
    assert body["status"] == "degraded"
    assert body["active_zones"] == 0


def test_degraded_without_api_key(health_client):
    body = health_client(CountingSession(active_zones=2), api_key="").get("/api/health").json()
    assert body["status"] == "degraded"
    assert body["distance_oracle"] == "missing_api_key"


def test_database_error_is_reported(health_client):
    session = CountingSession(error=RuntimeError("connection refused"))
    response = health_client(session).get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "degraded"
    assert body["database"] == "error: connection refused"
    assert body["active_zones"] is None
