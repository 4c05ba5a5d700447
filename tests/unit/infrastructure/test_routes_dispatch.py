"""Tests for the /assign-rider endpoint — use case and session replaced via dependency overrides."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from riderdispatch.adapters.persistence.database import get_session
from riderdispatch.application.use_cases.assign_rider import (
    AlreadyAccepted,
    Assigned,
    Conflict,
    InternalError,
    NoActiveZones,
    NoRidersAvailable,
    NotFound,
    ZoneUndeterminable,
)
from riderdispatch.infrastructure.api.dependencies import get_assign_rider_uc
from riderdispatch.main import create_app

TIMEOUT_AT = datetime(2026, 10, 19, 12, 3, tzinfo=timezone.utc)


class StubUseCase:
    def __init__(self, outcome):
        self._outcome = outcome
        self.calls: list[str] = []

    async def execute(self, order_id):
        self.calls.append(order_id)
        return self._outcome


class StubSession:
    def __init__(self):
        self.committed = 0
        self.rolled_back = 0

    async def commit(self):
        self.committed += 1

    async def rollback(self):
        self.rolled_back += 1


@pytest.fixture
def make_client():
    def _make(outcome):
        app = create_app()
        uc = StubUseCase(outcome)
        session = StubSession()
        app.dependency_overrides[get_assign_rider_uc] = lambda: uc
        app.dependency_overrides[get_session] = lambda: session
        return TestClient(app), uc, session

    return _make


# ─── Request validation ──────────────────────────────────────────────


@pytest.mark.parametrize("body", [{}, {"order_id": ""}, {"order_id": "   "}, {"order_id": None}])
def test_missing_order_id_is_400(make_client, body):
    client, uc, _ = make_client(NoActiveZones(order_id="x"))
    response = client.post("/assign-rider", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "order_id is required"}
    assert uc.calls == []


def test_empty_body_is_400(make_client):
    client, uc, _ = make_client(NoActiveZones(order_id="x"))
    response = client.post("/assign-rider")
    assert response.status_code == 400
    assert uc.calls == []


def test_options_returns_200_without_body(make_client):
    client, _, _ = make_client(NoActiveZones(order_id="x"))
    response = client.options("/assign-rider")
    assert response.status_code == 200
    assert response.content == b""


def test_cors_preflight(make_client):
    client, _, _ = make_client(NoActiveZones(order_id="x"))
    response = client.options(
        "/assign-rider",
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_cors_preflight_accepts_any_requested_header(make_client):
    client, _, _ = make_client(NoActiveZones(order_id="x"))
    response = client.options(
        "/assign-rider",
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "x-custom-header, x-request-id",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "x-custom-header" in response.headers["access-control-allow-headers"].lower()


# ─── Outcome mapping ─────────────────────────────────────────────────


def test_assigned(make_client):
    outcome = Assigned(
        order_id="o1", rider_id="r1", zone_id="z2", zone_name="Yaba",
        assigned_at=TIMEOUT_AT, timeout_at=TIMEOUT_AT,
    )
    client, uc, session = make_client(outcome)
    response = client.post("/assign-rider", json={"order_id": "o1"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Rider assigned successfully from zone: Yaba",
        "rider_id": "r1",
        "zone_id": "z2",
        "zone_name": "Yaba",
        "timeout_at": "2026-10-19T12:03:00+00:00",
    }
    assert uc.calls == ["o1"]
    assert session.committed == 1


def test_not_found(make_client):
    client, _, _ = make_client(NotFound(order_id="o1"))
    response = client.post("/assign-rider", json={"order_id": "o1"})
    assert response.status_code == 404
    assert response.json()["error"] == "Order not found"


def test_already_accepted(make_client):
    client, _, _ = make_client(AlreadyAccepted(order_id="o1"))
    response = client.post("/assign-rider", json={"order_id": "o1"})
    assert response.status_code == 200
    assert response.json() == {"success": False, "message": "Order already accepted by a rider"}


@pytest.mark.parametrize(
    "outcome,message",
    [
        (NoActiveZones(order_id="o1"), "No active zones found in the system"),
        (
            ZoneUndeterminable(order_id="o1"),
            "Could not determine closest zone. Please check Google Maps API configuration.",
        ),
        (
            NoRidersAvailable(order_id="o1", zones_searched=3),
            "No available riders found in any zone. Order will remain pending.",
        ),
    ],
)
def test_operational_negatives_are_200(make_client, outcome, message):
    client, _, session = make_client(outcome)
    response = client.post("/assign-rider", json={"order_id": "o1"})
    assert response.status_code == 200
    assert response.json() == {"success": False, "message": message}
    # Zone seeding must survive a failed rider search
    assert session.committed == 1


def test_conflict_is_409(make_client):
    client, _, _ = make_client(Conflict(order_id="o1", detail="changed"))
    response = client.post("/assign-rider", json={"order_id": "o1"})
    assert response.status_code == 409
    assert response.json()["success"] is False


def test_internal_error_rolls_back(make_client):
    client, _, session = make_client(InternalError(order_id="o1", detail="db down"))
    response = client.post("/assign-rider", json={"order_id": "o1"})
    assert response.status_code == 500
    assert response.json() == {"error": "db down"}
    assert session.rolled_back == 1
    assert session.committed == 0
