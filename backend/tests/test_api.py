"""Tests for the HTTP endpoints, with views mounted on the SQLite store."""

import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from tracker.main import app
from tracker.views.live import DashboardView, TrackerView, TransactionsView

from tests.factories import NOW, add_movement, add_unit


@pytest.fixture
def api(client, session_factory):
    with session_factory() as db:
        add_unit(db, "1001", station="Dyeing", article_number="SILK-1")
        add_unit(db, "1002", station="Inspection", article_number="COT-2")
        add_movement(db, "1001", "Inspection", "Dyeing", NOW - timedelta(hours=2))

    views = {
        "dashboard": DashboardView(client),
        "tracker": TrackerView(client),
        "transactions": TransactionsView(client),
    }

    async def mount():
        for view in views.values():
            await view.mount()

    asyncio.run(mount())
    app.state.client = client
    app.state.views = views
    # startup hooks are not run without the context manager
    yield TestClient(app)
    del app.state.client
    del app.state.views


def test_dashboard(api):
    response = api.get("/api/v1/dashboard/")
    assert response.status_code == 200
    body = response.json()
    assert body["total_units"] == 902
    assert body["daily_throughput"] == {"completed": 300, "target": 120}
    assert body["live"] is True


def test_dashboard_failed_load_is_503(api):
    app.state.views["dashboard"].load_error = "Failed to load dashboard data"
    response = api.get("/api/v1/dashboard/")
    assert response.status_code == 503


def test_units_search(api):
    response = api.get("/api/v1/units/", params={"search": "silk"})
    assert response.status_code == 200
    assert [u["saree_id"] for u in response.json()] == ["1001"]


def test_unit_detail(api):
    response = api.get("/api/v1/units/1001")
    assert response.status_code == 200
    body = response.json()
    assert body["unit"]["current_station"] == "Dyeing"
    assert [s["status"] for s in body["stages"][:3]] == ["completed", "current", "pending"]


def test_unit_detail_not_found(api):
    assert api.get("/api/v1/units/9999").status_code == 404


def test_movements_filter(api):
    response = api.get("/api/v1/movements/", params={"station": "Dyeing", "order": "asc"})
    assert response.status_code == 200
    assert [m["saree_id"] for m in response.json()] == ["1001"]
    assert api.get("/api/v1/movements/", params={"order": "sideways"}).status_code == 422


def test_create_movement_writes_through(api, session_factory):
    response = api.post(
        "/api/v1/movements/",
        json={"saree_id": "1002", "from_station": "Inspection", "to_station": "Dyeing"},
    )
    assert response.status_code == 201
    assert response.json()["to_station"] == "Dyeing"
    from tracker import models
    with session_factory() as db:
        assert db.query(models.Movement).filter(models.Movement.saree_id == "1002").count() == 1


def test_realtime_status(api):
    response = api.get("/api/v1/realtime/status")
    assert response.status_code == 200
    views = {v["view"]: v for v in response.json()}
    assert set(views) == {"dashboard", "tracker", "transactions"}
    assert len(views["dashboard"]["subscriptions"]) == 3
    assert all(s["state"] == "connected" for s in views["tracker"]["subscriptions"])


def test_current_user(api, user):
    response = api.get("/api/v1/auth/user")
    assert response.status_code == 200
    assert response.json()["email"] == user.email
