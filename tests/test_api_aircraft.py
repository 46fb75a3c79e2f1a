from fastapi.testclient import TestClient

from nearsky.config import settings
from nearsky.main import app
from nearsky.models.aircraft import TrackedAircraft
from nearsky.models.tracking import CycleResult, CycleStatus


def test_closest_aircraft_before_first_cycle(monkeypatch):
    monkeypatch.setattr(settings, "enable_tracker", False)

    with TestClient(app) as client:
        response = client.get("/api/v1/aircraft/closest")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "idle"
    assert body["aircraft"]["flight"] == "Waiting for data..."
    assert body["alert_triggered"] is False


def test_closest_aircraft_returns_latest_result(monkeypatch):
    monkeypatch.setattr(settings, "enable_tracker", False)
    result = CycleResult(
        status=CycleStatus.TRACKING,
        aircraft=TrackedAircraft(
            present=True,
            hex="4ca7b5",
            flight="RYR4TX",
            squawk="7700",
            distance_km=0.16,
            bearing_deg=292.0,
            track_deg=268.0,
            registration="EI-DWF",
        ),
        alert_triggered=True,
        alert_active=True,
    )

    with TestClient(app) as client:
        app.state.mailbox.put(result)
        response = client.get("/api/v1/aircraft/closest")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "tracking"
    assert body["alert_triggered"] is True
    assert body["aircraft"]["hex"] == "4ca7b5"
    assert body["aircraft"]["registration"] == "EI-DWF"
    assert body["aircraft"]["squawk_description"] == "General Emergency"
    assert body["aircraft"]["track_direction"] == "W"


def test_squawk_endpoint(monkeypatch):
    monkeypatch.setattr(settings, "enable_tracker", False)

    with TestClient(app) as client:
        response = client.get("/api/v1/squawk/7500")

    assert response.status_code == 200
    assert response.json() == {"squawk": "7500", "description": "Hijacking", "emergency": True}


def test_health_check(monkeypatch):
    monkeypatch.setattr(settings, "enable_tracker", False)

    with TestClient(app) as client:
        response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_run_serves_app_with_uvicorn(monkeypatch):
    from nearsky import main

    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setattr(settings, "api_host", "0.0.0.0")
    monkeypatch.setattr(settings, "api_port", 9090)

    main.run()

    assert len(calls) == 1
    args, kwargs = calls[0]
    assert args == (app,)
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9090
