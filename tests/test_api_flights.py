import json
from datetime import datetime

import httpx

from flight_dispatch.schemas.flight import FlightLeg, FlightSnapshot

from conftest import make_job, stub_fetcher


def use_provider(client, handler):
    client.app.state.flight_fetcher = stub_fetcher(handler)


def test_invalid_flight_number(client):
    response = client.get("/api/flights/status/aa123")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid flight number format"


def test_cached_status_is_served_without_a_provider_call(client, client_db):
    snapshot = FlightSnapshot(
        flight_number="AA200",
        status="landed",
        departure=FlightLeg(airport="JFK", delay=12),
        arrival=FlightLeg(airport="LAX"),
        airline="American Airlines",
    )
    make_job(
        client_db,
        flight_number="AA200",
        flight_status="landed",
        flight_status_data=json.dumps(snapshot.model_dump(mode="json", by_alias=True)),
        flight_status_updated_at=datetime(2025, 6, 2, 12, 0),
    )
    requests = []
    use_provider(client, lambda request: requests.append(request) or httpx.Response(500))

    response = client.get("/api/flights/status/AA200")

    assert response.status_code == 200
    body = response.json()
    assert body["cached"] is True
    assert body["status"] == "landed"
    assert body["airline"] == "American Airlines"
    assert body["departure"]["delay"] == 12
    assert body["updatedAt"].startswith("2025-06-02T12:00")
    assert requests == []


def test_live_lookup(client):
    use_provider(
        client,
        lambda request: httpx.Response(
            200,
            json={"data": [{"flight_status": "scheduled", "airline": {"name": "British Airways"}}]},
        ),
    )

    response = client.get("/api/flights/status/BA100")

    assert response.status_code == 200
    body = response.json()
    assert body["flightNumber"] == "BA100"
    assert body["status"] == "scheduled"
    assert body["airline"] == "British Airways"
    assert body["cached"] is False
    assert "message" not in body


def test_live_lookup_without_data(client):
    use_provider(client, lambda request: httpx.Response(200, json={"data": []}))

    response = client.get("/api/flights/status/BA100")

    assert response.status_code == 200
    assert response.json() == {
        "flightNumber": "BA100",
        "status": "Not found",
        "cached": False,
        "message": "Flight information not available",
    }


def test_live_lookup_provider_failure(client):
    use_provider(client, lambda request: httpx.Response(503, text="unavailable"))

    response = client.get("/api/flights/status/BA100")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch flight status"


def test_live_lookup_without_api_key(client):
    response = client.get("/api/flights/status/BA100")

    assert response.status_code == 500
    assert response.json()["detail"] == "AviationStack API key not configured"
