"""HTTP surface: routes, status codes and the error body shape."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from travel_advisor.api.main import app, get_orchestrator
from travel_advisor.application.conversation import ConversationOrchestrator
from travel_advisor.shared.exceptions import RateLimitError

READY = [{"role": "user", "content": "I want to visit Japan in March with a budget of $3000"}]


@pytest.fixture
def client_for(settings, no_sleep):
    def factory(gateway, **overrides):
        cfg = settings.model_copy(update=overrides) if overrides else settings
        orchestrator = ConversationOrchestrator(gateway, settings=cfg, sleep=no_sleep)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


def _plans(plan_factory) -> str:
    return json.dumps({"summary": "Two picks.", "plans": [plan_factory(1), plan_factory(2)]})


def test_health(client_for, fake_gateway):
    r = client_for(fake_gateway("unused")).get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert r.headers["x-content-type-options"] == "nosniff"


def test_gathering_reply(client_for, fake_gateway):
    client = client_for(fake_gateway("What's your budget?"))
    r = client.post("/api/assistant", json={"messages": [{"role": "user", "content": "hi", "timestamp": 1}]})
    assert r.status_code == 200
    assert r.json() == {"message": "What's your budget?"}


def test_recommendations(client_for, fake_gateway, plan_factory):
    client = client_for(fake_gateway(_plans(plan_factory)))
    r = client.post("/api/assistant", json={"messages": READY})
    assert r.status_code == 200
    data = r.json()
    assert data["summary"] == "Two picks."
    assert [p["id"] for p in data["travelPlans"]] == ["plan-1", "plan-2"]
    assert data["travelPlans"][0]["budget"]["estimated"] == 120


def test_malformed_json_body(client_for, fake_gateway):
    gateway = fake_gateway("unused")
    r = client_for(gateway).post(
        "/api/assistant",
        content="{not json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_REQUEST"
    assert r.json()["retryable"] is False
    assert gateway.calls == []


def test_missing_messages(client_for, fake_gateway):
    r = client_for(fake_gateway("unused")).post("/api/assistant", json={})
    assert r.status_code == 400
    assert set(r.json()) == {"error", "message", "code", "retryable"}


def test_invalid_message(client_for, fake_gateway):
    r = client_for(fake_gateway("unused")).post("/api/assistant", json={"messages": [{"role": "user", "content": ""}]})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_MESSAGE"


def test_rate_limit_maps_to_429(client_for, fake_gateway):
    client = client_for(fake_gateway(RateLimitError("429")), llm_max_attempts=1)
    r = client.post("/api/assistant", json={"messages": READY})
    assert r.status_code == 429
    assert r.json() == {
        "error": "Rate limit exceeded",
        "message": "Too many requests. Please wait a moment and try again.",
        "code": "RATE_LIMIT",
        "retryable": True,
    }


def test_unparseable_completion_maps_to_502(client_for, fake_gateway):
    client = client_for(fake_gateway("Sorry, I cannot help with that."))
    r = client.post("/api/assistant", json={"messages": READY})
    assert r.status_code == 502
    assert r.json()["code"] == "PARSE_ERROR"
    assert r.json()["retryable"] is True


def test_map_recommendations(client_for, fake_gateway, plan_factory):
    gateway = fake_gateway(_plans(plan_factory))
    r = client_for(gateway).post("/api/map-recommendations", json={
        "coordinates": {"lat": 49.28, "lng": -123.12},
        "locationName": "Vancouver",
        "nearbyAttractions": [{"name": "Stanley Park", "distanceMeters": 2500, "rating": 7}],
        "nearbyCities": ["Burnaby"],
    })
    assert r.status_code == 200
    assert len(r.json()["travelPlans"]) == 2
    assert "Stanley Park - 2.5 km away" in gateway.calls[0].messages[0].content


def test_map_recommendations_without_nearby_data(client_for, fake_gateway, plan_factory):
    gateway = fake_gateway(_plans(plan_factory))
    r = client_for(gateway).post("/api/map-recommendations", json={
        "coordinates": {"lat": 62.0, "lng": -135.0},
        "locationName": None,
        "nearbyAttractions": None,
    })
    assert r.status_code == 200
    assert "remote location" in gateway.calls[0].messages[0].content


def test_map_recommendations_bad_coordinates(client_for, fake_gateway):
    r = client_for(fake_gateway("unused")).post("/api/map-recommendations", json={"coordinates": {"lat": "x"}})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_COORDINATES"
