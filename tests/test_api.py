"""Tests for api/app.py — JSON endpoints over a temporary workspace."""

import pytest
from fastapi.testclient import TestClient

from api.app import app


@pytest.fixture
def client(workspace):
    return TestClient(app)


BUILDING_DAY = {
    "mode": "building",
    "environment": 0.5,
    "businessFocus": 4,
    "trainingFocus": 2,
    "microNovelty": [
        {"id": "newBook", "active": True, "note": "Range, ch. 1"},
        {"id": "newChallenge", "active": True},
    ],
    "dopamine": 1,
    "clearing": 2,
}


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": "true"}


def test_get_existing_day_uses_profile_user(client):
    resp = client.get("/api/days/2026-02-10")
    assert resp.status_code == 200
    body = resp.json()
    assert body["day"]["mode"] == "expanding"
    assert body["evaluation"]["score"] == 6.4
    assert body["tier"] == "Starting"


def test_get_missing_day_returns_default_draft(client):
    body = client.get("/api/days/2026-04-01", params={"user": "bob"}).json()
    assert body["day"]["date"] == "2026-04-01"
    assert body["day"]["submitted"] is False
    assert body["evaluation"]["score"] == 0.0


def test_invalid_date_is_structured_error(client):
    resp = client.get("/api/days/not-a-date")
    assert resp.status_code == 422
    assert resp.json()["code"] == "INVALID_DATE"


def test_save_draft_ignores_client_score(client):
    payload = dict(BUILDING_DAY, score=1000, submitted=True)
    resp = client.put("/api/days/2026-03-01", params={"user": "bob"}, json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["evaluation"]["score"] == 6.0
    assert body["day"]["submitted"] is False
    assert body["day"]["macroNovelty"] == 5


def test_submit_then_save_conflicts(client):
    resp = client.post("/api/days/2026-03-01/submit", params={"user": "bob"}, json=BUILDING_DAY)
    assert resp.status_code == 200
    assert resp.json()["day"]["submitted"] is True

    resp = client.put("/api/days/2026-03-01", params={"user": "bob"}, json=BUILDING_DAY)
    assert resp.status_code == 409
    assert resp.json()["code"] == "DAY_ALREADY_SUBMITTED"


def test_bad_payload_is_400(client):
    resp = client.put("/api/days/2026-03-01", json={"businessFocus": "lots"})
    assert resp.status_code == 400


def test_evaluate_does_not_persist(client):
    resp = client.post("/api/evaluate", params={"user": "bob"}, json=dict(BUILDING_DAY, date="2026-03-01"))
    assert resp.status_code == 200
    assert resp.json()["evaluation"]["score"] == 6.0
    assert client.get("/api/history", params={"user": "bob"}).json()["count"] == 0


def test_history_and_stats(client):
    history = client.get("/api/history").json()
    assert history["count"] == 3
    assert history["days"][0]["date"] == "2026-02-10"

    stats = client.get("/api/stats").json()
    assert stats["stats"]["buildingDays"] == 2
    assert stats["stats"]["expandingDays"] == 1
    assert stats["stats"]["submittedDays"] == 2
    assert [p["date"] for p in stats["recent"]] == ["2026-02-08", "2026-02-09", "2026-02-10"]


def test_calendar(client):
    body = client.get("/api/calendar/2026/2").json()
    assert len(body["days"]) == 28
    assert body["days"][9]["score"] == 6.4


def test_calendar_bad_month(client):
    assert client.get("/api/calendar/2026/13").status_code == 400


def test_corrupt_store_is_500(client, workspace):
    (workspace / "days" / "alice.json").write_text("{oops", encoding="utf-8")
    resp = client.get("/api/history")
    assert resp.status_code == 500
    assert resp.json()["code"] == "STORE_ERROR"
