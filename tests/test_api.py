"""HTTP API tests through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import create_application
from app.services.engine import WorkoutEngine

pytestmark = pytest.mark.integration

PREFIX = "/api/v1"


@pytest.fixture
def api_client(catalog, clock):
    engine = WorkoutEngine(catalog=catalog, clock=clock)
    with TestClient(create_application(engine)) as client:
        yield client


def _start_push_day(client) -> dict:
    resp = client.post(f"{PREFIX}/session", json={"template_id": "push-day"})
    assert resp.status_code == 201
    return resp.json()


def test_health(api_client):
    resp = api_client.get(f"{PREFIX}/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["service"] == get_settings().app_name
    assert "built_at" not in body


def test_free_exercise_history_accumulates(api_client):
    for weight in ("100", "120"):
        api_client.post(f"{PREFIX}/session", json={})
        session = api_client.post(f"{PREFIX}/session/exercises", json={"name": "Bench Press"}).json()
        exercise = session["exercises"][0]
        assert exercise["exercise_id"] == "bench-press"
        session = api_client.post(f"{PREFIX}/session/exercises/{exercise['id']}/sets").json()
        set_url = f"{PREFIX}/session/exercises/{exercise['id']}/sets/{session['exercises'][0]['sets'][0]['id']}"
        api_client.patch(set_url, json={"field": "weight", "value": weight})
        api_client.patch(set_url, json={"field": "reps", "value": "5"})
        api_client.post(f"{PREFIX}/session/finish", json={"duration_seconds": 600})

    records = api_client.get(f"{PREFIX}/stats").json()["personal_records"]
    assert list(records) == ["bench-press"]
    assert records["bench-press"]["weight"] == 120.0
    assert len(api_client.get(f"{PREFIX}/history/exercises/bench-press").json()["entries"]) == 2


class TestSessionEndpoints:
    def test_no_session(self, api_client):
        assert api_client.get(f"{PREFIX}/session").json() is None
        assert api_client.post(f"{PREFIX}/session/cancel").status_code == 409
        assert api_client.post(f"{PREFIX}/session/finish", json={}).status_code == 409
        assert api_client.get(f"{PREFIX}/session/progress").status_code == 409

    def test_unknown_template(self, api_client):
        resp = api_client.post(f"{PREFIX}/session", json={"template_id": "nope"})
        assert resp.status_code == 404

    def test_start_free_session(self, api_client):
        resp = api_client.post(f"{PREFIX}/session", json={})
        assert resp.status_code == 201
        assert resp.json()["name"] == "Workout"
        assert resp.json()["exercises"] == []

    def test_log_and_finish(self, api_client):
        session = _start_push_day(api_client)
        assert len(session["exercises"]) == 5
        bench = session["exercises"][0]
        set_id = bench["sets"][0]["id"]
        set_url = f"{PREFIX}/session/exercises/{bench['id']}/sets/{set_id}"

        api_client.patch(set_url, json={"field": "weight", "value": "100"})
        resp = api_client.patch(set_url, json={"field": "reps", "value": "5"})
        assert resp.json()["exercises"][0]["sets"][0]["weight"] == "100"

        resp = api_client.post(f"{set_url}/complete")
        assert resp.status_code == 200
        assert resp.json()["action"] == "completed"
        assert api_client.get(f"{PREFIX}/timer").json()["state"] == "running"

        progress = api_client.get(f"{PREFIX}/session/progress").json()
        assert progress["completed_sets"] == 1
        assert progress["total_sets"] == 5
        assert progress["progress_percentage"] == 20.0

        resp = api_client.post(f"{PREFIX}/session/finish", json={"duration_seconds": 600})
        assert resp.status_code == 201
        record = resp.json()
        assert record["total_volume"] == 500.0
        assert record["duration"] == 600
        assert record["total_sets"] == 5

        assert api_client.get(f"{PREFIX}/session").json() is None
        stats = api_client.get(f"{PREFIX}/stats").json()
        assert stats["total_workouts"] == 1
        assert stats["personal_records"]["bench-press"]["weight"] == 100.0
        assert api_client.get(f"{PREFIX}/achievements").json()["total_points"] == 10

        ghost = api_client.get(f"{PREFIX}/session/previous-performance", params={"name": "Bench Press"}).json()
        assert ghost == [{"set_number": 1, "weight": 100.0, "reps": 5}]

    def test_unknown_set_returns_unchanged_snapshot(self, api_client):
        session = _start_push_day(api_client)
        bench = session["exercises"][0]
        resp = api_client.patch(
            f"{PREFIX}/session/exercises/{bench['id']}/sets/missing",
            json={"field": "weight", "value": "100"},
        )
        assert resp.status_code == 200
        assert resp.json() == session

    def test_invalid_field_is_rejected(self, api_client):
        session = _start_push_day(api_client)
        bench = session["exercises"][0]
        resp = api_client.patch(
            f"{PREFIX}/session/exercises/{bench['id']}/sets/{bench['sets'][0]['id']}",
            json={"field": "tempo", "value": "3-1-1"},
        )
        assert resp.status_code == 422

    def test_exercise_and_set_editing(self, api_client):
        api_client.post(f"{PREFIX}/session", json={})
        session = api_client.post(f"{PREFIX}/session/exercises", json={"name": "Deadlift", "muscle_group": "Back"}).json()
        exercise_id = session["exercises"][0]["id"]

        session = api_client.post(f"{PREFIX}/session/exercises/{exercise_id}/sets").json()
        session = api_client.post(f"{PREFIX}/session/exercises/{exercise_id}/sets").json()
        sets = session["exercises"][0]["sets"]
        assert [s["set_number"] for s in sets] == [1, 2]

        session = api_client.delete(f"{PREFIX}/session/exercises/{exercise_id}/sets/{sets[0]['id']}").json()
        assert [(s["id"], s["set_number"]) for s in session["exercises"][0]["sets"]] == [(sets[1]["id"], 1)]

        session = api_client.post(f"{PREFIX}/session/exercises/{exercise_id}/toggle").json()
        assert session["exercises"][0]["expanded"] is False

        session = api_client.delete(f"{PREFIX}/session/exercises/{exercise_id}").json()
        assert session["exercises"] == []

    def test_cancel(self, api_client):
        _start_push_day(api_client)
        assert api_client.post(f"{PREFIX}/session/cancel").status_code == 204
        assert api_client.get(f"{PREFIX}/history").json() == []


class TestTimerEndpoints:
    def test_preset_and_adjust(self, api_client):
        snapshot = api_client.post(f"{PREFIX}/timer/preset", json={"seconds": 60}).json()
        assert snapshot == {"state": "idle", "total_seconds": 60, "remaining_seconds": 60}

        snapshot = api_client.post(f"{PREFIX}/timer/adjust", json={}).json()
        assert snapshot["remaining_seconds"] == 75

    def test_skip(self, api_client):
        api_client.post(f"{PREFIX}/timer/start", json={"seconds": 120})
        snapshot = api_client.post(f"{PREFIX}/timer/skip").json()
        assert snapshot["state"] == "expired"
        assert snapshot["remaining_seconds"] == 0

    def test_toggle_and_reset(self, api_client):
        api_client.post(f"{PREFIX}/timer/start", json={"seconds": 120})
        assert api_client.post(f"{PREFIX}/timer/toggle").json()["state"] == "paused"
        snapshot = api_client.post(f"{PREFIX}/timer/reset").json()
        assert snapshot["state"] == "idle"
        assert snapshot["remaining_seconds"] == 120

    def test_out_of_range_start_is_rejected(self, api_client):
        assert api_client.post(f"{PREFIX}/timer/start", json={"seconds": 700}).status_code == 422


class TestHistoryEndpoints:
    def _finish_one(self, client) -> dict:
        client.post(f"{PREFIX}/session", json={"template_id": "leg-day"})
        return client.post(f"{PREFIX}/session/finish", json={"duration_seconds": 1800}).json()

    def test_list_get_delete(self, api_client):
        record = self._finish_one(api_client)

        assert [r["id"] for r in api_client.get(f"{PREFIX}/history").json()] == [record["id"]]
        assert api_client.get(f"{PREFIX}/history/{record['id']}").json()["template_name"] == "Leg Day"

        assert api_client.delete(f"{PREFIX}/history/{record['id']}").status_code == 204
        assert api_client.delete(f"{PREFIX}/history/{record['id']}").status_code == 404
        assert api_client.get(f"{PREFIX}/history/{record['id']}").status_code == 404

    def test_range(self, api_client, clock):
        record = self._finish_one(api_client)
        params = {
            "from_date": clock.now.replace(hour=0).isoformat(),
            "to_date": clock.now.isoformat(),
        }
        assert [r["id"] for r in api_client.get(f"{PREFIX}/history/range", params=params).json()] == [record["id"]]

        params["to_date"], params["from_date"] = params["from_date"], params["to_date"]
        assert api_client.get(f"{PREFIX}/history/range", params=params).status_code == 400

    def test_range_without_offsets(self, api_client, clock):
        record = self._finish_one(api_client)
        local_now = clock.now.replace(tzinfo=None)
        params = {
            "from_date": local_now.replace(hour=0).isoformat(),
            "to_date": local_now.isoformat(),
        }
        resp = api_client.get(f"{PREFIX}/history/range", params=params)
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()] == [record["id"]]

    def test_range_with_mixed_bounds(self, api_client, clock):
        record = self._finish_one(api_client)
        params = {
            "from_date": clock.now.replace(hour=0, tzinfo=None).isoformat(),
            "to_date": clock.now.isoformat(),
        }
        resp = api_client.get(f"{PREFIX}/history/range", params=params)
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()] == [record["id"]]

        params = {
            "from_date": clock.now.replace(hour=23, tzinfo=None).isoformat(),
            "to_date": clock.now.isoformat(),
        }
        assert api_client.get(f"{PREFIX}/history/range", params=params).status_code == 400

    def test_exercise_history(self, api_client):
        self._finish_one(api_client)
        body = api_client.get(f"{PREFIX}/history/exercises/squat").json()
        assert body["exercise_id"] == "squat"
        assert len(body["entries"]) == 1

    def test_reset_keeps_points(self, api_client):
        self._finish_one(api_client)
        assert api_client.post(f"{PREFIX}/history/reset").status_code == 204
        assert api_client.get(f"{PREFIX}/stats").json()["total_workouts"] == 0
        assert api_client.get(f"{PREFIX}/achievements").json()["total_points"] == 10

    def test_reload_without_mirror_keeps_history(self, api_client):
        self._finish_one(api_client)
        assert api_client.post(f"{PREFIX}/history/reload").json() == {"count": 1}


class TestAchievementEndpoints:
    def test_manual_unlock(self, api_client):
        resp = api_client.post(f"{PREFIX}/achievements/night-owl/unlock")
        assert resp.status_code == 200
        assert resp.json()["is_unlocked"] is True
        assert api_client.post(f"{PREFIX}/achievements/missing/unlock").status_code == 404

    def test_check_is_idempotent(self, api_client):
        api_client.post(f"{PREFIX}/session", json={})
        api_client.post(f"{PREFIX}/session/finish", json={"duration_seconds": 60})
        body = api_client.post(f"{PREFIX}/achievements/check").json()
        assert body == {"newly_unlocked": [], "total_points": 10}
