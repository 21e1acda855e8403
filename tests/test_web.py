"""Tests for the JSON API."""

import pytest
from fastapi.testclient import TestClient

from virtual_coach.web import create_app

PREFERENCES = {
    "training_goal": "muscle_gain",
    "target_muscles": ["legs", "core"],
    "difficulty_level": "beginner",
    "available_minutes": 30,
}


@pytest.fixture
def client(temp_data_dir):
    """API client backed by a fresh database and guest store."""
    app = create_app(db_path=temp_data_dir / "api.db", data_dir=temp_data_dir)
    with TestClient(app) as test_client:
        yield test_client


def _create_plan(client) -> dict:
    response = client.post("/plans", json=PREFERENCES)
    assert response.status_code == 200
    return response.json()


def _finished_session(client) -> dict:
    plan = _create_plan(client)
    session = client.post("/sessions", json={"plan_id": plan["id"]}).json()
    for _ in plan["exercises"]:
        session = client.post(f"/sessions/{session['session_id']}/next").json()
    return session


class TestHealthAndCatalog:
    """Tests for health and exercise routes."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_exercises_seeded(self, client):
        data = client.get("/exercises").json()

        assert data["total"] == 20
        assert data["exercises"][0]["name"] == "Squat"

    def test_exercises_by_muscle(self, client):
        data = client.get("/exercises", params={"muscle": "core"}).json()

        assert {e["target_muscle"] for e in data["exercises"]} == {"core"}


class TestPlans:
    """Tests for plan routes."""

    def test_create_plan(self, client):
        plan = _create_plan(client)

        assert len(plan["exercises"]) == 3
        assert [i["exercise"]["name"] for i in plan["exercises"]] == [
            "Squat",
            "Reverse Lunge",
            "Plank",
        ]
        assert plan["exercises"][-1]["rest_seconds"] == 0

    def test_get_plan(self, client):
        plan = _create_plan(client)
        response = client.get(f"/plans/{plan['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == plan["id"]

    def test_get_unknown_plan(self, client):
        response = client.get("/plans/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Plan not found"}

    def test_invalid_preferences(self, client):
        response = client.post("/plans", json={**PREFERENCES, "target_muscles": []})

        assert response.status_code == 422
        assert "muscle" in response.json()["error"]

    def test_unknown_muscle(self, client):
        response = client.post("/plans", json={**PREFERENCES, "target_muscles": ["tail"]})

        assert response.status_code == 422
        assert "error" in response.json()

    def test_minutes_out_of_range(self, client):
        response = client.post("/plans", json={**PREFERENCES, "available_minutes": 200})

        assert response.status_code == 422

    def test_equipment_must_be_list(self, client):
        response = client.post("/plans", json={**PREFERENCES, "equipment_available": "bell"})

        assert response.status_code == 422
        assert "list" in response.json()["error"]

    def test_name_ordering(self, client):
        response = client.post("/plans", json={**PREFERENCES, "order": "name"})
        names = [i["exercise"]["name"] for i in response.json()["exercises"]]

        assert names == ["Squat", "Reverse Lunge", "Plank"]


class TestSessions:
    """Tests for playback session routes."""

    def test_start_session(self, client):
        plan = _create_plan(client)
        response = client.post("/sessions", json={"plan_id": plan["id"]})
        session = response.json()

        assert response.status_code == 200
        assert session["mode"] == "running"
        assert session["current_exercise_index"] == 0
        assert session["remaining_seconds"] == 45
        assert session["current_exercise"]["name"] == "Squat"

    def test_unknown_plan(self, client):
        response = client.post("/sessions", json={"plan_id": "missing"})

        assert response.status_code == 404

    def test_actions(self, client):
        plan = _create_plan(client)
        session_id = client.post("/sessions", json={"plan_id": plan["id"]}).json()["session_id"]

        assert client.post(f"/sessions/{session_id}/tick").json()["remaining_seconds"] == 44
        assert client.post(f"/sessions/{session_id}/pause").json()["mode"] == "paused"
        assert client.post(f"/sessions/{session_id}/tick").json()["remaining_seconds"] == 44
        assert client.post(f"/sessions/{session_id}/resume").json()["mode"] == "running"

        session = client.post(f"/sessions/{session_id}/next").json()
        assert session["display_index"] == "2 / 3"

        session = client.post(f"/sessions/{session_id}/previous").json()
        assert session["current_exercise_index"] == 0
        assert session["remaining_seconds"] == 45

    def test_unknown_action(self, client):
        plan = _create_plan(client)
        session_id = client.post("/sessions", json={"plan_id": plan["id"]}).json()["session_id"]

        assert client.post(f"/sessions/{session_id}/rewind").status_code == 400

    def test_completion_and_reset(self, client):
        session = _finished_session(client)

        assert session["mode"] == "completed"
        assert session["summary"]["exercises"][0]["completed"] is False

        session = client.post(f"/sessions/{session['session_id']}/reset").json()
        assert session["mode"] == "running"
        assert session["summary"] is None

    def test_end_session(self, client):
        plan = _create_plan(client)
        session_id = client.post("/sessions", json={"plan_id": plan["id"]}).json()["session_id"]

        assert client.delete(f"/sessions/{session_id}").json() == {"status": "ended"}
        assert client.get(f"/sessions/{session_id}").status_code == 404


class TestLogs:
    """Tests for workout log routes."""

    def test_guest_log_from_session(self, client):
        session = _finished_session(client)
        response = client.post(
            "/logs",
            json={"session_id": session["session_id"], "rating": 4, "feedback": {"0": "too_easy"}},
        )
        log = response.json()

        assert response.status_code == 200
        assert log["id"].startswith("local_")
        assert log["user_id"] == "guest"
        assert log["rating"] == 4
        assert log["exercises"][0]["feedback"] == "too_easy"
        assert log["settings"]["goal"] == "muscle_gain"

    def test_member_log_from_session(self, client):
        session = _finished_session(client)
        log = client.post(
            "/logs", params={"user_id": "user-1"}, json={"session_id": session["session_id"]}
        ).json()

        assert log["user_id"] == "user-1"
        assert client.get(f"/logs/{log['id']}", params={"user_id": "user-1"}).status_code == 200
        assert client.get(f"/logs/{log['id']}").status_code == 404

    def test_unfinished_session_rejected(self, client):
        plan = _create_plan(client)
        session_id = client.post("/sessions", json={"plan_id": plan["id"]}).json()["session_id"]
        response = client.post("/logs", json={"session_id": session_id})

        assert response.status_code == 409

    def test_create_from_full_payload(self, client):
        payload = {
            "started_at": "2024-03-01T08:00:00",
            "completed_at": "2024-03-01T08:30:00",
            "duration_minutes": 30,
            "settings": {
                "goal": "endurance",
                "difficulty": "beginner",
                "equipment": [],
                "planned_duration": 30,
            },
            "exercises": [
                {"name": "Squat", "planned_duration": 45, "actual_duration": 45, "completed": True}
            ],
        }
        response = client.post("/logs", json=payload)

        assert response.status_code == 200
        assert response.json()["duration_minutes"] == 30

    def test_rate_and_list(self, client):
        session = _finished_session(client)
        log = client.post("/logs", json={"session_id": session["session_id"]}).json()

        response = client.patch(f"/logs/{log['id']}", json={"rating": 5, "notes": "Great"})
        assert response.json()["rating"] == 5

        logs = client.get("/logs").json()["logs"]
        assert [item["id"] for item in logs] == [log["id"]]
        assert logs[0]["exercise_count"] == 3

        stats = client.get("/logs/stats").json()
        assert stats["total_workouts"] == 1
        assert stats["avg_rating"] == 5.0

    def test_rating_out_of_range(self, client):
        session = _finished_session(client)
        log = client.post("/logs", json={"session_id": session["session_id"]}).json()

        response = client.patch(f"/logs/{log['id']}", json={"rating": 9})
        assert response.status_code == 422

    def test_patch_unknown_log(self, client):
        response = client.patch("/logs/missing", json={"rating": 3})

        assert response.status_code == 404

    def test_non_integer_rating(self, client):
        session = _finished_session(client)
        log = client.post("/logs", json={"session_id": session["session_id"]}).json()

        response = client.patch(f"/logs/{log['id']}", json={"rating": "five"})

        assert response.status_code == 422
        assert "whole number" in response.json()["error"]

    def test_delete_log(self, client):
        session = _finished_session(client)
        log = client.post("/logs", json={"session_id": session["session_id"]}).json()

        assert client.delete(f"/logs/{log['id']}").json() == {"status": "deleted"}
        assert client.get(f"/logs/{log['id']}").status_code == 404
        assert client.delete(f"/logs/{log['id']}").status_code == 404

    def test_migrate_guest_logs(self, client):
        session = _finished_session(client)
        client.post("/logs", json={"session_id": session["session_id"], "rating": 3})

        response = client.post("/logs/migrate", params={"user_id": "user-1"})

        assert response.json() == {"migrated": 1}
        assert client.get("/logs").json()["logs"] == []
        member_logs = client.get("/logs", params={"user_id": "user-1"}).json()["logs"]
        assert len(member_logs) == 1
        assert member_logs[0]["rating"] == 3

    def test_migrate_requires_user(self, client):
        assert client.post("/logs/migrate").status_code == 422
