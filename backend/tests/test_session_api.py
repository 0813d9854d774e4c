import pytest
from fastapi.testclient import TestClient

from conftest import FakeClock
from ironlog.deps.session import build_session
from ironlog.main import app

client = TestClient(app)


@pytest.fixture
def api_clock():
    clock = FakeClock()
    original = app.state.workout_session
    app.state.workout_session = build_session(clock)
    yield clock
    app.state.workout_session = original


def start_bench(clock, weight=80):
    r = client.post("/session/start", json={"name": "Push", "workout_type": "Push"})
    assert r.status_code == 201, r.text
    assert r.json()["state"] == "configuring"
    r = client.post("/session/exercise", json={
        "name": "Bench Press", "muscle": "Chest", "equipment": {"type": "barbell"},
    })
    assert r.status_code == 201, r.text
    r = client.post("/session/sets/start")
    assert r.json()["state"] == "set_running"
    clock.advance(40)
    r = client.post("/session/sets/finish", json={"weight": weight, "reps": 5})
    assert r.status_code == 201, r.text
    return r.json()


def test_live_flow_end_to_end(api_clock):
    s = start_bench(api_clock)
    assert s["real_weight"] == 100
    assert s["duration"] == 40

    snap = client.get("/session").json()
    assert snap["state"] == "resting"
    assert snap["rest_remaining_seconds"] == 90
    assert snap["current_volume"] == 500

    # rest runs out between requests; the next read picks it up
    api_clock.advance(95)
    snap = client.get("/session").json()
    assert snap["state"] == "set_running"
    assert snap["total_rest_seconds"] == 90
    assert snap["elapsed_set_seconds"] == 5

    r = client.post("/session/finish")
    assert r.status_code == 200, r.text
    out = r.json()
    assert out["workout"]["total_volume"] == 500
    assert out["workout"]["total_sets"] == 1
    assert out["prs"] == [{"exercise": "Bench Press", "weight": 100}]
    assert client.get("/session").json()["state"] == "idle"

    workouts = client.get("/workouts").json()
    assert [w["id"] for w in workouts] == [out["workout"]["id"]]
    assert client.get(f"/workouts/{out['workout']['id']}").status_code == 200

    posts = client.get("/posts").json()
    assert len(posts) == 1 and posts[0]["session_name"] == "Push"

def test_empty_set_is_409(api_clock):
    client.post("/session/start", json={})
    client.post("/session/exercise", json={"name": "Squat"})
    client.post("/session/sets/start")
    r = client.post("/session/sets/finish", json={"weight": 0, "reps": 0})
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "empty_set"
    assert client.get("/session").json()["state"] == "set_running"

def test_negative_weight_is_422(api_clock):
    start_bench(api_clock)
    client.post("/session/sets/start")
    r = client.post("/session/sets/finish", json={"weight": -5, "reps": 5})
    assert r.status_code == 422

def test_finish_without_exercises_is_409(api_clock):
    client.post("/session/start", json={})
    r = client.post("/session/finish")
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "no_exercises"

def test_actions_before_start_are_409(api_clock):
    r = client.post("/session/exercise", json={"name": "Squat"})
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "invalid_state"

def test_blank_exercise_name_is_422(api_clock):
    client.post("/session/start", json={})
    r = client.post("/session/exercise", json={"name": "   "})
    assert r.status_code == 422

def test_unknown_template_is_404(api_clock):
    r = client.post("/session/start", json={"template_id": "missing"})
    assert r.status_code == 404

def test_skip_rest_and_pause_endpoints(api_clock):
    start_bench(api_clock)
    api_clock.advance(30)
    snap = client.post("/session/rest/skip").json()
    assert snap["total_rest_seconds"] == 30
    assert snap["total_skipped_rest_seconds"] == 60

    r = client.post("/session/pause/workout")
    assert r.status_code == 409
    assert client.post("/session/pause/set").json()["state"] == "set_running"
    assert client.post("/session/pause/lunch").status_code == 422

def test_companion_toggle(api_clock):
    start_bench(api_clock)
    snap = client.post("/session/companion").json()
    assert snap["companion_active"] is True
    assert snap["workout_paused"] is True
    api_clock.advance(20)
    snap = client.post("/session/companion").json()
    assert snap["companion_active"] is False
    assert snap["companion_wait_seconds"] == 20

def test_next_weight_and_close(api_clock):
    start_bench(api_clock)
    snap = client.post("/session/next-weight", json={"delta": 5}).json()
    assert snap["next_weight"] == 85
    r = client.post("/session/exercise/close")
    assert r.status_code == 200
    assert r.json()["name"] == "Bench Press"
    assert client.post("/session/exercise/close").status_code == 409

def test_cancel_discards_session(api_clock):
    start_bench(api_clock)
    assert client.post("/session/cancel").json()["state"] == "idle"
    assert client.get("/workouts").json() == []


# --- templates ---
def test_template_from_session_roundtrip(api_clock):
    start_bench(api_clock)
    r = client.post("/templates", json={"name": "Push A"})
    assert r.status_code == 201, r.text
    tpl = r.json()
    assert tpl["exercises"][0]["estimated_weight"] == 80

    listed = client.get("/templates").json()
    assert [t["name"] for t in listed] == ["Push A"]

    client.post("/session/cancel")
    r = client.post("/session/start", json={"template_id": tpl["id"]})
    assert r.status_code == 201
    assert r.json()["planned_exercises"] == ["Bench Press"]

    assert client.delete(f"/templates/{tpl['id']}").status_code == 204
    assert client.get("/templates").json() == []

def test_template_needs_exercises(api_clock):
    client.post("/session/start", json={})
    r = client.post("/templates", json={"name": "Empty"})
    assert r.status_code == 409

def test_plan_mode_finish_returns_template(api_clock):
    client.post("/session/start", json={"mode": "plan", "name": "Legs"})
    client.post("/session/exercise", json={"name": "Squat", "muscle": "Legs"})
    client.post("/session/sets/start")
    client.post("/session/sets/finish", json={"weight": 100, "reps": 5})
    out = client.post("/session/finish").json()
    assert out["workout"] is None
    assert out["template"]["name"] == "Legs"
    assert client.get("/workouts").json() == []


# --- feed ---
def test_like_and_comment(api_clock):
    start_bench(api_clock)
    client.post("/session/finish")
    post_id = client.get("/posts").json()[0]["id"]

    assert client.post(f"/posts/{post_id}/like").json()["likes"] == 1
    assert client.post(f"/posts/{post_id}/like").json()["likes"] == 0

    r = client.post(f"/posts/{post_id}/comments", json={"text": "  strong!  "})
    assert r.status_code == 201
    comments = client.get(f"/posts/{post_id}/comments").json()
    assert [c["text"] for c in comments] == ["strong!"]
    assert comments[0]["username"] == "IRONUSER"

    assert client.post(f"/posts/{post_id}/comments", json={"text": "   "}).status_code == 422
    assert client.post("/posts/missing/like").status_code == 404
    assert client.get("/posts/missing/comments").status_code == 404


# --- stats ---
def test_stats_after_one_workout(api_clock):
    start_bench(api_clock)
    client.post("/session/finish")

    summary = client.get("/stats/summary", params={"today": "2026-10-14"}).json()
    assert summary["workout_count"] == 1
    assert summary["pr_count"] == 1
    assert summary["level"] == {"level": "BEGINNER", "tier": 1}
    assert len(summary["streak"]) == 7
    assert summary["days_trained_this_week"] == 1

    prs = client.get("/stats/prs").json()
    assert prs == [{"exercise": "bench press", "weight": 100}]

    volume = client.get("/stats/volume", params={"today": "2026-10-14", "weeks": 2}).json()
    assert [v["volume"] for v in volume] == [0, 500]
    assert volume[-1]["label"] == "500 kg"

    progress = client.get("/stats/progress").json()
    assert progress["exercise"] == "Bench Press"
    assert [p["weight"] for p in progress["points"]] == [100]

def test_empty_stats(api_clock):
    summary = client.get("/stats/summary").json()
    assert summary["workout_count"] == 0
    assert client.get("/stats/progress").json() == {"exercise": None, "points": []}

def test_exercise_search():
    r = client.get("/exercises", params={"q": "bench"})
    assert r.status_code == 200
    assert {"name": "Bench Press", "muscle": "Chest"} in r.json()

def test_workout_types():
    types = client.get("/workout-types").json()
    assert "Push Day" in types

def test_snapshot_clock_labels(api_clock):
    start_bench(api_clock)
    api_clock.advance(25)
    clocks = client.get("/session").json()["clocks"]
    assert clocks == {"workout": "00:25", "set": "0:00", "rest": "1:05"}

def test_feed_labels(api_clock):
    start_bench(api_clock)
    api_clock.advance(40)
    client.post("/session/finish")
    post = client.get("/posts").json()[0]
    assert post["volume_label"] == "500 kg"
    assert post["duration_label"] == "0m 40s"
    assert post["time_ago"]

def test_session_and_lock_are_created_with_the_app():
    session, lock = app.state.workout_session, app.state.session_lock
    assert session is not None and lock is not None
    client.post("/session/start", json={"name": "Pull"})
    assert client.get("/session").json()["workout_name"] == "Pull"
    client.post("/session/cancel")
    assert app.state.workout_session is session
    assert app.state.session_lock is lock

def test_exercise_detail():
    r = client.get("/exercises/bench press")
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Bench Press" and body["muscle"] == "Chest"
    assert len(body["steps"]) == 4
    assert "shoulder blades" in body["tips"]
    assert client.get("/exercises/Plank").json()["steps"][0].startswith("Set up")
    assert client.get("/exercises/Zercher Squat").status_code == 404
