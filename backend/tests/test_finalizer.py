from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.enums import EquipmentType, SessionState
from ironlog.schemas.workout import Equipment
from ironlog.services import errors
from ironlog.services.errors import WorkoutRejected
from ironlog.services.finalizer import finish_workout, template_from_session


def broken_factory():
    raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))


def bench_workout(session, clock, weight=80):
    session.start(name="Push", workout_type="Push")
    session.begin_exercise("Bench Press", "Chest", Equipment(type=EquipmentType.barbell))
    session.start_set()
    clock.advance(45)
    session.finish_set(weight, 5)
    clock.advance(30)


def test_live_workout_is_saved_with_totals(session, clock, gateway):
    bench_workout(session, clock)
    out = finish_workout(session, gateway)

    w = out.workout
    assert w.name == "Push" and w.type == "Push"
    assert w.total_volume == 500
    assert w.effective_volume == 500
    assert w.total_sets == 1
    assert w.exercise_count == 1
    # the workout clock only starts once the first set is recorded
    assert w.duration == 30
    assert w.series_time == 45
    # leaving rest to finish counts the remainder as skipped
    assert (w.rest_time, w.skipped_rest_time) == (30, 60)
    assert w.date == datetime(2026, 10, 14, 18, 1, 15, tzinfo=timezone.utc)
    assert [(p.exercise, p.weight) for p in out.prs] == [("Bench Press", 100)]

    assert gateway.get_pr_table() == {"bench press": 100}
    history = gateway.get_workout_history()
    assert [h.id for h in history] == [w.id]
    assert history[0].exercises[0].sets[0].real_weight == 100
    assert session.state is SessionState.idle

def test_finish_publishes_post(session, clock, gateway):
    bench_workout(session, clock)
    out = finish_workout(session, gateway)
    posts = gateway.get_posts()
    assert len(posts) == 1
    post = posts[0]
    assert post.id == out.post.id
    assert post.username == "IRONUSER"
    assert post.initials == "IR"
    assert post.session_name == "Push"
    assert post.total_volume == 500
    assert post.likes == 0 and post.comments == []
    assert post.created_at == out.workout.date

def test_lighter_workout_keeps_existing_pr(session, clock, gateway):
    bench_workout(session, clock)
    finish_workout(session, gateway)
    bench_workout(session, clock, weight=60)
    out = finish_workout(session, gateway)
    assert out.prs == []
    assert gateway.get_pr_table() == {"bench press": 100}
    assert len(gateway.get_workout_history()) == 2

def test_finish_without_exercises_is_rejected(session, gateway):
    seen = []
    session.subscribe(seen.append)
    session.start()
    session.begin_exercise("Squat")
    with pytest.raises(WorkoutRejected) as exc:
        finish_workout(session, gateway)
    assert exc.value.code == errors.NO_EXERCISES
    assert seen[-1].kind == "rejected"
    assert session.state is SessionState.exercise_preview
    assert gateway.get_workout_history() == []

def test_unfinished_set_is_dropped(session, clock, gateway):
    bench_workout(session, clock)
    session.skip_rest()
    clock.advance(20)
    out = finish_workout(session, gateway)
    assert out.workout.total_sets == 1

def test_finish_survives_storage_failure(session, clock):
    broken = SqlGateway(broken_factory)
    bench_workout(session, clock)
    out = finish_workout(session, broken)
    assert out.workout.total_volume == 500
    assert out.post.username == "IRONUSER"
    assert [p.weight for p in out.prs] == [100]
    assert session.state is SessionState.idle


# --- plan mode ---
def plan_legs(session, name="Legs"):
    session.start("plan", name=name, workout_type="Legs")
    session.begin_exercise("Squat", "Legs", Equipment(type=EquipmentType.barbell))
    session.start_set()
    session.finish_set(100, 5)
    session.finish_set(110, 3)

def test_plan_mode_saves_template_not_workout(session, gateway):
    plan_legs(session)
    out = finish_workout(session, gateway)
    assert out.workout is None and out.post is None
    templates = gateway.get_templates()
    assert [t.name for t in templates] == ["Legs"]
    bp = templates[0].exercises[0]
    assert bp.name == "Squat"
    assert bp.estimated_sets == 2
    assert bp.estimated_weight == 110
    assert gateway.get_workout_history() == []
    assert gateway.get_pr_table() == {}

def test_plan_mode_updates_template_with_same_name(session, gateway):
    plan_legs(session)
    first = finish_workout(session, gateway).template
    plan_legs(session, name="  legs ")
    second = finish_workout(session, gateway).template
    assert second.id == first.id
    assert second.name == "Legs"
    assert len(gateway.get_templates()) == 1

def test_plan_mode_from_template_keeps_its_id(session, gateway):
    plan_legs(session)
    saved = finish_workout(session, gateway).template
    session.start("plan", name="Leg Day v2", template=saved)
    session.begin_exercise("Squat")
    session.start_set()
    session.finish_set(120, 3)
    out = finish_workout(session, gateway)
    assert out.template.id == saved.id
    assert gateway.get_template(saved.id).exercises[0].estimated_weight == 120

def test_template_from_session_includes_open_exercise(session, clock):
    bench_workout(session, clock)
    tpl = template_from_session(session, "Push A")
    assert tpl.name == "Push A"
    assert tpl.rest_seconds == 90
    assert [bp.name for bp in tpl.exercises] == ["Bench Press"]
    assert tpl.exercises[0].equipment.type is EquipmentType.barbell
