from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import OperationalError

from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.template import ExerciseBlueprint, TemplateRecord
from ironlog.schemas.workout import WorkoutRecord


def broken_factory():
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_profile_is_created_from_settings(gateway):
    profile = gateway.get_user_profile()
    assert profile.id == "user_1"
    assert profile.username == "IRONUSER"
    assert profile.initials == "IR"
    assert gateway.get_user_profile().id == profile.id

def test_history_is_newest_first_and_paged(gateway):
    base = datetime(2026, 10, 1, 18, 0, tzinfo=timezone.utc)
    for i in range(3):
        assert gateway.append_workout(WorkoutRecord(id=f"w{i}", name=f"W{i}", date=base + timedelta(days=i)))
    assert [w.id for w in gateway.get_workout_history()] == ["w2", "w1", "w0"]
    assert [w.id for w in gateway.get_workout_history(limit=1, offset=1)] == ["w1"]
    assert gateway.get_workout("w0").date == base
    assert gateway.get_workout("missing") is None

def test_pr_table_replace(gateway):
    assert gateway.get_pr_table() == {}
    assert gateway.save_pr_table({"squat": 140.0, "bench press": 100.0})
    assert gateway.save_pr_table({"squat": 150.0})
    assert gateway.get_pr_table() == {"squat": 150.0}

def test_template_upsert_and_delete(gateway):
    tpl = TemplateRecord(id="t1", name="Pull", exercises=[ExerciseBlueprint(name="Row")])
    assert gateway.upsert_template(tpl)
    assert gateway.upsert_template(tpl.model_copy(update={"rest_seconds": 60}))
    stored = gateway.get_templates()
    assert len(stored) == 1 and stored[0].rest_seconds == 60
    assert stored[0].exercises[0].name == "Row"
    assert gateway.delete_template("t1")
    assert gateway.get_template("t1") is None


# --- storage failures ---
def test_reads_fall_back_to_defaults():
    broken = SqlGateway(broken_factory)
    assert broken.get_workout_history() == []
    assert broken.get_pr_table() == {}
    assert broken.get_templates() == []
    assert broken.get_posts() == []
    assert broken.get_post("p1") is None
    assert broken.get_template("t1") is None
    profile = broken.get_user_profile()
    assert profile.username == "IRONUSER"
    assert profile.initials == "IR"

def test_writes_report_failure():
    broken = SqlGateway(broken_factory)
    now = datetime(2026, 10, 14, tzinfo=timezone.utc)
    assert broken.append_workout(WorkoutRecord(id="w", name="W", date=now)) is False
    assert broken.save_pr_table({"squat": 100}) is False
    assert broken.upsert_template(TemplateRecord(id="t", name="T")) is False

def test_duplicate_id_is_reported_not_raised(gateway):
    now = datetime(2026, 10, 14, tzinfo=timezone.utc)
    record = WorkoutRecord(id="dup", name="W", date=now)
    assert gateway.append_workout(record)
    assert gateway.append_workout(record) is False
    assert len(gateway.get_workout_history()) == 1
