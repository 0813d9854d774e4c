from __future__ import annotations
import logging

from ironlog.ids import new_id
from ironlog.schemas.enums import SessionMode, SetType
from ironlog.schemas.post import PostRecord
from ironlog.schemas.session import FinishWorkoutOut
from ironlog.schemas.template import ExerciseBlueprint, TemplateRecord
from ironlog.schemas.workout import CompletedExercise, WorkoutRecord
from ironlog.services import errors
from ironlog.services.errors import WorkoutRejected
from ironlog.services.gateway import Gateway
from ironlog.services.metrics import (
    compute_effective_volume,
    compute_volume,
    update_personal_records,
)
from ironlog.services.session import DEFAULT_WORKOUT_NAME, WorkoutSession, transition

log = logging.getLogger(__name__)


def _blueprint(ex: CompletedExercise) -> ExerciseBlueprint:
    working = [s for s in ex.sets if s.set_type is SetType.effective] or list(ex.sets)
    return ExerciseBlueprint(
        name=ex.name,
        muscle=ex.muscle,
        equipment=ex.equipment,
        estimated_sets=len(ex.sets),
        estimated_weight=max((s.weight for s in working), default=0.0),
    )


def template_from_session(
    session: WorkoutSession,
    name: str | None = None,
    *,
    template_id: str | None = None,
) -> TemplateRecord:
    """Snapshot the session's exercises (open one included) as a reusable plan."""
    exercises = list(session.completed_exercises)
    if session.current_exercise is not None and session.current_exercise.sets:
        exercises.append(session.current_exercise.freeze())
    return TemplateRecord(
        id=template_id or new_id(),
        name=name or session.workout_name or DEFAULT_WORKOUT_NAME,
        type=session.workout_type,
        rest_seconds=session.rest_seconds,
        exercises=[_blueprint(ex) for ex in exercises],
    )


def _matching_template(gateway: Gateway, session: WorkoutSession) -> TemplateRecord | None:
    templates = gateway.get_templates()
    if session.source_template_id:
        for t in templates:
            if t.id == session.source_template_id:
                return t
    wanted = (session.workout_name or DEFAULT_WORKOUT_NAME).strip().lower()
    for t in templates:
        if t.name.strip().lower() == wanted:
            return t
    return None


@transition
def finish_workout(session: WorkoutSession, gateway: Gateway) -> FinishWorkoutOut:
    """
    Close out the session and persist what it produced.

    Live sessions become a workout record plus a feed post and may raise PRs.
    Plan sessions are written back into their template instead. The session
    is reset to idle afterwards either way.
    """
    session.tick()
    if session.current_exercise is not None and session.current_exercise.sets:
        session.close_exercise()

    if not session.completed_exercises:
        message = "Complete at least one exercise before finishing"
        session.events.emit("rejected", code=errors.NO_EXERCISES, message=message)
        raise WorkoutRejected(errors.NO_EXERCISES, message)

    if session.mode is SessionMode.plan:
        existing = _matching_template(gateway, session)
        template = template_from_session(
            session,
            existing.name if existing else None,
            template_id=existing.id if existing else None,
        )
        if not gateway.upsert_template(template):
            log.warning("template %s could not be saved", template.id)
        session.reset()
        return FinishWorkoutOut(template=template)

    session.complete()
    exercises = list(session.completed_exercises)
    all_sets = [s for ex in exercises for s in ex.sets]
    total_volume = sum(compute_volume(ex.sets) for ex in exercises)

    pr_table = gateway.get_pr_table()
    new_prs = update_personal_records(exercises, pr_table)
    if new_prs and not gateway.save_pr_table(pr_table):
        log.warning("PR table could not be saved (%d new PRs)", len(new_prs))

    workout = WorkoutRecord(
        id=new_id(),
        name=session.workout_name or DEFAULT_WORKOUT_NAME,
        type=session.workout_type,
        date=session.clock.wall(),
        duration=session.elapsed_workout_seconds(),
        exercises=tuple(exercises),
        total_volume=total_volume,
        effective_volume=compute_effective_volume(all_sets),
        total_sets=len(all_sets),
        exercise_count=len(exercises),
        series_time=session.total_series_seconds,
        rest_time=session.total_rest_seconds,
        skipped_rest_time=session.total_skipped_rest_seconds,
        companion_wait_time=session.companion_wait_seconds(),
        prs=tuple(new_prs),
    )
    gateway.append_workout(workout)

    profile = gateway.get_user_profile()
    post = PostRecord(
        id=new_id(),
        user_id=profile.id,
        username=profile.username,
        initials=profile.initials,
        session_name=workout.name,
        type=workout.type,
        total_volume=workout.total_volume,
        total_sets=workout.total_sets,
        duration=workout.duration,
        exercise_count=workout.exercise_count,
        exercises=workout.exercises,
        prs=workout.prs,
        created_at=workout.date,
    )
    gateway.append_post(post)

    log.info(
        "workout %s saved: %d exercises, %d sets, %.1f kg, %d new PRs",
        workout.id, workout.exercise_count, workout.total_sets, workout.total_volume, len(new_prs),
    )
    session.reset()
    return FinishWorkoutOut(workout=workout, post=post, prs=list(new_prs))
