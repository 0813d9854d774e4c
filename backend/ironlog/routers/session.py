from fastapi import APIRouter, Depends, HTTPException, status

from ironlog.deps.session import get_gateway, get_workout_session, rejection
from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.enums import PauseDomain
from ironlog.schemas.session import (
    BeginExerciseIn,
    ConfigureSessionIn,
    FinishSetIn,
    FinishWorkoutOut,
    NextWeightIn,
    SessionSnapshot,
    StartSessionIn,
)
from ironlog.schemas.workout import CompletedExercise, SetRecord
from ironlog.services.errors import WorkoutRejected
from ironlog.services.finalizer import finish_workout
from ironlog.services.session import WorkoutSession

router = APIRouter(prefix="/session", tags=["session"])

@router.get("", response_model=SessionSnapshot)
def get_session(session: WorkoutSession = Depends(get_workout_session)):
    return session.snapshot()

@router.post("/start", response_model=SessionSnapshot, status_code=status.HTTP_201_CREATED)
def start_session(
    payload: StartSessionIn,
    session: WorkoutSession = Depends(get_workout_session),
    gateway: SqlGateway = Depends(get_gateway),
):
    template = None
    if payload.template_id:
        template = gateway.get_template(payload.template_id)
        if template is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    session.start(
        payload.mode,
        name=payload.name,
        workout_type=payload.workout_type,
        rest_seconds=payload.rest_seconds,
        template=template,
        known_prs=gateway.get_pr_table(),
    )
    return session.snapshot()

@router.post("/configure", response_model=SessionSnapshot)
def configure_session(payload: ConfigureSessionIn, session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.configure(name=payload.name, workout_type=payload.workout_type, rest_seconds=payload.rest_seconds)
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/proceed", response_model=SessionSnapshot)
def proceed(session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.proceed()
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/exercise", response_model=SessionSnapshot, status_code=status.HTTP_201_CREATED)
def begin_exercise(payload: BeginExerciseIn, session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.begin_exercise(payload.name, payload.muscle, payload.equipment)
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/sets/start", response_model=SessionSnapshot)
def start_set(session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.start_set()
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/sets/finish", response_model=SetRecord, status_code=status.HTTP_201_CREATED)
def finish_set(payload: FinishSetIn, session: WorkoutSession = Depends(get_workout_session)):
    try:
        return session.finish_set(payload.weight, payload.reps, payload.set_type)
    except WorkoutRejected as e:
        raise rejection(e)

@router.post("/rest/skip", response_model=SessionSnapshot)
def skip_rest(session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.skip_rest()
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/pause/{domain}", response_model=SessionSnapshot)
def pause(domain: PauseDomain, session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.pause(domain)
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/resume/{domain}", response_model=SessionSnapshot)
def resume(domain: PauseDomain, session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.resume(domain)
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/companion", response_model=SessionSnapshot)
def toggle_companion(session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.toggle_companion()
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/next-weight", response_model=SessionSnapshot)
def adjust_next_weight(payload: NextWeightIn, session: WorkoutSession = Depends(get_workout_session)):
    try:
        session.adjust_next_weight(payload.delta)
    except WorkoutRejected as e:
        raise rejection(e)
    return session.snapshot()

@router.post("/exercise/close", response_model=CompletedExercise)
def close_exercise(session: WorkoutSession = Depends(get_workout_session)):
    try:
        return session.close_exercise()
    except WorkoutRejected as e:
        raise rejection(e)

@router.post("/finish", response_model=FinishWorkoutOut)
def finish(
    session: WorkoutSession = Depends(get_workout_session),
    gateway: SqlGateway = Depends(get_gateway),
):
    try:
        return finish_workout(session, gateway)
    except WorkoutRejected as e:
        raise rejection(e)

@router.post("/cancel", response_model=SessionSnapshot)
def cancel(session: WorkoutSession = Depends(get_workout_session)):
    session.cancel()
    return session.snapshot()
