# ironlog/deps/session.py
from __future__ import annotations
from collections.abc import Iterator

from fastapi import HTTPException, Request, status

from ironlog.repositories.gateway import SqlGateway
from ironlog.services.errors import WorkoutRejected
from ironlog.services.session import WorkoutSession
from ironlog.settings import get_settings


def build_session(clock=None) -> WorkoutSession:
    s = get_settings()
    return WorkoutSession(
        clock,
        default_rest_seconds=s.DEFAULT_REST_SECONDS,
        standard_barbell_kg=s.STANDARD_BARBELL_KG,
        plan_rest_policy=s.PLAN_REST_POLICY,
    )


def get_gateway(request: Request) -> SqlGateway:
    return request.app.state.gateway


def get_workout_session(request: Request) -> Iterator[WorkoutSession]:
    """
    The app's single live session, held for the whole request.

    Sync endpoints run in a thread pool, so handlers take the lock to keep
    each mutation atomic. Both are created once in ``ironlog.main``.
    """
    state = request.app.state
    with state.session_lock:
        session = state.workout_session
        session.tick()
        yield session


def rejection(exc: WorkoutRejected) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.as_detail())
