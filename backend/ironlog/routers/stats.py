from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ironlog.deps.session import get_gateway
from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.stats import (
    CatalogEntryRead,
    ExerciseDetailRead,
    LevelRead,
    PRRead,
    ProgressRead,
    StreakDayRead,
    SummaryRead,
    WeekVolumeRead,
)
from ironlog.services import stats
from ironlog.services.catalog import WORKOUT_TYPES, exercise_guide, find_exercise, search_exercises
from ironlog.services.formatters import format_volume
from ironlog.services.metrics import compute_level, compute_weekly_streak

router = APIRouter(tags=["stats"])

@router.get("/stats/summary", response_model=SummaryRead)
def summary(gateway: SqlGateway = Depends(get_gateway), today: date | None = None):
    today = today or date.today()
    me = gateway.get_user_profile()
    workouts = gateway.get_workout_history()
    prs = gateway.get_pr_table()
    streak = compute_weekly_streak(workouts, today)
    return SummaryRead(
        profile_id=me.id,
        username=me.username,
        workout_count=len(workouts),
        pr_count=len(prs),
        total_volume=sum(w.total_volume for w in workouts),
        level=LevelRead(**asdict(compute_level(len(workouts)))),
        streak=[StreakDayRead(**asdict(d)) for d in streak],
        days_trained_this_week=sum(1 for d in streak if d.trained),
    )

@router.get("/stats/volume", response_model=list[WeekVolumeRead])
def weekly_volume(
    gateway: SqlGateway = Depends(get_gateway),
    weeks: int = Query(6, ge=1, le=52),
    today: date | None = None,
):
    rows = stats.weekly_volume(gateway.get_workout_history(), today or date.today(), weeks)
    return [WeekVolumeRead(week_start=r.week_start, volume=r.volume, label=format_volume(r.volume)) for r in rows]

@router.get("/stats/frequency", response_model=list[bool])
def frequency(
    gateway: SqlGateway = Depends(get_gateway),
    weeks: int = Query(4, ge=1, le=52),
    today: date | None = None,
):
    return stats.frequency_grid(gateway.get_workout_history(), today or date.today(), weeks)

@router.get("/stats/prs", response_model=list[PRRead])
def personal_records(gateway: SqlGateway = Depends(get_gateway), limit: int = Query(8, ge=1, le=100)):
    return [PRRead(exercise=name, weight=w) for name, w in stats.top_prs(gateway.get_pr_table(), limit)]

@router.get("/stats/progress", response_model=ProgressRead)
def progress(
    gateway: SqlGateway = Depends(get_gateway),
    exercise: str | None = None,
    limit: int = Query(10, ge=1, le=100),
):
    workouts = gateway.get_workout_history()
    name = exercise or stats.top_exercise(workouts)
    if not name:
        return ProgressRead(exercise=None, points=[])
    points = stats.exercise_progress(workouts, name, limit)
    return ProgressRead(exercise=name, points=[asdict(p) for p in points])

@router.get("/exercises", response_model=list[CatalogEntryRead])
def exercises(q: str = "", limit: int = Query(12, ge=1, le=50)):
    return [CatalogEntryRead(name=e.name, muscle=e.muscle) for e in search_exercises(q, limit)]

@router.get("/exercises/{name}", response_model=ExerciseDetailRead)
def exercise_detail(name: str):
    entry = find_exercise(name)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not in catalog")
    steps, tips = exercise_guide(entry)
    return ExerciseDetailRead(name=entry.name, muscle=entry.muscle, steps=list(steps), tips=tips)

@router.get("/workout-types", response_model=list[str])
def workout_types():
    return list(WORKOUT_TYPES)
