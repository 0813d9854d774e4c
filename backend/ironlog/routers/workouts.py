from fastapi import APIRouter, Depends, HTTPException, Query, status

from ironlog.deps.session import get_gateway
from ironlog.repositories.gateway import SqlGateway
from ironlog.schemas.workout import WorkoutRecord

router = APIRouter(prefix="/workouts", tags=["workouts"])

@router.get("", response_model=list[WorkoutRecord])
def list_workouts(
    gateway: SqlGateway = Depends(get_gateway),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return gateway.get_workout_history(limit=limit, offset=offset)

@router.get("/{workout_id}", response_model=WorkoutRecord)
def get_workout(workout_id: str, gateway: SqlGateway = Depends(get_gateway)):
    workout = gateway.get_workout(workout_id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout
