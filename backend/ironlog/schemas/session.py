from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints, field_validator

from ironlog.schemas.enums import SessionMode, SessionState, SetType
from ironlog.schemas.post import PostRecord
from ironlog.schemas.template import TemplateRecord
from ironlog.schemas.workout import CompletedExercise, Equipment, NewPR, SetRecord, WorkoutRecord

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=120)]
RestSeconds = Annotated[int, Field(ge=0, le=1800)]

class StartSessionIn(BaseModel):
    mode: SessionMode = SessionMode.live
    name: NameStr | None = None
    workout_type: NameStr | None = None
    rest_seconds: RestSeconds | None = None
    template_id: str | None = None

class ConfigureSessionIn(BaseModel):
    name: NameStr | None = None
    workout_type: NameStr | None = None
    rest_seconds: RestSeconds | None = None

class BeginExerciseIn(BaseModel):
    name: NameStr
    muscle: NameStr | None = None
    equipment: Equipment | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("exercise cannot be blank")
        return v

class FinishSetIn(BaseModel):
    weight: float = Field(default=0, ge=0, le=1000)
    reps: int = Field(default=0, ge=0, le=1000)
    set_type: SetType = SetType.effective

class NextWeightIn(BaseModel):
    delta: float = 2.5

class OpenExercise(BaseModel):
    id: str
    name: str
    muscle: str
    equipment: Equipment
    sets: list[SetRecord]

class SessionClocks(BaseModel):
    # display strings for the three running timers
    workout: str
    set: str
    rest: str

class SessionSnapshot(BaseModel):
    state: SessionState
    mode: SessionMode
    workout_name: str
    workout_type: str
    rest_seconds: int
    elapsed_workout_seconds: int
    elapsed_set_seconds: int
    rest_remaining_seconds: int
    total_series_seconds: int
    total_rest_seconds: int
    total_skipped_rest_seconds: int
    companion_active: bool
    companion_wait_seconds: int
    workout_paused: bool
    next_weight: float
    current_volume: float
    clocks: SessionClocks
    current_exercise: OpenExercise | None = None
    completed_exercises: list[CompletedExercise]
    planned_exercises: list[str]

class FinishWorkoutOut(BaseModel):
    workout: WorkoutRecord | None = None
    post: PostRecord | None = None
    prs: list[NewPR] = Field(default_factory=list)
    template: TemplateRecord | None = None
