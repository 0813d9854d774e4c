from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from ironlog.schemas.enums import BarbellVariant, EquipmentType, SetType

NonNegFloat = Annotated[float, Field(ge=0)]
NonNegInt = Annotated[int, Field(ge=0)]

class Equipment(BaseModel):
    type: EquipmentType = EquipmentType.other
    barbell_variant: BarbellVariant | None = None
    barbell_weight: NonNegFloat = 0.0

    model_config = ConfigDict(frozen=True)

    @property
    def fixed_load(self) -> float:
        """Weight the equipment adds on top of the loaded plates."""
        if self.type is EquipmentType.barbell:
            return self.barbell_weight
        return 0.0

class SetRecord(BaseModel):
    id: str
    weight: float = 0.0
    real_weight: float = 0.0
    reps: int = 0
    duration: int = 0
    set_type: SetType = SetType.effective
    equipment_type: EquipmentType = EquipmentType.other

    model_config = ConfigDict(frozen=True)

class CompletedExercise(BaseModel):
    id: str
    name: str
    muscle: str = "General"
    equipment: Equipment = Field(default_factory=Equipment)
    sets: tuple[SetRecord, ...] = ()

    model_config = ConfigDict(frozen=True)

class NewPR(BaseModel):
    exercise: str
    weight: float

    model_config = ConfigDict(frozen=True)

class WorkoutRecord(BaseModel):
    id: str
    name: str
    type: str = ""
    date: datetime
    duration: NonNegInt = 0
    exercises: tuple[CompletedExercise, ...] = ()
    total_volume: float = 0.0
    effective_volume: float = 0.0
    total_sets: NonNegInt = 0
    exercise_count: NonNegInt = 0
    series_time: NonNegInt = 0
    rest_time: NonNegInt = 0
    skipped_rest_time: NonNegInt = 0
    companion_wait_time: NonNegInt = 0
    prs: tuple[NewPR, ...] = ()

    model_config = ConfigDict(frozen=True, from_attributes=True)
