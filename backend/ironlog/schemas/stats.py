from datetime import date
from pydantic import BaseModel

class LevelRead(BaseModel):
    level: str
    tier: int

class StreakDayRead(BaseModel):
    day: date
    label: str
    trained: bool

class SummaryRead(BaseModel):
    profile_id: str
    username: str
    workout_count: int
    pr_count: int
    total_volume: float
    level: LevelRead
    streak: list[StreakDayRead]
    days_trained_this_week: int

class WeekVolumeRead(BaseModel):
    week_start: date
    volume: float
    label: str

class PRRead(BaseModel):
    exercise: str
    weight: float

class ProgressRead(BaseModel):
    exercise: str | None
    points: list[dict]

class CatalogEntryRead(BaseModel):
    name: str
    muscle: str

class ExerciseDetailRead(CatalogEntryRead):
    steps: list[str]
    tips: str
