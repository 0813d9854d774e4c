from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from ironlog.schemas.workout import CompletedExercise, NewPR

CommentText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]

class CommentCreate(BaseModel):
    text: CommentText

class CommentRead(BaseModel):
    username: str
    initials: str = ""
    text: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

class PostRecord(BaseModel):
    id: str
    user_id: str
    username: str
    initials: str = ""
    session_name: str
    type: str = ""
    total_volume: float = 0.0
    total_sets: int = 0
    duration: int = 0
    exercise_count: int = 0
    exercises: tuple[CompletedExercise, ...] = ()
    prs: tuple[NewPR, ...] = ()
    likes: int = 0
    liked_by: list[str] = Field(default_factory=list)
    comments: list[CommentRead] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class PostRead(PostRecord):
    """Feed entry with display labels."""
    time_ago: str
    volume_label: str
    duration_label: str
