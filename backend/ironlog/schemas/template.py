from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ironlog.schemas.workout import Equipment

TemplateName = Annotated[str, Field(max_length=120)]

class ExerciseBlueprint(BaseModel):
    name: str
    muscle: str = "General"
    equipment: Equipment = Field(default_factory=Equipment)
    estimated_sets: int = Field(default=3, ge=0)
    estimated_weight: float = Field(default=0.0, ge=0)

class TemplateRecord(BaseModel):
    id: str
    name: str
    type: str = ""
    rest_seconds: int = 90
    exercises: list[ExerciseBlueprint] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

class TemplateCreate(BaseModel):
    name: TemplateName

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2
