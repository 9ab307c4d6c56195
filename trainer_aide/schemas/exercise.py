"""Exercise library schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from trainer_aide.core.enums import ExerciseLevel


class ExerciseBase(BaseModel):
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9][a-z0-9_-]*$")
    name: str = Field(..., min_length=1, max_length=255)
    exercise_type: str = Field(default="resistance", max_length=32)
    anatomical_category: str = Field(default="", max_length=64)
    movement_pattern: str | None = Field(None, max_length=32)
    plane_of_motion: str | None = Field(None, max_length=32)
    force: str | None = Field(None, max_length=16)
    mechanic: str | None = Field(None, max_length=16)
    is_unilateral: bool = False
    is_bodyweight: bool = False
    level: ExerciseLevel = ExerciseLevel.BEGINNER
    equipment: str | None = Field(None, max_length=64)
    primary_muscles: list[str] = []
    secondary_muscles: list[str] = []
    instructions: list[str] = []
    tempo_default: str | None = Field(None, max_length=16)
    image_folder: str | None = None


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    exercise_type: str | None = None
    anatomical_category: str | None = None
    movement_pattern: str | None = None
    plane_of_motion: str | None = None
    force: str | None = None
    mechanic: str | None = None
    is_unilateral: bool | None = None
    is_bodyweight: bool | None = None
    level: ExerciseLevel | None = None
    equipment: str | None = None
    primary_muscles: list[str] | None = None
    secondary_muscles: list[str] | None = None
    instructions: list[str] | None = None
    tempo_default: str | None = None
    image_folder: str | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
