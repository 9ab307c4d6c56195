"""Workout template schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from trainer_aide.core.enums import MuscleGroup, ResistanceType, SignOffMode, TemplateType


class TemplateExerciseBase(BaseModel):
    exercise_id: str = Field(..., min_length=1, max_length=255)
    position: int = Field(default=0, ge=0)
    muscle_group: MuscleGroup = MuscleGroup.OTHER
    resistance_type: ResistanceType = ResistanceType.WEIGHT
    resistance_value: float = Field(default=0, ge=0)
    reps_min: int = Field(default=0, ge=0)
    reps_max: int = Field(default=0, ge=0)
    sets: int = Field(default=1, ge=1, le=20)
    cardio_duration: int | None = Field(None, ge=0)
    cardio_intensity: int | None = Field(None, ge=1, le=10)


class TemplateExerciseCreate(TemplateExerciseBase):
    pass


class TemplateExerciseRead(TemplateExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID


class TemplateBlockBase(BaseModel):
    block_number: int = Field(default=1, ge=1)
    name: str = Field(default="", max_length=100)


class TemplateBlockCreate(TemplateBlockBase):
    exercises: list[TemplateExerciseCreate] = []


class TemplateBlockRead(TemplateBlockBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    exercises: list[TemplateExerciseRead] = []


class WorkoutTemplateBase(BaseModel):
    name: str = Field(..., max_length=255)
    description: str = ""
    type: TemplateType = TemplateType.STANDARD
    created_by: UUID | None = None
    assigned_studios: list[str] = []
    default_sign_off_mode: SignOffMode | None = None
    alert_interval_minutes: int | None = Field(None, ge=1, le=120)
    is_default: bool = False


class WorkoutTemplateCreate(WorkoutTemplateBase):
    blocks: list[TemplateBlockCreate] = []


class WorkoutTemplateUpdate(BaseModel):
    """Partial update. When `blocks` is sent, all blocks are replaced."""

    name: str | None = Field(None, max_length=255)
    description: str | None = None
    type: TemplateType | None = None
    assigned_studios: list[str] | None = None
    default_sign_off_mode: SignOffMode | None = None
    alert_interval_minutes: int | None = Field(None, ge=1, le=120)
    is_default: bool | None = None
    blocks: list[TemplateBlockCreate] | None = None


class WorkoutTemplateRead(WorkoutTemplateBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
    updated_at: datetime
    blocks: list[TemplateBlockRead] = []
