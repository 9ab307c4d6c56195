"""Training session, block, exercise and timer schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trainer_aide.core.constants import RPE_MAX, RPE_MIN
from trainer_aide.core.enums import MuscleGroup, ResistanceType, SignOffMode
from trainer_aide.schemas.template import TemplateBlockCreate, TemplateExerciseBase


class SessionExerciseRead(TemplateExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    block_id: UUID
    tempo: str | None = None
    rest_seconds: int | None = None
    rir: int | None = None
    coaching_cues: list[str] = []
    notes: str | None = None
    completed: bool = False
    actual_resistance: float | None = None
    actual_reps: int | None = None
    actual_duration: int | None = None
    rpe: int | None = None


class SessionExerciseUpdate(BaseModel):
    """What the trainer logs while the exercise is performed."""

    completed: bool | None = None
    actual_resistance: float | None = Field(None, ge=0)
    actual_reps: int | None = Field(None, ge=0)
    actual_duration: int | None = Field(None, ge=0)
    rpe: int | None = Field(None, ge=RPE_MIN, le=RPE_MAX)
    notes: str | None = None
    resistance_type: ResistanceType | None = None
    resistance_value: float | None = Field(None, ge=0)
    muscle_group: MuscleGroup | None = None


class SessionBlockRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    session_id: UUID
    block_number: int
    name: str
    rpe: int | None = None
    completed: bool = False
    exercises: list[SessionExerciseRead] = []


class SessionBlockUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    rpe: int | None = Field(None, ge=RPE_MIN, le=RPE_MAX)
    completed: bool | None = None


class BlockComplete(BaseModel):
    rpe: int = Field(..., ge=RPE_MIN, le=RPE_MAX)


class TrainingSessionStart(BaseModel):
    """Start from a template, an AI workout, or explicit blocks (exactly one source)."""

    trainer_id: UUID
    client_profile_id: UUID | None = None
    template_id: UUID | None = None
    ai_workout_id: UUID | None = None
    blocks: list[TemplateBlockCreate] | None = None
    session_name: str | None = Field(None, max_length=255)
    sign_off_mode: SignOffMode | None = None
    planned_duration_minutes: int | None = Field(None, ge=1, le=240)
    start_timer: bool = True

    @model_validator(mode="after")
    def check_single_source(self):
        sources = [self.template_id, self.ai_workout_id, self.blocks]
        if sum(s is not None for s in sources) != 1:
            raise ValueError("Provide exactly one of template_id, ai_workout_id or blocks")
        return self


class TrainingSessionUpdate(BaseModel):
    session_name: str | None = Field(None, min_length=1, max_length=255)
    sign_off_mode: SignOffMode | None = None
    planned_duration_minutes: int | None = Field(None, ge=1, le=240)
    private_notes: str | None = None
    public_notes: str | None = None
    recommendations: str | None = None


class TrainingSessionComplete(BaseModel):
    overall_rpe: int = Field(..., ge=RPE_MIN, le=RPE_MAX)
    private_notes: str | None = None
    public_notes: str | None = None
    recommendations: str | None = None
    trainer_declaration: bool = False


class TrainingSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    trainer_id: UUID
    client_profile_id: UUID | None = None
    template_id: UUID | None = None
    ai_workout_id: UUID | None = None
    session_name: str
    sign_off_mode: SignOffMode
    started_at: datetime
    completed_at: datetime | None = None
    duration_seconds: int | None = None
    planned_duration_minutes: int | None = None
    overall_rpe: int | None = None
    private_notes: str | None = None
    public_notes: str | None = None
    recommendations: str | None = None
    trainer_declaration: bool = False
    completed: bool = False
    blocks: list[SessionBlockRead] = []


class SessionSummary(BaseModel):
    """List row without nested blocks."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    trainer_id: UUID
    client_profile_id: UUID | None = None
    session_name: str
    started_at: datetime
    completed_at: datetime | None = None
    duration_seconds: int | None = None
    overall_rpe: int | None = None
    completed: bool = False


class SessionProgress(BaseModel):
    completed: int
    total: int
    percentage: int


class TimerStart(BaseModel):
    total_seconds: int | None = Field(None, ge=1, le=6 * 60 * 60)


class TimerState(BaseModel):
    session_id: UUID
    total_seconds: int
    seconds_left: int
    formatted: str
    is_active: bool
    is_paused: bool
    start_time: datetime | None = None
    paused_at: datetime | None = None
    accumulated_paused_seconds: float = 0
    alert_interval_minutes: int | None = None
    next_alert_in_seconds: int | None = None
    alerts_elapsed: int | None = None
