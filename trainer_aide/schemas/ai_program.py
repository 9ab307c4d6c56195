"""AI program schemas: stored programs, workouts, exercises and generation requests."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from trainer_aide.core.constants import MAX_PROGRAM_WEEKS, MAX_SESSIONS_PER_WEEK, RPE_MAX, RPE_MIN
from trainer_aide.core.enums import (
    ExperienceLevel,
    GenerationStatus,
    GoalType,
    ProgramStatus,
    SessionType,
)
from trainer_aide.schemas.user import Injury


class AIWorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    exercise_id: UUID | None = None
    exercise_name: str | None = None
    exercise_order: int
    block_label: str | None = None
    sets: int | None = None
    reps_target: str | None = None
    target_load_kg: float | None = None
    target_rpe: float | None = None
    target_rir: int | None = None
    tempo: str | None = None
    rest_seconds: int | None = None
    is_unilateral: bool = False
    is_bodyweight: bool = False
    coaching_cues: list[str] = []
    modifications: list[str] = []
    actual_sets: int | None = None
    actual_reps: int | None = None
    actual_load_kg: float | None = None
    actual_rpe: int | None = None
    performance_notes: str | None = None
    skip_reason: str | None = None


class AIWorkoutExerciseUpdate(BaseModel):
    id: UUID
    exercise_id: UUID | None = None
    exercise_order: int | None = Field(None, ge=1)
    block_label: str | None = Field(None, max_length=8)
    sets: int | None = Field(None, ge=1, le=20)
    reps_target: str | None = Field(None, max_length=32)
    target_load_kg: float | None = Field(None, ge=0)
    target_rpe: float | None = Field(None, ge=RPE_MIN, le=RPE_MAX)
    target_rir: int | None = Field(None, ge=0, le=10)
    tempo: str | None = Field(None, max_length=16)
    rest_seconds: int | None = Field(None, ge=0)
    coaching_cues: list[str] | None = None
    modifications: list[str] | None = None
    actual_sets: int | None = Field(None, ge=0)
    actual_reps: int | None = Field(None, ge=0)
    actual_load_kg: float | None = Field(None, ge=0)
    actual_rpe: int | None = Field(None, ge=RPE_MIN, le=RPE_MAX)
    performance_notes: str | None = None
    skip_reason: str | None = None


class AIWorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    program_id: UUID
    week_number: int
    day_number: int
    session_order: int | None = None
    workout_name: str
    workout_focus: str | None = None
    session_type: SessionType | None = None
    planned_duration_minutes: int | None = None
    movement_patterns_covered: list[str] = []
    planes_of_motion_covered: list[str] = []
    primary_muscle_groups: list[str] = []
    ai_rationale: str | None = None
    is_completed: bool = False
    completed_at: datetime | None = None
    overall_rpe: int | None = None
    trainer_notes: str | None = None
    client_feedback: str | None = None
    exercises: list[AIWorkoutExerciseRead] = []


class AIWorkoutUpdate(BaseModel):
    id: UUID
    workout_name: str | None = Field(None, min_length=1, max_length=255)
    workout_focus: str | None = None
    session_type: SessionType | None = None
    planned_duration_minutes: int | None = Field(None, ge=1, le=240)
    ai_rationale: str | None = None
    is_completed: bool | None = None
    overall_rpe: int | None = Field(None, ge=RPE_MIN, le=RPE_MAX)
    trainer_notes: str | None = None
    client_feedback: str | None = None
    exercises: list[AIWorkoutExerciseUpdate] | None = None


class AIProgramRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    client_profile_id: UUID | None = None
    trainer_id: UUID
    created_by: UUID | None = None
    program_name: str
    description: str | None = None
    status: ProgramStatus
    total_weeks: int
    sessions_per_week: int
    session_duration_minutes: int | None = None
    primary_goal: str
    secondary_goals: list[str] = []
    experience_level: str
    ai_model: str
    generation_prompt_version: str | None = None
    ai_rationale: str | None = None
    movement_balance_summary: dict | None = None
    generation_status: GenerationStatus
    generation_error: str | None = None
    progress_message: str | None = None
    current_step: int | None = None
    total_steps: int | None = None
    progress_percentage: int = 0
    generated_at: datetime | None = None
    is_template: bool = False
    is_published: bool = False
    allow_client_modifications: bool = False
    created_at: datetime
    updated_at: datetime


class AIProgramUpdate(BaseModel):
    """Program fields plus optional nested workout (and exercise) edits."""

    program_name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: ProgramStatus | None = None
    session_duration_minutes: int | None = Field(None, ge=10, le=240)
    ai_rationale: str | None = None
    is_published: bool | None = None
    allow_client_modifications: bool | None = None
    workouts: list[AIWorkoutUpdate] | None = None


class AIProgramAssign(BaseModel):
    client_profile_id: UUID


class AIProgramTemplateToggle(BaseModel):
    is_template: bool


class AIProgramStatistics(BaseModel):
    total_workouts: int
    completed_workouts: int
    total_exercises: int
    completion_percentage: int


class AIProgramRevisionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    program_id: UUID
    revision_number: int
    program_snapshot: dict
    change_description: str | None = None
    created_by: UUID | None = None
    created_at: datetime


class AIGenerationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    entity_id: UUID
    entity_type: str
    generation_type: str
    status: str
    ai_provider: str
    ai_model: str
    prompt_version: str | None = None
    input_tokens: int
    output_tokens: int
    estimated_cost_usd: float
    latency_ms: int
    retry_count: int
    error_message: str | None = None
    created_at: datetime


class GenerateProgramRequest(BaseModel):
    """Body of POST /ai/generate-program. Range checks happen in the endpoint (400s)."""

    trainer_id: UUID | None = None
    client_profile_id: UUID | None = None
    program_name: str | None = Field(None, min_length=1, max_length=255)
    total_weeks: int
    sessions_per_week: int
    session_duration_minutes: int = Field(default=60, ge=10, le=240)
    include_nutrition: bool = False
    primary_goal: GoalType | None = None
    secondary_goals: list[str] = []
    experience_level: ExperienceLevel | None = None
    available_equipment: list[str] | None = None
    training_location: str | None = None
    injuries: list[Injury] = []
    physical_limitations: list[str] = []
    exercise_aversions: list[str] = []
    preferred_exercise_types: list[str] = []
    preferred_movement_patterns: list[str] = []


class GenerateProgramResponse(BaseModel):
    program_id: UUID
    generation_status: GenerationStatus
    message: str


class GenerationStatusRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    generation_status: GenerationStatus
    generation_error: str | None = None
    progress_message: str | None = None
    current_step: int | None = None
    total_steps: int | None = None
    progress_percentage: int = 0


class ProgramGenerationInput(BaseModel):
    """Fully resolved inputs for the generation pipeline."""

    trainer_id: UUID
    client_profile_id: UUID | None = None
    total_weeks: int = Field(..., ge=1, le=MAX_PROGRAM_WEEKS)
    sessions_per_week: int = Field(..., ge=1, le=MAX_SESSIONS_PER_WEEK)
    session_duration_minutes: int = 60
    include_nutrition: bool = False
    primary_goal: str
    secondary_goals: list[str] = []
    experience_level: str
    available_equipment: list[str] = []
    training_location: str = "home"
    injuries: list[Injury] = []
    physical_limitations: list[str] = []
    exercise_aversions: list[str] = []
    preferred_exercise_types: list[str] = []
    preferred_movement_patterns: list[str] = []
