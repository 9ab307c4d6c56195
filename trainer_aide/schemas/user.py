"""User and client profile schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from trainer_aide.core.enums import ExperienceLevel, GoalType, UserRole


class UserBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: UserRole


class UserCreate(UserBase):
    pass


class UserRead(UserBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime


class Injury(BaseModel):
    """One injury with its movement restrictions (e.g. 'no overhead press')."""

    body_part: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    restrictions: list[str] = []
    severity: str | None = Field(None, max_length=32)


class ClientProfileBase(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date | None = None
    gender: str | None = Field(None, max_length=32)
    height_cm: float | None = Field(None, gt=0, le=300)
    current_weight_kg: float | None = Field(None, gt=0, le=500)
    target_weight_kg: float | None = Field(None, gt=0, le=500)

    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    training_history: str | None = None
    current_activity_level: str = "moderately_active"
    primary_goal: GoalType = GoalType.GENERAL_FITNESS
    secondary_goals: list[GoalType] = []

    preferred_training_frequency: int | None = Field(None, ge=1, le=7)
    preferred_session_duration_minutes: int | None = Field(None, ge=10, le=240)
    preferred_training_days: list[str] = []
    preferred_training_times: list[str] = []

    available_equipment: list[str] = []
    training_location: str | None = Field(None, max_length=32)

    injuries: list[Injury] = []
    medical_conditions: list[str] = []
    physical_limitations: list[str] = []
    doctor_clearance: bool = False

    preferred_exercise_types: list[str] = []
    exercise_aversions: list[str] = []
    preferred_movement_patterns: list[str] = []

    average_sleep_hours: float | None = Field(None, ge=0, le=24)
    sleep_quality: int | None = Field(None, ge=1, le=5)
    stress_level: int | None = Field(None, ge=1, le=5)
    recovery_capacity: int | None = Field(None, ge=1, le=5)

    assigned_trainer_id: UUID | None = None
    notes: str | None = None


class ClientProfileCreate(ClientProfileBase):
    pass


class ClientProfileUpdate(BaseModel):
    email: EmailStr | None = None
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    date_of_birth: date | None = None
    gender: str | None = None
    height_cm: float | None = Field(None, gt=0, le=300)
    current_weight_kg: float | None = Field(None, gt=0, le=500)
    target_weight_kg: float | None = Field(None, gt=0, le=500)
    experience_level: ExperienceLevel | None = None
    training_history: str | None = None
    current_activity_level: str | None = None
    primary_goal: GoalType | None = None
    secondary_goals: list[GoalType] | None = None
    preferred_training_frequency: int | None = Field(None, ge=1, le=7)
    preferred_session_duration_minutes: int | None = Field(None, ge=10, le=240)
    preferred_training_days: list[str] | None = None
    preferred_training_times: list[str] | None = None
    available_equipment: list[str] | None = None
    training_location: str | None = None
    injuries: list[Injury] | None = None
    medical_conditions: list[str] | None = None
    physical_limitations: list[str] | None = None
    doctor_clearance: bool | None = None
    preferred_exercise_types: list[str] | None = None
    exercise_aversions: list[str] | None = None
    preferred_movement_patterns: list[str] | None = None
    average_sleep_hours: float | None = Field(None, ge=0, le=24)
    sleep_quality: int | None = Field(None, ge=1, le=5)
    stress_level: int | None = Field(None, ge=1, le=5)
    recovery_capacity: int | None = Field(None, ge=1, le=5)
    assigned_trainer_id: UUID | None = None
    is_active: bool | None = None
    notes: str | None = None


class ClientProfileRead(ClientProfileBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime


class WorkoutConstraints(BaseModel):
    """Generation inputs derived from a client profile."""

    experience_level: ExperienceLevel
    primary_goal: GoalType
    secondary_goals: list[str] = []
    available_equipment: list[str] = []
    training_location: str = "gym"
    sessions_per_week: int = 3
    session_duration_minutes: int = 60
    injuries: list[Injury] = []
    physical_limitations: list[str] = []
    exercise_aversions: list[str] = []
    preferred_exercise_types: list[str] = []
    preferred_movement_patterns: list[str] = []
    preferred_training_days: list[str] = []
    preferred_training_times: list[str] = []
    sleep_hours: float | None = None
    sleep_quality: int | None = None
    stress_level: int | None = None
    recovery_capacity: int | None = None
    activity_level: str | None = None
