"""AI program models: master program, workouts, exercise prescriptions, logs and revisions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainer_aide.core.enums import GenerationStatus, ProgramStatus, SessionType
from trainer_aide.db.base import Base, str_enum, utcnow


class AIProgram(Base):
    """Multi-week plan produced by the model; progress fields track background generation."""

    __tablename__ = "ai_programs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_profile_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("client_profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    trainer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    program_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ProgramStatus] = mapped_column(
        str_enum(ProgramStatus), default=ProgramStatus.DRAFT, nullable=False
    )

    total_weeks: Mapped[int] = mapped_column(Integer, nullable=False)
    sessions_per_week: Mapped[int] = mapped_column(Integer, nullable=False)
    session_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    primary_goal: Mapped[str] = mapped_column(String(32), nullable=False)
    secondary_goals: Mapped[list] = mapped_column(JSON, default=list)
    experience_level: Mapped[str] = mapped_column(String(32), nullable=False)

    ai_model: Mapped[str] = mapped_column(String(64), nullable=False)
    generation_prompt_version: Mapped[str | None] = mapped_column(String(16), nullable=True)
    ai_rationale: Mapped[str | None] = mapped_column(Text, nullable=True)
    movement_balance_summary: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # Background generation progress
    generation_status: Mapped[GenerationStatus] = mapped_column(
        str_enum(GenerationStatus), default=GenerationStatus.PENDING, nullable=False
    )
    generation_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    progress_message: Mapped[str | None] = mapped_column(String(255), nullable=True)
    current_step: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_steps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    progress_percentage: Mapped[int] = mapped_column(Integer, default=0)
    generated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    is_template: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_client_modifications: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    workouts: Mapped[list["AIWorkout"]] = relationship(
        "AIWorkout",
        back_populates="program",
        cascade="all, delete-orphan",
        order_by="(AIWorkout.week_number, AIWorkout.day_number)",
    )
    nutrition_plan: Mapped["AINutritionPlan | None"] = relationship(
        "AINutritionPlan", cascade="all, delete-orphan", uselist=False
    )
    revisions: Mapped[list["AIProgramRevision"]] = relationship(
        "AIProgramRevision", cascade="all, delete-orphan", order_by="AIProgramRevision.revision_number.desc()"
    )


class AIWorkout(Base):
    """One session of a program, identified by (program, week, day)."""

    __tablename__ = "ai_workouts"
    __table_args__ = (
        UniqueConstraint("program_id", "week_number", "day_number", name="uq_ai_workouts_program_week_day"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ai_programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-52
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-7
    session_order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    workout_name: Mapped[str] = mapped_column(String(255), nullable=False)
    workout_focus: Mapped[str | None] = mapped_column(String(255), nullable=True)
    session_type: Mapped[SessionType | None] = mapped_column(str_enum(SessionType), nullable=True)
    planned_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    movement_patterns_covered: Mapped[list] = mapped_column(JSON, default=list)
    planes_of_motion_covered: Mapped[list] = mapped_column(JSON, default=list)
    primary_muscle_groups: Mapped[list] = mapped_column(JSON, default=list)
    ai_rationale: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    overall_rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    trainer_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    program: Mapped["AIProgram"] = relationship("AIProgram", back_populates="workouts")
    exercises: Mapped[list["AIWorkoutExercise"]] = relationship(
        "AIWorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="AIWorkoutExercise.exercise_order",
    )


class AIWorkoutExercise(Base):
    """Prescription (target) for one exercise in an AI workout, plus logged actuals."""

    __tablename__ = "ai_workout_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ai_workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True
    )
    exercise_order: Mapped[int] = mapped_column(Integer, default=1)
    block_label: Mapped[str | None] = mapped_column(String(8), nullable=True)  # "A", "A1", "B2"

    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps_target: Mapped[str | None] = mapped_column(String(32), nullable=True)  # "8-12", "AMRAP"
    target_load_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_rpe: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tempo: Mapped[str | None] = mapped_column(String(16), nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)

    is_unilateral: Mapped[bool] = mapped_column(Boolean, default=False)
    is_bodyweight: Mapped[bool] = mapped_column(Boolean, default=False)
    coaching_cues: Mapped[list] = mapped_column(JSON, default=list)
    modifications: Mapped[list] = mapped_column(JSON, default=list)

    actual_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actual_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actual_load_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    performance_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    skip_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    workout: Mapped["AIWorkout"] = relationship("AIWorkout", back_populates="exercises")
    exercise: Mapped["Exercise | None"] = relationship("Exercise")


class AINutritionPlan(Base):
    __tablename__ = "ai_nutrition_plans"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ai_programs.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    daily_calories: Mapped[int | None] = mapped_column(Integer, nullable=True)
    protein_grams: Mapped[int | None] = mapped_column(Integer, nullable=True)
    carbs_grams: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fats_grams: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dietary_restrictions: Mapped[list] = mapped_column(JSON, default=list)
    ai_rationale: Mapped[str | None] = mapped_column(Text, nullable=True)
    disclaimer: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class AIGeneration(Base):
    """Audit row per model run: tokens, cost and latency."""

    __tablename__ = "ai_generations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(32), default="ai_program")
    generation_type: Mapped[str] = mapped_column(String(32), default="program")
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    ai_provider: Mapped[str] = mapped_column(String(32), default="anthropic")
    ai_model: Mapped[str] = mapped_column(String(64), nullable=False)
    prompt_version: Mapped[str | None] = mapped_column(String(16), nullable=True)
    input_tokens: Mapped[int] = mapped_column(Integer, default=0)
    output_tokens: Mapped[int] = mapped_column(Integer, default=0)
    estimated_cost_usd: Mapped[float] = mapped_column(Float, default=0)
    latency_ms: Mapped[int] = mapped_column(Integer, default=0)
    retry_count: Mapped[int] = mapped_column(Integer, default=0)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class AIProgramRevision(Base):
    """Point-in-time snapshot of a program, its workouts and exercises."""

    __tablename__ = "ai_program_revisions"
    __table_args__ = (
        UniqueConstraint("program_id", "revision_number", name="uq_ai_program_revisions_number"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("ai_programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    revision_number: Mapped[int] = mapped_column(Integer, nullable=False)
    program_snapshot: Mapped[dict] = mapped_column(JSON, nullable=False)
    change_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
