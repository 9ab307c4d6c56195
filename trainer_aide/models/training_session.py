"""Training session models: a timed encounter with block and exercise logging."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainer_aide.core.enums import MuscleGroup, ResistanceType, SignOffMode
from trainer_aide.db.base import Base, str_enum, utcnow


class TrainingSession(Base):
    """A single timed training encounter between a trainer and (optionally) a client."""

    __tablename__ = "training_sessions"
    __table_args__ = (Index("ix_training_sessions_trainer_started", "trainer_id", "started_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trainer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_profile_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("client_profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    template_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_templates.id", ondelete="SET NULL"), nullable=True
    )
    ai_workout_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("ai_workouts.id", ondelete="SET NULL"), nullable=True
    )
    session_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sign_off_mode: Mapped[SignOffMode] = mapped_column(
        str_enum(SignOffMode), default=SignOffMode.FULL_SESSION, nullable=False
    )

    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)  # Actual duration
    planned_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    overall_rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-10
    private_notes: Mapped[str | None] = mapped_column(Text, nullable=True)  # Trainer only
    public_notes: Mapped[str | None] = mapped_column(Text, nullable=True)  # Shared with client
    recommendations: Mapped[str | None] = mapped_column(Text, nullable=True)
    trainer_declaration: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    blocks: Mapped[list["SessionBlock"]] = relationship(
        "SessionBlock",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionBlock.block_number",
    )
    timer: Mapped["SessionTimer | None"] = relationship(
        "SessionTimer", back_populates="session", cascade="all, delete-orphan", uselist=False
    )
    template: Mapped["WorkoutTemplate | None"] = relationship("WorkoutTemplate")
    client: Mapped["ClientProfile | None"] = relationship("ClientProfile")


class SessionBlock(Base):
    __tablename__ = "session_blocks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    block_number: Mapped[int] = mapped_column(Integer, default=1)
    name: Mapped[str] = mapped_column(String(100), default="")
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    session: Mapped["TrainingSession"] = relationship("TrainingSession", back_populates="blocks")
    exercises: Mapped[list["SessionExercise"]] = relationship(
        "SessionExercise",
        back_populates="block",
        cascade="all, delete-orphan",
        order_by="SessionExercise.position",
    )


class SessionExercise(Base):
    """Prescribed exercise plus what actually happened during the session."""

    __tablename__ = "session_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    block_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("session_blocks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0)
    muscle_group: Mapped[MuscleGroup] = mapped_column(str_enum(MuscleGroup), default=MuscleGroup.OTHER)
    resistance_type: Mapped[ResistanceType] = mapped_column(
        str_enum(ResistanceType), default=ResistanceType.WEIGHT
    )
    resistance_value: Mapped[float] = mapped_column(Float, default=0)
    reps_min: Mapped[int] = mapped_column(Integer, default=0)
    reps_max: Mapped[int] = mapped_column(Integer, default=0)
    sets: Mapped[int] = mapped_column(Integer, default=1)
    cardio_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cardio_intensity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # From AI-generated workouts
    tempo: Mapped[str | None] = mapped_column(String(16), nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rir: Mapped[int | None] = mapped_column(Integer, nullable=True)
    coaching_cues: Mapped[list] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Logged during the session
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    actual_resistance: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    actual_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)

    block: Mapped["SessionBlock"] = relationship("SessionBlock", back_populates="exercises")


class SessionTimer(Base):
    """Countdown state for a session; seconds left are derived from wall-clock deltas."""

    __tablename__ = "session_timers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_seconds: Mapped[int] = mapped_column(Integer, default=30 * 60)
    is_paused: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    paused_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    accumulated_paused_seconds: Mapped[float] = mapped_column(Float, default=0)

    session: Mapped["TrainingSession"] = relationship("TrainingSession", back_populates="timer")
