"""User and client profile models."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainer_aide.core.enums import ExperienceLevel, GoalType, UserRole
from trainer_aide.db.base import Base, str_enum, utcnow


class User(Base):
    """App user: studio owner, trainer, solo practitioner or client."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    role: Mapped[UserRole] = mapped_column(str_enum(UserRole), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class ClientProfile(Base):
    """Client intake data used for sessions and AI program generation."""

    __tablename__ = "client_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)

    height_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    current_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)

    experience_level: Mapped[ExperienceLevel] = mapped_column(
        str_enum(ExperienceLevel), default=ExperienceLevel.BEGINNER, nullable=False
    )
    training_history: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_activity_level: Mapped[str] = mapped_column(String(32), default="moderately_active")

    primary_goal: Mapped[GoalType] = mapped_column(
        str_enum(GoalType), default=GoalType.GENERAL_FITNESS, nullable=False
    )
    secondary_goals: Mapped[list] = mapped_column(JSON, default=list)

    preferred_training_frequency: Mapped[int | None] = mapped_column(Integer, nullable=True)
    preferred_session_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    preferred_training_days: Mapped[list] = mapped_column(JSON, default=list)
    preferred_training_times: Mapped[list] = mapped_column(JSON, default=list)

    available_equipment: Mapped[list] = mapped_column(JSON, default=list)
    training_location: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # [{body_part, description, restrictions: [...], severity}]
    injuries: Mapped[list] = mapped_column(JSON, default=list)
    medical_conditions: Mapped[list] = mapped_column(JSON, default=list)
    physical_limitations: Mapped[list] = mapped_column(JSON, default=list)
    doctor_clearance: Mapped[bool] = mapped_column(Boolean, default=False)

    preferred_exercise_types: Mapped[list] = mapped_column(JSON, default=list)
    exercise_aversions: Mapped[list] = mapped_column(JSON, default=list)
    preferred_movement_patterns: Mapped[list] = mapped_column(JSON, default=list)

    average_sleep_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    sleep_quality: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-5
    stress_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-5
    recovery_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-5

    assigned_trainer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    assigned_trainer: Mapped["User | None"] = relationship("User")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
