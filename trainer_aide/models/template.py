"""Workout template - trainer-authored blocks of exercises, reused by sessions."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainer_aide.core.enums import MuscleGroup, ResistanceType, SignOffMode, TemplateType
from trainer_aide.db.base import Base, str_enum, utcnow


class WorkoutTemplate(Base):
    """Saved workout structure (name + ordered blocks of exercises)."""

    __tablename__ = "workout_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[TemplateType] = mapped_column(str_enum(TemplateType), default=TemplateType.STANDARD, nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    assigned_studios: Mapped[list] = mapped_column(JSON, default=list)
    default_sign_off_mode: Mapped[SignOffMode | None] = mapped_column(str_enum(SignOffMode), nullable=True)
    alert_interval_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    blocks: Mapped[list["TemplateBlock"]] = relationship(
        "TemplateBlock",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateBlock.block_number",
    )


class TemplateBlock(Base):
    __tablename__ = "template_blocks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    block_number: Mapped[int] = mapped_column(Integer, default=1)
    name: Mapped[str] = mapped_column(String(100), default="")

    template: Mapped["WorkoutTemplate"] = relationship("WorkoutTemplate", back_populates="blocks")
    exercises: Mapped[list["TemplateExercise"]] = relationship(
        "TemplateExercise",
        back_populates="block",
        cascade="all, delete-orphan",
        order_by="TemplateExercise.position",
    )


class TemplateExercise(Base):
    """Exercise prescription inside a block. exercise_id is the library slug or id."""

    __tablename__ = "template_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    block_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("template_blocks.id", ondelete="CASCADE"), nullable=False, index=True
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
    cardio_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    cardio_intensity: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-10

    block: Mapped["TemplateBlock"] = relationship("TemplateBlock", back_populates="exercises")
