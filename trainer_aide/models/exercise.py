"""Exercise library model - the catalogue AI programs and templates pick from."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from trainer_aide.core.enums import ExerciseLevel
from trainer_aide.db.base import Base, str_enum, utcnow


class Exercise(Base):
    """Exercise definition with movement classification, equipment and difficulty."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    exercise_type: Mapped[str] = mapped_column(String(32), default="resistance")  # resistance, cardio, plyometric...
    anatomical_category: Mapped[str] = mapped_column(String(64), default="", index=True)  # e.g. Chest, Back
    movement_pattern: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)
    plane_of_motion: Mapped[str | None] = mapped_column(String(32), nullable=True)

    force: Mapped[str | None] = mapped_column(String(16), nullable=True)  # push, pull, static
    mechanic: Mapped[str | None] = mapped_column(String(16), nullable=True)  # compound, isolation
    is_unilateral: Mapped[bool] = mapped_column(Boolean, default=False)
    is_bodyweight: Mapped[bool] = mapped_column(Boolean, default=False)

    level: Mapped[ExerciseLevel] = mapped_column(
        str_enum(ExerciseLevel), default=ExerciseLevel.BEGINNER, nullable=False
    )
    equipment: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    primary_muscles: Mapped[list] = mapped_column(JSON, default=list)
    secondary_muscles: Mapped[list] = mapped_column(JSON, default=list)
    instructions: Mapped[list] = mapped_column(JSON, default=list)
    tempo_default: Mapped[str | None] = mapped_column(String(16), nullable=True)  # eccentric-pause-concentric-pause
    image_folder: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
