"""Studio services, calendar bookings, booking requests and trainer availability."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainer_aide.core.enums import (
    AvailabilityBlockType,
    BookingRequestStatus,
    BookingStatus,
    Recurrence,
    ServiceType,
)
from trainer_aide.db.base import Base, str_enum, utcnow


class Service(Base):
    """What the studio sells (30min PT, duet, group...). Separate from workout templates."""

    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    type: Mapped[ServiceType] = mapped_column(str_enum(ServiceType), default=ServiceType.ONE_TO_ONE)
    max_capacity: Mapped[int] = mapped_column(Integer, default=1)
    credits_required: Mapped[float] = mapped_column(Float, default=1)
    color: Mapped[str] = mapped_column(String(7), default="#12229D")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    assigned_studios: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class CalendarBooking(Base):
    """A booked slot on a trainer's calendar."""

    __tablename__ = "calendar_bookings"
    __table_args__ = (Index("ix_calendar_bookings_trainer_scheduled", "trainer_id", "scheduled_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    trainer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    client_profile_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("client_profiles.id", ondelete="SET NULL"), nullable=True
    )
    client_name: Mapped[str] = mapped_column(String(255), default="")
    service_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("services.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[BookingStatus] = mapped_column(
        str_enum(BookingStatus), default=BookingStatus.CONFIRMED, nullable=False
    )
    workout_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    hold_expiry: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    service: Mapped["Service | None"] = relationship("Service")


class BookingRequest(Base):
    """Client asks for a session and proposes times; the trainer accepts or declines."""

    __tablename__ = "booking_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trainer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("client_profiles.id", ondelete="CASCADE"), nullable=False
    )
    service_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("services.id", ondelete="SET NULL"), nullable=True
    )
    preferred_times: Mapped[list] = mapped_column(JSON, default=list)  # ISO datetimes
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[BookingRequestStatus] = mapped_column(
        str_enum(BookingRequestStatus), default=BookingRequestStatus.PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    client: Mapped["ClientProfile"] = relationship("ClientProfile")


class AvailabilityBlock(Base):
    """Weekly or one-time window where a trainer is available or blocked."""

    __tablename__ = "availability_blocks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trainer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    block_type: Mapped[AvailabilityBlockType] = mapped_column(
        str_enum(AvailabilityBlockType), default=AvailabilityBlockType.AVAILABLE, nullable=False
    )
    recurrence: Mapped[Recurrence] = mapped_column(str_enum(Recurrence), default=Recurrence.WEEKLY, nullable=False)
    day_of_week: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0 = Sunday
    specific_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)  # Inclusive, multi-day one-time blocks
    start_hour: Mapped[int] = mapped_column(Integer, default=9)
    start_minute: Mapped[int] = mapped_column(Integer, default=0)
    end_hour: Mapped[int] = mapped_column(Integer, default=17)
    end_minute: Mapped[int] = mapped_column(Integer, default=0)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
