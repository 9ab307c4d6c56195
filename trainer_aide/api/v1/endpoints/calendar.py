"""Calendar bookings on a trainer's diary, including soft holds."""

import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.config import get_settings
from trainer_aide.core.enums import BookingStatus
from trainer_aide.db.base import apply_changes, as_utc
from trainer_aide.db.session import get_db
from trainer_aide.models.calendar import CalendarBooking, Service
from trainer_aide.models.user import User
from trainer_aide.schemas.calendar import BookingCreate, BookingRead, BookingUpdate
from trainer_aide.services.availability import expire_soft_holds, soft_hold_expiry

logger = logging.getLogger(__name__)

router = APIRouter()

_FINAL_STATUSES = {BookingStatus.CANCELLED, BookingStatus.COMPLETED}


async def _get_booking(db: AsyncSession, booking_id: uuid.UUID) -> CalendarBooking:
    booking = await db.get(CalendarBooking, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def _check_transition(booking: CalendarBooking, status: BookingStatus) -> None:
    """Completed and cancelled bookings are final."""
    if booking.status in _FINAL_STATUSES and booking.status != status:
        raise HTTPException(status_code=409, detail=f"Booking is already {booking.status.value}")


async def _set_status(db: AsyncSession, booking_id: uuid.UUID, status: BookingStatus) -> CalendarBooking:
    booking = await _get_booking(db, booking_id)
    _check_transition(booking, status)
    booking.status = status
    if status != BookingStatus.SOFT_HOLD:
        booking.hold_expiry = None
    await db.flush()
    await db.refresh(booking)
    return booking


@router.get("", response_model=list[BookingRead])
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    trainer_id: uuid.UUID | None = None,
    on_date: date | None = None,
    include_cancelled: bool = True,
):
    """Bookings ordered by time. Expired soft holds are cancelled first."""
    pending = await db.execute(
        select(CalendarBooking).where(CalendarBooking.status == BookingStatus.SOFT_HOLD)
    )
    expired = expire_soft_holds(pending.scalars().all())
    if expired:
        logger.info("Cancelled %s expired soft holds", expired)
        await db.flush()

    stmt = select(CalendarBooking)
    if trainer_id:
        stmt = stmt.where(CalendarBooking.trainer_id == trainer_id)
    if on_date:
        day_start = datetime.combine(on_date, time.min, tzinfo=timezone.utc)
        stmt = stmt.where(
            CalendarBooking.scheduled_at >= day_start,
            CalendarBooking.scheduled_at < day_start + timedelta(days=1),
        )
    if not include_cancelled:
        stmt = stmt.where(CalendarBooking.status != BookingStatus.CANCELLED)
    result = await db.execute(stmt.order_by(CalendarBooking.scheduled_at))
    return list(result.scalars().all())


@router.post("", response_model=BookingRead, status_code=201)
async def create_booking(
    payload: BookingCreate,
    db: AsyncSession = Depends(get_db),
):
    """Book a slot. Soft holds without a hold_expiry expire after the configured hours."""
    if not await db.get(User, payload.trainer_id):
        raise HTTPException(status_code=404, detail="Trainer not found")
    if payload.service_id and not await db.get(Service, payload.service_id):
        raise HTTPException(status_code=404, detail="Service not found")
    data = payload.model_dump()
    data["scheduled_at"] = as_utc(payload.scheduled_at)
    if payload.status == BookingStatus.SOFT_HOLD:
        data["hold_expiry"] = as_utc(payload.hold_expiry) or soft_hold_expiry(get_settings().soft_hold_hours)
    else:
        data["hold_expiry"] = None
    booking = CalendarBooking(**data)
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    return booking


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await _get_booking(db, booking_id)


@router.patch("/{booking_id}", response_model=BookingRead)
async def update_booking(
    booking_id: uuid.UUID,
    payload: BookingUpdate,
    db: AsyncSession = Depends(get_db),
):
    booking = await _get_booking(db, booking_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("status") is not None:
        _check_transition(booking, data["status"])
        if data["status"] != BookingStatus.SOFT_HOLD and "hold_expiry" not in data:
            data["hold_expiry"] = None
    for key in ("scheduled_at", "hold_expiry"):
        if data.get(key):
            data[key] = as_utc(data[key])
    apply_changes(booking, data)
    if booking.status == BookingStatus.SOFT_HOLD and booking.hold_expiry is None:
        booking.hold_expiry = soft_hold_expiry(get_settings().soft_hold_hours)
    await db.flush()
    await db.refresh(booking)
    return booking


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    booking = await _get_booking(db, booking_id)
    await db.delete(booking)
    return None


@router.post("/{booking_id}/check-in", response_model=BookingRead)
async def check_in(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, booking_id, BookingStatus.CHECKED_IN)


@router.post("/{booking_id}/complete", response_model=BookingRead)
async def complete_booking(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, booking_id, BookingStatus.COMPLETED)


@router.post("/{booking_id}/late", response_model=BookingRead)
async def mark_late(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, booking_id, BookingStatus.LATE)


@router.post("/{booking_id}/no-show", response_model=BookingRead)
async def mark_no_show(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, booking_id, BookingStatus.NO_SHOW)


@router.post("/{booking_id}/cancel", response_model=BookingRead)
async def cancel_booking(booking_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await _set_status(db, booking_id, BookingStatus.CANCELLED)
