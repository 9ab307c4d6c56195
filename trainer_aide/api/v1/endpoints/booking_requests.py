"""Client booking requests: propose times, trainer accepts or declines."""

import logging
import uuid
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.constants import BOOKING_REQUEST_EXPIRY_DAYS
from trainer_aide.core.enums import BookingRequestStatus, BookingStatus
from trainer_aide.db.base import as_utc, utcnow
from trainer_aide.db.session import get_db
from trainer_aide.models.calendar import BookingRequest, CalendarBooking
from trainer_aide.models.user import ClientProfile, User
from trainer_aide.schemas.calendar import (
    BookingRead,
    BookingRequestAccept,
    BookingRequestCreate,
    BookingRequestRead,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_pending(db: AsyncSession, request_id: uuid.UUID) -> BookingRequest:
    req = await db.get(BookingRequest, request_id)
    if not req:
        raise HTTPException(status_code=404, detail="Booking request not found")
    if req.status == BookingRequestStatus.PENDING and as_utc(req.expires_at) <= utcnow():
        req.status = BookingRequestStatus.EXPIRED
        # get_db rolls back when the 409 below is raised
        await db.commit()
    if req.status != BookingRequestStatus.PENDING:
        raise HTTPException(status_code=409, detail=f"Booking request is {req.status.value}")
    return req


@router.post("", response_model=BookingRequestRead, status_code=201)
async def create_booking_request(
    payload: BookingRequestCreate,
    db: AsyncSession = Depends(get_db),
):
    """Pending request that expires after seven days."""
    if not await db.get(User, payload.trainer_id):
        raise HTTPException(status_code=404, detail="Trainer not found")
    if not await db.get(ClientProfile, payload.client_profile_id):
        raise HTTPException(status_code=404, detail="Client profile not found")
    req = BookingRequest(
        **payload.model_dump(mode="json", exclude={"trainer_id", "client_profile_id", "service_id"}),
        trainer_id=payload.trainer_id,
        client_profile_id=payload.client_profile_id,
        service_id=payload.service_id,
        expires_at=utcnow() + timedelta(days=BOOKING_REQUEST_EXPIRY_DAYS),
    )
    db.add(req)
    await db.flush()
    await db.refresh(req)
    return req


@router.get("", response_model=list[BookingRequestRead])
async def list_booking_requests(
    db: AsyncSession = Depends(get_db),
    trainer_id: uuid.UUID | None = None,
    status: BookingRequestStatus | None = None,
):
    """Requests newest first; pending ones past expiry are marked expired first."""
    stmt = select(BookingRequest)
    if trainer_id:
        stmt = stmt.where(BookingRequest.trainer_id == trainer_id)
    result = await db.execute(stmt.order_by(BookingRequest.created_at.desc()))
    requests = list(result.scalars().all())

    now = utcnow()
    for req in requests:
        if req.status == BookingRequestStatus.PENDING and as_utc(req.expires_at) <= now:
            req.status = BookingRequestStatus.EXPIRED
    await db.flush()
    if status:
        requests = [r for r in requests if r.status == status]
    return requests


@router.post("/{request_id}/accept", response_model=BookingRead)
async def accept_booking_request(
    request_id: uuid.UUID,
    payload: BookingRequestAccept,
    db: AsyncSession = Depends(get_db),
):
    """Create a confirmed booking at the chosen time (first preferred time by default)."""
    req = await _get_pending(db, request_id)
    scheduled_at = payload.scheduled_at or BookingRequestRead.model_validate(req).preferred_times[0]
    client = await db.get(ClientProfile, req.client_profile_id)
    booking = CalendarBooking(
        scheduled_at=as_utc(scheduled_at),
        trainer_id=req.trainer_id,
        client_profile_id=req.client_profile_id,
        client_name=client.full_name if client else "",
        service_id=req.service_id,
        status=BookingStatus.CONFIRMED,
        notes=req.notes,
    )
    req.status = BookingRequestStatus.ACCEPTED
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    logger.info("Accepted booking request %s as booking %s", req.id, booking.id)
    return booking


@router.post("/{request_id}/decline", response_model=BookingRequestRead)
async def decline_booking_request(
    request_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    req = await _get_pending(db, request_id)
    req.status = BookingRequestStatus.DECLINED
    await db.flush()
    await db.refresh(req)
    return req
