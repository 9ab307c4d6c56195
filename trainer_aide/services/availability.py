"""Trainer availability windows and calendar booking rules."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from trainer_aide.core.enums import AvailabilityBlockType, BookingStatus, Recurrence
from trainer_aide.db.base import as_utc, utcnow
from trainer_aide.models.calendar import AvailabilityBlock, CalendarBooking

# Mon-Fri 06:00-20:00 and Sat 07:00-12:00 open; weekday lunch and Tuesday admin blocked.
DEFAULT_AVAILABILITY: list[dict] = [
    *(
        {"block_type": AvailabilityBlockType.AVAILABLE, "day_of_week": d, "start_hour": 6, "end_hour": 20}
        for d in range(1, 6)
    ),
    {"block_type": AvailabilityBlockType.AVAILABLE, "day_of_week": 6, "start_hour": 7, "end_hour": 12},
    *(
        {
            "block_type": AvailabilityBlockType.BLOCKED,
            "day_of_week": d,
            "start_hour": 12,
            "end_hour": 13,
            "reason": "Lunch break",
        }
        for d in range(1, 6)
    ),
    {
        "block_type": AvailabilityBlockType.BLOCKED,
        "day_of_week": 2,
        "start_hour": 14,
        "end_hour": 16,
        "reason": "Weekly admin tasks",
    },
]


def sunday_weekday(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def default_blocks(trainer_id) -> list[AvailabilityBlock]:
    return [
        AvailabilityBlock(trainer_id=trainer_id, recurrence=Recurrence.WEEKLY, start_minute=0, end_minute=0, **b)
        for b in DEFAULT_AVAILABILITY
    ]


def applies_on(block: AvailabilityBlock, day: date) -> bool:
    if block.recurrence == Recurrence.WEEKLY:
        return block.day_of_week == sunday_weekday(day)
    if block.recurrence == Recurrence.ONCE and block.specific_date is not None:
        if block.end_date is None or block.end_date == block.specific_date:
            return block.specific_date == day
        return block.specific_date <= day <= block.end_date
    return False


def blocks_for_date(blocks: Iterable[AvailabilityBlock], day: date) -> list[AvailabilityBlock]:
    return [b for b in blocks if applies_on(b, day)]


def _covers(block: AvailabilityBlock, minute_of_day: int) -> bool:
    start = block.start_hour * 60 + block.start_minute
    end = block.end_hour * 60 + block.end_minute
    return start <= minute_of_day < end


def is_within_availability(blocks: Iterable[AvailabilityBlock], when: datetime) -> bool:
    """Inside an available window for that day and not inside a blocked one."""
    todays = blocks_for_date(blocks, when.date())
    minute_of_day = when.hour * 60 + when.minute
    available = any(b.block_type == AvailabilityBlockType.AVAILABLE and _covers(b, minute_of_day) for b in todays)
    blocked = any(b.block_type == AvailabilityBlockType.BLOCKED and _covers(b, minute_of_day) for b in todays)
    return available and not blocked


def soft_hold_expiry(hours: int, now: datetime | None = None) -> datetime:
    return (now or utcnow()) + timedelta(hours=hours)


def expire_soft_holds(bookings: Iterable[CalendarBooking], now: datetime | None = None) -> int:
    """Cancel soft holds past their expiry; returns how many changed."""
    now = as_utc(now or utcnow())
    expired = 0
    for booking in bookings:
        if (
            booking.status == BookingStatus.SOFT_HOLD
            and booking.hold_expiry is not None
            and as_utc(booking.hold_expiry) <= now
        ):
            booking.status = BookingStatus.CANCELLED
            expired += 1
    return expired
